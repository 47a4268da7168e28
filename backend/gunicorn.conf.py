# Bind & workers
bind = "0.0.0.0:8000"
wsgi_app = "accounts:create_app()"
workers = 2  # override con env GUNICORN_WORKERS
threads = 4  # collaborators are shared per process; each call is request-scoped
timeout = 60  # provider and SMTP calls carry no timeout of their own
graceful_timeout = 30
keepalive = 5

# Logs a stdout/stderr (colectables por Docker)
accesslog = "-"
errorlog = "-"
loglevel = "info"  # override con env LOG_LEVEL

# Respeto de cabeceras de proxy
forwarded_allow_ips = "*"
proxy_protocol = False

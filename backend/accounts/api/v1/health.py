"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app

from accounts.api.deps import json_response, timing

bp = Blueprint("health", __name__)


@bp.get("/health")
@timing
def healthcheck():
    """Return application health and the configured collaborator backends."""

    payload = {
        "status": "ok",
        "version": current_app.config.get("APP_VERSION", "dev"),
        "commit": current_app.config.get("APP_COMMIT", "unknown"),
        "identity_backend": current_app.config.get("IDENTITY_BACKEND"),
        "mail_backend": current_app.config.get("MAIL_BACKEND"),
    }
    return json_response(payload)

"""Global Flask extension instances and collaborator wiring."""

from __future__ import annotations

from typing import cast

from flask import Flask, current_app
from flask_mail import Mail

from accounts.services._shared.ports import (
    EmailSender,
    IdentityProvider,
    InMemoryEmailSender,
    InMemoryIdentityProvider,
)

# Global singletons (import-safe)
mail = Mail()

IDENTITY_KEY = "identity_provider"
MAILER_KEY = "email_sender"


def build_identity_provider(app: Flask) -> IdentityProvider:
    """Create the identity provider selected by ``IDENTITY_BACKEND``."""

    backend = str(app.config.get("IDENTITY_BACKEND", "firebase")).strip().lower()
    if backend == "memory":
        return InMemoryIdentityProvider()
    if backend == "firebase":
        from accounts.infra.firebase.firebase_identity_provider import (
            FirebaseIdentityProvider,
            init_firebase_app,
        )

        firebase_app = init_firebase_app(
            credentials_path=app.config.get("FIREBASE_CREDENTIALS") or None,
            project_id=app.config.get("FIREBASE_PROJECT_ID"),
        )
        return FirebaseIdentityProvider(
            app=firebase_app,
            continue_url=app.config.get("EMAIL_VERIFICATION_CONTINUE_URL"),
        )
    raise RuntimeError(f"Unknown IDENTITY_BACKEND {backend!r}")


def build_email_sender(app: Flask) -> EmailSender:
    """Create the email sender selected by ``MAIL_BACKEND``."""

    backend = str(app.config.get("MAIL_BACKEND", "flask_mail")).strip().lower()
    if backend == "memory":
        return InMemoryEmailSender()
    if backend == "flask_mail":
        from accounts.infra.mail.flask_mail_email_sender import FlaskMailEmailSender

        return FlaskMailEmailSender(
            mail=mail,
            subject=str(app.config.get("WELCOME_EMAIL_SUBJECT", "Welcome")),
            sender=app.config.get("MAIL_DEFAULT_SENDER"),
        )
    raise RuntimeError(f"Unknown MAIL_BACKEND {backend!r}")


def init_app(
    app: Flask,
    *,
    identity_provider: IdentityProvider | None = None,
    email_sender: EmailSender | None = None,
) -> None:
    """Initialize Flask-Mail and attach the registration collaborators.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances.
    identity_provider, email_sender:
        Pre-built collaborators. When omitted they are built from
        configuration, once per application.
    """
    mail.init_app(app)

    app.extensions[IDENTITY_KEY] = identity_provider or build_identity_provider(app)
    app.extensions[MAILER_KEY] = email_sender or build_email_sender(app)


def get_identity_provider() -> IdentityProvider:
    """Return the identity provider bound to the current application."""
    provider = current_app.extensions.get(IDENTITY_KEY)
    if provider is None:
        raise RuntimeError("Identity provider is not initialized. Call init_app() first.")
    return cast(IdentityProvider, provider)


def get_email_sender() -> EmailSender:
    """Return the email sender bound to the current application."""
    sender = current_app.extensions.get(MAILER_KEY)
    if sender is None:
        raise RuntimeError("Email sender is not initialized. Call init_app() first.")
    return cast(EmailSender, sender)

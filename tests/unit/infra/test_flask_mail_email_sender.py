"""Unit tests for the Flask-Mail welcome email adapter."""

from __future__ import annotations

import smtplib

import pytest

from accounts import create_app
from accounts.core.config import TestingConfig
from accounts.core.extensions import get_email_sender, mail
from accounts.infra.mail.flask_mail_email_sender import FlaskMailEmailSender
from accounts.services._shared.errors import EmailDeliveryError

LINK = "https://example.com/verify?oobCode=abc"


class FlaskMailConfig(TestingConfig):
    MAIL_BACKEND = "flask_mail"
    MAIL_DEFAULT_SENDER = "welcome@example.com"
    WELCOME_EMAIL_SUBJECT = "Bienvenido"


@pytest.fixture
def mail_app(identity):
    application = create_app(FlaskMailConfig, identity_provider=identity)
    with application.app_context():
        yield application


def test_config_selects_flask_mail_sender(mail_app):
    assert isinstance(get_email_sender(), FlaskMailEmailSender)


def test_welcome_email_renders_name_and_link(mail_app):
    sender = get_email_sender()

    with mail.record_messages() as outbox:
        sender.send_welcome_email(email="ana@example.com", display_name="Ana", verification_link=LINK)

    [msg] = outbox
    assert msg.recipients == ["ana@example.com"]
    assert msg.subject == "Bienvenido"
    assert msg.sender == "welcome@example.com"
    assert "Hola Ana" in msg.body
    assert LINK in msg.body
    assert 'href="https://example.com/verify?oobCode=abc"' in msg.html


def test_html_body_escapes_display_name(mail_app):
    msg = get_email_sender().build_message(
        email="x@example.com", display_name="<script>", verification_link=LINK
    )

    assert "<script>" not in msg.html
    assert "&lt;script&gt;" in msg.html


def test_smtp_failure_becomes_delivery_error(mail_app):
    class _BrokenMail:
        def send(self, message):
            raise smtplib.SMTPServerDisconnected("gone")

    sender = FlaskMailEmailSender(mail=_BrokenMail(), subject="Hi", sender="a@example.com")

    with pytest.raises(EmailDeliveryError):
        sender.send_welcome_email(email="x@example.com", display_name="X", verification_link=LINK)


def test_connection_refused_becomes_delivery_error(mail_app):
    class _UnreachableMail:
        def send(self, message):
            raise ConnectionRefusedError(111, "Connection refused")

    sender = FlaskMailEmailSender(mail=_UnreachableMail(), subject="Hi")

    with pytest.raises(EmailDeliveryError):
        sender.send_welcome_email(email="x@example.com", display_name="X", verification_link=LINK)

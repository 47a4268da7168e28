# accounts/infra/mail/flask_mail_email_sender.py
from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass

from flask import render_template
from flask_mail import Mail, Message

from accounts.core.logger import email_domain
from accounts.services._shared.errors import EmailDeliveryError
from accounts.services._shared.ports import EmailSender

log = logging.getLogger(__name__)

WELCOME_TEMPLATE = "email/welcome"


@dataclass(slots=True)
class FlaskMailEmailSender(EmailSender):
    """
    Adapter sending the welcome email through Flask-Mail.

    .. note::
       Requires an active Flask app context: templates are rendered with
       :func:`flask.render_template` and SMTP settings come from ``MAIL_*``.
    """

    mail: Mail
    subject: str
    sender: str | None = None

    def build_message(self, *, email: str, display_name: str, verification_link: str) -> Message:
        """Render the text and HTML bodies for the welcome email."""
        context = {"display_name": display_name, "verification_link": verification_link}
        return Message(
            subject=self.subject,
            recipients=[email],
            sender=self.sender,
            body=render_template(f"{WELCOME_TEMPLATE}.txt", **context),
            html=render_template(f"{WELCOME_TEMPLATE}.html", **context),
        )

    def send_welcome_email(self, *, email: str, display_name: str, verification_link: str) -> None:
        msg = self.build_message(
            email=email, display_name=display_name, verification_link=verification_link
        )
        try:
            self.mail.send(msg)
        except (smtplib.SMTPException, OSError) as exc:
            raise EmailDeliveryError(f"Welcome email could not be sent: {exc}") from exc
        log.info("mail.welcome_sent", extra={"email_domain": email_domain(email)})

"""Flask CLI commands for repairing email verification after registration."""

from __future__ import annotations

import logging

import click
from flask.cli import with_appcontext

from accounts.core.extensions import get_email_sender, get_identity_provider
from accounts.services._shared.errors import EmailDeliveryError, IdentityProviderError
from accounts.services.registration.service import UserRegistrationService

LOGGER = logging.getLogger(__name__)


@click.group("verification")
def verification_cli() -> None:
    """Commands for email verification links."""


@verification_cli.command("resend")
@click.argument("email")
@click.option("--display-name", required=True, help="Name used in the welcome greeting.")
@click.option("--show-link", is_flag=True, help="Print the generated link.")
@with_appcontext
def resend_command(email: str, display_name: str, show_link: bool) -> None:
    """Send a fresh welcome/verification email to an existing account.

    Meant for accounts created while the email backend was failing.
    """
    service = UserRegistrationService(
        identity=get_identity_provider(),
        mailer=get_email_sender(),
    )
    try:
        link = service.resend_verification(email=email, display_name=display_name)
    except IdentityProviderError as exc:
        raise click.ClickException(f"Identity provider rejected the request: {exc.code}") from exc
    except EmailDeliveryError as exc:
        raise click.ClickException(str(exc)) from exc
    LOGGER.info("verification.resend.done")
    click.echo(f"Verification email sent to {email}")
    if show_link:
        click.echo(link)

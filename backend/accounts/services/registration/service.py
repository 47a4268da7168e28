"""
UserRegistrationService
=======================

Process-level service that registers a new account:

- Decodes and validates the payload (password policy, confirmation match).
- Creates the account at the identity provider under a fresh UUID1.
- Generates the email verification link and sends the welcome email.

Every collaborator call happens exactly once, strictly in sequence. No
compensation runs when a later step fails: an account whose welcome email
could not be sent stays created and is logged for a manual resend.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from typing import Any
from uuid import uuid1

from marshmallow import ValidationError

from accounts.core.logger import email_domain
from accounts.schemas.auth import RegisterSchema
from accounts.services._shared.base import BaseService, ServiceContext
from accounts.services._shared.errors import (
    MalformedPayloadError,
    PasswordMismatchError,
    RegistrationValidationError,
)
from accounts.services._shared.ports import EmailSender, IdentityProvider
from accounts.services.registration.dto import (
    UserPublicOut,
    UserRegistrationIn,
    UserRegistrationOut,
)

log = logging.getLogger(__name__)


def _time_ordered_uid() -> str:
    return str(uuid1())


class UserRegistrationService(BaseService):
    """
    Orchestrates the registration flow against the injected collaborators.
    """

    def __init__(
        self,
        *,
        identity: IdentityProvider,
        mailer: EmailSender,
        schema: RegisterSchema | None = None,
        uid_factory: Callable[[], str] = _time_ordered_uid,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        :param identity: Identity provider adapter.
        :param mailer: Email delivery adapter.
        :param schema: Field validator; defaults to a schema with the default policy.
        :param uid_factory: Source of new account identifiers.
        :param ctx: Request-scoped context.
        """
        super().__init__(ctx=ctx)
        self.identity = identity
        self.mailer = mailer
        self.schema = schema or RegisterSchema()
        self.uid_factory = uid_factory

    # ----------------------------- input --------------------------------

    def parse(self, body: Mapping[str, Any] | str | bytes | None) -> Mapping[str, Any]:
        """
        Return the structured payload for ``body``.

        Pre-parsed mappings pass through. Text is decoded as JSON; an empty
        text body means an empty payload.

        :raises MalformedPayloadError: When the text is not valid JSON or the
            document is not an object.
        """
        if body is None:
            return {}
        if isinstance(body, (bytes, bytearray)):
            try:
                body = body.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise MalformedPayloadError("Request body is not UTF-8") from exc
        if isinstance(body, str):
            if not body.strip():
                return {}
            try:
                body = json.loads(body)
            except ValueError as exc:
                raise MalformedPayloadError("Request body is not valid JSON") from exc
        if not isinstance(body, Mapping):
            raise MalformedPayloadError(f"Request body must be an object, got {type(body).__name__}")
        return body

    def validate(self, payload: Mapping[str, Any]) -> UserRegistrationIn:
        """
        Validate ``payload`` and check the password confirmation.

        :raises RegistrationValidationError: On any field error.
        :raises PasswordMismatchError: When both fields are valid but differ.
        """
        try:
            data = self.schema.load(payload)
        except ValidationError as exc:
            raise RegistrationValidationError(errors=exc.normalized_messages()) from exc

        if data["password"] != data["confirm_password"]:
            raise PasswordMismatchError()

        return UserRegistrationIn(
            display_name=data["display_name"],
            email=data["email"],
            password=data["password"],
            confirm_password=data["confirm_password"],
        )

    # ---------------------------- process -------------------------------

    def register(self, dto: UserRegistrationIn) -> UserRegistrationOut:
        """
        Create the account, generate the verification link and send the email.

        :param dto: Validated registration input.
        :type dto: :class:`UserRegistrationIn`
        :returns: Public-safe account projection.
        :rtype: :class:`UserRegistrationOut`
        :raises IdentityProviderError: When the provider rejects a call.
        :raises EmailDeliveryError: When the welcome email cannot be sent.
        """
        uid = self.uid_factory()
        domain = email_domain(dto.email)

        record = self.identity.create_user(
            uid=uid,
            email=dto.email,
            email_verified=False,
            password=dto.password,
            display_name=dto.display_name,
            disabled=False,
        )
        log.info("registration.created", extra={"uid": record.uid, "email_domain": domain})

        link = self.identity.generate_email_verification_link(record.email)

        try:
            self.mailer.send_welcome_email(
                email=record.email,
                display_name=record.display_name,
                verification_link=link,
            )
        except Exception:
            # The account exists; operators resend with `flask verification resend`
            log.error(
                "registration.email_failed",
                extra={"uid": record.uid, "email_domain": domain},
                exc_info=True,
            )
            raise

        return UserRegistrationOut(user=UserPublicOut.from_record(record))

    def handle(self, body: Mapping[str, Any] | str | bytes | None) -> UserRegistrationOut:
        """Run the whole flow for a raw request ``body``."""
        return self.register(self.validate(self.parse(body)))

    def resend_verification(self, *, email: str, display_name: str) -> str:
        """
        Generate a fresh verification link for an existing account and email it.

        :returns: The link that was sent.
        """
        link = self.identity.generate_email_verification_link(email)
        self.mailer.send_welcome_email(email=email, display_name=display_name, verification_link=link)
        log.info("registration.verification_resent", extra={"email_domain": email_domain(email)})
        return link

# accounts/services/_shared/base.py
from __future__ import annotations

from dataclasses import dataclass

from accounts.core import errors as api_errors
from accounts.core.errors import field_errors
from accounts.core.i18n import translate
from accounts.services._shared.errors import (
    DuplicateEmailError,
    EmailDeliveryError,
    MalformedPayloadError,
    PasswordMismatchError,
    ProviderInternalError,
    RegistrationValidationError,
    ServiceError,
    UnknownProviderError,
)

# Public ``message`` strings of the provider failures; ``data`` is localized
PROVIDER_LABEL = "Firebase"


@dataclass(slots=True)
class ServiceContext:
    """
    Carry request-scoped data the service needs (the negotiated locale).

    :param locale: Locale for user-facing messages; ``None`` negotiates it.
    """

    locale: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Carry the request-scoped :class:`ServiceContext`.
    * Centralize error translation from service errors to API errors.
    * Keep services thin, orchestration-only, no web/SDK leakage.
    """

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        """
        Initialize the base service.

        :param ctx: Optional request-scoped context (locale).
        :type ctx: ServiceContext | None
        """
        self.ctx = ctx or ServiceContext()

    # -------------------------- Error handling ------------------------------

    def translate_exceptions(self, exc: Exception) -> Exception:
        """
        Map domain/service-level errors to API-level (HTTP) errors.

        :param exc: Exception raised within the service.
        :type exc: Exception
        :returns: Translated exception ready to be re-raised.
        :rtype: Exception
        """
        locale = self.ctx.locale

        if isinstance(exc, RegistrationValidationError):
            # → 422 with one entry per field message
            return api_errors.UnprocessableEntity(
                "Fields validation error", data=field_errors(exc.errors)
            )

        if isinstance(exc, PasswordMismatchError):
            return api_errors.UnprocessableEntity(
                "The password does not match", data=[translate("password_mismatch", locale)]
            )

        if isinstance(exc, DuplicateEmailError):
            return api_errors.UnprocessableEntity(
                f"{PROVIDER_LABEL}:{exc.code}", data=[translate("email_in_use", locale)]
            )

        if isinstance(exc, ProviderInternalError):
            return api_errors.InternalServerError(
                f"{PROVIDER_LABEL}:{exc.code}", data=[translate("provider_internal", locale)]
            )

        if isinstance(exc, UnknownProviderError):
            return api_errors.InternalServerError(
                f"{PROVIDER_LABEL}:Unknown error", data=[translate("provider_unknown", locale)]
            )

        if isinstance(exc, (EmailDeliveryError, MalformedPayloadError)):
            # Generic 500, no detail leaked
            return api_errors.InternalServerError()

        # Any other ServiceError subclass is a server-side bug
        if isinstance(exc, ServiceError):
            return api_errors.InternalServerError()

        # Fallback: return untouched (will bubble up to Flask handler)
        return exc

"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask, HTTP, or a provider SDK directly. They serve as stable contracts
between adapters (identity provider, email delivery) and application services.

Translation to ``APIError`` happens in ``BaseService.translate_exceptions()``;
``accounts/core/errors.py`` renders those as HTTP responses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from adapters or domain logic.
    - The API layer or BaseService will later translate them to APIError.
    """

    pass


# --------------------------------------------------------------------------- #
# Input errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True, eq=False)
class RegistrationValidationError(ServiceError):
    """
    Raised when the registration payload fails field validation.

    :param errors: Field name → list of messages, as produced by Marshmallow.
    :type errors: dict[str, Any]
    """

    errors: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:  # pragma: no cover
        return f"Invalid fields: {', '.join(sorted(map(str, self.errors)))}"


class PasswordMismatchError(ServiceError):
    """Raised when ``confirmPassword`` differs from ``password``."""

    def __init__(self, message: str = "The password does not match") -> None:
        super().__init__(message)


class MalformedPayloadError(ServiceError):
    """Raised when a text body cannot be decoded as a JSON document."""


# --------------------------------------------------------------------------- #
# Identity provider errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True, eq=False)
class IdentityProviderError(ServiceError):
    """
    Base for failures reported by the identity provider.

    :param code: Provider error code, e.g. ``"auth/email-already-exists"``.
    :type code: str
    :param detail: Provider message, kept for logs only.
    :type detail: str
    """

    code: str = "auth/unknown"
    detail: str = ""

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.code}: {self.detail}" if self.detail else self.code


@dataclass(slots=True, eq=False)
class DuplicateEmailError(IdentityProviderError):
    """The provider already holds an account for the email."""

    code: str = "auth/email-already-exists"


@dataclass(slots=True, eq=False)
class ProviderInternalError(IdentityProviderError):
    """The provider reported an internal failure."""

    code: str = "auth/internal-error"


@dataclass(slots=True, eq=False)
class UnknownProviderError(IdentityProviderError):
    """The provider failed with a code this service does not recognize."""

    code: str = "auth/unknown"


# --------------------------------------------------------------------------- #
# Email delivery errors
# --------------------------------------------------------------------------- #


class EmailDeliveryError(ServiceError):
    """Raised when the welcome email could not be handed to the mail backend."""


__all__ = [
    "ServiceError",
    "RegistrationValidationError",
    "PasswordMismatchError",
    "MalformedPayloadError",
    "IdentityProviderError",
    "DuplicateEmailError",
    "ProviderInternalError",
    "UnknownProviderError",
    "EmailDeliveryError",
]

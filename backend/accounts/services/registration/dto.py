"""
DTOs for UserRegistrationService.

Contracts for the self-registration flow that creates an account at the
identity provider and sends the welcome/verification email.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from accounts.services._shared.ports import UserRecord

# --------------------------------------------------------------------------- #
# Input
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserRegistrationIn:
    """
    Validated input payload for the registration process.

    :param display_name: Public name shown in the welcome email.
    :type display_name: str
    :param email: Login email, syntactically valid.
    :type email: str
    :param password: Raw password, already checked against the policy.
    :type password: str
    :param confirm_password: Repetition of ``password``.
    :type confirm_password: str
    """

    display_name: str
    email: str
    password: str
    confirm_password: str

    def __repr__(self) -> str:
        # Never render credentials in logs or tracebacks
        return f"UserRegistrationIn(display_name={self.display_name!r}, email={self.email!r})"


# --------------------------------------------------------------------------- #
# Output
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """
    Public-safe projection of the created account.

    :param uid: Provider identifier.
    :param email: Registered email.
    :param email_verified: Always ``False`` right after registration.
    :param display_name: Public name.
    :param disabled: Whether sign-in is blocked.
    :param metadata: Provider metadata, passed through untouched.
    """

    uid: str
    email: str
    email_verified: bool
    display_name: str
    disabled: bool
    metadata: dict[str, Any]

    @classmethod
    def from_record(cls, record: UserRecord) -> UserPublicOut:
        return cls(
            uid=record.uid,
            email=record.email,
            email_verified=record.email_verified,
            display_name=record.display_name,
            disabled=record.disabled,
            metadata=dict(record.metadata),
        )


@dataclass(frozen=True, slots=True)
class UserRegistrationOut:
    """
    Output summary for the registration process.

    :param user: Public-safe user payload.
    :type user: :class:`UserPublicOut`
    """

    user: UserPublicOut

from __future__ import annotations

import secrets
import threading
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Protocol
from urllib.parse import urlencode

from accounts.services._shared.errors import DuplicateEmailError, UnknownProviderError


@dataclass(frozen=True, slots=True)
class UserRecord:
    """
    Account snapshot returned by the identity provider.

    :ivar uid: Provider-side identifier (a UUID1 string chosen by this service).
    :ivar email: Login email as stored by the provider.
    :ivar email_verified: Whether the email ownership has been proven.
    :ivar display_name: Public name.
    :ivar disabled: Whether sign-in is blocked.
    :ivar metadata: Provider metadata (creation time, last sign-in...), opaque.
    """

    uid: str
    email: str
    email_verified: bool
    display_name: str
    disabled: bool
    metadata: dict[str, Any] = field(default_factory=dict)


class IdentityProvider(Protocol):
    """
    Port for the external service of record for accounts.

    Implementations MUST translate their SDK failures into
    :class:`~accounts.services._shared.errors.IdentityProviderError`
    subclasses; anything else is treated as an unexpected failure.
    """

    def create_user(
        self,
        *,
        uid: str,
        email: str,
        email_verified: bool,
        password: str,
        display_name: str,
        disabled: bool,
    ) -> UserRecord:
        """
        Create the account.

        :raises DuplicateEmailError: When ``email`` is already registered.
        :raises ProviderInternalError: When the provider fails internally.
        :raises UnknownProviderError: For any other provider-coded failure.
        """

    def generate_email_verification_link(self, email: str) -> str:
        """Return a single-use link proving ownership of ``email``."""


class InMemoryIdentityProvider(IdentityProvider):
    """
    Process-local identity provider used in tests and local development.

    .. note::
       Enforces email uniqueness case-insensitively, like hosted providers do.
       Passwords are accepted to mirror the contract and then discarded.
    """

    def __init__(self, *, link_base_url: str = "http://localhost/auth/action") -> None:
        self._by_email: dict[str, UserRecord] = {}
        self._link_base_url = link_base_url
        self._lock = threading.Lock()

    def create_user(
        self,
        *,
        uid: str,
        email: str,
        email_verified: bool,
        password: str,
        display_name: str,
        disabled: bool,
    ) -> UserRecord:
        key = email.strip().lower()
        with self._lock:
            if key in self._by_email:
                raise DuplicateEmailError(detail=f"email already registered: {key}")
            record = UserRecord(
                uid=uid,
                email=key,
                email_verified=email_verified,
                display_name=display_name,
                disabled=disabled,
                metadata={
                    "creationTime": datetime.now(UTC).isoformat(),
                    "lastSignInTime": None,
                },
            )
            self._by_email[key] = record
            return record

    def generate_email_verification_link(self, email: str) -> str:
        key = email.strip().lower()
        with self._lock:
            if key not in self._by_email:
                raise UnknownProviderError(code="auth/user-not-found", detail=key)
            oob_code = secrets.token_urlsafe(24)
        return f"{self._link_base_url}?{urlencode({'mode': 'verifyEmail', 'oobCode': oob_code})}"

    # ------------------------- inspection -------------------------

    def get_user_by_email(self, email: str) -> UserRecord | None:
        """Return the stored record for ``email`` (tests only)."""
        with self._lock:
            return self._by_email.get(email.strip().lower())

    @property
    def users(self) -> list[UserRecord]:
        """Snapshot of every account created so far."""
        with self._lock:
            return list(self._by_email.values())

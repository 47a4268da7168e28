# accounts/infra/firebase/firebase_identity_provider.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

import firebase_admin
from firebase_admin import auth, credentials
from firebase_admin import exceptions as firebase_exceptions

from accounts.services._shared.errors import (
    DuplicateEmailError,
    IdentityProviderError,
    ProviderInternalError,
    UnknownProviderError,
)
from accounts.services._shared.ports import IdentityProvider, UserRecord

FIREBASE_APP_NAME = "accounts"


def init_firebase_app(
    *,
    credentials_path: str | None = None,
    project_id: str | None = None,
    name: str = FIREBASE_APP_NAME,
) -> firebase_admin.App:
    """
    Return the named Firebase app, initializing it on first use.

    An empty ``credentials_path`` falls back to application default
    credentials (``GOOGLE_APPLICATION_CREDENTIALS`` or the metadata server).
    """
    try:
        return firebase_admin.get_app(name)
    except ValueError:
        pass
    cred = (
        credentials.Certificate(credentials_path)
        if credentials_path
        else credentials.ApplicationDefault()
    )
    options = {"projectId": project_id} if project_id else None
    return firebase_admin.initialize_app(cred, options=options, name=name)


def _code_from(exc: firebase_exceptions.FirebaseError) -> str:
    """Render a canonical code such as ``INVALID_ARGUMENT`` as ``auth/invalid-argument``."""
    raw = str(getattr(exc, "code", "") or "unknown")
    return "auth/" + raw.lower().replace("_", "-")


def translate_firebase_error(exc: Exception) -> IdentityProviderError:
    """Map a firebase-admin failure to the provider error taxonomy."""
    if isinstance(exc, auth.EmailAlreadyExistsError):
        return DuplicateEmailError(detail=str(exc))
    if isinstance(exc, firebase_exceptions.InternalError):
        return ProviderInternalError(detail=str(exc))
    if isinstance(exc, firebase_exceptions.FirebaseError):
        return UnknownProviderError(code=_code_from(exc), detail=str(exc))
    # The SDK validates arguments locally (short password, bad email) with ValueError
    return UnknownProviderError(code="auth/invalid-argument", detail=str(exc))


def _iso_from_millis(value: int | None) -> str | None:
    if not value:
        return None
    return datetime.fromtimestamp(value / 1000, tz=UTC).isoformat()


def to_user_record(user: Any) -> UserRecord:
    """Convert a ``firebase_admin.auth.UserRecord`` into the port's record."""
    meta = getattr(user, "user_metadata", None)
    metadata = {
        "creationTime": _iso_from_millis(getattr(meta, "creation_timestamp", None)),
        "lastSignInTime": _iso_from_millis(getattr(meta, "last_sign_in_timestamp", None)),
        "lastRefreshTime": _iso_from_millis(getattr(meta, "last_refresh_timestamp", None)),
    }
    return UserRecord(
        uid=user.uid,
        email=user.email,
        email_verified=bool(user.email_verified),
        display_name=user.display_name,
        disabled=bool(user.disabled),
        metadata=metadata,
    )


@dataclass(slots=True)
class FirebaseIdentityProvider(IdentityProvider):
    """
    Adapter for Firebase Authentication through ``firebase-admin``.

    :ivar app: Firebase app to use; ``None`` means the SDK default app.
    :ivar continue_url: Optional URL the verification page redirects to.
    """

    app: firebase_admin.App | None = None
    continue_url: str | None = None

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
        try:
            user = auth.create_user(
                uid=uid,
                email=email,
                email_verified=email_verified,
                password=password,
                display_name=display_name,
                disabled=disabled,
                app=self.app,
            )
        except (firebase_exceptions.FirebaseError, ValueError) as exc:
            raise translate_firebase_error(exc) from exc
        return to_user_record(user)

    def generate_email_verification_link(self, email: str) -> str:
        settings = auth.ActionCodeSettings(url=self.continue_url) if self.continue_url else None
        try:
            return auth.generate_email_verification_link(
                email, action_code_settings=settings, app=self.app
            )
        except (firebase_exceptions.FirebaseError, ValueError) as exc:
            raise translate_firebase_error(exc) from exc

"""Service layer public API.

This package exposes the essential building blocks for the service layer so that
callers can import from :mod:`accounts.services` without knowing internal structure.

Re-exports
----------
- Base primitives (from ``accounts.services._shared.base``)
    * :class:`BaseService`
    * :class:`ServiceContext`

- Service errors (from ``accounts.services._shared.errors``)
    * :class:`ServiceError` and the registration/provider/email subclasses

- Policies (from ``accounts.services._shared.policies``)
    * :class:`PasswordPolicy`

The registration service itself lives in :mod:`accounts.services.registration`
and is imported from there; it depends on the schema layer, which in turn
depends on the policies exported here.
"""

from __future__ import annotations

# Base primitives (service base + request-scoped context)
from ._shared.base import BaseService, ServiceContext
from ._shared.errors import (
    DuplicateEmailError,
    EmailDeliveryError,
    IdentityProviderError,
    MalformedPayloadError,
    PasswordMismatchError,
    ProviderInternalError,
    RegistrationValidationError,
    ServiceError,
    UnknownProviderError,
)
from ._shared.policies.password import PasswordPolicy

__all__ = [
    "BaseService",
    "ServiceContext",
    "ServiceError",
    "RegistrationValidationError",
    "PasswordMismatchError",
    "MalformedPayloadError",
    "IdentityProviderError",
    "DuplicateEmailError",
    "ProviderInternalError",
    "UnknownProviderError",
    "EmailDeliveryError",
    "PasswordPolicy",
]

"""
accounts.services._shared.ports
===============================

Collection of *ports* (hexagonal interfaces) that define the contracts
for the external collaborators of the registration flow.

Modules
-------
- :mod:`identity_provider`:
    Defines :class:`~.IdentityProvider` and :class:`~.UserRecord`, the
    abstraction over the service of record for accounts.

- :mod:`email_sender`:
    Defines :class:`~.EmailSender` and :class:`~.WelcomeEmail`, the
    abstraction over transactional email delivery.

Design Notes
------------
Concrete adapters (Firebase, Flask-Mail) live under ``accounts.infra``;
the in-memory implementations here back tests and local development.
"""

from __future__ import annotations

from .email_sender import EmailSender, InMemoryEmailSender, WelcomeEmail
from .identity_provider import IdentityProvider, InMemoryIdentityProvider, UserRecord

__all__ = [
    "IdentityProvider",
    "InMemoryIdentityProvider",
    "UserRecord",
    "EmailSender",
    "InMemoryEmailSender",
    "WelcomeEmail",
]

"""Global pytest fixtures for the accounts registration API."""

from __future__ import annotations

import os
import sys
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from flask import Flask

# Ensure the ``backend`` package is importable
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "backend"))

from accounts import create_app  # noqa: E402
from accounts.core.config import TestingConfig  # noqa: E402
from accounts.services._shared.ports import (  # noqa: E402
    InMemoryEmailSender,
    InMemoryIdentityProvider,
)

STRONG_PASSWORD = "Str0ngPassw0rd"


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


@pytest.fixture()
def identity() -> InMemoryIdentityProvider:
    """Fresh in-memory identity provider per test."""

    return InMemoryIdentityProvider()


@pytest.fixture()
def mailer() -> InMemoryEmailSender:
    """Fresh in-memory email outbox per test."""

    return InMemoryEmailSender()


@pytest.fixture()
def app(identity: InMemoryIdentityProvider, mailer: InMemoryEmailSender) -> Generator[Flask, None, None]:
    """Create a Flask application wired to the in-memory collaborators.

    Returns
    -------
    Generator[Flask, None, None]
        Configured Flask application instance.
    """

    os.environ.setdefault("APP_ENV", "testing")
    application = create_app(TestingConfig, identity_provider=identity, email_sender=mailer)
    application.logger.setLevel("WARNING")
    with application.app_context():
        yield application


@pytest.fixture()
def client(app: Flask) -> Any:
    """Return a Flask test client."""

    return app.test_client()


@pytest.fixture()
def payload(faker) -> dict[str, str]:
    """A registration payload that satisfies every field rule."""

    return {
        "displayName": faker.name(),
        "email": faker.unique.email(),
        "password": STRONG_PASSWORD,
        "confirmPassword": STRONG_PASSWORD,
    }

"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request

from accounts.core.extensions import get_email_sender, get_identity_provider
from accounts.core.i18n import negotiate_locale
from accounts.schemas.auth import RegisterSchema
from accounts.services._shared.base import ServiceContext
from accounts.services._shared.policies.password import PasswordPolicy
from accounts.services.registration.service import UserRegistrationService

F = TypeVar("F", bound=Callable[..., Any])


def service_context() -> ServiceContext:
    """Build the request-scoped context passed to services."""

    return ServiceContext(locale=negotiate_locale())


def get_registration_service() -> UserRegistrationService:
    """Assemble the registration service from the app's collaborators and policy."""

    policy = PasswordPolicy.from_config(current_app.config)
    return UserRegistrationService(
        identity=get_identity_provider(),
        mailer=get_email_sender(),
        schema=RegisterSchema(password_policy=policy),
        ctx=service_context(),
    )


FORM_MIMETYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def request_body() -> Any:
    """Return the parsed request body, or the raw text when it is not usable JSON.

    JSON requests that parse cleanly come back as Python structures and form
    posts as a flat mapping. Anything else (text bodies, malformed JSON) is
    returned as text for the service to decode, so malformed payloads fail
    the same way regardless of media type.
    """

    if request.mimetype in FORM_MIMETYPES:
        return request.form.to_dict()
    if request.is_json:
        parsed = request.get_json(silent=True)
        if parsed is not None:
            return parsed
    return request.get_data(as_text=True)


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def empty_response(*, status: int = 200) -> Response:
    """Return a response without a body (used for pre-flight requests)."""

    return current_app.response_class(status=status)


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]

"""Centralized JSON error handling for the API.

Every failure leaves the app as the response envelope used by the
registration contract::

    {"statusCode": <int>, "message": <str>, "data": <list>}

``data`` is omitted when the error carries no user-facing detail.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify
from werkzeug.exceptions import HTTPException, MethodNotAllowed

from accounts.core.logger import ensure_request_id

log = logging.getLogger(__name__)


def envelope(status: int, message: str, data: Any = None) -> dict[str, Any]:
    """
    Build the ``statusCode``/``message``/``data`` body shared by all responses.

    :param status: HTTP status code.
    :param message: Human-readable summary (safe for clients).
    :param data: Optional payload; left out of the body when ``None``.
    :returns: JSON-serializable dictionary.
    :rtype: dict
    """
    body: dict[str, Any] = {"statusCode": int(status), "message": message}
    if data is not None:
        body["data"] = data
    return body


def envelope_response(status: int, message: str, data: Any = None) -> Response:
    """Return a Flask JSON response carrying :func:`envelope` and ``status``."""

    resp = jsonify(envelope(status, message, data))
    resp.status_code = int(status)
    return resp


def field_errors(messages: Any) -> list[dict[str, str]]:
    """
    Flatten Marshmallow ``messages`` into ``[{"field", "message"}, ...]``.

    Nested dictionaries use dotted paths; fields are emitted in sorted order so
    clients and tests see a stable list.
    """
    entries: list[dict[str, str]] = []

    def _walk(prefix: str, value: Any) -> None:
        if isinstance(value, dict):
            for key in sorted(value, key=str):
                _walk(f"{prefix}.{key}" if prefix else str(key), value[key])
        elif isinstance(value, (list, tuple)):
            for item in value:
                _walk(prefix, item)
        else:
            entries.append({"field": prefix or "_schema", "message": str(value)})

    _walk("", messages)
    return entries


class APIError(Exception):
    """
    Represent a JSON-serializable API error.

    Parameters
    ----------
    message : str
        Summary presented to clients in the ``message`` key.
    status_code : int, optional
        HTTP status code to return. Defaults to ``400``.
    data : list | None, optional
        User-facing details rendered under ``data``.

    Attributes
    ----------
    message : str
        Error summary stored for serialization.
    status_code : int
        HTTP status code returned to the client.
    data : list | None
        Details specific to the error instance.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        data: list[Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.data = data

    def to_response(self) -> Response:
        """Serialize the error into an envelope response."""
        return envelope_response(self.status_code, self.message, self.data)


# Domain conveniences
class UnprocessableEntity(APIError):
    """422 for payloads that are well-formed but semantically rejected."""

    def __init__(self, message: str, data: list[Any] | None = None) -> None:
        super().__init__(message, status_code=HTTPStatus.UNPROCESSABLE_ENTITY, data=data)


class InternalServerError(APIError):
    """500 carrying a safe, user-facing explanation."""

    def __init__(self, message: str = "Internal Server Error", data: list[Any] | None = None) -> None:
        super().__init__(message, status_code=HTTPStatus.INTERNAL_SERVER_ERROR, data=data)


def init_app(app: Flask) -> None:
    """
    Attach JSON error handlers to the Flask app.

    Notes
    -----
    - Guarantees the envelope format for all handled errors.
    - Emits 5xx with ``exc_info`` for traceability; 4xx as warnings.
    """

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        if err.status_code >= 500:
            log.error(
                "APIError: status=%s msg=%s request_id=%s",
                err.status_code,
                err.message,
                ensure_request_id(),
                exc_info=err.__cause__ is not None,
            )
        else:
            log.warning(
                "APIError: status=%s msg=%s request_id=%s",
                err.status_code,
                err.message,
                ensure_request_id(),
            )
        return err.to_response()

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        # Werkzeug descriptions are HTML-ish prose; the contract uses the phrase
        message = HTTPStatus(status).phrase
        level = log.error if status >= 500 else log.warning
        level(
            "HTTPException: status=%s detail=%s request_id=%s",
            status,
            message,
            ensure_request_id(),
        )
        response = envelope_response(status, message)
        if isinstance(err, MethodNotAllowed) and err.valid_methods:
            response.headers["Allow"] = ", ".join(sorted(err.valid_methods))
        return response

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        # Unexpected server-side error; never leak internal details
        log.error(
            "Unhandled exception: request_id=%s",
            ensure_request_id(),
            exc_info=err,
        )
        return envelope_response(HTTPStatus.INTERNAL_SERVER_ERROR, "Internal Server Error")


__all__ = [
    "APIError",
    "InternalServerError",
    "UnprocessableEntity",
    "envelope",
    "envelope_response",
    "field_errors",
    "init_app",
]

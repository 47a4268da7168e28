"""Registration endpoint using the service layer."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, request

from accounts.api.deps import (
    empty_response,
    get_registration_service,
    json_response,
    request_body,
    timing,
)
from accounts.core.errors import envelope
from accounts.schemas import UserPublicSchema
from accounts.services._shared.errors import ServiceError

bp = Blueprint("auth", __name__, url_prefix="/auth")

user_schema = UserPublicSchema()


@bp.route("/register", methods=["POST", "OPTIONS"], provide_automatic_options=False)
@timing
def register():
    """Register a new account and return its public representation.

    ``OPTIONS`` answers the CORS pre-flight with an empty 200. Other methods
    never reach the view: Flask raises 405, rendered by the error handlers.
    """

    if request.method == "OPTIONS":
        return empty_response(status=HTTPStatus.OK)

    service = get_registration_service()
    try:
        result = service.handle(request_body())
    except ServiceError as exc:
        raise service.translate_exceptions(exc) from exc

    body = envelope(
        HTTPStatus.CREATED,
        "Successfully registered user",
        {"user": user_schema.dump(result.user)},
    )
    return json_response(body, status=HTTPStatus.CREATED)

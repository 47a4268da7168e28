"""Integration tests for the registration endpoint."""

from __future__ import annotations

import pytest

from accounts.services._shared.errors import (
    EmailDeliveryError,
    ProviderInternalError,
    UnknownProviderError,
)
from tests.helpers.assertions import assert_envelope, assert_json_keys, error_fields
from tests.helpers.http import REGISTER_URL, json_headers


def test_options_preflight_returns_empty_ok(client) -> None:
    resp = client.options(REGISTER_URL)

    assert resp.status_code == 200
    assert resp.data == b""


@pytest.mark.parametrize("method", ["get", "put", "patch", "delete"])
def test_other_methods_are_not_allowed(client, method) -> None:
    resp = getattr(client, method)(REGISTER_URL)

    assert resp.status_code == 405
    assert resp.get_json() == {"statusCode": 405, "message": "Method Not Allowed"}
    assert "POST" in resp.headers["Allow"]


def test_register_creates_user(client, payload, identity, mailer) -> None:
    resp = client.post(REGISTER_URL, json=payload)

    assert resp.status_code == 201
    body = resp.get_json()
    assert_envelope(body, 201, "Successfully registered user")
    user = body["data"]["user"]
    assert set(user) == {"uid", "email", "emailVerified", "displayName", "disabled", "metadata"}
    assert user["emailVerified"] is False
    assert user["disabled"] is False
    assert user["displayName"] == payload["displayName"]
    assert "password" not in resp.get_data(as_text=True).lower()

    assert identity.get_user_by_email(payload["email"]).uid == user["uid"]
    [sent] = mailer.outbox
    assert sent.email == user["email"]


def test_text_body_is_parsed_as_json(client, payload) -> None:
    import json

    resp = client.post(REGISTER_URL, data=json.dumps(payload), content_type="text/plain")

    assert resp.status_code == 201


def test_malformed_text_body_is_internal_error(client) -> None:
    resp = client.post(REGISTER_URL, data="{not json", content_type="text/plain")

    assert resp.status_code == 500
    assert resp.get_json() == {"statusCode": 500, "message": "Internal Server Error"}


def test_malformed_json_body_is_internal_error(client) -> None:
    resp = client.post(REGISTER_URL, data="{not json", headers=json_headers())

    assert resp.status_code == 500
    assert_envelope(resp.get_json(), 500, "Internal Server Error")


@pytest.mark.parametrize(
    "kwargs",
    [
        {"data": "null", "content_type": "application/json"},
        {"json": [1, 2]},
        {"data": '"just text"', "content_type": "text/plain"},
    ],
)
def test_non_object_body_is_internal_error(client, identity, kwargs) -> None:
    resp = client.post(REGISTER_URL, **kwargs)

    assert resp.status_code == 500
    assert resp.get_json() == {"statusCode": 500, "message": "Internal Server Error"}
    assert identity.users == []


def test_form_body_is_validated_like_json(client, payload, identity) -> None:
    resp = client.post(REGISTER_URL, data=payload)

    assert resp.status_code == 201
    assert identity.get_user_by_email(payload["email"]) is not None


def test_incomplete_form_body_is_unprocessable(client, payload) -> None:
    payload.pop("displayName")

    resp = client.post(REGISTER_URL, data=payload)

    assert resp.status_code == 422
    assert error_fields(resp.get_json()) == {"displayName"}


def test_missing_email_is_unprocessable(client, payload, mailer) -> None:
    payload.pop("email")

    resp = client.post(REGISTER_URL, json=payload)

    assert resp.status_code == 422
    body = resp.get_json()
    assert_envelope(body, 422, "Fields validation error")
    assert "email" in error_fields(body)
    assert mailer.outbox == []


def test_empty_body_reports_every_field(client) -> None:
    resp = client.post(REGISTER_URL, data="", content_type="application/json")

    assert resp.status_code == 422
    assert error_fields(resp.get_json()) == {"displayName", "email", "password", "confirmPassword"}


def test_weak_password_is_unprocessable(client, payload) -> None:
    payload["password"] = payload["confirmPassword"] = "password"

    resp = client.post(REGISTER_URL, json=payload)

    assert resp.status_code == 422
    assert "password" in error_fields(resp.get_json())


def test_password_mismatch_is_unprocessable(client, payload, identity) -> None:
    payload["confirmPassword"] = "Different1Password"

    resp = client.post(REGISTER_URL, json=payload)

    assert resp.status_code == 422
    assert resp.get_json() == {
        "statusCode": 422,
        "message": "The password does not match",
        "data": ["La contraseña no coincide"],
    }
    assert identity.users == []


def test_mismatch_with_invalid_fields_is_still_unprocessable(client, payload) -> None:
    payload["email"] = "broken"
    payload["confirmPassword"] = "nope"

    resp = client.post(REGISTER_URL, json=payload)

    assert resp.status_code == 422


def test_duplicate_email_is_unprocessable(client, payload, mailer) -> None:
    first = client.post(REGISTER_URL, json=payload)
    assert first.status_code == 201

    resp = client.post(REGISTER_URL, json=payload)

    assert resp.status_code == 422
    assert resp.get_json() == {
        "statusCode": 422,
        "message": "Firebase:auth/email-already-exists",
        "data": ["El correo electrónico ya se encuentra en uso."],
    }
    # the second call never reaches email delivery
    assert len(mailer.outbox) == 1


def test_duplicate_rejection_comes_only_from_provider(client, payload, identity, monkeypatch) -> None:
    """Submitting the same payload twice is not idempotent on its own.

    With a provider that does not enforce uniqueness, both calls succeed and
    two accounts exist.
    """

    def create_without_uniqueness(**kwargs):
        kwargs["email"] = f"{kwargs['uid']}+{kwargs['email']}"
        return original(**kwargs)

    original = identity.create_user
    monkeypatch.setattr(identity, "create_user", create_without_uniqueness)
    monkeypatch.setattr(identity, "generate_email_verification_link", lambda email: "https://x/verify")

    assert client.post(REGISTER_URL, json=payload).status_code == 201
    assert client.post(REGISTER_URL, json=payload).status_code == 201
    assert len(identity.users) == 2


def test_duplicate_message_follows_accept_language(client, payload) -> None:
    client.post(REGISTER_URL, json=payload)

    resp = client.post(REGISTER_URL, json=payload, headers=json_headers("en"))

    assert resp.get_json()["data"] == ["The email address is already in use."]


def test_provider_internal_error(client, payload, identity, monkeypatch) -> None:
    def boom(**kwargs):
        raise ProviderInternalError(detail="unavailable")

    monkeypatch.setattr(identity, "create_user", boom)

    resp = client.post(REGISTER_URL, json=payload)

    assert resp.status_code == 500
    assert resp.get_json() == {
        "statusCode": 500,
        "message": "Firebase:auth/internal-error",
        "data": ["Error interno del servidor."],
    }


def test_unknown_provider_error(client, payload, identity, monkeypatch) -> None:
    def boom(**kwargs):
        raise UnknownProviderError(code="auth/invalid-password")

    monkeypatch.setattr(identity, "create_user", boom)

    resp = client.post(REGISTER_URL, json=payload)

    assert resp.status_code == 500
    assert resp.get_json() == {
        "statusCode": 500,
        "message": "Firebase:Unknown error",
        "data": ["Error desconocido."],
    }


def test_unexpected_provider_exception_is_generic(client, payload, identity, monkeypatch) -> None:
    def boom(**kwargs):
        raise RuntimeError("socket closed")

    monkeypatch.setattr(identity, "create_user", boom)

    resp = client.post(REGISTER_URL, json=payload)

    assert resp.status_code == 500
    assert resp.get_json() == {"statusCode": 500, "message": "Internal Server Error"}


def test_email_failure_is_generic_but_account_exists(client, payload, identity, mailer, monkeypatch) -> None:
    def boom(**kwargs):
        raise EmailDeliveryError("smtp down")

    monkeypatch.setattr(mailer, "send_welcome_email", boom)

    resp = client.post(REGISTER_URL, json=payload)

    assert resp.status_code == 500
    assert resp.get_json() == {"statusCode": 500, "message": "Internal Server Error"}
    assert identity.get_user_by_email(payload["email"]) is not None


def test_request_id_is_echoed(client, payload) -> None:
    resp = client.post(REGISTER_URL, json=payload, headers={"X-Request-ID": "req-123"})

    assert resp.headers["X-Request-ID"] == "req-123"


def test_cors_headers_on_allowed_origin(client) -> None:
    resp = client.options(
        REGISTER_URL,
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "POST",
        },
    )

    assert resp.status_code == 200
    assert resp.headers["Access-Control-Allow-Origin"] == "http://localhost:5173"
    assert_json_keys(dict(resp.headers), {"Access-Control-Allow-Methods"})

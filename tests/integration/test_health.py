"""Integration tests for the health endpoint."""

from __future__ import annotations

from tests.helpers.http import HEALTH_URL


def test_health_reports_backends(client) -> None:
    resp = client.get(HEALTH_URL)

    assert resp.status_code == 200
    assert resp.get_json() == {
        "status": "ok",
        "version": "dev",
        "commit": "unknown",
        "identity_backend": "memory",
        "mail_backend": "memory",
    }


def test_unknown_route_uses_envelope(client) -> None:
    resp = client.get("/api/v1/nope")

    assert resp.status_code == 404
    assert resp.get_json() == {"statusCode": 404, "message": "Not Found"}

"""Unit tests for the logging utility."""

from __future__ import annotations

import json
import logging

from accounts.core.logger import JSONFormatter, configure_logging, email_domain


def test_configure_logging_sets_level() -> None:
    """``configure_logging`` should set the root logger level."""

    # Act
    configure_logging("DEBUG")

    # Assert
    assert logging.getLogger().level == logging.DEBUG


def test_json_formatter_includes_registration_extras() -> None:
    """Extra ``uid``/``email_domain`` attributes end up in the JSON line."""

    record = logging.LogRecord("accounts", logging.INFO, __file__, 1, "registration.created", None, None)
    record.uid = "abc"
    record.email_domain = "example.com"

    line = json.loads(JSONFormatter().format(record))

    assert line["message"] == "registration.created"
    assert line["uid"] == "abc"
    assert line["email_domain"] == "example.com"
    assert "elapsed_ms" not in line


def test_email_domain_never_returns_local_part() -> None:
    assert email_domain("Jane.Doe@Example.COM") == "example.com"
    assert email_domain("not-an-email") is None
    assert email_domain(None) is None

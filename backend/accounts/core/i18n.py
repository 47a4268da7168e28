"""Localized user-facing messages returned in error payloads."""

from __future__ import annotations

from collections.abc import Mapping

from flask import current_app, has_request_context, request

# Spanish is the historical default of the public contract
CATALOG: Mapping[str, Mapping[str, str]] = {
    "es": {
        "password_mismatch": "La contraseña no coincide",
        "email_in_use": "El correo electrónico ya se encuentra en uso.",
        "provider_internal": "Error interno del servidor.",
        "provider_unknown": "Error desconocido.",
    },
    "en": {
        "password_mismatch": "The password does not match",
        "email_in_use": "The email address is already in use.",
        "provider_internal": "Internal server error.",
        "provider_unknown": "Unknown error.",
    },
}

FALLBACK_LOCALE = "es"


def negotiate_locale() -> str:
    """Pick the response locale from ``Accept-Language`` and app settings.

    Outside a request (CLI, unit tests without a request) the configured
    ``DEFAULT_LOCALE`` is used.
    """
    default = str(current_app.config.get("DEFAULT_LOCALE", FALLBACK_LOCALE))
    if not has_request_context():
        return default
    supported = list(current_app.config.get("SUPPORTED_LOCALES", CATALOG.keys()))
    return request.accept_languages.best_match(supported, default=default) or default


def translate(key: str, locale: str | None = None) -> str:
    """Return the message ``key`` for ``locale``; unknown locales fall back to Spanish."""

    messages = CATALOG.get(locale or negotiate_locale()) or CATALOG[FALLBACK_LOCALE]
    return messages.get(key) or CATALOG[FALLBACK_LOCALE][key]


__all__ = ["CATALOG", "negotiate_locale", "translate"]

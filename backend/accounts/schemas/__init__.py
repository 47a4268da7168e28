"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import RegisterSchema, UserPublicSchema, not_blank

__all__ = [
    "RegisterSchema",
    "UserPublicSchema",
    "not_blank",
]

"""Registration-related Marshmallow schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, ValidationError, fields, validate, validates

from accounts.services._shared.policies.password import PasswordPolicy


def not_blank(value: str) -> None:
    """Reject strings made only of whitespace."""

    if not value.strip():
        raise ValidationError("Field may not be blank.")


class RegisterSchema(Schema):
    """Input payload for account registration.

    Client keys are camelCase (``displayName``, ``confirmPassword``); loaded
    keys are snake_case. Unknown keys are dropped.
    """

    class Meta:
        unknown = EXCLUDE

    def __init__(self, *, password_policy: PasswordPolicy | None = None, **kwargs: Any) -> None:
        self._password_policy = password_policy or PasswordPolicy()
        super().__init__(**kwargs)

    display_name = fields.String(
        required=True,
        data_key="displayName",
        validate=[validate.Length(min=1, max=100), not_blank],
    )
    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True)
    confirm_password = fields.String(
        required=True,
        data_key="confirmPassword",
        validate=validate.Length(min=1),
    )

    @validates("password")
    def check_password_policy(self, value: str, **_: Any) -> None:
        problems = self._password_policy.violations(value)
        if problems:
            raise ValidationError(problems)


class UserPublicSchema(Schema):
    """Response payload exposing the created account, never its credentials."""

    class Meta:
        ordered = True

    uid = fields.String(required=True)
    email = fields.Email(required=True)
    email_verified = fields.Boolean(required=True, data_key="emailVerified")
    display_name = fields.String(required=True, data_key="displayName")
    disabled = fields.Boolean(required=True)
    metadata = fields.Dict(keys=fields.String(), allow_none=True)

"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import Schema, ValidationError, fields, validate, validates_schema

from .user import UserSchema


class RegisterSchema(Schema):
    """Input payload for account registration."""

    username = fields.String(required=True, validate=validate.Length(min=3, max=50))
    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=8, max=128))
    full_name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    avatar_url = fields.URL(load_default=None, allow_none=True)
    cover_image_url = fields.URL(load_default=None, allow_none=True)


class LoginSchema(Schema):
    """Input payload for authenticating with a username *or* an email."""

    username = fields.String(load_default=None, validate=validate.Length(min=1, max=50))
    email = fields.String(load_default=None, validate=validate.Length(min=1, max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))

    @validates_schema
    def require_handle(self, data: dict[str, Any], **_: Any) -> None:
        if not data.get("username") and not data.get("email"):
            raise ValidationError("username or email is required", field_name="username")


class RefreshSchema(Schema):
    """Optional body for non-cookie clients; the cookie wins when both are sent."""

    refresh_token = fields.String(load_default=None)


class ChangePasswordSchema(Schema):
    old_password = fields.String(required=True, validate=validate.Length(min=1, max=128))
    new_password = fields.String(required=True, validate=validate.Length(min=8, max=128))


class TokenPairSchema(Schema):
    """Response payload containing both session tokens."""

    access_token = fields.String(required=True)
    refresh_token = fields.String(required=True)


class LoginResponseSchema(Schema):
    user = fields.Nested(UserSchema, required=True)
    access_token = fields.String(attribute="tokens.access_token", required=True)
    refresh_token = fields.String(attribute="tokens.refresh_token", required=True)

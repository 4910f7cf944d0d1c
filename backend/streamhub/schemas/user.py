"""User and channel schemas."""

from __future__ import annotations

from marshmallow import Schema, fields


class UserSchema(Schema):
    """Public representation of an identity."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    email = fields.Email(required=True)
    full_name = fields.String(required=True)
    avatar_url = fields.String(allow_none=True)
    cover_image_url = fields.String(allow_none=True)


class UserSummarySchema(Schema):
    """Channel card used in subscriber listings."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    full_name = fields.String(required=True)
    avatar_url = fields.String(allow_none=True)


class ChannelProfileSchema(UserSummarySchema):
    email = fields.Email(required=True)
    cover_image_url = fields.String(allow_none=True)
    subscribers_count = fields.Integer(required=True)
    subscribed_to_count = fields.Integer(required=True)
    is_subscribed = fields.Boolean(required=True)

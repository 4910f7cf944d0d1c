"""Video read-model schemas."""

from __future__ import annotations

from marshmallow import Schema, fields

from .user import UserSummarySchema


class VideoSummarySchema(Schema):
    id = fields.Integer(required=True)
    owner_id = fields.Integer(required=True)
    title = fields.String(required=True)
    thumbnail_url = fields.String(allow_none=True)
    duration = fields.Float(required=True)
    views = fields.Integer(required=True)


class ChannelBriefSchema(UserSummarySchema):
    subscribers_count = fields.Integer(required=True)
    is_subscribed = fields.Boolean(required=True)


class VideoDetailSchema(Schema):
    """Video with its derived like data and owning channel."""

    id = fields.Integer(required=True)
    title = fields.String(required=True)
    description = fields.String(required=True)
    video_url = fields.String(required=True)
    thumbnail_url = fields.String(allow_none=True)
    duration = fields.Float(required=True)
    views = fields.Integer(required=True)
    is_published = fields.Boolean(required=True)
    created_at = fields.DateTime(required=True)
    likes_count = fields.Integer(required=True)
    is_liked = fields.Boolean(required=True)
    owner = fields.Nested(ChannelBriefSchema, required=True)

"""Toggle results and per-target summaries for likes and subscriptions."""

from __future__ import annotations

from marshmallow import Schema, fields

from streamhub.models.enums import RelationshipKind


class LikeToggleSchema(Schema):
    is_liked = fields.Boolean(attribute="active", data_key="isLiked", required=True)


class SubscriptionToggleSchema(Schema):
    is_subscribed = fields.Boolean(attribute="active", data_key="isSubscribed", required=True)


class RelationshipSummarySchema(Schema):
    """Count of one target's likes or subscribers plus the viewer's own flag."""

    target_id = fields.Integer(required=True)
    kind = fields.Enum(RelationshipKind, by_value=True, required=True)
    count = fields.Integer(attribute="relationship_count", required=True)
    viewer_has_relationship = fields.Boolean(required=True)

"""Channel subscription toggle, summary and listings."""

from __future__ import annotations

from flask import Blueprint

from streamhub.api.deps import (
    current_viewer_id,
    json_response,
    optional_auth,
    require_auth,
    timing,
)
from streamhub.models.enums import RelationshipKind
from streamhub.schemas import (
    RelationshipSummarySchema,
    SubscriptionToggleSchema,
    UserSummarySchema,
)
from streamhub.services.relationships.service import RelationshipService
from streamhub.services.views.service import ViewService

bp = Blueprint("subscriptions", __name__)

toggle_schema = SubscriptionToggleSchema()
users_schema = UserSummarySchema(many=True)
summary_schema = RelationshipSummarySchema()


@bp.post("/<channel_id>")
@require_auth
@timing
def toggle_subscription(channel_id: str):
    outcome = RelationshipService().toggle(
        current_viewer_id(), channel_id, RelationshipKind.CHANNEL_SUBSCRIPTION
    )
    return json_response({"data": toggle_schema.dump(outcome)})


@bp.get("/<channel_id>/subscribers")
@require_auth
@timing
def channel_subscribers(channel_id: str):
    users = RelationshipService().subscribers(channel_id)
    return json_response({"data": users_schema.dump(users)})


@bp.get("/by/<subscriber_id>")
@require_auth
@timing
def subscribed_channels(subscriber_id: str):
    users = RelationshipService().subscribed_channels(subscriber_id)
    return json_response({"data": users_schema.dump(users)})


@bp.get("/<channel_id>")
@optional_auth
@timing
def subscription_summary(channel_id: str):
    """Subscriber count of a channel and whether the viewer is one of them."""

    summary = ViewService().relationship_summary(
        channel_id, RelationshipKind.CHANNEL_SUBSCRIPTION, current_viewer_id()
    )
    return json_response({"data": summary_schema.dump(summary)})

"""Public channel profile."""

from __future__ import annotations

from flask import Blueprint

from streamhub.api.deps import current_viewer_id, json_response, optional_auth, timing
from streamhub.schemas import ChannelProfileSchema
from streamhub.services.views.service import ViewService

bp = Blueprint("channels", __name__)

profile_schema = ChannelProfileSchema()


@bp.get("/<username>")
@optional_auth
@timing
def channel_profile(username: str):
    """Channel with subscriber counts; ``is_subscribed`` is false for anonymous reads."""

    profile = ViewService().channel_profile(username, current_viewer_id())
    return json_response({"data": profile_schema.dump(profile)})

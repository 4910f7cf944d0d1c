"""Like toggles, like summaries and the liked-videos list."""

from __future__ import annotations

from flask import Blueprint, abort

from streamhub.api.deps import (
    current_viewer_id,
    json_response,
    optional_auth,
    require_auth,
    timing,
)
from streamhub.models.enums import RelationshipKind
from streamhub.schemas import LikeToggleSchema, RelationshipSummarySchema, VideoSummarySchema
from streamhub.services.relationships.service import RelationshipService
from streamhub.services.views.service import ViewService

bp = Blueprint("likes", __name__)

toggle_schema = LikeToggleSchema()
videos_schema = VideoSummarySchema(many=True)
summary_schema = RelationshipSummarySchema()


def _toggle(target_id: str, kind: RelationshipKind):
    outcome = RelationshipService().toggle(current_viewer_id(), target_id, kind)
    return json_response({"data": toggle_schema.dump(outcome)})


# Ids stay strings here so malformed ones reach the service and yield 400, not 404
@bp.post("/video/<video_id>")
@require_auth
@timing
def toggle_video_like(video_id: str):
    return _toggle(video_id, RelationshipKind.VIDEO_LIKE)


@bp.post("/comment/<comment_id>")
@require_auth
@timing
def toggle_comment_like(comment_id: str):
    return _toggle(comment_id, RelationshipKind.COMMENT_LIKE)


@bp.post("/tweet/<tweet_id>")
@require_auth
@timing
def toggle_tweet_like(tweet_id: str):
    return _toggle(tweet_id, RelationshipKind.TWEET_LIKE)


@bp.get("/videos")
@require_auth
@timing
def liked_videos():
    """Videos the authenticated viewer likes, most recent first."""

    videos = RelationshipService().liked_videos(current_viewer_id())
    return json_response({"data": videos_schema.dump(videos)})


_LIKE_KINDS = {
    "video": RelationshipKind.VIDEO_LIKE,
    "comment": RelationshipKind.COMMENT_LIKE,
    "tweet": RelationshipKind.TWEET_LIKE,
}


@bp.get("/<target>/<target_id>")
@optional_auth
@timing
def like_summary(target: str, target_id: str):
    """Like count of one video, comment or tweet, and whether the viewer likes it."""

    kind = _LIKE_KINDS.get(target)
    if kind is None:
        abort(404)
    summary = ViewService().relationship_summary(target_id, kind, current_viewer_id())
    return json_response({"data": summary_schema.dump(summary)})

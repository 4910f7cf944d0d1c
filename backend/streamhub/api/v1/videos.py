"""Video detail with viewer-relative like and subscription data."""

from __future__ import annotations

from flask import Blueprint

from streamhub.api.deps import current_viewer_id, json_response, optional_auth, timing
from streamhub.schemas import VideoDetailSchema
from streamhub.services.views.service import ViewService

bp = Blueprint("videos", __name__)

detail_schema = VideoDetailSchema()


@bp.get("/<video_id>")
@optional_auth
@timing
def video_detail(video_id: str):
    detail = ViewService().video_detail(video_id, current_viewer_id())
    return json_response({"data": detail_schema.dump(detail)})

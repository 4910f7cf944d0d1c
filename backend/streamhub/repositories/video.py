"""Video repository."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Row, select

from streamhub.models.enums import RelationshipKind
from streamhub.models.video import Video
from streamhub.repositories.base import BaseRepository
from streamhub.repositories.relationship import RelationshipRepository


class VideoRepository(BaseRepository[Video]):
    """Persistence-only repository for :class:`Video`."""

    model = Video

    def detail_row(self, video_id: int, viewer_id: int | None) -> Row[Any] | None:
        """Load a video with its like count and the viewer's flags in one query.

        ``owner_subscribers_count`` and ``is_subscribed`` refer to the video's
        owning channel.

        :returns: Row ``(Video, likes_count, owner_subscribers_count,
            is_liked, is_subscribed)`` or ``None`` when no such video exists.
        """
        stmt = select(
            Video,
            RelationshipRepository.count_subquery(Video.id, RelationshipKind.VIDEO_LIKE).label(
                "likes_count"
            ),
            RelationshipRepository.count_subquery(
                Video.owner_id, RelationshipKind.CHANNEL_SUBSCRIPTION
            ).label("owner_subscribers_count"),
            RelationshipRepository.flag_expression(
                Video.id, RelationshipKind.VIDEO_LIKE, viewer_id
            ).label("is_liked"),
            RelationshipRepository.flag_expression(
                Video.owner_id, RelationshipKind.CHANNEL_SUBSCRIPTION, viewer_id
            ).label("is_subscribed"),
        ).where(Video.id == video_id)
        return self.session.execute(stmt).first()

"""
ViewService
===========

Viewer-relative aggregation over the relationship ledger: counts and
"does this viewer have one" flags, recomputed on every call.
"""

from __future__ import annotations

from streamhub.models.enums import RelationshipKind
from streamhub.services._shared.base import BaseService
from streamhub.services._shared.errors import InvalidInputError, NotFoundError
from streamhub.services._shared.policies.common import parse_entity_id
from streamhub.services.views.dto import (
    ChannelBriefOut,
    ChannelProfileOut,
    RelationshipSummaryOut,
    VideoDetailOut,
)


class ViewService(BaseService):
    """
    Pure read service.

    ``viewer_id=None`` means an anonymous read: every viewer flag is
    ``False`` and nothing fails because of it. A missing *base* entity
    (video, channel) raises :class:`NotFoundError`; zero relationships is a
    normal result.
    """

    def relationship_summary(
        self, target_id: object, kind: RelationshipKind, viewer_id: int | None = None
    ) -> RelationshipSummaryOut:
        """
        Count and viewer flag for a single target.

        Video and channel targets must exist; comment and tweet targets are
        not checked.

        :raises InvalidTargetError: If ``target_id`` is malformed.
        :raises NotFoundError: If a video/channel target does not exist.
        """
        parsed = parse_entity_id(target_id)
        with self.ro_uow() as uow:
            if kind is RelationshipKind.VIDEO_LIKE and uow.videos.get(parsed) is None:
                raise NotFoundError("Video", parsed)
            if kind is RelationshipKind.CHANNEL_SUBSCRIPTION and uow.users.get(parsed) is None:
                raise NotFoundError("Channel", parsed)

            count = uow.relationships.count_for_target(parsed, kind)
            has = viewer_id is not None and uow.relationships.has(viewer_id, parsed, kind)
            return RelationshipSummaryOut(
                target_id=parsed,
                kind=kind,
                relationship_count=count,
                viewer_has_relationship=bool(has),
            )

    def video_detail(self, video_id: object, viewer_id: int | None = None) -> VideoDetailOut:
        """
        Video with like count, viewer like flag and owner subscription data,
        loaded in one statement.

        :raises InvalidTargetError: If ``video_id`` is malformed.
        :raises NotFoundError: If the video does not exist.
        """
        parsed = parse_entity_id(video_id)
        with self.ro_uow() as uow:
            row = uow.videos.detail_row(parsed, viewer_id)
            if row is None:
                raise NotFoundError("Video", parsed)

            video = row[0]
            owner = video.owner
            return VideoDetailOut(
                id=video.id,
                title=video.title,
                description=video.description,
                video_url=video.video_url,
                thumbnail_url=video.thumbnail_url,
                duration=video.duration,
                views=video.views,
                is_published=video.is_published,
                created_at=video.created_at,
                likes_count=int(row.likes_count or 0),
                is_liked=bool(row.is_liked),
                owner=ChannelBriefOut(
                    id=owner.id,
                    username=owner.username,
                    full_name=owner.full_name,
                    avatar_url=owner.avatar_url,
                    subscribers_count=int(row.owner_subscribers_count or 0),
                    is_subscribed=bool(row.is_subscribed),
                ),
            )

    def channel_profile(self, username: str, viewer_id: int | None = None) -> ChannelProfileOut:
        """
        Channel page with subscriber / subscribed-to counts.

        :raises InvalidInputError: If ``username`` is blank.
        :raises NotFoundError: If no identity has that username.
        """
        if not username or not username.strip():
            raise InvalidInputError("Username is missing")

        with self.ro_uow() as uow:
            row = uow.users.channel_profile_row(username, viewer_id)
            if row is None:
                raise NotFoundError("Channel", username.strip().lower())

            user = row[0]
            return ChannelProfileOut(
                id=user.id,
                username=user.username,
                full_name=user.full_name,
                email=user.email,
                avatar_url=user.avatar_url,
                cover_image_url=user.cover_image_url,
                subscribers_count=int(row.subscribers_count or 0),
                subscribed_to_count=int(row.subscribed_to_count or 0),
                is_subscribed=bool(row.is_subscribed),
            )

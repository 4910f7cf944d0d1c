"""Read models produced by ViewService. Never persisted, never cached."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from streamhub.models.enums import RelationshipKind


@dataclass(frozen=True, slots=True)
class RelationshipSummaryOut:
    """
    Derived aggregate for one target.

    :param relationship_count: Number of records for the target, any viewer.
    :param viewer_has_relationship: Whether the requesting viewer has one;
        always ``False`` for anonymous reads.
    """

    target_id: int
    kind: RelationshipKind
    relationship_count: int
    viewer_has_relationship: bool


@dataclass(frozen=True, slots=True)
class ChannelBriefOut:
    """Owning channel as embedded in a video detail."""

    id: int
    username: str
    full_name: str
    avatar_url: str | None
    subscribers_count: int
    is_subscribed: bool


@dataclass(frozen=True, slots=True)
class VideoDetailOut:
    id: int
    title: str
    description: str
    video_url: str
    thumbnail_url: str | None
    duration: float
    views: int
    is_published: bool
    created_at: datetime
    likes_count: int
    is_liked: bool
    owner: ChannelBriefOut


@dataclass(frozen=True, slots=True)
class ChannelProfileOut:
    """
    Public channel page.

    ``subscribers_count`` treats the identity as a subscription target,
    ``subscribed_to_count`` as a subscription source.
    """

    id: int
    username: str
    full_name: str
    email: str
    avatar_url: str | None
    cover_image_url: str | None
    subscribers_count: int
    subscribed_to_count: int
    is_subscribed: bool

"""Domain enumerations shared by models, ports and services."""

from __future__ import annotations

import enum


class RelationshipKind(str, enum.Enum):
    """What a relationship row points at.

    The three like kinds target content by id; ``CHANNEL_SUBSCRIPTION``
    targets a user acting as a channel.
    """

    VIDEO_LIKE = "video_like"
    COMMENT_LIKE = "comment_like"
    TWEET_LIKE = "tweet_like"
    CHANNEL_SUBSCRIPTION = "channel_subscription"

    @property
    def is_like(self) -> bool:
        return self is not RelationshipKind.CHANNEL_SUBSCRIPTION


class RelationshipState(str, enum.Enum):
    """Presence of a relationship row for one ``(viewer, target, kind)`` tuple."""

    ACTIVE = "active"
    INACTIVE = "inactive"

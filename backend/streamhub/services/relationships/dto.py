"""DTOs for RelationshipService."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from streamhub.models.enums import RelationshipKind, RelationshipState

if TYPE_CHECKING:
    from streamhub.models.video import Video


@dataclass(frozen=True, slots=True)
class ToggleOutcome:
    """
    Result of one toggle call.

    :param target_id: Parsed target identifier.
    :param kind: Relationship kind that was toggled.
    :param state: State of the relationship after the call.
    """

    target_id: int
    kind: RelationshipKind
    state: RelationshipState

    @property
    def active(self) -> bool:
        return self.state is RelationshipState.ACTIVE


@dataclass(frozen=True, slots=True)
class VideoSummaryOut:
    """Card for video listings."""

    id: int
    owner_id: int
    title: str
    thumbnail_url: str | None
    duration: float
    views: int

    @classmethod
    def from_model(cls, video: Video) -> VideoSummaryOut:
        return cls(
            id=video.id,
            owner_id=video.owner_id,
            title=video.title,
            thumbnail_url=video.thumbnail_url,
            duration=video.duration,
            views=video.views,
        )

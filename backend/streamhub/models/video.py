"""Video metadata; the media itself lives in the blob store."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from streamhub.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import User


class Video(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """
    A published (or draft) video owned by a channel.

    Notes
    -----
    - ``video_url`` / ``thumbnail_url`` and ``duration`` come from the blob
      store descriptor ``{url, duration}``.
    - Like counts are never stored here; they are derived from
      :class:`~streamhub.models.relationship.Relationship` at read time.
    """

    __tablename__ = "videos"

    owner_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    video_url: Mapped[str] = mapped_column(String(500), nullable=False)
    thumbnail_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    duration: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    owner: Mapped[User] = relationship("User", back_populates="videos")

    __table_args__ = (Index("ix_videos_owner_id", "owner_id"),)

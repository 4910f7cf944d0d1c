"""Column mixins shared by the ORM models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column


def _db_now(*, refresh: bool = False) -> Mapped[datetime]:
    return mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now() if refresh else None,
    )


class PKMixin:
    id: Mapped[int] = mapped_column(Integer, primary_key=True)


class CreatedAtMixin:
    """Insert time, set by the database. Rows that are never edited stop here."""

    created_at: Mapped[datetime] = _db_now()


class TimestampMixin(CreatedAtMixin):
    """``created_at`` plus an ``updated_at`` bumped on every ORM update."""

    updated_at: Mapped[datetime] = _db_now(refresh=True)


class ReprMixin:
    """``<Video id=3>``-style repr; never touches lazy attributes."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={getattr(self, 'id', None)}>"

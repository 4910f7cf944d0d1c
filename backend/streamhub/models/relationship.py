"""Relationship ledger rows: likes and channel subscriptions."""

from __future__ import annotations

from sqlalchemy import Enum, ForeignKey, Index, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from streamhub.core.extensions import db

from .base import CreatedAtMixin, PKMixin, ReprMixin
from .enums import RelationshipKind

# Matched by name when an insert loses a race; keep in sync with __table_args__.
RELATIONSHIP_UNIQUE_CONSTRAINT = "uq_relationships_viewer_target_kind"

RelationshipKindType = Enum(
    RelationshipKind,
    name="relationship_kind",
    values_callable=lambda kinds: [k.value for k in kinds],
    validate_strings=True,
)


class Relationship(PKMixin, CreatedAtMixin, ReprMixin, db.Model):
    """
    A "viewer engaged with target" fact.

    Rows are only ever inserted or deleted, never updated. ``target_id`` is
    polymorphic over ``target_kind`` and therefore carries no foreign key:
    a video id, comment id, tweet id, or the channel's user id.

    Invariant
    ---------
    At most one row per ``(viewer_id, target_id, target_kind)``, enforced by
    :data:`RELATIONSHIP_UNIQUE_CONSTRAINT` rather than by application checks.
    """

    __tablename__ = "relationships"

    viewer_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    target_id: Mapped[int] = mapped_column(Integer, nullable=False)
    target_kind: Mapped[RelationshipKind] = mapped_column(RelationshipKindType, nullable=False)

    __table_args__ = (
        UniqueConstraint(
            "viewer_id", "target_id", "target_kind", name=RELATIONSHIP_UNIQUE_CONSTRAINT
        ),
        # Count/flag lookups go target-first
        Index("ix_relationships_target", "target_kind", "target_id"),
    )

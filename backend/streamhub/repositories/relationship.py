"""Relationship ledger repository: atomic add/remove plus read-side helpers."""

from __future__ import annotations

from typing import Any

from sqlalchemy import ColumnElement, ScalarSelect, delete, exists, false, func, insert, select

from streamhub.models.enums import RelationshipKind
from streamhub.models.relationship import Relationship
from streamhub.models.user import User
from streamhub.models.video import Video
from streamhub.repositories.base import BaseRepository


class RelationshipRepository(BaseRepository[Relationship]):
    """Persistence-only access to :class:`Relationship` rows.

    Write methods map one-to-one onto single atomic statements so callers
    never need a read-then-write sequence:

    * :meth:`delete_matching` is a find-and-delete (``DELETE ... WHERE``);
    * :meth:`insert` is a plain ``INSERT`` issued inside a SAVEPOINT, leaving
      duplicate detection to the unique constraint.
    """

    model = Relationship

    def _filterable_fields(self):
        return {
            "viewer_id": Relationship.viewer_id,
            "target_id": Relationship.target_id,
            "target_kind": Relationship.target_kind,
        }

    # ---------------------------- Writes ----------------------------

    def delete_matching(self, viewer_id: int, target_id: int, kind: RelationshipKind) -> int:
        """Delete the row for ``(viewer_id, target_id, kind)`` if present.

        :returns: Number of rows removed (0 or 1 given the unique constraint).
        :rtype: int
        """
        stmt = (
            delete(Relationship)
            .where(
                Relationship.viewer_id == viewer_id,
                Relationship.target_id == target_id,
                Relationship.target_kind == kind,
            )
            .execution_options(synchronize_session=False)
        )
        result = self.session.execute(stmt)
        return int(result.rowcount or 0)

    def insert(self, viewer_id: int, target_id: int, kind: RelationshipKind) -> None:
        """Insert a row inside a SAVEPOINT.

        A unique-constraint violation rolls back only the SAVEPOINT and then
        propagates as :class:`sqlalchemy.exc.IntegrityError`; the surrounding
        transaction stays usable.
        """
        with self.session.begin_nested():
            self.session.execute(
                insert(Relationship).values(
                    viewer_id=viewer_id, target_id=target_id, target_kind=kind
                )
            )

    # ---------------------------- Reads ----------------------------

    def count_for_target(self, target_id: int, kind: RelationshipKind) -> int:
        stmt = select(func.count(Relationship.id)).where(
            Relationship.target_id == target_id, Relationship.target_kind == kind
        )
        return int(self.session.execute(stmt).scalar_one())

    def has(self, viewer_id: int, target_id: int, kind: RelationshipKind) -> bool:
        return self.exists(viewer_id=viewer_id, target_id=target_id, target_kind=kind)

    def liked_videos(self, viewer_id: int) -> list[Video]:
        """Videos ``viewer_id`` currently likes, most recent like first."""
        stmt = (
            select(Video)
            .join(
                Relationship,
                (Relationship.target_id == Video.id)
                & (Relationship.target_kind == RelationshipKind.VIDEO_LIKE),
            )
            .where(Relationship.viewer_id == viewer_id)
            .order_by(Relationship.created_at.desc(), Relationship.id.desc())
        )
        return list(self.session.execute(stmt).scalars())

    def subscribers_of(self, channel_id: int) -> list[User]:
        stmt = (
            select(User)
            .join(Relationship, Relationship.viewer_id == User.id)
            .where(
                Relationship.target_id == channel_id,
                Relationship.target_kind == RelationshipKind.CHANNEL_SUBSCRIPTION,
            )
            .order_by(Relationship.created_at.desc(), Relationship.id.desc())
        )
        return list(self.session.execute(stmt).scalars())

    def channels_of(self, subscriber_id: int) -> list[User]:
        stmt = (
            select(User)
            .join(
                Relationship,
                (Relationship.target_id == User.id)
                & (Relationship.target_kind == RelationshipKind.CHANNEL_SUBSCRIPTION),
            )
            .where(Relationship.viewer_id == subscriber_id)
            .order_by(Relationship.created_at.desc(), Relationship.id.desc())
        )
        return list(self.session.execute(stmt).scalars())

    # ---------------------- Aggregation building blocks ----------------------
    # Correlated sub-queries that other repositories embed in their SELECTs so
    # an entity and its derived counts/flags come back in one round trip.

    @staticmethod
    def count_subquery(target: ColumnElement[Any], kind: RelationshipKind) -> ScalarSelect[int]:
        """``COUNT(*)`` of rows of ``kind`` whose target is ``target``."""
        return (
            select(func.count(Relationship.id))
            .where(Relationship.target_id == target, Relationship.target_kind == kind)
            .correlate_except(Relationship)
            .scalar_subquery()
        )

    @staticmethod
    def source_count_subquery(
        viewer: ColumnElement[Any], kind: RelationshipKind
    ) -> ScalarSelect[int]:
        """``COUNT(*)`` of rows of ``kind`` created by ``viewer``."""
        return (
            select(func.count(Relationship.id))
            .where(Relationship.viewer_id == viewer, Relationship.target_kind == kind)
            .correlate_except(Relationship)
            .scalar_subquery()
        )

    @staticmethod
    def flag_expression(
        target: ColumnElement[Any], kind: RelationshipKind, viewer_id: int | None
    ) -> ColumnElement[bool]:
        """``EXISTS`` for the viewer's row; constant false for anonymous reads."""
        if viewer_id is None:
            return false()
        return (
            exists()
            .where(
                Relationship.viewer_id == viewer_id,
                Relationship.target_id == target,
                Relationship.target_kind == kind,
            )
            .correlate_except(Relationship)
        )

"""Relationship ledger backed by the ``relationships`` table."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from streamhub.models.enums import RelationshipKind
from streamhub.models.relationship import RELATIONSHIP_UNIQUE_CONSTRAINT
from streamhub.services._shared.errors import PersistenceError, violates
from streamhub.services._shared.ports import RelationshipLedger
from streamhub.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

log = logging.getLogger(__name__)

# SQLite names the columns rather than the constraint
_UNIQUE_COLUMNS = (
    "relationships.viewer_id",
    "relationships.target_id",
    "relationships.target_kind",
)


class SQLRelationshipLedger(RelationshipLedger):
    """
    :class:`RelationshipLedger` over SQL.

    ``remove`` is one ``DELETE``; ``add`` is one ``INSERT`` in a SAVEPOINT
    whose duplicate-key failure is reported as ``False``. Each write commits
    on its own.
    """

    def remove(self, viewer_id: int, target_id: int, kind: RelationshipKind) -> bool:
        try:
            with SQLAlchemyUnitOfWork() as uow:
                return uow.relationships.delete_matching(viewer_id, target_id, kind) > 0
        except SQLAlchemyError as exc:
            raise PersistenceError("Could not update relationship") from exc

    def add(self, viewer_id: int, target_id: int, kind: RelationshipKind) -> bool:
        try:
            with SQLAlchemyUnitOfWork() as uow:
                try:
                    uow.relationships.insert(viewer_id, target_id, kind)
                except IntegrityError as exc:
                    if violates(exc, RELATIONSHIP_UNIQUE_CONSTRAINT, columns=_UNIQUE_COLUMNS):
                        log.info(
                            "relationship.duplicate_insert",
                            extra={
                                "viewer_id": viewer_id,
                                "target_id": target_id,
                                "target_kind": kind.value,
                            },
                        )
                        return False
                    raise
                return True
        except SQLAlchemyError as exc:
            raise PersistenceError("Could not update relationship") from exc


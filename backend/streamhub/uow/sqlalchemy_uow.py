"""
SQLAlchemy implementation of UnitOfWork for Flask.
"""

from __future__ import annotations

from contextlib import suppress

from sqlalchemy import event
from sqlalchemy.exc import InvalidRequestError
from sqlalchemy.orm import Session, SessionTransaction

from streamhub.core.extensions import db
from streamhub.repositories import RelationshipRepository, UserRepository, VideoRepository
from streamhub.uow.base import UnitOfWork


class SQLAlchemyRepositoryContainer:
    """Provide repository instances that share a SQLAlchemy session."""

    def __init__(self, *, session: Session) -> None:
        self.session = session
        self.users = UserRepository(session=self.session)
        self.videos = VideoRepository(session=self.session)
        self.relationships = RelationshipRepository(session=self.session)


class SQLAlchemyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    SQLAlchemy-backed UoW using the Flask-scoped session.

    The same session is shared across all repositories for a consistent
    transaction, which starts lazily on the first statement.
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyReadOnlyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-only Unit of Work backed by the Flask-scoped SQLAlchemy session.

    This UoW:
    - Owns a fresh transaction when none is running and rolls it back on exit.
    - Attaches to an already-running transaction otherwise, leaving its fate
      to the outer scope.
    - Blocks ORM flushes of new/dirty/deleted objects while active.
    - Disallows ``commit()``.
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)
        self._txn: SessionTransaction | None = None
        self._guard_installed = False

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        try:
            self._txn = self.session.begin()
        except InvalidRequestError:
            # Already inside a transaction; the outer scope owns it
            self._txn = None
        event.listen(self.session, "before_flush", self._block_flush)
        self._guard_installed = True
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._guard_installed:
            with suppress(Exception):
                event.remove(self.session, "before_flush", self._block_flush)
            self._guard_installed = False
        if self._txn is not None:
            self.rollback()
            self._txn = None

    def commit(self) -> None:
        raise RuntimeError("Read-only UnitOfWork cannot commit.")

    def rollback(self) -> None:
        self.session.rollback()

    @staticmethod
    def _block_flush(session, flush_context, instances) -> None:
        if session.new or session.dirty or session.deleted:
            raise RuntimeError(
                "Read-only UnitOfWork: ORM flush blocked (new/dirty/deleted objects present)."
            )

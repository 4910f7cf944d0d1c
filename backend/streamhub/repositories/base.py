"""Generic repository base for SQLAlchemy 2.x.

Repositories are persistence-only: they build and run statements against
the session of the unit of work that created them and never commit, roll
back or open transactions themselves.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import ColumnElement, exists, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from streamhub.core.extensions import db

E = TypeVar("E")  # SQLAlchemy mapped entity type


class BaseRepository(Generic[E]):
    """Single-entity repository.

    Subclasses set ``model`` and may list the columns callers are allowed to
    filter on in :meth:`_filterable_fields`.
    """

    #: SQLAlchemy mapped model (must be set by subclasses)
    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        """The unit of work's session, or the Flask-scoped one when none was given."""
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    def _filterable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        """Columns usable as ``key=value`` filters; empty means none."""
        return {}

    def _criteria(self, filters: Mapping[str, Any]) -> list[ColumnElement[bool]]:
        """Translate ``filters`` into equality clauses.

        :raises ValueError: For keys outside :meth:`_filterable_fields`.
        """
        allowed = self._filterable_fields()
        unknown = sorted(set(filters) - set(allowed))
        if unknown:
            raise ValueError(f"{type(self).__name__} cannot filter on {unknown}")
        return [allowed[key] == value for key, value in filters.items()]

    # ------------------------------------------------------------------ #

    def add(self, instance: E) -> E:
        """Stage ``instance`` and flush so its primary key is populated."""
        self.session.add(instance)
        self.flush()
        return instance

    def get(self, entity_id: Any) -> E | None:
        return self.session.get(self.model, entity_id)

    def exists(self, **filters: Any) -> bool:
        """``SELECT EXISTS`` over whitelisted equality filters."""
        stmt = select(exists().where(*self._criteria(filters)).select_from(self.model))
        return bool(self.session.execute(stmt).scalar())

    def flush(self) -> None:
        self.session.flush()

"""Refresh-token slot stored on the ``users`` row."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError

from streamhub.services._shared.errors import PersistenceError
from streamhub.services._shared.ports import SessionStateStore
from streamhub.uow.sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork

log = logging.getLogger(__name__)


class SQLSessionStateStore(SessionStateStore):
    """
    :class:`SessionStateStore` over ``users.refresh_token``.

    Each call is its own committed transaction wrapping one conditional
    ``UPDATE``, so the compare-and-swap is decided by the database and two
    concurrent rotations of the same token cannot both succeed.

    :raises PersistenceError: When the store fails (timeout, lost connection,
        constraint failure). Nothing is retried here.
    """

    def put(self, identity_id: int, token: str) -> bool:
        try:
            with SQLAlchemyUnitOfWork() as uow:
                return uow.users.set_refresh_token(identity_id, token)
        except SQLAlchemyError as exc:
            log.error("session_state.put_failed", extra={"identity_id": identity_id})
            raise PersistenceError("Could not persist session state") from exc

    def compare_and_swap(self, identity_id: int, expected: str, replacement: str) -> bool:
        try:
            with SQLAlchemyUnitOfWork() as uow:
                return uow.users.swap_refresh_token(identity_id, expected, replacement)
        except SQLAlchemyError as exc:
            log.error("session_state.swap_failed", extra={"identity_id": identity_id})
            raise PersistenceError("Could not persist session state") from exc

    def clear(self, identity_id: int) -> None:
        try:
            with SQLAlchemyUnitOfWork() as uow:
                uow.users.clear_refresh_token(identity_id)
        except SQLAlchemyError as exc:
            log.error("session_state.clear_failed", extra={"identity_id": identity_id})
            raise PersistenceError("Could not persist session state") from exc

    def current(self, identity_id: int) -> str | None:
        with SQLAlchemyReadOnlyUnitOfWork() as uow:
            return uow.users.get_refresh_token(identity_id)

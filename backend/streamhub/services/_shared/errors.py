"""
Service-layer exceptions.

Repositories, adapters and services raise these; none of them know about
HTTP. ``BaseService.translate_exceptions`` picks the response for each one
at the API boundary.
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str, *, columns: Iterable[str] = ()) -> bool:
    """
    Tell whether ``exc`` was raised by one particular unique constraint.

    PostgreSQL names the constraint in its message. SQLite only prints
    ``UNIQUE constraint failed: table.col, ...``, so ``columns`` (as
    ``table.column``) is matched there instead.

    :param exc: Error raised during flush/execute.
    :param constraint_name: Constraint name, e.g. ``uq_users_email``.
    :param columns: ``table.column`` names making up the constraint.
    :rtype: bool
    """
    text = str(exc.orig if exc.orig is not None else exc).lower()
    if constraint_name.lower() in text:
        return True
    wanted = [c.lower() for c in columns]
    return bool(wanted) and "unique constraint failed" in text and all(c in text for c in wanted)


class ServiceError(Exception):
    """Root of every error a service may raise."""


class InvalidInputError(ServiceError):
    """The caller sent a missing or malformed field."""

    def __init__(self, message: str = "Invalid input") -> None:
        super().__init__(message)


class InvalidTargetError(InvalidInputError):
    """A target id is not a well-formed identifier.

    ``raw`` keeps the value as received.
    """

    def __init__(self, raw: object) -> None:
        self.raw = raw
        super().__init__(f"Invalid target id: {raw!r}")


class UnauthorizedError(ServiceError):
    """
    Authentication failed.

    Missing, expired, malformed, superseded and orphaned tokens all raise
    this. ``reason`` goes to the logs and nowhere else.
    """

    def __init__(self, reason: str = "unauthorized") -> None:
        self.reason = reason
        super().__init__(reason)


class InvalidCredentialsError(UnauthorizedError):
    """Wrong handle or wrong password; the two are not told apart."""

    def __init__(self) -> None:
        super().__init__("invalid_credentials")


class NotFoundError(ServiceError):
    """No ``entity`` row for ``key``."""

    def __init__(self, entity: str, key: str | int) -> None:
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} not found: {key}")


class ConflictError(ServiceError):
    """A uniqueness or business rule rejected the write."""

    def __init__(self, entity: str, detail: str) -> None:
        self.entity = entity
        self.detail = detail
        super().__init__(f"Conflict on {entity}: {detail}")


class PersistenceError(ServiceError):
    """The store failed to complete an operation."""

    def __init__(self, message: str = "Persistence failure") -> None:
        super().__init__(message)

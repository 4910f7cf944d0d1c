"""Transaction boundary shared by every service call."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from streamhub.repositories import RelationshipRepository, UserRepository, VideoRepository


class UnitOfWork(ABC):
    """
    One use-case, one transaction.

    Used as a context manager: leaving the block normally commits, leaving it
    with an exception rolls back and lets the exception propagate. Read-only
    variants override :meth:`__exit__` and refuse :meth:`commit`.
    """

    users: UserRepository
    videos: VideoRepository
    relationships: RelationshipRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.rollback()
            return
        try:
            self.commit()
        except Exception:
            self.rollback()
            raise

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...

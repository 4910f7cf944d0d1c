from __future__ import annotations

import threading
from typing import Protocol

from streamhub.models.enums import RelationshipKind


class RelationshipLedger(Protocol):
    """
    Store of unique ``(viewer, target, kind)`` facts.

    Both writes are single atomic store operations and uniqueness is enforced
    by the store, never by a preceding read.
    """

    def remove(self, viewer_id: int, target_id: int, kind: RelationshipKind) -> bool:
        """Atomically find-and-delete. :returns: ``True`` if a record was removed."""

    def add(self, viewer_id: int, target_id: int, kind: RelationshipKind) -> bool:
        """
        Insert a record.

        :returns: ``True`` if created; ``False`` if the uniqueness constraint
            rejected it because a matching record already exists.
        """


class InMemoryRelationshipLedger(RelationshipLedger):
    """
    Set-backed ledger.

    .. note::
       Each method holds a lock for its own duration only, emulating a store
       whose single operations are atomic while sequences of them are not.
    """

    def __init__(self) -> None:
        self._rows: set[tuple[int, int, RelationshipKind]] = set()
        self._lock = threading.Lock()

    def remove(self, viewer_id: int, target_id: int, kind: RelationshipKind) -> bool:
        key = (viewer_id, target_id, kind)
        with self._lock:
            if key in self._rows:
                self._rows.remove(key)
                return True
            return False

    def add(self, viewer_id: int, target_id: int, kind: RelationshipKind) -> bool:
        key = (viewer_id, target_id, kind)
        with self._lock:
            if key in self._rows:
                return False
            self._rows.add(key)
            return True

    # Read helpers for assertions; reads in the app go through the views

    def count(self, target_id: int, kind: RelationshipKind) -> int:
        with self._lock:
            return sum(1 for _, t, k in self._rows if t == target_id and k == kind)

    def has(self, viewer_id: int, target_id: int, kind: RelationshipKind) -> bool:
        with self._lock:
            return (viewer_id, target_id, kind) in self._rows

    def __len__(self) -> int:
        with self._lock:
            return len(self._rows)

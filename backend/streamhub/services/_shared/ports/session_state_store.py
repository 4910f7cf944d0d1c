from __future__ import annotations

import threading
from typing import Protocol


class SessionStateStore(Protocol):
    """
    Per-identity "current refresh token" slot.

    The slot is the only server-side session state. Every write is a single
    atomic store operation; in particular :meth:`compare_and_swap` MUST NOT be
    implemented as a read followed by a write.
    """

    def put(self, identity_id: int, token: str) -> bool:
        """Overwrite the slot. :returns: ``False`` if the identity is unknown."""

    def compare_and_swap(self, identity_id: int, expected: str, replacement: str) -> bool:
        """
        Replace the slot with ``replacement`` only if it currently equals
        ``expected`` (byte-for-byte).

        :returns: ``True`` if this call performed the swap; ``False`` when the
            identity is unknown, the slot is empty, or it holds another token.
        """

    def clear(self, identity_id: int) -> None:
        """Empty the slot. Clearing an empty or unknown slot is not an error."""

    def current(self, identity_id: int) -> str | None:
        """Read the slot (diagnostics and tests only)."""


class InMemorySessionStateStore(SessionStateStore):
    """
    Dict-backed slot store.

    .. note::
       Uses a threading lock to simulate the store's single-row atomicity in
       unit tests.
    """

    def __init__(self, identities: list[int] | None = None) -> None:
        self._slots: dict[int, str | None] = {i: None for i in identities or []}
        self._lock = threading.Lock()

    def add_identity(self, identity_id: int) -> None:
        with self._lock:
            self._slots.setdefault(identity_id, None)

    def remove_identity(self, identity_id: int) -> None:
        with self._lock:
            self._slots.pop(identity_id, None)

    def put(self, identity_id: int, token: str) -> bool:
        with self._lock:
            if identity_id not in self._slots:
                return False
            self._slots[identity_id] = token
            return True

    def compare_and_swap(self, identity_id: int, expected: str, replacement: str) -> bool:
        with self._lock:
            if identity_id not in self._slots or self._slots[identity_id] != expected:
                return False
            self._slots[identity_id] = replacement
            return True

    def clear(self, identity_id: int) -> None:
        with self._lock:
            if identity_id in self._slots:
                self._slots[identity_id] = None

    def current(self, identity_id: int) -> str | None:
        return self._slots.get(identity_id)

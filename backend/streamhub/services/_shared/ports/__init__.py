"""
streamhub.services._shared.ports
================================

*Ports* (hexagonal interfaces) that decouple the service layer from token
signing and from the store holding session state and relationships.

Modules
-------
- :mod:`token_provider`:
    :class:`~.TokenProvider` and :class:`~.InvalidTokenError`, the abstraction
    over JWT creation and verification.

- :mod:`session_state_store`:
    :class:`~.SessionStateStore`, the per-identity refresh-token slot with
    compare-and-swap.

- :mod:`relationship_ledger`:
    :class:`~.RelationshipLedger`, unique like/subscription facts with atomic
    add/remove.

Concrete adapters live under ``streamhub.infra``; the in-memory doubles here
back the unit tests.
"""

from __future__ import annotations

from .relationship_ledger import InMemoryRelationshipLedger, RelationshipLedger
from .session_state_store import InMemorySessionStateStore, SessionStateStore
from .token_provider import InvalidTokenError, StubTokenProvider, TokenProvider

__all__ = [
    "TokenProvider",
    "InvalidTokenError",
    "StubTokenProvider",
    "SessionStateStore",
    "InMemorySessionStateStore",
    "RelationshipLedger",
    "InMemoryRelationshipLedger",
]

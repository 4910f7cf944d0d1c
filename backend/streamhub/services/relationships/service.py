"""
RelationshipService
===================

Toggle engine for likes and subscriptions plus the simple listings built on
the relationship ledger.
"""

from __future__ import annotations

import logging

from streamhub.models.enums import RelationshipKind, RelationshipState
from streamhub.services._shared.base import BaseService, ServiceContext
from streamhub.services._shared.policies.common import parse_entity_id
from streamhub.services._shared.ports import RelationshipLedger
from streamhub.services.identity.dto import UserSummaryOut
from streamhub.services.relationships.dto import ToggleOutcome, VideoSummaryOut

log = logging.getLogger(__name__)


class RelationshipService(BaseService):
    """
    Edge-triggered toggling of unique ``(viewer, target, kind)`` records.

    Each call flips the current state; there is no "desired state" argument.
    The transition is two atomic ledger operations, never a read followed by a
    write:

    1. remove a matching record; if one was removed the state is
       :attr:`RelationshipState.INACTIVE`;
    2. otherwise insert one. If the ledger's uniqueness constraint rejects the
       insert, a concurrent caller created the record first and the state is
       reported as :attr:`RelationshipState.ACTIVE`.

    Target existence is not checked; only malformed identifiers are rejected.
    """

    def __init__(
        self,
        *,
        ledger: RelationshipLedger | None = None,
        ctx: ServiceContext | None = None,
    ) -> None:
        super().__init__(ctx=ctx)
        if ledger is None:
            from streamhub.infra.sql.relationship_ledger import SQLRelationshipLedger

            ledger = SQLRelationshipLedger()
        self.ledger = ledger

    # ------------------------------------------------------------------ #
    # Toggle
    # ------------------------------------------------------------------ #

    def toggle(self, viewer_id: int, target_id: object, kind: RelationshipKind) -> ToggleOutcome:
        """
        Flip the viewer's relationship with ``target_id``.

        :param viewer_id: Authenticated identity.
        :param target_id: Raw identifier (usually a path segment).
        :param kind: Which relationship to toggle.
        :returns: The resulting state.
        :raises InvalidTargetError: If ``target_id`` is malformed; the ledger
            is not touched.
        """
        parsed = parse_entity_id(target_id)
        state = self._transition(viewer_id, parsed, kind)
        log.info(
            "relationship.toggled state=%s",
            state.value,
            extra={"viewer_id": viewer_id, "target_id": parsed, "target_kind": kind.value},
        )
        return ToggleOutcome(target_id=parsed, kind=kind, state=state)

    def _transition(
        self, viewer_id: int, target_id: int, kind: RelationshipKind
    ) -> RelationshipState:
        if self.ledger.remove(viewer_id, target_id, kind):
            return RelationshipState.INACTIVE
        if not self.ledger.add(viewer_id, target_id, kind):
            log.info(
                "relationship.toggle_race",
                extra={"viewer_id": viewer_id, "target_id": target_id, "target_kind": kind.value},
            )
        return RelationshipState.ACTIVE

    # ------------------------------------------------------------------ #
    # Listings
    # ------------------------------------------------------------------ #

    def liked_videos(self, viewer_id: int) -> list[VideoSummaryOut]:
        """Videos the viewer currently likes (possibly empty)."""
        with self.ro_uow() as uow:
            videos = uow.relationships.liked_videos(viewer_id)
            return [VideoSummaryOut.from_model(v) for v in videos]

    def subscribers(self, channel_id: object) -> list[UserSummaryOut]:
        """Identities subscribed to ``channel_id`` (possibly empty).

        :raises InvalidTargetError: If ``channel_id`` is malformed.
        """
        parsed = parse_entity_id(channel_id)
        with self.ro_uow() as uow:
            return [UserSummaryOut.from_model(u) for u in uow.relationships.subscribers_of(parsed)]

    def subscribed_channels(self, subscriber_id: object) -> list[UserSummaryOut]:
        """Channels ``subscriber_id`` subscribes to (possibly empty).

        :raises InvalidTargetError: If ``subscriber_id`` is malformed.
        """
        parsed = parse_entity_id(subscriber_id)
        with self.ro_uow() as uow:
            return [UserSummaryOut.from_model(u) for u in uow.relationships.channels_of(parsed)]

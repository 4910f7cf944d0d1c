"""RelationshipService toggle engine, driven through the in-memory ledger."""

from __future__ import annotations

import logging
import threading

import pytest

from streamhub.models.enums import RelationshipKind, RelationshipState
from streamhub.services._shared.errors import InvalidTargetError
from streamhub.services._shared.ports import InMemoryRelationshipLedger
from streamhub.services.relationships.service import RelationshipService

LIKE = RelationshipKind.VIDEO_LIKE
SUB = RelationshipKind.CHANNEL_SUBSCRIPTION


@pytest.fixture()
def ledger() -> InMemoryRelationshipLedger:
    return InMemoryRelationshipLedger()


@pytest.fixture()
def service(ledger) -> RelationshipService:
    return RelationshipService(ledger=ledger)


class _LostRaceLedger(InMemoryRelationshipLedger):
    """Another caller inserts the record between our remove and our add."""

    def remove(self, viewer_id, target_id, kind):
        removed = super().remove(viewer_id, target_id, kind)
        super().add(viewer_id, target_id, kind)
        return removed


class _ExplodingLedger(InMemoryRelationshipLedger):
    def remove(self, *args):
        raise AssertionError("ledger must not be touched")

    add = remove


def test_first_toggle_activates(service, ledger):
    outcome = service.toggle(1, "5", LIKE)

    assert outcome.state is RelationshipState.ACTIVE
    assert outcome.active
    assert outcome.target_id == 5
    assert ledger.has(1, 5, LIKE)


def test_toggles_alternate(service, ledger):
    states = [service.toggle(1, 5, LIKE).state for _ in range(5)]

    assert states == [
        RelationshipState.ACTIVE,
        RelationshipState.INACTIVE,
        RelationshipState.ACTIVE,
        RelationshipState.INACTIVE,
        RelationshipState.ACTIVE,
    ]
    assert ledger.count(5, LIKE) == 1


@pytest.mark.parametrize("calls", [2, 3, 6, 7])
def test_final_state_follows_parity(service, ledger, calls):
    for _ in range(calls):
        service.toggle(1, 9, SUB)

    assert ledger.has(1, 9, SUB) is (calls % 2 == 1)


def test_viewers_kinds_and_targets_are_independent(service, ledger):
    service.toggle(1, 5, LIKE)
    service.toggle(2, 5, LIKE)
    service.toggle(1, 5, RelationshipKind.COMMENT_LIKE)
    service.toggle(1, 6, LIKE)

    assert ledger.count(5, LIKE) == 2
    assert ledger.count(5, RelationshipKind.COMMENT_LIKE) == 1
    assert ledger.count(6, LIKE) == 1

    service.toggle(2, 5, LIKE)
    assert ledger.count(5, LIKE) == 1
    assert ledger.has(1, 5, LIKE)


def test_self_subscription_is_allowed(service, ledger):
    assert service.toggle(3, 3, SUB).active
    assert ledger.has(3, 3, SUB)


@pytest.mark.parametrize("raw", ["abc", "", "0", "-4", None, 2.5])
def test_malformed_target_is_rejected_before_any_write(raw):
    service = RelationshipService(ledger=_ExplodingLedger())

    with pytest.raises(InvalidTargetError):
        service.toggle(1, raw, LIKE)


def test_lost_insert_race_reports_active(caplog):
    ledger = _LostRaceLedger()
    service = RelationshipService(ledger=ledger)

    with caplog.at_level(logging.INFO, logger="streamhub.services.relationships.service"):
        outcome = service.toggle(1, 5, LIKE)

    assert outcome.state is RelationshipState.ACTIVE
    assert ledger.count(5, LIKE) == 1
    assert any(r.getMessage() == "relationship.toggle_race" for r in caplog.records)


def test_concurrent_toggles_never_duplicate(service, ledger):
    """Overlapping toggles may collapse, but never produce two records."""
    workers = 16
    barrier = threading.Barrier(workers)
    errors: list[BaseException] = []

    def _toggle() -> None:
        barrier.wait()
        try:
            for _ in range(25):
                service.toggle(1, 77, LIKE)
                assert ledger.count(77, LIKE) <= 1
        except BaseException as exc:  # pragma: no cover - surfaced below
            errors.append(exc)

    threads = [threading.Thread(target=_toggle) for _ in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert not errors
    assert ledger.count(77, LIKE) <= 1
    assert len(ledger) <= 1

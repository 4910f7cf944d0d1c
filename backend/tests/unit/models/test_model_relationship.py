"""Unit tests for the :class:`Relationship` model and its unique constraint."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from streamhub.models.enums import RelationshipKind
from streamhub.models.relationship import RELATIONSHIP_UNIQUE_CONSTRAINT, Relationship
from streamhub.services._shared.errors import violates
from tests.factories.relationship import RelationshipFactory
from tests.factories.user import UserFactory

_COLUMNS = ("relationships.viewer_id", "relationships.target_id", "relationships.target_kind")


def test_duplicate_viewer_target_kind_rejected(session):
    viewer = UserFactory()
    RelationshipFactory(viewer=viewer, target_id=7, target_kind=RelationshipKind.VIDEO_LIKE)

    session.add(
        Relationship(viewer_id=viewer.id, target_id=7, target_kind=RelationshipKind.VIDEO_LIKE)
    )
    with pytest.raises(IntegrityError) as info:
        session.flush()

    assert violates(info.value, RELATIONSHIP_UNIQUE_CONSTRAINT, columns=_COLUMNS)
    session.rollback()


def test_same_target_different_kind_is_allowed(session):
    viewer = UserFactory()
    RelationshipFactory(viewer=viewer, target_id=7, target_kind=RelationshipKind.VIDEO_LIKE)
    RelationshipFactory(viewer=viewer, target_id=7, target_kind=RelationshipKind.COMMENT_LIKE)
    RelationshipFactory(viewer=viewer, target_id=7, target_kind=RelationshipKind.TWEET_LIKE)

    rows = session.query(Relationship).filter_by(viewer_id=viewer.id, target_id=7).all()
    assert {r.target_kind for r in rows} == {
        RelationshipKind.VIDEO_LIKE,
        RelationshipKind.COMMENT_LIKE,
        RelationshipKind.TWEET_LIKE,
    }


def test_kind_helpers():
    assert RelationshipKind.VIDEO_LIKE.is_like
    assert RelationshipKind.TWEET_LIKE.is_like
    assert not RelationshipKind.CHANNEL_SUBSCRIPTION.is_like
    assert RelationshipKind("channel_subscription") is RelationshipKind.CHANNEL_SUBSCRIPTION

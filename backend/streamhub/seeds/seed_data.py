"""Demo rows for local development.

Every seeder looks rows up by their natural key before inserting, so running
the pipeline twice only reports ``existing`` counters the second time.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select
from sqlalchemy.orm import Session

from streamhub.models.enums import RelationshipKind
from streamhub.models.relationship import Relationship
from streamhub.models.user import User
from streamhub.models.video import Video

LOGGER = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")
Summary = dict[str, dict[str, int]]

USER_FIXTURES: list[dict[str, str]] = [
    {
        "username": "alexm",
        "email": "alex.martinez@example.com",
        "full_name": "Alex Martinez",
        "password": "devPass123!",
    },
    {
        "username": "jamielee",
        "email": "jamie.lee@example.com",
        "full_name": "Jamie Lee",
        "password": "strongPass123",
    },
    {
        "username": "sarak",
        "email": "sara.kim@example.com",
        "full_name": "Sara Kim",
        "password": "watchMore2024",
    },
]

VIDEO_FIXTURES: list[dict[str, Any]] = [
    {
        "owner": "alexm",
        "title": "Sourdough in 10 minutes",
        "description": "Quick starter refresh and shaping.",
        "video_url": "https://media.example.com/v/sourdough.mp4",
        "thumbnail_url": "https://media.example.com/t/sourdough.jpg",
        "duration": 612.4,
    },
    {
        "owner": "alexm",
        "title": "Knife skills 101",
        "description": "Dice, julienne, chiffonade.",
        "video_url": "https://media.example.com/v/knife.mp4",
        "thumbnail_url": "https://media.example.com/t/knife.jpg",
        "duration": 431.0,
    },
    {
        "owner": "jamielee",
        "title": "Bouldering warm-up routine",
        "description": "",
        "video_url": "https://media.example.com/v/boulder.mp4",
        "thumbnail_url": None,
        "duration": 298.7,
    },
]

# (viewer username, target, kind); video targets are referenced by title
RELATIONSHIP_FIXTURES: list[tuple[str, str, RelationshipKind]] = [
    ("jamielee", "Sourdough in 10 minutes", RelationshipKind.VIDEO_LIKE),
    ("sarak", "Sourdough in 10 minutes", RelationshipKind.VIDEO_LIKE),
    ("sarak", "Bouldering warm-up routine", RelationshipKind.VIDEO_LIKE),
    ("jamielee", "alexm", RelationshipKind.CHANNEL_SUBSCRIPTION),
    ("sarak", "alexm", RelationshipKind.CHANNEL_SUBSCRIPTION),
    ("alexm", "jamielee", RelationshipKind.CHANNEL_SUBSCRIPTION),
]


class _Tally:
    """Per-table ``created``/``existing`` counters."""

    def __init__(self) -> None:
        self.tables: Summary = {}

    def record(self, table: str, created: bool) -> None:
        counters = self.tables.setdefault(table, {"created": 0, "existing": 0})
        counters["created" if created else "existing"] += 1

    def merge(self, other: Summary) -> None:
        for table, counters in other.items():
            mine = self.tables.setdefault(table, {"created": 0, "existing": 0})
            for key in ("created", "existing"):
                mine[key] += counters.get(key, 0)


def _ensure(
    session: Session, model: type[ModelT], extra: dict[str, Any], **key: Any
) -> tuple[ModelT, bool]:
    """Return the row matching ``key``, inserting it with ``extra`` when absent."""
    found = session.scalars(select(model).filter_by(**key)).one_or_none()
    if found is not None:
        return found, False
    row = model(**key, **extra)
    session.add(row)
    session.flush()
    return row, True


def seed_users_and_videos(database: SQLAlchemy, *, verbose: bool = False) -> Summary:
    """Channels from :data:`USER_FIXTURES` and the videos they own."""
    if verbose:
        LOGGER.info("seed.users_and_videos")
    session: Session = database.session
    tally = _Tally()

    with session.begin():
        by_username: dict[str, User] = {}
        for fixture in USER_FIXTURES:
            extra = {k: v for k, v in fixture.items() if k != "username"}
            user, created = _ensure(session, User, extra, username=fixture["username"])
            by_username[user.username] = user
            tally.record("users", created)

        for fixture in VIDEO_FIXTURES:
            extra = {k: v for k, v in fixture.items() if k not in ("owner", "title")}
            owner = by_username[fixture["owner"]]
            _, created = _ensure(session, Video, extra, owner_id=owner.id, title=fixture["title"])
            tally.record("videos", created)

    return tally.tables


def seed_relationships(database: SQLAlchemy, *, verbose: bool = False) -> Summary:
    """Likes and subscriptions from :data:`RELATIONSHIP_FIXTURES`.

    Expects :func:`seed_users_and_videos` to have run.
    """
    if verbose:
        LOGGER.info("seed.relationships")
    session: Session = database.session
    tally = _Tally()

    with session.begin():
        user_ids = {u.username: u.id for u in session.scalars(select(User))}
        video_ids = {v.title: v.id for v in session.scalars(select(Video))}
        for viewer, target, kind in RELATIONSHIP_FIXTURES:
            target_id = video_ids[target] if kind.is_like else user_ids[target]
            _, created = _ensure(
                session,
                Relationship,
                {},
                viewer_id=user_ids[viewer],
                target_id=target_id,
                target_kind=kind,
            )
            tally.record("relationships", created)

    return tally.tables


SEEDERS: tuple[Callable[..., Summary], ...] = (seed_users_and_videos, seed_relationships)


def run_all(database: SQLAlchemy, *, verbose: bool = False) -> Summary:
    """Run every seeder in foreign-key order and merge their counters."""
    tally = _Tally()
    for seeder in SEEDERS:
        tally.merge(seeder(database, verbose=verbose))
    return tally.tables


__all__ = ["seed_users_and_videos", "seed_relationships", "run_all"]

"""User repository: identity lookups, password ops and refresh-token state."""

from __future__ import annotations

from typing import Any, cast

from sqlalchemy import Row, or_, select, update

from streamhub.models.enums import RelationshipKind
from streamhub.models.user import User
from streamhub.repositories.base import BaseRepository
from streamhub.repositories.relationship import RelationshipRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    The refresh-token helpers are single conditional ``UPDATE`` statements;
    their return value tells the caller whether a row matched, which is how
    compare-and-swap semantics are obtained without a read-then-write.
    """

    model = User

    # ---------------------------- Lookup helpers ----------------------------

    def _filterable_fields(self):
        return {"email": User.email, "username": User.username}

    def get_by_username(self, username: str) -> User | None:
        stmt = select(User).where(User.username == username.strip().lower())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def get_by_login(self, handle: str) -> User | None:
        """Fetch a user by username *or* email (both stored lower-cased).

        :param handle: Username or email as typed by the caller.
        :type handle: str
        :returns: Matching user or ``None``.
        :rtype: User | None
        """
        key = handle.strip().lower()
        stmt = select(User).where(or_(User.username == key, User.email == key))
        return cast(User | None, self.session.execute(stmt.limit(1)).scalars().first())

    def exists_by_email(self, email: str) -> bool:
        return self.exists(email=email.strip().lower())

    def exists_by_username(self, username: str) -> bool:
        return self.exists(username=username.strip().lower())

    # ---------------------------- Password ops ----------------------------

    def update_password(self, user_id: int, new_password: str) -> None:
        """Update a user's password and flush the session.

        :raises ValueError: If the user does not exist.
        """
        user = self.get(user_id)
        if not user:
            raise ValueError(f"User {user_id} not found.")
        user.password = new_password  # invokes setter → hash
        self.flush()

    # ---------------------------- Refresh-token state ----------------------------

    def set_refresh_token(self, user_id: int, token: str) -> bool:
        """Unconditionally store ``token`` as the live refresh token.

        :returns: ``True`` if the identity exists.
        :rtype: bool
        """
        stmt = update(User).where(User.id == user_id).values(refresh_token=token)
        return self.session.execute(stmt).rowcount == 1

    def swap_refresh_token(self, user_id: int, expected: str, replacement: str) -> bool:
        """Replace the stored token only if it still equals ``expected``.

        :returns: ``True`` when exactly this caller performed the swap.
        :rtype: bool
        """
        stmt = (
            update(User)
            .where(User.id == user_id, User.refresh_token == expected)
            .values(refresh_token=replacement)
        )
        return self.session.execute(stmt).rowcount == 1

    def clear_refresh_token(self, user_id: int) -> None:
        stmt = update(User).where(User.id == user_id).values(refresh_token=None)
        self.session.execute(stmt)

    def get_refresh_token(self, user_id: int) -> str | None:
        stmt = select(User.refresh_token).where(User.id == user_id)
        return cast(str | None, self.session.execute(stmt).scalar_one_or_none())

    # ---------------------------- Aggregated reads ----------------------------

    def channel_profile_row(self, username: str, viewer_id: int | None) -> Row[Any] | None:
        """Load a channel together with its subscription counts in one query.

        :returns: Row ``(User, subscribers_count, subscribed_to_count,
            is_subscribed)`` or ``None`` when the username is unknown.
        """
        kind = RelationshipKind.CHANNEL_SUBSCRIPTION
        stmt = select(
            User,
            RelationshipRepository.count_subquery(User.id, kind).label("subscribers_count"),
            RelationshipRepository.source_count_subquery(User.id, kind).label(
                "subscribed_to_count"
            ),
            RelationshipRepository.flag_expression(User.id, kind, viewer_id).label(
                "is_subscribed"
            ),
        ).where(User.username == username.strip().lower())
        return self.session.execute(stmt).first()

"""Plain dataclasses passed in and out of :class:`CredentialService`.

Nothing here holds an ORM object; outputs are copied off the model inside
the unit of work that loaded it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from streamhub.models.user import User


@dataclass(frozen=True, slots=True)
class UserRegisterIn:
    """
    Registration payload.

    :param username: Login handle and channel slug; the model lower-cases it.
    :param email: Login email; the model lower-cases it.
    :param password: Raw password, hashed by the model setter.
    :param avatar_url: Blob-store URL, if an avatar was uploaded.
    :param cover_image_url: Blob-store URL, if a cover was uploaded.
    """

    username: str
    email: str
    password: str
    full_name: str
    avatar_url: str | None = None
    cover_image_url: str | None = None


@dataclass(frozen=True, slots=True)
class UserAuthIn:
    handle: str  # username or email
    password: str


@dataclass(frozen=True, slots=True)
class UserPasswordChangeIn:
    user_id: int
    old_password: str
    new_password: str


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """The caller's own identity. Never carries the hash or a token."""

    id: int
    username: str
    email: str
    full_name: str
    avatar_url: str | None
    cover_image_url: str | None

    @classmethod
    def from_model(cls, user: User) -> UserPublicOut:
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            full_name=user.full_name,
            avatar_url=user.avatar_url,
            cover_image_url=user.cover_image_url,
        )


@dataclass(frozen=True, slots=True)
class UserSummaryOut:
    """Channel card in subscriber and subscription listings (no email)."""

    id: int
    username: str
    full_name: str
    avatar_url: str | None

    @classmethod
    def from_model(cls, user: User) -> UserSummaryOut:
        return cls(user.id, user.username, user.full_name, user.avatar_url)

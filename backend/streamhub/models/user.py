"""Identity model: login handle, hashed secret and the live refresh token."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates
from werkzeug.security import check_password_hash, generate_password_hash

from streamhub.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .video import Video

# Hash compared against when the login handle is unknown, so a miss costs the
# same as a wrong password.
_DUMMY_HASH = generate_password_hash("streamhub-timing-equalizer")


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Authentication identity and public channel.

    Fields
    ------
    username : str
        Login handle and channel slug. Stored lower-cased and trimmed.
    email : str
        Login email. Stored lower-cased and trimmed.
    password_hash : str
        Salted one-way hash (write via ``password``).
    full_name : str
        Display name.
    avatar_url / cover_image_url : str | None
        Blob-store URLs for channel artwork.
    refresh_token : str | None
        The only refresh token currently accepted for this identity. Replaced
        on every login/rotation and cleared on logout; see
        :class:`streamhub.infra.sql.session_state_store.SQLSessionStateStore`.
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(254), nullable=False)
    full_name: Mapped[str] = mapped_column(String(100), nullable=False)
    avatar_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    cover_image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    refresh_token: Mapped[str | None] = mapped_column(Text, nullable=True)

    videos: Mapped[list[Video]] = relationship(
        "Video", back_populates="owner", cascade="all, delete-orphan", passive_deletes=True
    )

    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        UniqueConstraint("username", name="uq_users_username"),
    )

    @property
    def password(self) -> Any:  # pragma: no cover
        raise AttributeError("User.password is write-only; use verify_password().")

    @password.setter
    def password(self, raw: str) -> None:
        """Store a salted hash of ``raw``; empty or non-string values are refused."""
        if not raw or not isinstance(raw, str):
            raise ValueError("Password must be a non-empty string.")
        self.password_hash = generate_password_hash(raw)

    def verify_password(self, raw: str) -> bool:
        return bool(self.password_hash) and check_password_hash(self.password_hash, raw)

    @staticmethod
    def burn_password_check(raw: str) -> bool:
        """Spend one hash comparison on an unknown handle. Always ``False``."""
        check_password_hash(_DUMMY_HASH, raw)
        return False

    @staticmethod
    def _clean(value: Any, field: str, *, lower: bool = False) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"{field} is required.")
        cleaned = value.strip()
        return cleaned.lower() if lower else cleaned

    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """Lower-case and sanity-check the address; marshmallow does the strict check.

        :raises ValueError: Missing ``@`` or a domain without a dot.
        """
        email = self._clean(value, "Email", lower=True)
        _, _, domain = email.partition("@")
        if "@" not in email or "." not in domain:
            raise ValueError("Email format looks invalid.")
        return email

    @validates("username")
    def _normalize_username(self, key: str, value: str) -> str:
        return self._clean(value, "Username", lower=True)

    @validates("full_name")
    def _normalize_full_name(self, key: str, value: str) -> str:
        return self._clean(value, "Full name")

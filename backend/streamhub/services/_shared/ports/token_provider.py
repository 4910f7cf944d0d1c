from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any, Protocol
from uuid import uuid4

ACCESS = "access"
REFRESH = "refresh"


class InvalidTokenError(Exception):
    """Bad signature, bad structure, wrong ``type`` or expired.

    Adapters raise only this, whatever the cause, and put the cause in the
    message for logs.
    """


class TokenProvider(Protocol):
    """Mints and verifies signed session tokens."""

    def create_access_token(
        self, *, identity: int | str, expires_delta: timedelta | None = None
    ) -> str: ...

    def create_refresh_token(
        self, *, identity: int | str, expires_delta: timedelta | None = None
    ) -> str: ...

    def decode(self, token: str, *, expected_type: str) -> dict[str, Any]:
        """Return the claims of ``token``.

        :raises InvalidTokenError: Any verification failure, a ``type`` claim
            other than ``expected_type`` included.
        """
        ...


class StubTokenProvider(TokenProvider):
    """Unsigned tokens remembered in a dict, for tests without an app.

    ``exp`` is compared with the wall clock on decode, so freezegun can age a
    token past its lifetime.
    """

    DEFAULT_TTL = {ACCESS: timedelta(minutes=15), REFRESH: timedelta(days=10)}

    def __init__(self) -> None:
        self._counter = 0
        self._claims: dict[str, dict[str, Any]] = {}

    def _issue(self, kind: str, identity: int | str, ttl: timedelta | None) -> str:
        self._counter += 1
        issued_at = datetime.now(tz=UTC)
        jti = uuid4().hex
        token = f"{kind}.{identity}.{jti}.{self._counter}"
        self._claims[token] = {
            "sub": str(identity),
            "type": kind,
            "jti": jti,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + (ttl or self.DEFAULT_TTL[kind])).timestamp()),
        }
        return token

    def create_access_token(
        self, *, identity: int | str, expires_delta: timedelta | None = None
    ) -> str:
        return self._issue(ACCESS, identity, expires_delta)

    def create_refresh_token(
        self, *, identity: int | str, expires_delta: timedelta | None = None
    ) -> str:
        return self._issue(REFRESH, identity, expires_delta)

    def decode(self, token: str, *, expected_type: str) -> dict[str, Any]:
        claims = self._claims.get(token)
        if claims is None:
            raise InvalidTokenError("unknown token")
        if claims["type"] != expected_type:
            raise InvalidTokenError("wrong token type")
        if claims["exp"] <= datetime.now(tz=UTC).timestamp():
            raise InvalidTokenError("token expired")
        return dict(claims)

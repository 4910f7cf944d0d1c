"""Signed session tokens through Flask-JWT-Extended."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from flask_jwt_extended import create_access_token, create_refresh_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from streamhub.services._shared.ports import InvalidTokenError, TokenProvider


class JWTTokenProvider(TokenProvider):
    """
    HS256 tokens signed with ``JWT_SECRET_KEY``.

    Claims are ``sub`` (the identity id as a string), ``iat``, ``exp``,
    ``type`` (``access`` or ``refresh``) and a random ``jti``, so two tokens
    minted in the same second still differ. Every method needs an app
    context.
    """

    def create_access_token(
        self, *, identity: int | str, expires_delta: timedelta | None = None
    ) -> str:
        # None falls back to JWT_ACCESS_TOKEN_EXPIRES
        return create_access_token(identity=str(identity), expires_delta=expires_delta)

    def create_refresh_token(
        self, *, identity: int | str, expires_delta: timedelta | None = None
    ) -> str:
        return create_refresh_token(identity=str(identity), expires_delta=expires_delta)

    def decode(self, token: str, *, expected_type: str) -> dict[str, Any]:
        try:
            claims: dict[str, Any] = decode_token(token)
        except (PyJWTError, JWTExtendedException) as exc:
            raise InvalidTokenError(type(exc).__name__) from exc
        if claims.get("type") != expected_type:
            raise InvalidTokenError("wrong token type")
        return claims

"""Inputs, outputs and settings of :class:`~streamhub.services.auth.service.TokenService`."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from streamhub.services.identity.dto import UserPublicOut

DEFAULT_ACCESS_TTL = timedelta(minutes=15)
DEFAULT_REFRESH_TTL = timedelta(days=10)


@dataclass(frozen=True, slots=True)
class LoginIn:
    handle: str  # username or email
    password: str


@dataclass(frozen=True, slots=True)
class RefreshIn:
    refresh_token: str


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    An access token and the refresh token that may later replace it.

    :param access_token: Short-lived bearer token.
    :param refresh_token: Long-lived token; the only one the store accepts
        for this identity until the next rotation, login or logout.
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class LoginOut:
    user: UserPublicOut
    tokens: TokenPairOut


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """Token lifetimes, also used as cookie ``max_age``."""

    access_expires: timedelta = DEFAULT_ACCESS_TTL
    refresh_expires: timedelta = DEFAULT_REFRESH_TTL

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> AuthTokenConfig:
        """Read ``JWT_ACCESS_TOKEN_EXPIRES``/``JWT_REFRESH_TOKEN_EXPIRES`` from Flask config."""
        return cls(
            access_expires=config.get("JWT_ACCESS_TOKEN_EXPIRES", DEFAULT_ACCESS_TTL),
            refresh_expires=config.get("JWT_REFRESH_TOKEN_EXPIRES", DEFAULT_REFRESH_TTL),
        )

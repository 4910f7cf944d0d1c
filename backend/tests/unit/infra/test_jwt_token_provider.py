"""Unit tests for the Flask-JWT-Extended token adapter."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from freezegun import freeze_time

from streamhub.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from streamhub.services._shared.ports import InvalidTokenError


@pytest.fixture()
def provider() -> JWTTokenProvider:
    return JWTTokenProvider()


def test_access_token_round_trip(provider):
    token = provider.create_access_token(identity=7)
    claims = provider.decode(token, expected_type="access")

    assert claims["sub"] == "7"
    assert claims["type"] == "access"
    assert claims["jti"]


def test_two_tokens_for_same_identity_differ(provider):
    """Tokens minted within the same second still differ (random jti)."""
    assert provider.create_refresh_token(identity=7) != provider.create_refresh_token(identity=7)


def test_wrong_type_rejected(provider):
    refresh = provider.create_refresh_token(identity=7)
    with pytest.raises(InvalidTokenError):
        provider.decode(refresh, expected_type="access")

    access = provider.create_access_token(identity=7)
    with pytest.raises(InvalidTokenError):
        provider.decode(access, expected_type="refresh")


def test_expired_token_rejected(provider):
    with freeze_time("2026-03-01 12:00:00") as frozen:
        token = provider.create_access_token(identity=7, expires_delta=timedelta(minutes=15))
        provider.decode(token, expected_type="access")

        frozen.tick(timedelta(minutes=16))
        with pytest.raises(InvalidTokenError):
            provider.decode(token, expected_type="access")


@pytest.mark.parametrize("token", ["", "not-a-jwt", "a.b.c"])
def test_garbage_rejected(provider, token):
    with pytest.raises(InvalidTokenError):
        provider.decode(token, expected_type="access")


def test_foreign_signature_rejected(provider):
    now = datetime.now(UTC)
    forged = jwt.encode(
        {"sub": "7", "type": "access", "jti": "x", "iat": now, "exp": now + timedelta(minutes=5)},
        "some-other-secret-that-is-long-enough-for-hs256",
        algorithm="HS256",
    )
    with pytest.raises(InvalidTokenError):
        provider.decode(forged, expected_type="access")

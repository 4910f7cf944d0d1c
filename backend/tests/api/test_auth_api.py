"""Integration tests for authentication endpoints."""

from __future__ import annotations

from datetime import timedelta

import pytest
from freezegun import freeze_time

from tests.factories.user import UserFactory
from tests.helpers.auth import bearer, expired_token, issue_token, login

AUTH = "/api/v1/auth"


@pytest.fixture()
def account(session) -> dict:
    """Persisted identity; only plain values leave the fixture."""
    user = UserFactory(username="gina", email="gina@example.com", password="Passw0rd!")
    session.commit()
    return {"id": user.id, "username": user.username, "email": user.email}


def test_register_and_login(client) -> None:
    """A user can register then obtain a token pair by logging in."""

    payload = {
        "username": "Hank",
        "email": "hank@example.com",
        "password": "secret123",
        "full_name": "Hank Hill",
    }

    resp = client.post(f"{AUTH}/register", json=payload)
    assert resp.status_code == 201
    body = resp.get_json()["data"]
    assert body["username"] == "hank"
    assert "password" not in body and "refresh_token" not in body

    resp = login(client, "hank", "secret123")
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["user"]["email"] == "hank@example.com"
    assert data["access_token"] and data["refresh_token"]


def test_register_duplicate_is_conflict(client, account) -> None:
    resp = client.post(
        f"{AUTH}/register",
        json={
            "username": account["username"],
            "email": "other@example.com",
            "password": "secret123",
            "full_name": "Other",
        },
    )
    assert resp.status_code == 409


def test_register_validation_error(client) -> None:
    resp = client.post(f"{AUTH}/register", json={"username": "x"})
    assert resp.status_code == 422
    assert resp.get_json()["code"] == "validation_error"


def test_login_sets_httponly_cookies(client, account) -> None:
    resp = login(client, account["email"])
    assert resp.status_code == 200

    set_cookies = resp.headers.getlist("Set-Cookie")
    assert any(c.startswith("accessToken=") and "HttpOnly" in c for c in set_cookies)
    assert any(c.startswith("refreshToken=") and "HttpOnly" in c for c in set_cookies)
    assert client.get_cookie("accessToken").value == resp.get_json()["data"]["access_token"]


def test_session_cookie_attributes(client, account) -> None:
    set_cookies = login(client, account["username"]).headers.getlist("Set-Cookie")
    access = next(c for c in set_cookies if c.startswith("accessToken="))
    refresh = next(c for c in set_cookies if c.startswith("refreshToken="))

    assert "Max-Age=900" in access
    assert f"Max-Age={10 * 24 * 3600}" in refresh
    assert all("SameSite=Lax" in c and "Path=/" in c for c in (access, refresh))
    # Secure is switched off for the plain-HTTP test client
    assert "; Secure" not in access
    assert not any(c.startswith("csrf_") for c in set_cookies)


@pytest.mark.parametrize(("handle", "password"), [("gina", "wrong-pass"), ("nobody", "Passw0rd!")])
def test_login_failure_is_uniform(client, account, handle, password) -> None:
    resp = login(client, handle, password)

    assert resp.status_code == 401
    assert resp.get_json()["detail"] == "Invalid credentials"


def test_login_requires_a_handle(client) -> None:
    resp = client.post(f"{AUTH}/login", json={"password": "x"})
    assert resp.status_code == 422


def test_me_with_bearer_token(client, account) -> None:
    resp = client.get(f"{AUTH}/me", headers=bearer(issue_token(account["id"])))

    assert resp.status_code == 200
    assert resp.get_json()["data"]["id"] == account["id"]


def test_me_with_cookie(client, account) -> None:
    login(client, account["username"])

    resp = client.get(f"{AUTH}/me")
    assert resp.status_code == 200
    assert resp.get_json()["data"]["username"] == "gina"


@pytest.mark.parametrize(
    "headers", [{}, {"Authorization": "Bearer garbage"}, {"Authorization": "Basic xyz"}]
)
def test_me_rejects_missing_or_malformed_tokens(client, headers) -> None:
    resp = client.get(f"{AUTH}/me", headers=headers)

    assert resp.status_code == 401
    assert resp.get_json()["detail"] == "Unauthorized"


def test_expired_access_token_is_plain_unauthorized(client, account) -> None:
    resp = client.get(f"{AUTH}/me", headers=bearer(expired_token(account["id"])))

    assert resp.status_code == 401
    assert resp.get_json()["detail"] == "Unauthorized"


def test_access_cookie_expires_after_fifteen_minutes(client, account) -> None:
    with freeze_time("2026-06-01 10:00:00") as frozen:
        token = login(client, account["username"]).get_json()["data"]["access_token"]
        frozen.tick(timedelta(minutes=16))

        resp = client.get(f"{AUTH}/me", headers=bearer(token))
        assert resp.status_code == 401


def test_refresh_with_cookie_rotates_once(client, account) -> None:
    first = login(client, account["username"]).get_json()["data"]

    resp = client.post(f"{AUTH}/refresh-token")
    assert resp.status_code == 200
    rotated = resp.get_json()["data"]
    assert rotated["refresh_token"] != first["refresh_token"]
    assert client.get_cookie("refreshToken").value == rotated["refresh_token"]

    # Replaying the superseded token from the body fails
    client.delete_cookie("refreshToken")
    resp = client.post(f"{AUTH}/refresh-token", json={"refresh_token": first["refresh_token"]})
    assert resp.status_code == 401
    assert resp.get_json()["detail"] == "Unauthorized"


def test_refresh_with_body_token(client, account) -> None:
    tokens = login(client, account["username"]).get_json()["data"]
    client.delete_cookie("refreshToken")
    client.delete_cookie("accessToken")

    resp = client.post(f"{AUTH}/refresh-token", json={"refresh_token": tokens["refresh_token"]})
    assert resp.status_code == 200


def test_refresh_without_token(client) -> None:
    resp = client.post(f"{AUTH}/refresh-token", json={})
    assert resp.status_code == 401


def test_logout_clears_cookies_and_session(client, account) -> None:
    tokens = login(client, account["username"]).get_json()["data"]

    resp = client.post(f"{AUTH}/logout")
    assert resp.status_code == 200
    assert client.get_cookie("accessToken") is None
    assert client.get_cookie("refreshToken") is None

    resp = client.post(f"{AUTH}/refresh-token", json={"refresh_token": tokens["refresh_token"]})
    assert resp.status_code == 401


def test_logout_requires_auth(client) -> None:
    assert client.post(f"{AUTH}/logout").status_code == 401


def test_change_password(client, account) -> None:
    headers = bearer(issue_token(account["id"]))

    resp = client.post(
        f"{AUTH}/change-password",
        json={"old_password": "wrong", "new_password": "BrandNew123"},
        headers=headers,
    )
    assert resp.status_code == 400
    assert resp.get_json()["detail"] == "Invalid old password"

    resp = client.post(
        f"{AUTH}/change-password",
        json={"old_password": "Passw0rd!", "new_password": "BrandNew123"},
        headers=headers,
    )
    assert resp.status_code == 200
    assert login(client, account["username"], "BrandNew123").status_code == 200

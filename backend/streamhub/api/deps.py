"""Shared API helpers: authentication, session cookies, JSON and timing."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, g, jsonify, request
from flask_jwt_extended import set_access_cookies, set_refresh_cookies, unset_jwt_cookies

from streamhub.services._shared.errors import UnauthorizedError
from streamhub.services.auth.dto import AuthTokenConfig, TokenPairOut
from streamhub.services.auth.service import TokenService

F = TypeVar("F", bound=Callable[..., Any])


# --------------------------------------------------------------------------- #
# Services
# --------------------------------------------------------------------------- #


def token_service() -> TokenService:
    """Build a :class:`TokenService` with lifetimes from the app config."""

    return TokenService(token_cfg=AuthTokenConfig.from_mapping(current_app.config))


# --------------------------------------------------------------------------- #
# Authentication
# --------------------------------------------------------------------------- #


def _bearer_token() -> str | None:
    header = request.headers.get("Authorization", "")
    scheme, _, value = header.partition(" ")
    if scheme.lower() == "bearer" and value.strip():
        return value.strip()
    return None


def access_token_from_request() -> str | None:
    """Return the access token from the cookie or an ``Authorization: Bearer`` header."""

    cookie = request.cookies.get(current_app.config["JWT_ACCESS_COOKIE_NAME"])
    return cookie or _bearer_token()


def refresh_token_from_request(body_token: str | None = None) -> str | None:
    cookie = request.cookies.get(current_app.config["JWT_REFRESH_COOKIE_NAME"])
    return cookie or body_token


def current_viewer_id() -> int | None:
    """Identity set by :func:`require_auth` / :func:`optional_auth`."""

    return g.get("viewer_id")


def require_auth(func: F) -> F:
    """Reject the request with 401 unless it carries a valid access token."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        g.viewer_id = token_service().validate_access(access_token_from_request())
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def optional_auth(func: F) -> F:
    """Resolve the viewer when a valid token is present; otherwise read anonymously."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        g.viewer_id = None
        token = access_token_from_request()
        if token:
            try:
                g.viewer_id = token_service().validate_access(token)
            except UnauthorizedError:
                current_app.logger.debug("optional_auth.anonymous_fallback")
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


# --------------------------------------------------------------------------- #
# Cookies
# --------------------------------------------------------------------------- #


def set_auth_cookies(response: Response, pair: TokenPairOut) -> Response:
    """Set both ``HttpOnly`` session cookies, ``max_age`` matching each token's lifetime."""
    cfg = current_app.config
    set_access_cookies(
        response,
        pair.access_token,
        max_age=int(cfg["JWT_ACCESS_TOKEN_EXPIRES"].total_seconds()),
    )
    set_refresh_cookies(
        response,
        pair.refresh_token,
        max_age=int(cfg["JWT_REFRESH_TOKEN_EXPIRES"].total_seconds()),
    )
    return response


def clear_auth_cookies(response: Response) -> Response:
    unset_jwt_cookies(response)
    return response


# --------------------------------------------------------------------------- #
# Responses
# --------------------------------------------------------------------------- #


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={
                    "endpoint": request_endpoint,
                    "elapsed_ms": round(elapsed_ms, 2),
                    "viewer_id": g.get("viewer_id"),
                },
            )

    return wrapper  # type: ignore[return-value]

"""Authentication endpoints: register, login, refresh, logout, password, me."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from streamhub.api.deps import (
    clear_auth_cookies,
    current_viewer_id,
    json_response,
    refresh_token_from_request,
    require_auth,
    set_auth_cookies,
    timing,
    token_service,
)
from streamhub.core.extensions import limiter
from streamhub.schemas import (
    ChangePasswordSchema,
    LoginResponseSchema,
    LoginSchema,
    RefreshSchema,
    RegisterSchema,
    TokenPairSchema,
    UserSchema,
)
from streamhub.services.auth.dto import LoginIn
from streamhub.services.identity.dto import UserPasswordChangeIn, UserRegisterIn
from streamhub.services.identity.service import CredentialService

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
login_response_schema = LoginResponseSchema()
refresh_schema = RefreshSchema()
change_password_schema = ChangePasswordSchema()
token_schema = TokenPairSchema()
user_schema = UserSchema()


def _login_rate_limit() -> str:
    return str(current_app.config.get("AUTH_LOGIN_RATE_LIMIT", "5 per minute"))


@bp.post("/register")
@timing
def register():
    """Create an identity and return its public representation."""

    payload = register_schema.load(request.get_json(silent=True) or {})
    user = CredentialService().register(UserRegisterIn(**payload))
    return json_response({"data": user_schema.dump(user)}, status=201)


@bp.post("/login")
@limiter.limit(_login_rate_limit)
@timing
def login():
    """Verify credentials, issue a token pair and set both session cookies."""

    data = login_schema.load(request.get_json(silent=True) or {})
    result = token_service().login(
        LoginIn(handle=data["username"] or data["email"], password=data["password"])
    )
    response = json_response({"data": login_response_schema.dump(result)})
    return set_auth_cookies(response, result.tokens)


@bp.post("/refresh-token")
@timing
def refresh_token():
    """Rotate the refresh token (cookie or body) into a brand-new pair."""

    data = refresh_schema.load(request.get_json(silent=True) or {})
    pair = token_service().rotate(refresh_token_from_request(data["refresh_token"]))
    response = json_response({"data": token_schema.dump(pair)})
    return set_auth_cookies(response, pair)


@bp.post("/logout")
@require_auth
@timing
def logout():
    """Clear the stored refresh token and both cookies."""

    token_service().invalidate(current_viewer_id())
    return clear_auth_cookies(json_response({"data": {}}))


@bp.post("/change-password")
@require_auth
@timing
def change_password():
    data = change_password_schema.load(request.get_json(silent=True) or {})
    CredentialService().change_password(
        UserPasswordChangeIn(
            user_id=current_viewer_id(),
            old_password=data["old_password"],
            new_password=data["new_password"],
        )
    )
    return json_response({"data": {}})


@bp.get("/me")
@require_auth
@timing
def me():
    """Return the authenticated identity."""

    user = CredentialService().get_user(current_viewer_id())
    return json_response({"data": user_schema.dump(user)})

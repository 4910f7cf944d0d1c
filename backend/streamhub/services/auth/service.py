# streamhub/services/auth/service.py
from __future__ import annotations

import logging
from typing import Any

from streamhub.services._shared.base import BaseService, ServiceContext
from streamhub.services._shared.errors import PersistenceError, UnauthorizedError
from streamhub.services._shared.ports import (
    InvalidTokenError,
    SessionStateStore,
    TokenProvider,
)
from streamhub.services.auth.dto import AuthTokenConfig, LoginIn, LoginOut, RefreshIn, TokenPairOut
from streamhub.services.identity.dto import UserAuthIn
from streamhub.services.identity.service import CredentialService

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"

log = logging.getLogger(__name__)


class TokenService(BaseService):
    """
    Session token lifecycle: issue, validate, rotate, invalidate.

    The identity's stored refresh token (a :class:`SessionStateStore` slot) is
    the single source of truth for refresh validity. A structurally valid
    refresh token that no longer equals the stored one is rejected, so each
    refresh token works for exactly one rotation.

    Every failure to authenticate surfaces as :class:`UnauthorizedError`; the
    precise cause is logged, never returned.
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider | None = None,
        session_store: SessionStateStore | None = None,
        credentials: CredentialService | None = None,
        token_cfg: AuthTokenConfig | None = None,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param token_provider: Adapter for issuing/decoding JWTs.
            Defaults to :class:`~streamhub.infra.jwt.flask_jwt_token_provider.JWTTokenProvider`.
        :param session_store: Refresh-token slot store.
            Defaults to :class:`~streamhub.infra.sql.session_state_store.SQLSessionStateStore`.
        :param credentials: Password verification used by :meth:`login`.
        :param token_cfg: Access/Refresh expiry configuration.
        """
        super().__init__(ctx=ctx)
        if token_provider is None:
            from streamhub.infra.jwt.flask_jwt_token_provider import JWTTokenProvider

            token_provider = JWTTokenProvider()
        if session_store is None:
            from streamhub.infra.sql.session_state_store import SQLSessionStateStore

            session_store = SQLSessionStateStore()
        self.tokens = token_provider
        self.sessions = session_store
        self.credentials = credentials or CredentialService(ctx=ctx)
        self.cfg = token_cfg or AuthTokenConfig()

    # ------------------------------------------------------------------ #
    # Core operations
    # ------------------------------------------------------------------ #

    def issue_pair(self, identity_id: int) -> TokenPairOut:
        """
        Mint an access/refresh pair and store the refresh token on the identity,
        overwriting any previous one.

        :raises PersistenceError: If the identity slot could not be written
            (including when the identity does not exist).
        """
        pair = self._mint(identity_id)
        if not self.sessions.put(identity_id, pair.refresh_token):
            raise PersistenceError("Identity missing while storing session state")
        log.info("auth.pair_issued", extra={"identity_id": identity_id})
        return pair

    def validate_access(self, token: str | None) -> int:
        """
        Verify an access token's signature, type and expiry.

        :returns: The identity id asserted by the token.
        :raises UnauthorizedError: For missing, malformed, expired or wrong-type
            tokens alike.
        """
        claims = self._decode(token, ACCESS_TOKEN_TYPE)
        return self._coerce_identity_id(claims)

    def rotate(self, refresh_token: str | None) -> TokenPairOut:
        """
        Exchange a refresh token for a new pair.

        The swap of the stored token is one conditional write keyed on the
        presented token, so of two concurrent rotations with the same token
        exactly one wins. The presented token is dead afterwards whether or not
        the caller ever receives the new pair.

        :raises UnauthorizedError: If the token is invalid/expired, its identity
            is gone, or it is not the identity's current refresh token.
        """
        claims = self._decode(refresh_token, REFRESH_TOKEN_TYPE)
        identity_id = self._coerce_identity_id(claims)

        pair = self._mint(identity_id)
        if not self.sessions.compare_and_swap(identity_id, str(refresh_token), pair.refresh_token):
            log.warning("auth.rotation_refused", extra={"identity_id": identity_id})
            raise UnauthorizedError("refresh_token_superseded")

        log.info("auth.pair_rotated", extra={"identity_id": identity_id})
        return pair

    def invalidate(self, identity_id: int) -> None:
        """Clear the stored refresh token (logout). Idempotent."""
        self.sessions.clear(identity_id)
        log.info("auth.session_invalidated", extra={"identity_id": identity_id})

    # ------------------------------------------------------------------ #
    # Orchestration
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> LoginOut:
        """
        Verify credentials and issue a fresh pair.

        :raises InvalidCredentialsError: When the handle or password is wrong.
        """
        user = self.credentials.authenticate(UserAuthIn(handle=dto.handle, password=dto.password))
        return LoginOut(user=user, tokens=self.issue_pair(user.id))

    def refresh(self, dto: RefreshIn) -> TokenPairOut:
        return self.rotate(dto.refresh_token)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _mint(self, identity_id: int) -> TokenPairOut:
        access = self.tokens.create_access_token(
            identity=identity_id, expires_delta=self.cfg.access_expires
        )
        refresh = self.tokens.create_refresh_token(
            identity=identity_id, expires_delta=self.cfg.refresh_expires
        )
        return TokenPairOut(access_token=access, refresh_token=refresh)

    def _decode(self, token: str | None, expected_type: str) -> dict[str, Any]:
        if not token:
            raise UnauthorizedError("token_missing")
        try:
            return self.tokens.decode(token, expected_type=expected_type)
        except InvalidTokenError as exc:
            log.info("auth.token_rejected type=%s", expected_type)
            raise UnauthorizedError(f"token_invalid:{exc}") from None

    @staticmethod
    def _coerce_identity_id(claims: dict[str, Any]) -> int:
        subject = claims.get("sub")
        try:
            identity_id = int(str(subject))
        except (TypeError, ValueError):
            raise UnauthorizedError("subject_invalid") from None
        if identity_id <= 0:
            raise UnauthorizedError("subject_invalid")
        return identity_id

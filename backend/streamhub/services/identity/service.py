"""Identity records: registration, credential checks and password changes.

Tokens are issued elsewhere, by
:class:`streamhub.services.auth.service.TokenService`.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from streamhub.services._shared.base import BaseService
from streamhub.services._shared.errors import (
    ConflictError,
    InvalidCredentialsError,
    InvalidInputError,
    UnauthorizedError,
    violates,
)
from streamhub.services.identity.dto import (
    UserAuthIn,
    UserPasswordChangeIn,
    UserPublicOut,
    UserRegisterIn,
)

log = logging.getLogger(__name__)

_TAKEN = "username or email already in use"
_UNIQUE_KEYS = (
    ("uq_users_email", ("users.email",)),
    ("uq_users_username", ("users.username",)),
)


class CredentialService(BaseService):
    def register(self, dto: UserRegisterIn) -> UserPublicOut:
        """
        Create an identity with a unique username and email.

        :raises InvalidInputError: Empty password or a field the model rejects.
        :raises ConflictError: Username or email already taken, including when
            a concurrent registration wins the insert.
        """
        if not dto.password:
            raise InvalidInputError("Password is required")

        with self.rw_uow() as uow:
            users = uow.users
            if users.exists_by_username(dto.username) or users.exists_by_email(dto.email):
                raise ConflictError("User", _TAKEN)

            try:
                user = users.model(
                    username=dto.username,
                    email=dto.email,
                    password=dto.password,
                    full_name=dto.full_name,
                    avatar_url=dto.avatar_url,
                    cover_image_url=dto.cover_image_url,
                )
            except ValueError as exc:
                raise InvalidInputError(str(exc)) from exc

            try:
                users.add(user)
            except IntegrityError as exc:
                if any(violates(exc, name, columns=cols) for name, cols in _UNIQUE_KEYS):
                    raise ConflictError("User", _TAKEN) from exc
                raise

            log.info("identity.registered", extra={"identity_id": user.id})
            return UserPublicOut.from_model(user)

    def authenticate(self, dto: UserAuthIn) -> UserPublicOut:
        """
        Check a username-or-email and password pair.

        Unknown handles still cost one hash comparison.

        :raises InvalidCredentialsError: Wrong handle or wrong password.
        """
        password = dto.password or ""
        with self.ro_uow() as uow:
            user = uow.users.get_by_login(dto.handle) if dto.handle else None
            if user is None:
                uow.users.model.burn_password_check(password)
                raise InvalidCredentialsError()
            if not user.verify_password(password):
                raise InvalidCredentialsError()
            return UserPublicOut.from_model(user)

    def get_user(self, user_id: int) -> UserPublicOut:
        """:raises UnauthorizedError: The token is valid but its identity is gone."""
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise UnauthorizedError("identity_missing")
            return UserPublicOut.from_model(user)

    def change_password(self, dto: UserPasswordChangeIn) -> None:
        """
        Swap the password once the current one checks out.

        The stored refresh token is kept, so open sessions survive until they
        rotate or log out.

        :raises InvalidInputError: Wrong old password or empty new one.
        :raises UnauthorizedError: The identity no longer exists.
        """
        if not dto.new_password:
            raise InvalidInputError("New password is required")

        with self.rw_uow() as uow:
            user = uow.users.get(dto.user_id)
            if user is None:
                raise UnauthorizedError("identity_missing")
            if not user.verify_password(dto.old_password or ""):
                raise InvalidInputError("Invalid old password")
            uow.users.update_password(user.id, dto.new_password)

        log.info("identity.password_changed", extra={"identity_id": dto.user_id})

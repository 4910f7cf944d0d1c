"""TokenService against the real JWT adapter and the ``users`` table."""

from __future__ import annotations

import pytest

from streamhub.services._shared.errors import PersistenceError, UnauthorizedError
from streamhub.services.auth.service import TokenService
from tests.factories.user import UserFactory
from tests.helpers.auth import stray_refresh_token


@pytest.fixture()
def service() -> TokenService:
    return TokenService()


def test_full_lifecycle(service, session):
    user = UserFactory()
    session.commit()

    pair = service.issue_pair(user.id)
    assert service.validate_access(pair.access_token) == user.id
    assert service.sessions.current(user.id) == pair.refresh_token

    rotated = service.rotate(pair.refresh_token)
    with pytest.raises(UnauthorizedError):
        service.rotate(pair.refresh_token)

    service.invalidate(user.id)
    with pytest.raises(UnauthorizedError):
        service.rotate(rotated.refresh_token)


def test_signed_but_never_stored_refresh_token_rejected(service, session):
    user = UserFactory()
    session.commit()
    service.issue_pair(user.id)

    with pytest.raises(UnauthorizedError):
        service.rotate(stray_refresh_token(user.id))


def test_issue_pair_for_missing_identity(service):
    with pytest.raises(PersistenceError):
        service.issue_pair(424_242)

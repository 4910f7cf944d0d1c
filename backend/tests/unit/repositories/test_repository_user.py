"""Unit tests for UserRepository."""

import pytest

from streamhub.models.enums import RelationshipKind
from streamhub.repositories.user import UserRepository
from tests.factories.relationship import RelationshipFactory
from tests.factories.user import UserFactory


class TestUserRepository:
    """Ensure ``UserRepository`` performs lookups and refresh-token updates."""

    @pytest.fixture()
    def repo(self):
        return UserRepository()

    def test_get_by_login_accepts_username_or_email(self, repo, session):
        u = UserFactory(email="alice@example.com", username="alice")
        session.commit()

        assert repo.get_by_login("alice").id == u.id
        assert repo.get_by_login("  ALICE@example.com ").id == u.id
        assert repo.get_by_login("nobody") is None

    def test_exists_by_email_and_username(self, repo, session):
        UserFactory(email="bob@example.com", username="bob")
        session.commit()

        assert repo.exists_by_email("BOB@example.com")
        assert repo.exists_by_username("bob")
        assert not repo.exists_by_email("nonexistent@example.com")
        assert not repo.exists_by_username("nobody")

    def test_update_password(self, repo, session):
        u = UserFactory(password="oldpass123")
        session.commit()

        repo.update_password(u.id, "newpass123")
        session.commit()

        refreshed = repo.get(u.id)
        assert refreshed.verify_password("newpass123")
        assert not refreshed.verify_password("oldpass123")

    def test_update_password_unknown_user(self, repo):
        with pytest.raises(ValueError):
            repo.update_password(987654, "whatever1")

    def test_set_refresh_token_reports_missing_identity(self, repo, session):
        u = UserFactory()
        session.commit()

        assert repo.set_refresh_token(u.id, "rt-1") is True
        assert repo.get_refresh_token(u.id) == "rt-1"
        assert repo.set_refresh_token(987654, "rt-x") is False

    def test_swap_refresh_token_only_on_match(self, repo, session):
        u = UserFactory()
        session.commit()
        repo.set_refresh_token(u.id, "rt-1")

        assert repo.swap_refresh_token(u.id, "rt-1", "rt-2") is True
        # The old value no longer matches, so a second swap with it fails
        assert repo.swap_refresh_token(u.id, "rt-1", "rt-3") is False
        assert repo.get_refresh_token(u.id) == "rt-2"

    def test_swap_refresh_token_on_empty_slot_fails(self, repo, session):
        u = UserFactory()
        session.commit()

        assert repo.swap_refresh_token(u.id, "anything", "rt-2") is False
        assert repo.get_refresh_token(u.id) is None

    def test_clear_refresh_token(self, repo, session):
        u = UserFactory()
        session.commit()
        repo.set_refresh_token(u.id, "rt-1")

        repo.clear_refresh_token(u.id)
        repo.clear_refresh_token(u.id)  # idempotent

        assert repo.get_refresh_token(u.id) is None

    def test_channel_profile_row_counts_both_directions(self, repo, session):
        channel = UserFactory(username="chan")
        fans = UserFactory.create_batch(3)
        followed = UserFactory()
        kind = RelationshipKind.CHANNEL_SUBSCRIPTION
        for fan in fans:
            RelationshipFactory(viewer=fan, target_id=channel.id, target_kind=kind)
        RelationshipFactory(viewer=channel, target_id=followed.id, target_kind=kind)
        # A video like on the same numeric id must not count as a subscription
        RelationshipFactory(
            viewer=followed, target_id=channel.id, target_kind=RelationshipKind.VIDEO_LIKE
        )
        session.commit()

        row = repo.channel_profile_row("CHAN", fans[0].id)
        assert row[0].id == channel.id
        assert row.subscribers_count == 3
        assert row.subscribed_to_count == 1
        assert bool(row.is_subscribed) is True

        row = repo.channel_profile_row("chan", followed.id)
        assert bool(row.is_subscribed) is False

        row = repo.channel_profile_row("chan", None)
        assert bool(row.is_subscribed) is False

    def test_channel_profile_row_unknown_username(self, repo):
        assert repo.channel_profile_row("ghost", None) is None

    def test_exists_rejects_unlisted_filters(self, repo):
        with pytest.raises(ValueError):
            repo.exists(full_name="Someone")

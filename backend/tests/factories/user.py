"""Factory Boy definition for :class:`streamhub.models.user.User`."""

from __future__ import annotations

import factory

from streamhub.models.user import User
from tests.factories import BaseFactory


class UserFactory(BaseFactory):
    """
    Build persisted :class:`streamhub.models.user.User` instances.

    Notes
    -----
    - ``refresh_token`` stays empty; tests that need a live session go
      through the token service instead of writing the column by hand.
    """

    class Meta:
        model = User

    id = None  # let autoincrement handle it
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    username = factory.Sequence(lambda n: f"user{n}")
    full_name = factory.LazyAttribute(lambda o: o.username.capitalize())
    avatar_url = factory.LazyAttribute(lambda o: f"https://cdn.example.com/avatars/{o.username}.png")
    password_hash = factory.LazyFunction(lambda: "")  # set via postgen

    @factory.post_generation
    def password(obj, create, extracted, **kwargs):
        """Set password using model setter (ensures hashing)."""
        value = extracted or "Passw0rd!"
        obj.password = value

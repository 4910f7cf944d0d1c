"""Factory Boy definition for :class:`streamhub.models.video.Video`."""

from __future__ import annotations

import factory

from streamhub.models.video import Video
from tests.factories import BaseFactory
from tests.factories.user import UserFactory


class VideoFactory(BaseFactory):
    class Meta:
        model = Video

    id = None
    owner = factory.SubFactory(UserFactory)
    title = factory.Sequence(lambda n: f"Video {n}")
    description = factory.Faker("sentence")
    video_url = factory.Sequence(lambda n: f"https://cdn.example.com/videos/{n}.mp4")
    thumbnail_url = factory.Sequence(lambda n: f"https://cdn.example.com/thumbs/{n}.jpg")
    duration = 120.5
    views = 0
    is_published = True

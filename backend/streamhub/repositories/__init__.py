"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from streamhub.repositories.base import BaseRepository
from streamhub.repositories.relationship import RelationshipRepository
from streamhub.repositories.user import UserRepository
from streamhub.repositories.video import VideoRepository

__all__ = [
    "BaseRepository",
    "RelationshipRepository",
    "UserRepository",
    "VideoRepository",
]

"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import (
    ChangePasswordSchema,
    LoginResponseSchema,
    LoginSchema,
    RefreshSchema,
    RegisterSchema,
    TokenPairSchema,
)
from .relationship import LikeToggleSchema, RelationshipSummarySchema, SubscriptionToggleSchema
from .user import ChannelProfileSchema, UserSchema, UserSummarySchema
from .video import ChannelBriefSchema, VideoDetailSchema, VideoSummarySchema

__all__ = [
    "ChangePasswordSchema",
    "LoginResponseSchema",
    "LoginSchema",
    "RefreshSchema",
    "RegisterSchema",
    "TokenPairSchema",
    "LikeToggleSchema",
    "RelationshipSummarySchema",
    "SubscriptionToggleSchema",
    "ChannelProfileSchema",
    "UserSchema",
    "UserSummarySchema",
    "ChannelBriefSchema",
    "VideoDetailSchema",
    "VideoSummarySchema",
]

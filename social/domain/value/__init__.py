"""Domain value objects."""

from social.domain.value.identifiers import (
    CommentId,
    CommentLikeId,
    FollowId,
    FriendRequestId,
    LikeId,
    NotificationId,
    PostId,
    SavedPostId,
    StoryId,
    StoryItemId,
    UserId,
)
from social.domain.value.types import (
    AuthenticatedIdentity,
    ExternalIdentityClaim,
    FriendRequestStatus,
    NotificationType,
    PostCounter,
    StoryItemType,
    TargetType,
    UserCounter,
    Username,
)

__all__ = [
    # Identifiers
    "UserId",
    "CommentId",
    "CommentLikeId",
    "LikeId",
    "FollowId",
    "FriendRequestId",
    "SavedPostId",
    "NotificationId",
    "PostId",
    "StoryId",
    "StoryItemId",
    # Types
    "AuthenticatedIdentity",
    "ExternalIdentityClaim",
    "FriendRequestStatus",
    "NotificationType",
    "PostCounter",
    "StoryItemType",
    "TargetType",
    "UserCounter",
    "Username",
]

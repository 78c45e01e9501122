"""Domain services."""

from .auth_service import AuthService
from .base import Service
from .comment_service import CommentService
from .follow_service import FollowService
from .friend_service import FriendService
from .identity_service import ExternalIdentityVerifier, IdentityReconciliationService
from .like_service import LikeService
from .notification_service import GroupedNotifications, NotificationService
from .post_service import PostService
from .saved_post_service import SavedPostService
from .session_service import SessionTokenService
from .story_service import StoryService
from .user_service import UserService

__all__ = [
    "AuthService",
    "CommentService",
    "ExternalIdentityVerifier",
    "FollowService",
    "FriendService",
    "GroupedNotifications",
    "IdentityReconciliationService",
    "LikeService",
    "NotificationService",
    "PostService",
    "SavedPostService",
    "Service",
    "SessionTokenService",
    "StoryService",
    "UserService",
]

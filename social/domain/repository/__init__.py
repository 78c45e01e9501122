"""Repository interfaces for the social domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from social.domain.repository.comment import CommentLikeRepository, CommentRepository
from social.domain.repository.notification import NotificationRepository
from social.domain.repository.post import PostRepository
from social.domain.repository.social_graph import (
    FollowRepository,
    FriendRequestRepository,
    LikeRepository,
    SavedPostRepository,
)
from social.domain.repository.story import StoryActivityRepository, StoryRepository
from social.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
    "PostRepository",
    "CommentRepository",
    "CommentLikeRepository",
    "LikeRepository",
    "FollowRepository",
    "FriendRequestRepository",
    "SavedPostRepository",
    "StoryRepository",
    "StoryActivityRepository",
    "NotificationRepository",
]

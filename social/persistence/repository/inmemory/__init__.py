"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentLikeRepository, InMemoryCommentRepository
from .notification import (
    InMemoryNotificationRepository,
    InMemoryStoryActivityRepository,
)
from .post import InMemoryPostRepository, InMemoryStoryRepository
from .social_graph import (
    InMemoryFollowRepository,
    InMemoryFriendRequestRepository,
    InMemoryLikeRepository,
    InMemorySavedPostRepository,
)
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryCommentLikeRepository",
    "InMemoryCommentRepository",
    "InMemoryFollowRepository",
    "InMemoryFriendRequestRepository",
    "InMemoryLikeRepository",
    "InMemoryNotificationRepository",
    "InMemoryPostRepository",
    "InMemorySavedPostRepository",
    "InMemoryStoryActivityRepository",
    "InMemoryStoryRepository",
    "InMemoryUserRepository",
]

"""PostgreSQL and document store repository implementations."""

from social.persistence.repository.comment import (
    PostgresCommentLikeRepository,
    PostgresCommentRepository,
)
from social.persistence.repository.notification import PostgresNotificationRepository
from social.persistence.repository.post import DocumentPostRepository
from social.persistence.repository.social_graph import (
    PostgresFollowRepository,
    PostgresFriendRequestRepository,
    PostgresLikeRepository,
    PostgresSavedPostRepository,
)
from social.persistence.repository.story import DocumentStoryRepository
from social.persistence.repository.story_activity import (
    PostgresStoryActivityRepository,
)
from social.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresCommentRepository",
    "PostgresCommentLikeRepository",
    "PostgresLikeRepository",
    "PostgresFollowRepository",
    "PostgresFriendRequestRepository",
    "PostgresSavedPostRepository",
    "PostgresStoryActivityRepository",
    "PostgresNotificationRepository",
    "DocumentPostRepository",
    "DocumentStoryRepository",
]

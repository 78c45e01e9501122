"""Repository interfaces for likes, follows, friend requests and saved posts.

Pair uniqueness (one like per user per post, one follow per pair, ...) is
enforced by the store; duplicates raise IntegrityError.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from social.domain.model.social_graph import Follow, FriendRequest, Like, SavedPost
from social.domain.value import FriendRequestId, PostId, UserId


class LikeRepository(ABC):
    """Repository for post likes."""

    @abstractmethod
    async def create(self, like: Like) -> Like:
        pass

    @abstractmethod
    async def delete(self, post_id: PostId, user_id: UserId) -> bool:
        """Remove a user's like on a post.

        Returns:
            True if a like was removed
        """
        pass

    @abstractmethod
    async def exists(self, post_id: PostId, user_id: UserId) -> bool:
        pass

    @abstractmethod
    async def count(self, post_id: PostId) -> int:
        pass

    @abstractmethod
    async def find_liked_post_ids(
        self, user_id: UserId, post_ids: Sequence[PostId]
    ) -> set[PostId]:
        """Which of the given posts the user has liked (batch query)."""
        pass


class FollowRepository(ABC):
    """Repository for follow edges."""

    @abstractmethod
    async def create(self, follow: Follow) -> Follow:
        pass

    @abstractmethod
    async def delete(self, follower_id: UserId, following_id: UserId) -> bool:
        """Remove a follow edge.

        Returns:
            True if an edge was removed
        """
        pass

    @abstractmethod
    async def exists(self, follower_id: UserId, following_id: UserId) -> bool:
        pass

    @abstractmethod
    async def list_follower_ids(self, user_id: UserId) -> list[UserId]:
        """IDs of users following `user_id`, most recent first."""
        pass

    @abstractmethod
    async def list_following_ids(self, user_id: UserId) -> list[UserId]:
        """IDs of users `user_id` follows, most recent first."""
        pass


class FriendRequestRepository(ABC):
    """Repository for friend requests."""

    @abstractmethod
    async def find_by_id(self, request_id: FriendRequestId) -> Optional[FriendRequest]:
        pass

    @abstractmethod
    async def find_between(
        self, user_a: UserId, user_b: UserId
    ) -> Optional[FriendRequest]:
        """Find the most recent request between two users, in either direction.

        Args:
            user_a: One user
            user_b: The other user

        Returns:
            The request if any, None otherwise
        """
        pass

    @abstractmethod
    async def list_pending_for(self, receiver_id: UserId) -> list[FriendRequest]:
        """Pending requests received by a user, newest first."""
        pass

    @abstractmethod
    async def list_accepted_for(self, user_id: UserId) -> list[FriendRequest]:
        """Accepted requests sent or received by a user."""
        pass

    @abstractmethod
    async def create(self, request: FriendRequest) -> FriendRequest:
        pass

    @abstractmethod
    async def update(self, request: FriendRequest) -> FriendRequest:
        pass

    @abstractmethod
    async def delete(self, request_id: FriendRequestId) -> bool:
        pass


class SavedPostRepository(ABC):
    """Repository for saved (bookmarked) posts."""

    @abstractmethod
    async def create(self, saved: SavedPost) -> SavedPost:
        pass

    @abstractmethod
    async def delete(self, user_id: UserId, post_id: PostId) -> bool:
        pass

    @abstractmethod
    async def list_by_user(self, user_id: UserId) -> list[SavedPost]:
        """A user's saved posts, most recently saved first."""
        pass

    @abstractmethod
    async def find_saved_post_ids(
        self, user_id: UserId, post_ids: Sequence[PostId]
    ) -> set[PostId]:
        """Which of the given posts the user has saved (batch query)."""
        pass

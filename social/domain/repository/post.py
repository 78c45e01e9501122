"""Post repository interface (document store)."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from social.domain.model.post import Post
from social.domain.value import PostCounter, PostId, UserId


class PostRepository(ABC):
    """Repository for Post documents."""

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: Post document id

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, post_ids: Sequence[PostId]) -> list[Post]:
        """Find several posts at once (batch query)."""
        pass

    @abstractmethod
    async def list_posts(
        self, user_id: Optional[UserId] = None, skip: int = 0, limit: int = 10
    ) -> list[Post]:
        """List posts newest first.

        Args:
            user_id: Only posts by this author, all posts if None
            skip: Number of posts to skip
            limit: Maximum number of posts

        Returns:
            Page of posts
        """
        pass

    @abstractmethod
    async def count(self, user_id: Optional[UserId] = None) -> int:
        """Count posts, optionally by author."""
        pass

    @abstractmethod
    async def create(self, post: Post) -> Post:
        pass

    @abstractmethod
    async def update(self, post: Post) -> Post:
        pass

    @abstractmethod
    async def delete(self, post_id: PostId) -> bool:
        """Delete a post.

        Returns:
            True if a post was deleted
        """
        pass

    @abstractmethod
    async def adjust_counter(
        self, post_id: PostId, counter: PostCounter, delta: int
    ) -> None:
        """Atomically add `delta` to a post counter, never going below 0."""
        pass

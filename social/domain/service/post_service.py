"""Post domain service."""

from typing import Any, Optional, Sequence
from uuid import uuid4

import logfire

from social.domain.error import NotAuthorizedError, NotFoundError
from social.domain.model import Post
from social.domain.model.common import utc_now
from social.domain.repository import PostRepository
from social.domain.value import PostCounter, PostId, UserCounter, UserId

from .base import Service
from .user_service import UserService


def new_document_id() -> str:
    """Generate a document-store id (32 hex chars)."""
    return uuid4().hex


class PostService(Service):
    """Domain service for post operations."""

    def __init__(self, post_repository: PostRepository, user_service: UserService) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository (document store)
            user_service: User domain service, for author counters
        """
        self.post_repository = post_repository
        self.user_service = user_service

    async def create_post(
        self,
        author_id: UserId,
        content: str,
        image_urls: Sequence[str] = (),
        video_urls: Sequence[str] = (),
    ) -> Post:
        """Create a post and bump the author's post count.

        Args:
            author_id: Author user ID
            content: Post text (1-280 characters)
            image_urls: Attached image URLs
            video_urls: Attached video URLs

        Returns:
            Created post
        """
        with logfire.span("post_service.create_post", author_id=author_id):
            post = Post(
                id=PostId(new_document_id()),
                user_id=author_id,
                content=content,
                image_urls=list(image_urls),
                video_urls=list(video_urls),
            )
            created = await self.post_repository.create(post)
            await self.user_service.adjust_counter(author_id, UserCounter.POSTS, 1)
            logfire.info("Post created", post_id=created.id, author_id=author_id)
            return created

    async def get_post(self, post_id: PostId) -> Post:
        """Get post by ID.

        Raises:
            NotFoundError: If post not found
        """
        post = await self.post_repository.find_by_id(post_id)
        if not post:
            logfire.warn("Post not found", post_id=post_id)
            raise NotFoundError("Post", post_id)
        return post

    async def get_many(self, post_ids: Sequence[PostId]) -> dict[PostId, Post]:
        """Load several posts keyed by id (batch query)."""
        if not post_ids:
            return {}
        posts = await self.post_repository.find_by_ids(list(dict.fromkeys(post_ids)))
        return {post.id: post for post in posts}

    async def list_posts(
        self, user_id: Optional[UserId] = None, skip: int = 0, limit: int = 10
    ) -> list[Post]:
        """List posts newest first, optionally by author."""
        return await self.post_repository.list_posts(user_id=user_id, skip=skip, limit=limit)

    async def count_posts(self, user_id: Optional[UserId] = None) -> int:
        return await self.post_repository.count(user_id)

    async def update_post(
        self, post_id: PostId, user_id: UserId, changes: dict[str, Any]
    ) -> Post:
        """Update a post owned by the caller.

        Args:
            post_id: Post ID
            user_id: Caller
            changes: Fields to change (content, image_urls, video_urls)

        Returns:
            Updated post

        Raises:
            NotFoundError: If post not found
            NotAuthorizedError: If the caller is not the author
        """
        with logfire.span("post_service.update_post", post_id=post_id, user_id=user_id):
            post = await self.get_post(post_id)
            if post.user_id != user_id:
                logfire.warn("Unauthorized post edit", post_id=post_id, user_id=user_id)
                raise NotAuthorizedError("Post", post_id, str(user_id))

            updated = Post.model_validate(
                {**post.model_dump(), **changes, "updated_at": utc_now()}
            )
            saved = await self.post_repository.update(updated)
            logfire.info("Post updated", post_id=post_id)
            return saved

    async def delete_post(self, post_id: PostId, user_id: UserId) -> None:
        """Delete a post owned by the caller and decrement the author's post count.

        Raises:
            NotFoundError: If post not found
            NotAuthorizedError: If the caller is not the author
        """
        with logfire.span("post_service.delete_post", post_id=post_id, user_id=user_id):
            post = await self.get_post(post_id)
            if post.user_id != user_id:
                logfire.warn("Unauthorized post delete", post_id=post_id, user_id=user_id)
                raise NotAuthorizedError("Post", post_id, str(user_id))

            await self.post_repository.delete(post_id)
            await self.user_service.adjust_counter(user_id, UserCounter.POSTS, -1)
            logfire.info("Post deleted", post_id=post_id)

    async def adjust_counter(
        self, post_id: PostId, counter: PostCounter, delta: int
    ) -> bool:
        """Update a post counter without failing the caller."""
        return await self._best_effort(
            "post_counter",
            self.post_repository.adjust_counter(post_id, counter, delta),
            post_id=post_id,
            counter=counter.value,
            delta=delta,
        )

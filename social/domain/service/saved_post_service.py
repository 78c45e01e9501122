"""Saved post domain service."""

import logfire
from sqlalchemy.exc import IntegrityError

from social.domain.error import ConflictError, NotFoundError
from social.domain.model import Post, SavedPost
from social.domain.repository import SavedPostRepository
from social.domain.value import PostId, UserId

from .base import Service
from .post_service import PostService


class SavedPostService(Service):
    """Domain service for bookmarking posts."""

    def __init__(
        self, saved_post_repository: SavedPostRepository, post_service: PostService
    ) -> None:
        """Initialize saved post service.

        Args:
            saved_post_repository: Saved post repository
            post_service: Post domain service
        """
        self.saved_post_repository = saved_post_repository
        self.post_service = post_service

    async def save(self, user_id: UserId, post_id: PostId) -> SavedPost:
        """Save a post.

        Raises:
            NotFoundError: If the post does not exist
            ConflictError: If already saved
        """
        with logfire.span("saved_post_service.save", user_id=user_id, post_id=post_id):
            await self.post_service.get_post(post_id)
            try:
                return await self.saved_post_repository.create(
                    SavedPost(user_id=user_id, post_id=post_id)
                )
            except IntegrityError:
                raise ConflictError("Post already saved")

    async def unsave(self, user_id: UserId, post_id: PostId) -> None:
        """Remove a saved post.

        Raises:
            NotFoundError: If the post was not saved
        """
        if not await self.saved_post_repository.delete(user_id, post_id):
            raise NotFoundError("Saved post", post_id, "Saved post not found")

    async def saved_posts(self, user_id: UserId) -> list[Post]:
        """The caller's saved posts, most recently saved first.

        Posts deleted since saving are skipped.
        """
        saved = await self.saved_post_repository.list_by_user(user_id)
        post_ids = [s.post_id for s in saved]
        posts = await self.post_service.get_many(post_ids)
        return [posts[i] for i in post_ids if i in posts]

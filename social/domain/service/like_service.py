"""Post like domain service."""

import logfire
from sqlalchemy.exc import IntegrityError

from social.domain.error import ConflictError, NotFoundError
from social.domain.model import Like
from social.domain.repository import LikeRepository
from social.domain.value import NotificationType, PostCounter, PostId, TargetType, UserId

from .base import Service
from .notification_service import NotificationService
from .post_service import PostService
from .user_service import UserService


class LikeService(Service):
    """Domain service for post likes."""

    def __init__(
        self,
        like_repository: LikeRepository,
        post_service: PostService,
        user_service: UserService,
        notification_service: NotificationService,
    ) -> None:
        """Initialize like service.

        Args:
            like_repository: Like repository
            post_service: Post domain service
            user_service: User domain service
            notification_service: Notification domain service
        """
        self.like_repository = like_repository
        self.post_service = post_service
        self.user_service = user_service
        self.notification_service = notification_service

    async def like_post(self, post_id: PostId, user_id: UserId) -> Like:
        """Like a post.

        Creates the like record, then increments the post's like count and
        notifies the author.

        Args:
            post_id: Post ID
            user_id: User ID

        Returns:
            Created like

        Raises:
            NotFoundError: If the post does not exist
            ConflictError: If the user already liked the post
        """
        with logfire.span("like_service.like_post", post_id=post_id, user_id=user_id):
            post = await self.post_service.get_post(post_id)
            actor = await self.user_service.get_by_id(user_id)

            try:
                like = await self.like_repository.create(
                    Like(post_id=post_id, user_id=user_id)
                )
            except IntegrityError:
                logfire.warn("Duplicate like attempt", post_id=post_id, user_id=user_id)
                raise ConflictError("Post already liked")

            await self.post_service.adjust_counter(post_id, PostCounter.LIKES, 1)
            await self.notification_service.notify(
                actor=actor,
                recipient_id=post.user_id,
                type=NotificationType.LIKE,
                target_id=post_id,
                target_type=TargetType.POST,
                preview_image_url=post.image_urls[0] if post.image_urls else None,
            )
            return like

    async def unlike_post(self, post_id: PostId, user_id: UserId) -> None:
        """Remove a like from a post.

        Raises:
            NotFoundError: If the post does not exist or was not liked
        """
        with logfire.span("like_service.unlike_post", post_id=post_id, user_id=user_id):
            await self.post_service.get_post(post_id)
            if not await self.like_repository.delete(post_id, user_id):
                raise NotFoundError("Like", post_id, "Like not found")
            await self.post_service.adjust_counter(post_id, PostCounter.LIKES, -1)

    async def count(self, post_id: PostId) -> int:
        await self.post_service.get_post(post_id)
        return await self.like_repository.count(post_id)

    async def has_liked(self, post_id: PostId, user_id: UserId) -> bool:
        await self.post_service.get_post(post_id)
        return await self.like_repository.exists(post_id, user_id)

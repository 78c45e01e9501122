"""Follow domain service."""

import logfire
from sqlalchemy.exc import IntegrityError

from social.domain.error import BusinessRuleViolationError, ConflictError, NotFoundError
from social.domain.model import Follow, User
from social.domain.repository import FollowRepository
from social.domain.value import NotificationType, TargetType, UserCounter, UserId

from .base import Service
from .notification_service import NotificationService
from .user_service import UserService


class FollowService(Service):
    """Domain service for the follow graph."""

    def __init__(
        self,
        follow_repository: FollowRepository,
        user_service: UserService,
        notification_service: NotificationService,
    ) -> None:
        """Initialize follow service.

        Args:
            follow_repository: Follow repository
            user_service: User domain service
            notification_service: Notification domain service
        """
        self.follow_repository = follow_repository
        self.user_service = user_service
        self.notification_service = notification_service

    async def follow(self, follower_id: UserId, following_id: UserId) -> Follow:
        """Follow another user.

        Args:
            follower_id: Caller
            following_id: User to follow

        Returns:
            Created follow edge

        Raises:
            BusinessRuleViolationError: If following oneself
            NotFoundError: If the target user does not exist
            ConflictError: If already following
        """
        with logfire.span(
            "follow_service.follow", follower_id=follower_id, following_id=following_id
        ):
            if follower_id == following_id:
                raise BusinessRuleViolationError("You cannot follow yourself")

            await self.user_service.get_by_id(following_id)
            follower = await self.user_service.get_by_id(follower_id)

            try:
                follow = await self.follow_repository.create(
                    Follow(follower_id=follower_id, following_id=following_id)
                )
            except IntegrityError:
                raise ConflictError("Already following this user")

            await self.user_service.adjust_counter(
                follower_id, UserCounter.FOLLOWING, 1
            )
            await self.user_service.adjust_counter(
                following_id, UserCounter.FOLLOWERS, 1
            )
            await self.notification_service.notify(
                actor=follower,
                recipient_id=following_id,
                type=NotificationType.FOLLOW,
                target_id=str(follower_id),
                target_type=TargetType.USER,
                preview_image_url=follower.avatar_url,
            )
            logfire.info("User followed", follower_id=follower_id, following_id=following_id)
            return follow

    async def unfollow(self, follower_id: UserId, following_id: UserId) -> None:
        """Stop following a user.

        Raises:
            NotFoundError: If the caller does not follow the user
        """
        with logfire.span(
            "follow_service.unfollow", follower_id=follower_id, following_id=following_id
        ):
            if not await self.follow_repository.delete(follower_id, following_id):
                raise NotFoundError(
                    "Follow", str(following_id), "Not following this user"
                )
            await self.user_service.adjust_counter(
                follower_id, UserCounter.FOLLOWING, -1
            )
            await self.user_service.adjust_counter(
                following_id, UserCounter.FOLLOWERS, -1
            )

    async def followers(self, user_id: UserId) -> list[User]:
        """Users following `user_id`."""
        await self.user_service.get_by_id(user_id)
        ids = await self.follow_repository.list_follower_ids(user_id)
        users = await self.user_service.get_many(ids)
        return [users[i] for i in ids if i in users]

    async def following(self, user_id: UserId) -> list[User]:
        """Users `user_id` follows."""
        await self.user_service.get_by_id(user_id)
        ids = await self.follow_repository.list_following_ids(user_id)
        users = await self.user_service.get_many(ids)
        return [users[i] for i in ids if i in users]

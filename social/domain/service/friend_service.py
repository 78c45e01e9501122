"""Friend request domain service."""

import logfire
from sqlalchemy.exc import IntegrityError

from social.domain.error import (
    BusinessRuleViolationError,
    ConflictError,
    NotAuthorizedError,
    NotFoundError,
)
from social.domain.model import FriendRequest, User
from social.domain.model.common import utc_now
from social.domain.repository import FriendRequestRepository
from social.domain.value import (
    FriendRequestId,
    FriendRequestStatus,
    NotificationType,
    TargetType,
    UserId,
)

from .base import Service
from .notification_service import NotificationService
from .user_service import UserService


class FriendService(Service):
    """Domain service for friend requests and friendships."""

    def __init__(
        self,
        friend_request_repository: FriendRequestRepository,
        user_service: UserService,
        notification_service: NotificationService,
    ) -> None:
        """Initialize friend service.

        Args:
            friend_request_repository: Friend request repository
            user_service: User domain service
            notification_service: Notification domain service
        """
        self.friend_request_repository = friend_request_repository
        self.user_service = user_service
        self.notification_service = notification_service

    async def send_request(self, sender_id: UserId, receiver_id: UserId) -> FriendRequest:
        """Send a friend request.

        A rejected request may be re-sent; it is replaced by the new one.

        Args:
            sender_id: Caller
            receiver_id: Recipient

        Returns:
            Pending friend request

        Raises:
            BusinessRuleViolationError: If sending to oneself
            NotFoundError: If the receiver does not exist
            ConflictError: If a pending request or a friendship already exists
        """
        with logfire.span(
            "friend_service.send_request", sender_id=sender_id, receiver_id=receiver_id
        ):
            if sender_id == receiver_id:
                raise BusinessRuleViolationError(
                    "Cannot send friend request to yourself"
                )

            await self.user_service.get_by_id(receiver_id)
            sender = await self.user_service.get_by_id(sender_id)

            existing = await self.friend_request_repository.find_between(
                sender_id, receiver_id
            )
            if existing is not None:
                if existing.status == FriendRequestStatus.ACCEPTED:
                    raise ConflictError("Users are already friends")
                if existing.status == FriendRequestStatus.PENDING:
                    raise ConflictError("Friend request already pending")
                await self.friend_request_repository.delete(existing.id)

            try:
                request = await self.friend_request_repository.create(
                    FriendRequest(sender_id=sender_id, receiver_id=receiver_id)
                )
            except IntegrityError:
                raise ConflictError("Friend request already pending")

            await self.notification_service.notify(
                actor=sender,
                recipient_id=receiver_id,
                type=NotificationType.FRIEND_REQUEST,
                target_id=str(request.id),
                target_type=TargetType.USER,
                preview_image_url=sender.avatar_url,
            )
            logfire.info("Friend request sent", request_id=request.id)
            return request

    async def pending_requests(self, receiver_id: UserId) -> list[FriendRequest]:
        """Pending requests received by the caller, newest first."""
        return await self.friend_request_repository.list_pending_for(receiver_id)

    async def respond(
        self,
        request_id: FriendRequestId,
        user_id: UserId,
        status: FriendRequestStatus,
    ) -> FriendRequest:
        """Accept or reject a received friend request.

        Args:
            request_id: Friend request ID
            user_id: Caller, must be the receiver
            status: ACCEPTED or REJECTED

        Returns:
            Updated friend request

        Raises:
            BusinessRuleViolationError: If status is PENDING
            NotFoundError: If the request does not exist
            NotAuthorizedError: If the caller is not the receiver
            ConflictError: If the request was already answered
        """
        with logfire.span(
            "friend_service.respond", request_id=request_id, user_id=user_id
        ):
            if status == FriendRequestStatus.PENDING:
                raise BusinessRuleViolationError("Status must be accepted or rejected")

            request = await self.friend_request_repository.find_by_id(request_id)
            if request is None:
                raise NotFoundError("Friend request", str(request_id))
            if request.receiver_id != user_id:
                raise NotAuthorizedError("Friend request", str(request_id), str(user_id))
            if request.status != FriendRequestStatus.PENDING:
                raise ConflictError("Friend request already answered")

            updated = await self.friend_request_repository.update(
                request.model_copy(update={"status": status, "updated_at": utc_now()})
            )
            logfire.info(
                "Friend request answered", request_id=request_id, status=status.value
            )
            return updated

    async def friends(self, user_id: UserId) -> list[User]:
        """Users with an accepted friendship with `user_id`."""
        accepted = await self.friend_request_repository.list_accepted_for(user_id)
        ids = [request.counterpart(user_id) for request in accepted]
        users = await self.user_service.get_many(ids)
        return [users[i] for i in ids if i in users]

    async def remove_friend(self, user_id: UserId, friend_id: UserId) -> None:
        """End a friendship.

        Raises:
            NotFoundError: If there is no request between the users
            BusinessRuleViolationError: If the request was never accepted
        """
        with logfire.span(
            "friend_service.remove_friend", user_id=user_id, friend_id=friend_id
        ):
            request = await self.friend_request_repository.find_between(
                user_id, friend_id
            )
            if request is None:
                raise NotFoundError("Friendship", str(friend_id), "Friendship not found")
            if request.status != FriendRequestStatus.ACCEPTED:
                raise BusinessRuleViolationError("Users are not friends")

            await self.friend_request_repository.delete(request.id)
            logfire.info("Friendship removed", user_id=user_id, friend_id=friend_id)

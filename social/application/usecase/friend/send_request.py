"""Friend request use cases."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from social.application.usecase.common import UserCompact
from social.domain.model import FriendRequest, User
from social.domain.service import FriendService, UserService
from social.domain.value import FriendRequestId, FriendRequestStatus, UserId


class FriendRequestResponse(BaseModel):
    """Friend request with its sender."""

    id: int
    sender_id: int
    receiver_id: int
    status: FriendRequestStatus
    created_at: datetime
    updated_at: datetime
    sender: UserCompact | None = None

    @classmethod
    def from_request(
        cls, request: FriendRequest, sender: User | None = None
    ) -> "FriendRequestResponse":
        return cls(
            **request.model_dump(),
            sender=UserCompact.from_user(sender) if sender else None,
        )


class SendFriendRequestRequest(BaseModel):
    """Send friend request request."""

    sender_id: int  # From authenticated user
    receiver_id: int


class PendingRequestsRequest(BaseModel):
    """Pending friend requests request."""

    user_id: int  # From authenticated user


class PendingRequestsResponse(BaseModel):
    """Pending friend requests response."""

    requests: list[FriendRequestResponse]


class RespondFriendRequestRequest(BaseModel):
    """Accept or reject a friend request."""

    request_id: int
    user_id: int  # From authenticated user
    status: FriendRequestStatus  # accepted or rejected


class SendFriendRequestUseCase:
    """Use case for sending a friend request."""

    def __init__(self, friend_service: FriendService) -> None:
        """Initialize send friend request use case.

        Args:
            friend_service: Friend domain service
        """
        self.friend_service = friend_service

    async def execute(self, request: SendFriendRequestRequest) -> FriendRequestResponse:
        """Execute send friend request flow.

        Raises:
            BusinessRuleViolationError: If sending to oneself
            NotFoundError: If the receiver does not exist
            ConflictError: If a pending request or friendship already exists
        """
        friend_request = await self.friend_service.send_request(
            UserId(request.sender_id), UserId(request.receiver_id)
        )
        return FriendRequestResponse.from_request(friend_request)


class PendingRequestsUseCase:
    """Use case for listing friend requests awaiting the caller's answer."""

    def __init__(self, friend_service: FriendService, user_service: UserService) -> None:
        """Initialize pending requests use case.

        Args:
            friend_service: Friend domain service
            user_service: User domain service, for senders
        """
        self.friend_service = friend_service
        self.user_service = user_service

    async def execute(self, request: PendingRequestsRequest) -> PendingRequestsResponse:
        with logfire.span("pending_requests.execute", user_id=request.user_id):
            pending = await self.friend_service.pending_requests(UserId(request.user_id))
            senders = await self.user_service.get_many([r.sender_id for r in pending])
            return PendingRequestsResponse(
                requests=[
                    FriendRequestResponse.from_request(r, senders.get(r.sender_id))
                    for r in pending
                ]
            )


class RespondFriendRequestUseCase:
    """Use case for accepting or rejecting a friend request."""

    def __init__(self, friend_service: FriendService) -> None:
        """Initialize respond friend request use case.

        Args:
            friend_service: Friend domain service
        """
        self.friend_service = friend_service

    async def execute(
        self, request: RespondFriendRequestRequest
    ) -> FriendRequestResponse:
        """Answer a friend request.

        Raises:
            NotFoundError: If the request does not exist
            NotAuthorizedError: If the caller is not the receiver
            BusinessRuleViolationError: If the status is still pending
            ConflictError: If the request was already answered
        """
        updated = await self.friend_service.respond(
            FriendRequestId(request.request_id),
            UserId(request.user_id),
            request.status,
        )
        return FriendRequestResponse.from_request(updated)

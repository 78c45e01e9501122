"""Friend use cases."""

from .friends import (
    ListFriendsRequest,
    ListFriendsUseCase,
    RemoveFriendRequest,
    RemoveFriendUseCase,
)
from .send_request import (
    FriendRequestResponse,
    PendingRequestsRequest,
    PendingRequestsResponse,
    PendingRequestsUseCase,
    RespondFriendRequestRequest,
    RespondFriendRequestUseCase,
    SendFriendRequestRequest,
    SendFriendRequestUseCase,
)

__all__ = [
    "FriendRequestResponse",
    "ListFriendsRequest",
    "ListFriendsUseCase",
    "PendingRequestsRequest",
    "PendingRequestsResponse",
    "PendingRequestsUseCase",
    "RemoveFriendRequest",
    "RemoveFriendUseCase",
    "RespondFriendRequestRequest",
    "RespondFriendRequestUseCase",
    "SendFriendRequestRequest",
    "SendFriendRequestUseCase",
]

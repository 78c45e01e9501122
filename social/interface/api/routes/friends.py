"""Friend routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Response, status
from pydantic import BaseModel

from social.application.usecase.friend import (
    FriendRequestResponse,
    ListFriendsRequest,
    ListFriendsUseCase,
    PendingRequestsRequest,
    PendingRequestsResponse,
    PendingRequestsUseCase,
    RemoveFriendRequest,
    RemoveFriendUseCase,
    RespondFriendRequestRequest,
    RespondFriendRequestUseCase,
    SendFriendRequestRequest,
    SendFriendRequestUseCase,
)
from social.application.usecase.user import UserListResponse
from social.domain.value import FriendRequestStatus
from social.interface.api.dependencies import CurrentIdentity

router = APIRouter(prefix="/friends", tags=["friends"], route_class=DishkaRoute)


class SendFriendRequestAPIRequest(BaseModel):
    """API request for sending a friend request."""

    receiver_id: int


class RespondFriendRequestAPIRequest(BaseModel):
    """API request for answering a friend request."""

    status: FriendRequestStatus


@router.post(
    "/request",
    response_model=FriendRequestResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_friend_request(
    request: SendFriendRequestAPIRequest,
    identity: CurrentIdentity,
    use_case: FromDishka[SendFriendRequestUseCase],
) -> FriendRequestResponse:
    """Send a friend request.

    Returns 409 if a pending request or friendship exists in either direction.
    """
    return await use_case.execute(
        SendFriendRequestRequest(
            sender_id=identity.user_id, receiver_id=request.receiver_id
        )
    )


@router.get("/requests/pending", response_model=PendingRequestsResponse)
async def pending_requests(
    identity: CurrentIdentity, use_case: FromDishka[PendingRequestsUseCase]
) -> PendingRequestsResponse:
    """Friend requests the caller has received and not yet answered."""
    return await use_case.execute(PendingRequestsRequest(user_id=identity.user_id))


@router.put("/request/{request_id}/status", response_model=FriendRequestResponse)
async def respond_friend_request(
    request_id: int,
    request: RespondFriendRequestAPIRequest,
    identity: CurrentIdentity,
    use_case: FromDishka[RespondFriendRequestUseCase],
) -> FriendRequestResponse:
    """Accept or reject a friend request. Only the receiver can answer."""
    return await use_case.execute(
        RespondFriendRequestRequest(
            request_id=request_id, user_id=identity.user_id, status=request.status
        )
    )


@router.get("", response_model=UserListResponse)
async def list_friends(
    identity: CurrentIdentity, use_case: FromDishka[ListFriendsUseCase]
) -> UserListResponse:
    """The caller's friends."""
    return await use_case.execute(ListFriendsRequest(user_id=identity.user_id))


@router.delete("/{friend_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_friend(
    friend_id: int,
    identity: CurrentIdentity,
    use_case: FromDishka[RemoveFriendUseCase],
) -> Response:
    """End a friendship."""
    await use_case.execute(
        RemoveFriendRequest(user_id=identity.user_id, friend_id=friend_id)
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)

"""Friend list use cases."""

from pydantic import BaseModel

from social.application.usecase.common import UserCompact
from social.application.usecase.user import UserListResponse
from social.domain.service import FriendService
from social.domain.value import UserId


class ListFriendsRequest(BaseModel):
    """List friends request."""

    user_id: int  # From authenticated user


class RemoveFriendRequest(BaseModel):
    """Remove friend request."""

    user_id: int  # From authenticated user
    friend_id: int


class ListFriendsUseCase:
    """Use case for listing the caller's friends."""

    def __init__(self, friend_service: FriendService) -> None:
        """Initialize list friends use case.

        Args:
            friend_service: Friend domain service
        """
        self.friend_service = friend_service

    async def execute(self, request: ListFriendsRequest) -> UserListResponse:
        users = await self.friend_service.friends(UserId(request.user_id))
        return UserListResponse(users=[UserCompact.from_user(u) for u in users])


class RemoveFriendUseCase:
    """Use case for ending a friendship."""

    def __init__(self, friend_service: FriendService) -> None:
        """Initialize remove friend use case.

        Args:
            friend_service: Friend domain service
        """
        self.friend_service = friend_service

    async def execute(self, request: RemoveFriendRequest) -> None:
        """End a friendship with another user.

        Raises:
            NotFoundError: If there is no request between the users
            BusinessRuleViolationError: If the users are not friends
        """
        await self.friend_service.remove_friend(
            UserId(request.user_id), UserId(request.friend_id)
        )

"""Follow use cases."""

from datetime import datetime

from pydantic import BaseModel

from social.application.usecase.common import UserCompact
from social.application.usecase.user import UserListResponse
from social.domain.service import FollowService
from social.domain.value import UserId


class FollowRequest(BaseModel):
    """Follow or unfollow request."""

    follower_id: int  # From authenticated user
    following_id: int


class FollowResponse(BaseModel):
    """Follow response."""

    id: int
    follower_id: int
    following_id: int
    created_at: datetime


class FollowListRequest(BaseModel):
    """Followers or following list request."""

    user_id: int


class FollowUserUseCase:
    """Use case for following a user."""

    def __init__(self, follow_service: FollowService) -> None:
        """Initialize follow user use case.

        Args:
            follow_service: Follow domain service
        """
        self.follow_service = follow_service

    async def execute(self, request: FollowRequest) -> FollowResponse:
        """Execute follow flow.

        Steps:
        1. Reject self-follows and unknown targets
        2. Store the follow edge (unique per pair)
        3. Update both users' counters and notify the target

        Raises:
            BusinessRuleViolationError: If following oneself
            NotFoundError: If the target user does not exist
            ConflictError: If already following
        """
        follow = await self.follow_service.follow(
            UserId(request.follower_id), UserId(request.following_id)
        )
        return FollowResponse(**follow.model_dump())


class UnfollowUserUseCase:
    """Use case for unfollowing a user."""

    def __init__(self, follow_service: FollowService) -> None:
        """Initialize unfollow user use case.

        Args:
            follow_service: Follow domain service
        """
        self.follow_service = follow_service

    async def execute(self, request: FollowRequest) -> None:
        await self.follow_service.unfollow(
            UserId(request.follower_id), UserId(request.following_id)
        )


class ListFollowersUseCase:
    """Use case for listing a user's followers."""

    def __init__(self, follow_service: FollowService) -> None:
        """Initialize list followers use case.

        Args:
            follow_service: Follow domain service
        """
        self.follow_service = follow_service

    async def execute(self, request: FollowListRequest) -> UserListResponse:
        users = await self.follow_service.followers(UserId(request.user_id))
        return UserListResponse(users=[UserCompact.from_user(u) for u in users])


class ListFollowingUseCase:
    """Use case for listing the users someone follows."""

    def __init__(self, follow_service: FollowService) -> None:
        """Initialize list following use case.

        Args:
            follow_service: Follow domain service
        """
        self.follow_service = follow_service

    async def execute(self, request: FollowListRequest) -> UserListResponse:
        users = await self.follow_service.following(UserId(request.user_id))
        return UserListResponse(users=[UserCompact.from_user(u) for u in users])

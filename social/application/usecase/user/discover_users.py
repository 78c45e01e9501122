"""User discovery use cases: suggestions and search."""

import logfire
from pydantic import BaseModel, Field

from social.application.usecase.common import UserCompact
from social.domain.service import UserService
from social.domain.value import UserId


class SuggestedUsersRequest(BaseModel):
    """Suggested users request."""

    user_id: int  # From authenticated user


class SearchUsersRequest(BaseModel):
    """Search users request."""

    query: str = Field(min_length=1, max_length=100)


class UserListResponse(BaseModel):
    """List of compact user projections."""

    users: list[UserCompact]


class SuggestedUsersUseCase:
    """Use case for suggesting users to connect with."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize suggested users use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: SuggestedUsersRequest) -> UserListResponse:
        users = await self.user_service.suggested(UserId(request.user_id))
        return UserListResponse(users=[UserCompact.from_user(u) for u in users])


class SearchUsersUseCase:
    """Use case for searching users by name, username or email."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize search users use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: SearchUsersRequest) -> UserListResponse:
        """Search users.

        Surrounding whitespace is ignored; at most 20 users are returned.
        """
        users = await self.user_service.search(request.query.strip())
        logfire.info("Users searched", results=len(users))
        return UserListResponse(users=[UserCompact.from_user(u) for u in users])

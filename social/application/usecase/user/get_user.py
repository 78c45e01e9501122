"""Get user use case."""

from pydantic import BaseModel

from social.application.usecase.common import UserResponse
from social.domain.service import UserService
from social.domain.value import UserId


class GetUserRequest(BaseModel):
    """Get user request."""

    user_id: int


class GetUserResponse(BaseModel):
    """Get user response."""

    user: UserResponse


class GetUserUseCase:
    """Use case for viewing another user's profile."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize get user use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: GetUserRequest) -> GetUserResponse:
        """Load a user by id.

        Raises:
            NotFoundError: If the user does not exist
        """
        user = await self.user_service.get_by_id(UserId(request.user_id))
        return GetUserResponse(user=UserResponse.from_user(user))

"""Get current user use case."""

from pydantic import BaseModel

from social.application.usecase.common import UserResponse
from social.domain.service import UserService
from social.domain.value import UserId


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    user_id: int  # From the verified session token


class GetCurrentUserResponse(BaseModel):
    """Get current user response."""

    user: UserResponse


class GetCurrentUserUseCase:
    """Use case for loading the authenticated caller's profile."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize get current user use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: GetCurrentUserRequest) -> GetCurrentUserResponse:
        """Load the caller.

        The token may outlive the account, so a missing user is a 404.

        Raises:
            NotFoundError: If the user no longer exists
        """
        user = await self.user_service.get_by_id(UserId(request.user_id))
        return GetCurrentUserResponse(user=UserResponse.from_user(user))

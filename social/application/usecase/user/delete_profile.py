"""Delete profile use case."""

from pydantic import BaseModel

from social.domain.service import UserService
from social.domain.value import UserId


class DeleteProfileRequest(BaseModel):
    """Delete profile request."""

    user_id: int  # From authenticated user


class DeleteProfileUseCase:
    """Use case for deleting the caller's account."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize delete profile use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: DeleteProfileRequest) -> None:
        await self.user_service.delete(UserId(request.user_id))

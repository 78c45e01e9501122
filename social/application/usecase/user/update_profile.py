"""Update profile use case."""

from pydantic import BaseModel, EmailStr, Field

from social.application.usecase.common import UserResponse
from social.domain.service import UserService
from social.domain.value import UserId


class UpdateProfileRequest(BaseModel):
    """Update profile request.

    Only fields present in the payload are changed.
    """

    user_id: int  # From authenticated user
    display_name: str | None = Field(default=None, min_length=1, max_length=128)
    username: str | None = Field(default=None, pattern=r"^[A-Za-z0-9._-]{3,30}$")
    email: EmailStr | None = None
    bio: str | None = Field(default=None, max_length=500)
    avatar_url: str | None = Field(default=None, max_length=2048)
    is_private: bool | None = None


class UpdateProfileResponse(BaseModel):
    """Update profile response."""

    user: UserResponse


class UpdateProfileUseCase:
    """Use case for updating the caller's profile.

    Counters, credentials and the external subject id cannot be changed here.
    """

    def __init__(self, user_service: UserService) -> None:
        """Initialize update profile use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: UpdateProfileRequest) -> UpdateProfileResponse:
        """Execute update profile flow.

        Raises:
            NotFoundError: If the user no longer exists
            ConflictError: If the new username or email is taken
        """
        changes = request.model_dump(exclude_unset=True, exclude={"user_id"})
        # display_name and is_private are not nullable
        for key in ("display_name", "is_private", "username"):
            if changes.get(key, False) is None:
                del changes[key]
        if "email" in changes and changes["email"] is not None:
            changes["email"] = str(changes["email"])

        user = await self.user_service.update_profile(UserId(request.user_id), changes)
        return UpdateProfileResponse(user=UserResponse.from_user(user))

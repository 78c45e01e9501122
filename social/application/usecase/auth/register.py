"""Legacy register use case.

Deprecated: trusts a client-supplied Firebase UID without verifying it
with Firebase. Kept for existing clients; new clients use Firebase login.
"""

from pydantic import BaseModel, EmailStr, Field

from social.application.usecase.common import UserResponse
from social.domain.service import AuthService


class RegisterRequest(BaseModel):
    """Legacy register request."""

    name: str = Field(min_length=1, max_length=128)
    email: EmailStr
    age: int | None = Field(default=None, ge=0, le=150)
    firebase_uid: str = Field(min_length=1, max_length=128)


class RegisterResponse(BaseModel):
    """Legacy register response (no session token)."""

    user: UserResponse


class RegisterUseCase:
    """Use case for the deprecated unverified registration."""

    def __init__(self, auth_service: AuthService) -> None:
        """Initialize register use case.

        Args:
            auth_service: Credential flows domain service
        """
        self.auth_service = auth_service

    async def execute(self, request: RegisterRequest) -> RegisterResponse:
        """Create a user linked to the supplied Firebase UID.

        Raises:
            ConflictError: If the Firebase UID or email is already registered
        """
        user = await self.auth_service.register_external(
            name=request.name,
            email=str(request.email),
            subject_id=request.firebase_uid,
            age=request.age,
        )
        return RegisterResponse(user=UserResponse.from_user(user))

"""Sign up use case."""

from pydantic import BaseModel, EmailStr, Field, field_validator

from social.application.usecase.common import UserResponse
from social.domain.service import AuthService, SessionTokenService
from social.util.password import MAX_PASSWORD_BYTES


class SignUpRequest(BaseModel):
    """Sign up request."""

    name: str = Field(min_length=1, max_length=128)
    username: str = Field(pattern=r"^[A-Za-z0-9._-]{3,30}$")
    email: EmailStr
    password: str = Field(min_length=8)

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        """bcrypt only uses the first 72 bytes."""
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class AuthResponse(BaseModel):
    """Session token and the authenticated user."""

    token: str
    user: UserResponse


class SignUpUseCase:
    """Use case for creating a password account and logging it in."""

    def __init__(
        self, auth_service: AuthService, session_token_service: SessionTokenService
    ) -> None:
        """Initialize sign up use case.

        Args:
            auth_service: Credential flows domain service
            session_token_service: Session token domain service
        """
        self.auth_service = auth_service
        self.session_token_service = session_token_service

    async def execute(self, request: SignUpRequest) -> AuthResponse:
        """Execute sign up flow.

        Steps:
        1. Reject a taken email or username
        2. Hash the password and create the user
        3. Issue a session token

        Raises:
            ConflictError: If email or username is already registered
        """
        user = await self.auth_service.sign_up(
            name=request.name,
            username=request.username,
            email=str(request.email),
            password=request.password,
        )
        token = self.session_token_service.issue(user)
        return AuthResponse(token=token, user=UserResponse.from_user(user))

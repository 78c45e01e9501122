"""Sign in use case."""

from pydantic import BaseModel, Field

from social.application.usecase.common import UserResponse
from social.domain.service import AuthService, SessionTokenService

from .signup import AuthResponse


class SignInRequest(BaseModel):
    """Sign in request.

    The email is not format-checked so every failure gets the same 401.
    """

    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1)


class SignInUseCase:
    """Use case for email and password login."""

    def __init__(
        self, auth_service: AuthService, session_token_service: SessionTokenService
    ) -> None:
        """Initialize sign in use case.

        Args:
            auth_service: Credential flows domain service
            session_token_service: Session token domain service
        """
        self.auth_service = auth_service
        self.session_token_service = session_token_service

    async def execute(self, request: SignInRequest) -> AuthResponse:
        """Execute sign in flow.

        Raises:
            AuthenticationError: If the email is unknown or the password is wrong
        """
        user = await self.auth_service.sign_in(request.email, request.password)
        token = self.session_token_service.issue(user)
        return AuthResponse(token=token, user=UserResponse.from_user(user))

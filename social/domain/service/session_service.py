"""Session token domain service."""

import logfire

from social.config import AuthSettings
from social.domain.model import User
from social.domain.value import AuthenticatedIdentity, UserId
from social.util.jwt import JWTError, create_token, verify_token

from .base import Service


class SessionTokenService(Service):
    """Issues and verifies session tokens.

    Verification trusts the embedded claims and does not consult the user
    store: a token stays valid until it expires even if its user is deleted.
    """

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize session token service.

        Args:
            auth_settings: Authentication settings (secret, algorithm, expiry)
        """
        self.auth_settings = auth_settings

    def issue(self, user: User) -> str:
        """Create a session token for a persisted user.

        Args:
            user: User with an assigned id

        Returns:
            Signed session token
        """
        if user.id is None:
            raise ValueError("Cannot issue a session token for an unsaved user")
        with logfire.span("session_service.issue", user_id=user.id):
            token = create_token(user.id, user.email or "", self.auth_settings)
            logfire.info("Session token issued", user_id=user.id)
            return token

    def verify(self, token: str) -> AuthenticatedIdentity:
        """Verify a session token.

        Args:
            token: Session token string

        Returns:
            Identity embedded in the token

        Raises:
            JWTError: TokenExpiredError, InvalidSignatureError or MalformedTokenError
        """
        with logfire.span("session_service.verify"):
            try:
                claims = verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.info("Session token rejected", reason=type(e).__name__)
                raise
            return AuthenticatedIdentity(user_id=UserId(claims.user_id), email=claims.email)

    def identity_from_token(self, token: str | None) -> AuthenticatedIdentity | None:
        """Resolve an optional token to an identity.

        Used by optional-auth endpoints, where an absent or invalid token
        means an anonymous caller.

        Args:
            token: Session token, or None

        Returns:
            Identity if the token is valid, None otherwise
        """
        if not token:
            return None
        try:
            return self.verify(token)
        except JWTError:
            return None

"""Firebase login use case."""

import logfire
from pydantic import BaseModel, ConfigDict, Field

from social.adapter.error import ProviderError
from social.application.usecase.common import UserResponse
from social.domain.error import AuthenticationError
from social.domain.service import (
    ExternalIdentityVerifier,
    IdentityReconciliationService,
    SessionTokenService,
)

from .signup import AuthResponse


class FirebaseLoginRequest(BaseModel):
    """Firebase login request."""

    model_config = ConfigDict(populate_by_name=True)

    id_token: str = Field(alias="idToken", min_length=1)


class FirebaseLoginUseCase:
    """Use case for logging in with a Firebase ID token."""

    def __init__(
        self,
        identity_verifier: ExternalIdentityVerifier,
        reconciliation_service: IdentityReconciliationService,
        session_token_service: SessionTokenService,
    ) -> None:
        """Initialize Firebase login use case.

        Args:
            identity_verifier: Verifies ID tokens with the identity provider
            reconciliation_service: Maps verified identities to local users
            session_token_service: Session token domain service
        """
        self.identity_verifier = identity_verifier
        self.reconciliation_service = reconciliation_service
        self.session_token_service = session_token_service

    async def execute(self, request: FirebaseLoginRequest) -> AuthResponse:
        """Execute Firebase login flow.

        Steps:
        1. Verify the ID token (bounded by the verifier's timeout)
        2. Resolve the identity to a local user, creating or linking one
        3. Issue a session token for that user

        No token is issued if any step fails.

        Raises:
            AuthenticationError: If the ID token is invalid or unverifiable
            StorageError: If the user could not be resolved or persisted
        """
        with logfire.span("firebase_login.execute"):
            try:
                claim = await self.identity_verifier.verify(request.id_token)
            except ProviderError as e:
                logfire.info("Firebase login rejected", reason=str(e))
                raise AuthenticationError("Invalid Firebase ID token") from e

            user = await self.reconciliation_service.reconcile(claim)
            token = self.session_token_service.issue(user)
            logfire.info("Firebase login succeeded", user_id=user.id)
            return AuthResponse(token=token, user=UserResponse.from_user(user))

"""Identity provider infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import httpx

from social.adapter.firebase.verifier import FirebaseIdentityVerifier
from social.config import FirebaseSettings
from social.domain.service import ExternalIdentityVerifier
from social.util.di.base import ProviderBase
from social.util.observability import instrument_httpx


class IdentityProvider(ProviderBase):
    """External identity verification component base."""

    __mock_component__ = "identity"


class ProdIdentityProvider(IdentityProvider):
    """Production identity provider verifying Firebase ID tokens."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_http_client(
        self, settings: FirebaseSettings
    ) -> AsyncIterator[httpx.AsyncClient]:
        """Provide HTTP client for fetching Firebase signing keys."""
        instrument_httpx()
        async with httpx.AsyncClient(
            timeout=settings.verify_timeout_seconds
        ) as client:
            yield client

    @provide(scope=Scope.APP)
    def get_identity_verifier(
        self, settings: FirebaseSettings, http_client: httpx.AsyncClient
    ) -> ExternalIdentityVerifier:
        """Provide Firebase ID token verifier.

        APP-scoped so the signing key cache is shared across requests.

        Raises:
            ValueError: If the Firebase project id is not configured
        """
        if not settings.project_id or settings.project_id == "CHANGE_ME_IN_PRODUCTION":
            raise ValueError("Firebase project id must be configured")

        return FirebaseIdentityVerifier(settings=settings, http_client=http_client)

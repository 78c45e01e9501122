"""Mock identity providers for testing."""

from dishka import Scope, provide

from social.adapter.firebase.verifier import MockIdentityVerifier
from social.domain.service import ExternalIdentityVerifier
from social.util.di.infrastructure.identity import IdentityProvider


class MockIdentityProvider(IdentityProvider):
    """Mock identity provider accepting `mock:<subject>[:<email>[:<name>]]` tokens."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_identity_verifier(self) -> ExternalIdentityVerifier:
        """Provide mock ID token verifier."""
        return MockIdentityVerifier()

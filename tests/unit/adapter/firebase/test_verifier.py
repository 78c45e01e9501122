"""Unit tests for Firebase ID token verification."""

import asyncio
import json
import time

import httpx
import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa
from jwt.algorithms import RSAAlgorithm

from social.adapter.error import IdentityVerificationError
from social.adapter.firebase.verifier import (
    FirebaseIdentityVerifier,
    MockIdentityVerifier,
)
from social.config import FirebaseSettings

PROJECT_ID = "demo-social"
KID = "key-1"


@pytest.fixture(scope="module")
def private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def settings() -> FirebaseSettings:
    return FirebaseSettings(project_id=PROJECT_ID, verify_timeout_seconds=2.0)


def jwks_for(private_key, kid: str = KID) -> dict:
    jwk = json.loads(RSAAlgorithm.to_jwk(private_key.public_key()))
    jwk.update({"kid": kid, "alg": "RS256", "use": "sig"})
    return {"keys": [jwk]}


def id_token(private_key, kid: str = KID, **overrides) -> str:
    now = int(time.time())
    claims = {
        "iss": f"https://securetoken.google.com/{PROJECT_ID}",
        "aud": PROJECT_ID,
        "sub": "firebase-uid-123",
        "iat": now - 10,
        "auth_time": now - 10,
        "exp": now + 3600,
        "email": "alice@example.com",
        "name": "Alice",
    }
    claims.update(overrides)
    claims = {k: v for k, v in claims.items() if v is not None}
    return jwt.encode(claims, private_key, algorithm="RS256", headers={"kid": kid})


class KeyServer:
    """Serves a JWKS document and counts fetches."""

    def __init__(self, jwks: dict, status_code: int = 200) -> None:
        self.jwks = jwks
        self.status_code = status_code
        self.fetches = 0

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.fetches += 1
        return httpx.Response(
            self.status_code,
            json=self.jwks,
            headers={"cache-control": "public, max-age=19000"},
        )


def make_verifier(settings, server: KeyServer) -> FirebaseIdentityVerifier:
    client = httpx.AsyncClient(transport=httpx.MockTransport(server.handler))
    return FirebaseIdentityVerifier(settings=settings, http_client=client)


class TestFirebaseIdentityVerifier:
    """Tests for FirebaseIdentityVerifier.verify()."""

    @pytest.mark.asyncio
    async def test_valid_token_yields_claim(self, settings, private_key):
        """A correctly signed token should produce the subject, email and name."""
        # Arrange
        verifier = make_verifier(settings, KeyServer(jwks_for(private_key)))

        # Act
        claim = await verifier.verify(id_token(private_key))

        # Assert
        assert claim.subject_id == "firebase-uid-123"
        assert claim.email == "alice@example.com"
        assert claim.display_name == "Alice"

    @pytest.mark.asyncio
    async def test_token_without_email(self, settings, private_key):
        """Email and name are optional claims."""
        verifier = make_verifier(settings, KeyServer(jwks_for(private_key)))

        claim = await verifier.verify(id_token(private_key, email=None, name=None))

        assert claim.email is None
        assert claim.display_name is None

    @pytest.mark.asyncio
    async def test_keys_are_cached(self, settings, private_key):
        """Repeated verifications should reuse the fetched keys."""
        server = KeyServer(jwks_for(private_key))
        verifier = make_verifier(settings, server)

        await verifier.verify(id_token(private_key))
        await verifier.verify(id_token(private_key))

        assert server.fetches == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides",
        [
            {"aud": "another-project"},
            {"iss": "https://securetoken.google.com/another-project"},
            {"exp": int(time.time()) - 3600, "iat": int(time.time()) - 7200},
            {"sub": ""},
            {"auth_time": int(time.time()) + 3600},
        ],
        ids=["audience", "issuer", "expired", "empty-subject", "future-auth-time"],
    )
    async def test_invalid_claims_are_rejected(self, settings, private_key, overrides):
        """Tokens for another project, expired or without a subject fail."""
        verifier = make_verifier(settings, KeyServer(jwks_for(private_key)))

        with pytest.raises(IdentityVerificationError):
            await verifier.verify(id_token(private_key, **overrides))

    @pytest.mark.asyncio
    async def test_token_signed_by_other_key_is_rejected(self, settings, private_key):
        """A forged signature should fail even with a known kid."""
        verifier = make_verifier(settings, KeyServer(jwks_for(private_key)))
        forger = rsa.generate_private_key(public_exponent=65537, key_size=2048)

        with pytest.raises(IdentityVerificationError):
            await verifier.verify(id_token(forger))

    @pytest.mark.asyncio
    async def test_unknown_kid_refetches_once(self, settings, private_key):
        """An unknown kid triggers one key refresh before failing."""
        server = KeyServer(jwks_for(private_key))
        verifier = make_verifier(settings, server)
        await verifier.verify(id_token(private_key))

        with pytest.raises(IdentityVerificationError):
            await verifier.verify(id_token(private_key, kid="rotated-key"))

        # Refresh is rate limited, so the immediate retry reuses the cache
        assert server.fetches == 1

    @pytest.mark.asyncio
    async def test_hs256_token_is_rejected(self, settings, private_key):
        """Only RS256 tokens are accepted."""
        verifier = make_verifier(settings, KeyServer(jwks_for(private_key)))
        token = jwt.encode(
            {"sub": "x", "aud": PROJECT_ID}, "secret", algorithm="HS256", headers={"kid": KID}
        )

        with pytest.raises(IdentityVerificationError):
            await verifier.verify(token)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", ["", "not-a-jwt"])
    async def test_malformed_token_is_rejected(self, settings, private_key, token):
        """Garbage input should fail without fetching keys."""
        server = KeyServer(jwks_for(private_key))
        verifier = make_verifier(settings, server)

        with pytest.raises(IdentityVerificationError):
            await verifier.verify(token)
        assert server.fetches == 0

    @pytest.mark.asyncio
    async def test_key_endpoint_failure_is_reported(self, settings, private_key):
        """A failing key endpoint should surface as a verification error."""
        verifier = make_verifier(
            settings, KeyServer(jwks_for(private_key), status_code=503)
        )

        with pytest.raises(IdentityVerificationError):
            await verifier.verify(id_token(private_key))

    @pytest.mark.asyncio
    async def test_verification_is_time_bounded(self, private_key):
        """A hanging key fetch should time out."""

        async def slow_handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(5)
            return httpx.Response(200, json=jwks_for(private_key))

        verifier = FirebaseIdentityVerifier(
            settings=FirebaseSettings(project_id=PROJECT_ID, verify_timeout_seconds=0.05),
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(slow_handler)),
        )

        with pytest.raises(IdentityVerificationError, match="timed out"):
            await verifier.verify(id_token(private_key))


class TestMockIdentityVerifier:
    """Tests for MockIdentityVerifier."""

    @pytest.mark.asyncio
    async def test_parses_subject_email_and_name(self):
        """mock:<subject>:<email>:<name> tokens are accepted."""
        claim = await MockIdentityVerifier().verify("mock:uid-1:a@example.com:Alice")

        assert claim.subject_id == "uid-1"
        assert claim.email == "a@example.com"
        assert claim.display_name == "Alice"

    @pytest.mark.asyncio
    async def test_subject_only(self):
        """Email and name may be omitted."""
        claim = await MockIdentityVerifier().verify("mock:uid-1")

        assert claim.email is None
        assert claim.display_name is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", ["", "mock:", "real-looking-token"])
    async def test_rejects_other_tokens(self, token):
        """Anything not in the mock format is invalid."""
        with pytest.raises(IdentityVerificationError):
            await MockIdentityVerifier().verify(token)

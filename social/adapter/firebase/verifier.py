"""Firebase ID token verification.

Firebase ID tokens are RS256 JWTs signed with Google-managed keys that
rotate regularly. The public keys are published as a JWKS document and
cached here for as long as Google's Cache-Control header allows.

Checks performed (per Firebase's "verify ID tokens using a third-party
JWT library" guidance):
- alg is RS256 and kid names a currently published key
- signature is valid
- aud is the project id and iss is https://securetoken.google.com/<project>
- exp is in the future, iat and auth_time are in the past
- sub is a non-empty string
"""

import asyncio
import re
import time
from typing import Any, Optional

import httpx
import jwt
import logfire

from social.adapter.error import IdentityVerificationError
from social.config import FirebaseSettings
from social.domain.service import ExternalIdentityVerifier
from social.domain.value import ExternalIdentityClaim

ALGORITHM = "RS256"
MAX_SUBJECT_LENGTH = 128


class FirebaseIdentityVerifier(ExternalIdentityVerifier):
    """Verifies Firebase ID tokens against Google's published keys."""

    # Used when the key endpoint sends no max-age
    DEFAULT_KEY_TTL_SECONDS = 3600

    # An unknown kid triggers a refetch at most this often
    MIN_REFRESH_INTERVAL_SECONDS = 30

    def __init__(
        self, settings: FirebaseSettings, http_client: httpx.AsyncClient
    ) -> None:
        """Initialize verifier.

        Args:
            settings: Firebase project and key endpoint configuration
            http_client: Client used to fetch signing keys
        """
        self.settings = settings
        self.http_client = http_client
        self._keys: Optional[jwt.PyJWKSet] = None
        self._fetched_at = 0.0
        self._ttl = float(self.DEFAULT_KEY_TTL_SECONDS)
        self._lock = asyncio.Lock()

    async def verify(self, id_token: str) -> ExternalIdentityClaim:
        """Verify a Firebase ID token.

        The whole verification, including any key fetch, is bounded by
        `verify_timeout_seconds`.

        Args:
            id_token: Token obtained by the client from the Firebase SDK

        Returns:
            Verified identity claim

        Raises:
            IdentityVerificationError: If the token is invalid, the keys
                cannot be fetched, or verification times out
        """
        if not id_token:
            raise IdentityVerificationError("ID token is required")

        with logfire.span("firebase.verify_id_token"):
            try:
                return await asyncio.wait_for(
                    self._verify(id_token),
                    timeout=self.settings.verify_timeout_seconds,
                )
            except asyncio.TimeoutError as e:
                logfire.warn(
                    "Firebase token verification timed out",
                    timeout_seconds=self.settings.verify_timeout_seconds,
                )
                raise IdentityVerificationError(
                    "Identity provider verification timed out"
                ) from e

    async def _verify(self, id_token: str) -> ExternalIdentityClaim:
        try:
            header = jwt.get_unverified_header(id_token)
        except jwt.InvalidTokenError as e:
            raise IdentityVerificationError("Malformed ID token") from e

        if header.get("alg") != ALGORITHM:
            raise IdentityVerificationError("Unexpected ID token algorithm")
        kid = header.get("kid")
        if not kid:
            raise IdentityVerificationError("ID token has no key id")

        signing_key = await self._signing_key(kid)

        try:
            claims = jwt.decode(
                id_token,
                signing_key.key,
                algorithms=[ALGORITHM],
                audience=self.settings.project_id,
                issuer=self.settings.issuer,
                leeway=self.settings.clock_skew_seconds,
                options={"require": ["sub", "aud", "iss", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as e:
            logfire.info("Firebase token rejected", reason="expired")
            raise IdentityVerificationError("ID token has expired") from e
        except jwt.InvalidTokenError as e:
            logfire.info("Firebase token rejected", reason=type(e).__name__)
            raise IdentityVerificationError("Invalid ID token") from e

        return self._to_claim(claims)

    def _to_claim(self, claims: dict[str, Any]) -> ExternalIdentityClaim:
        subject = claims.get("sub")
        if not isinstance(subject, str) or not subject:
            raise IdentityVerificationError("ID token has no subject")
        if len(subject) > MAX_SUBJECT_LENGTH:
            raise IdentityVerificationError("ID token subject is too long")

        auth_time = claims.get("auth_time")
        if auth_time is not None and (
            not isinstance(auth_time, (int, float))
            or auth_time > time.time() + self.settings.clock_skew_seconds
        ):
            raise IdentityVerificationError("ID token auth_time is in the future")

        email = claims.get("email")
        name = claims.get("name")
        return ExternalIdentityClaim(
            subject_id=subject,
            email=email if isinstance(email, str) and email else None,
            display_name=name if isinstance(name, str) and name else None,
        )

    async def _signing_key(self, kid: str) -> jwt.PyJWK:
        """Look up a signing key, refetching once if the kid is unknown."""
        keys = await self._key_set(force_refresh=False)
        key = _find_key(keys, kid)
        if key is None:
            keys = await self._key_set(force_refresh=True)
            key = _find_key(keys, kid)
        if key is None:
            raise IdentityVerificationError("ID token signed with unknown key")
        return key

    async def _key_set(self, force_refresh: bool) -> jwt.PyJWKSet:
        async with self._lock:
            age = time.monotonic() - self._fetched_at
            if self._keys is not None:
                if not force_refresh and age < self._ttl:
                    return self._keys
                if force_refresh and age < self.MIN_REFRESH_INTERVAL_SECONDS:
                    return self._keys

            try:
                response = await self.http_client.get(self.settings.jwks_url)
                response.raise_for_status()
                self._keys = jwt.PyJWKSet.from_dict(response.json())
            except (httpx.HTTPError, ValueError, jwt.PyJWKSetError) as e:
                logfire.error(
                    "Failed to fetch Firebase signing keys",
                    error_type=type(e).__name__,
                )
                raise IdentityVerificationError(
                    "Failed to fetch identity provider keys"
                ) from e

            self._fetched_at = time.monotonic()
            self._ttl = _max_age(response.headers.get("cache-control"))
            logfire.debug("Firebase signing keys refreshed", ttl_seconds=self._ttl)
            return self._keys


class MockIdentityVerifier(ExternalIdentityVerifier):
    """Identity verifier for development and testing.

    Accepts tokens of the form `mock:<subject>[:<email>[:<name>]]` without
    any network access. Anything else is rejected.
    """

    PREFIX = "mock:"

    async def verify(self, id_token: str) -> ExternalIdentityClaim:
        if not id_token or not id_token.startswith(self.PREFIX):
            raise IdentityVerificationError("Invalid ID token")

        parts = id_token[len(self.PREFIX) :].split(":", 2)
        subject = parts[0]
        if not subject:
            raise IdentityVerificationError("ID token has no subject")

        # Yield like a network round trip would
        await asyncio.sleep(0)
        return ExternalIdentityClaim(
            subject_id=subject,
            email=parts[1] or None if len(parts) > 1 else None,
            display_name=parts[2] or None if len(parts) > 2 else None,
        )


def _find_key(keys: jwt.PyJWKSet, kid: str) -> Optional[jwt.PyJWK]:
    for key in keys.keys:
        if key.key_id == kid:
            return key
    return None


def _max_age(cache_control: Optional[str]) -> float:
    """Key lifetime from a Cache-Control header."""
    if cache_control:
        match = re.search(r"max-age=(\d+)", cache_control)
        if match:
            return float(match.group(1))
    return float(FirebaseIdentityVerifier.DEFAULT_KEY_TTL_SECONDS)

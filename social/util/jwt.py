"""Session token utilities.

Session tokens are HS256 JWTs carrying `user_id`, `email`, `iat` and `exp`.
They are stateless: nothing is stored server-side and there is no revocation.
"""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from social.config import AuthSettings


class SessionClaims(BaseModel):
    """Verified session token payload."""

    user_id: int
    email: str
    iat: datetime
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


class TokenExpiredError(JWTError):
    """The token's `exp` claim is in the past."""

    def __init__(self) -> None:
        super().__init__("Token has expired")


class InvalidSignatureError(JWTError):
    """The token was not signed with the configured secret."""

    def __init__(self) -> None:
        super().__init__("Invalid token signature")


class MalformedTokenError(JWTError):
    """The token cannot be parsed or lacks required claims."""

    def __init__(self) -> None:
        super().__init__("Invalid token")


def create_token(
    user_id: int,
    email: str,
    settings: AuthSettings,
    now: datetime | None = None,
) -> str:
    """Create a session token for the user.

    Args:
        user_id: User ID
        email: User email (empty string when the account has none)
        settings: Authentication settings
        now: Issue time, defaults to the current UTC time

    Returns:
        Encoded JWT token
    """
    issued_at = now or datetime.now(timezone.utc)
    expiry = issued_at + timedelta(hours=settings.jwt_expiry_hours)

    payload = {
        "user_id": user_id,
        "email": email,
        "iat": issued_at,
        "exp": expiry,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> SessionClaims:
    """Verify and decode a session token.

    An expired token is reported as expired whether or not its signature
    is valid.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token claims if valid

    Raises:
        TokenExpiredError: If the token has expired
        InvalidSignatureError: If the signature does not match the secret
        MalformedTokenError: If the token cannot be decoded or misses claims
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError:
        raise TokenExpiredError()
    except jwt.InvalidSignatureError:
        if _is_expired_unverified(token):
            raise TokenExpiredError()
        raise InvalidSignatureError()
    except jwt.InvalidTokenError:
        raise MalformedTokenError()

    if not isinstance(payload.get("user_id"), int) or "email" not in payload:
        raise MalformedTokenError()

    return SessionClaims(
        user_id=payload["user_id"],
        email=payload["email"] or "",
        iat=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
        exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )


def _is_expired_unverified(token: str) -> bool:
    """Check the `exp` claim without trusting the signature."""
    try:
        claims = jwt.decode(token, options={"verify_signature": False})
    except jwt.InvalidTokenError:
        return False
    exp = claims.get("exp")
    if not isinstance(exp, (int, float)):
        return False
    return exp < datetime.now(timezone.utc).timestamp()

"""Request authentication dependencies.

Routes declare the caller through typed aliases:

    async def handler(identity: CurrentIdentity): ...   # 401 without a valid token
    async def handler(identity: OptionalIdentity): ...  # None when anonymous
"""

from typing import Annotated

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import Depends, Header, HTTPException, status

from social.domain.service import SessionTokenService
from social.domain.value import AuthenticatedIdentity
from social.util.jwt import InvalidSignatureError, JWTError, TokenExpiredError

BEARER_PREFIX = "Bearer "


def _unauthorized(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=message,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _bearer_token(authorization: str) -> str | None:
    """Token from a `Bearer <token>` header value, or None if malformed."""
    if not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX) :].strip()
    return token or None


@inject
async def require_identity(
    session_token_service: FromDishka[SessionTokenService],
    authorization: Annotated[str | None, Header()] = None,
) -> AuthenticatedIdentity:
    """Authenticate the caller from the Authorization header.

    Raises:
        HTTPException: 401 with the reason the token was rejected
    """
    if not authorization:
        raise _unauthorized("Missing Authorization header")

    token = _bearer_token(authorization)
    if token is None:
        raise _unauthorized("Invalid Authorization header format")

    try:
        return session_token_service.verify(token)
    except TokenExpiredError:
        raise _unauthorized("Token has expired")
    except InvalidSignatureError:
        raise _unauthorized("Invalid token signature")
    except JWTError:
        raise _unauthorized("Invalid token")


@inject
async def optional_identity(
    session_token_service: FromDishka[SessionTokenService],
    authorization: Annotated[str | None, Header()] = None,
) -> AuthenticatedIdentity | None:
    """Authenticate the caller if possible; anonymous callers get None."""
    if not authorization:
        return None
    return session_token_service.identity_from_token(_bearer_token(authorization))


CurrentIdentity = Annotated[AuthenticatedIdentity, Depends(require_identity)]
OptionalIdentity = Annotated[AuthenticatedIdentity | None, Depends(optional_identity)]

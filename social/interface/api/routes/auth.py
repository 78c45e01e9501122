"""Authentication routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, status

from social.application.usecase.auth import (
    AuthResponse,
    FirebaseLoginRequest,
    FirebaseLoginUseCase,
    GetCurrentUserRequest,
    GetCurrentUserResponse,
    GetCurrentUserUseCase,
    RegisterRequest,
    RegisterResponse,
    RegisterUseCase,
    SignInRequest,
    SignInUseCase,
    SignUpRequest,
    SignUpUseCase,
)
from social.interface.api.dependencies import CurrentIdentity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


@router.post(
    "/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED
)
async def signup(
    request: SignUpRequest, use_case: FromDishka[SignUpUseCase]
) -> AuthResponse:
    """Create a password account and return a session token.

    Returns 409 if the email or username is already registered.
    """
    return await use_case.execute(request)


@router.post("/signin", response_model=AuthResponse)
async def signin(
    request: SignInRequest, use_case: FromDishka[SignInUseCase]
) -> AuthResponse:
    """Log in with email and password.

    Unknown emails and wrong passwords get the same 401.
    """
    return await use_case.execute(request)


@router.post("/firebase-login", response_model=AuthResponse)
async def firebase_login(
    request: FirebaseLoginRequest, use_case: FromDishka[FirebaseLoginUseCase]
) -> AuthResponse:
    """Exchange a Firebase ID token for a session token.

    The local user is found by Firebase UID, then by email, and created if
    neither matches.
    """
    return await use_case.execute(request)


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    deprecated=True,
)
async def register(
    request: RegisterRequest, use_case: FromDishka[RegisterUseCase]
) -> RegisterResponse:
    """Legacy registration with a client-supplied Firebase UID.

    The UID is not verified. Use /auth/firebase-login instead.
    """
    logger.warning("Deprecated /auth/register called")
    return await use_case.execute(request)


@router.get("/me", response_model=GetCurrentUserResponse)
async def me(
    identity: CurrentIdentity, use_case: FromDishka[GetCurrentUserUseCase]
) -> GetCurrentUserResponse:
    """Current authenticated user."""
    return await use_case.execute(GetCurrentUserRequest(user_id=identity.user_id))

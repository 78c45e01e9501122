"""Authentication use cases."""

from .firebase_login import FirebaseLoginRequest, FirebaseLoginUseCase
from .get_current_user import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
    GetCurrentUserUseCase,
)
from .register import RegisterRequest, RegisterResponse, RegisterUseCase
from .signin import SignInRequest, SignInUseCase
from .signup import AuthResponse, SignUpRequest, SignUpUseCase

__all__ = [
    "AuthResponse",
    "FirebaseLoginRequest",
    "FirebaseLoginUseCase",
    "GetCurrentUserRequest",
    "GetCurrentUserResponse",
    "GetCurrentUserUseCase",
    "RegisterRequest",
    "RegisterResponse",
    "RegisterUseCase",
    "SignInRequest",
    "SignInUseCase",
    "SignUpRequest",
    "SignUpUseCase",
]

"""User use cases."""

from .delete_profile import DeleteProfileRequest, DeleteProfileUseCase
from .discover_users import (
    SearchUsersRequest,
    SearchUsersUseCase,
    SuggestedUsersRequest,
    SuggestedUsersUseCase,
    UserListResponse,
)
from .get_user import GetUserRequest, GetUserResponse, GetUserUseCase
from .update_profile import (
    UpdateProfileRequest,
    UpdateProfileResponse,
    UpdateProfileUseCase,
)

__all__ = [
    "DeleteProfileRequest",
    "DeleteProfileUseCase",
    "GetUserRequest",
    "GetUserResponse",
    "GetUserUseCase",
    "SearchUsersRequest",
    "SearchUsersUseCase",
    "SuggestedUsersRequest",
    "SuggestedUsersUseCase",
    "UpdateProfileRequest",
    "UpdateProfileResponse",
    "UpdateProfileUseCase",
    "UserListResponse",
]

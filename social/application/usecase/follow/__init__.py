"""Follow use cases."""

from .follow_user import (
    FollowListRequest,
    FollowRequest,
    FollowResponse,
    FollowUserUseCase,
    ListFollowersUseCase,
    ListFollowingUseCase,
    UnfollowUserUseCase,
)

__all__ = [
    "FollowListRequest",
    "FollowRequest",
    "FollowResponse",
    "FollowUserUseCase",
    "ListFollowersUseCase",
    "ListFollowingUseCase",
    "UnfollowUserUseCase",
]

"""Post like use cases."""

from .like_post import (
    LikeCountRequest,
    LikeCountResponse,
    LikeCountUseCase,
    LikePostUseCase,
    LikeResponse,
    LikeStatusResponse,
    LikeStatusUseCase,
    PostLikeRequest,
    UnlikePostUseCase,
)

__all__ = [
    "LikeCountRequest",
    "LikeCountResponse",
    "LikeCountUseCase",
    "LikePostUseCase",
    "LikeResponse",
    "LikeStatusResponse",
    "LikeStatusUseCase",
    "PostLikeRequest",
    "UnlikePostUseCase",
]

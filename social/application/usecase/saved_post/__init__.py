"""Saved post use cases."""

from .saved_posts import (
    ListSavedPostsRequest,
    ListSavedPostsResponse,
    ListSavedPostsUseCase,
    SavedPostResponse,
    SavePostRequest,
    SavePostUseCase,
    UnsavePostUseCase,
)

__all__ = [
    "ListSavedPostsRequest",
    "ListSavedPostsResponse",
    "ListSavedPostsUseCase",
    "SavedPostResponse",
    "SavePostRequest",
    "SavePostUseCase",
    "UnsavePostUseCase",
]

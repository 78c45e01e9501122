"""Saved post use cases."""

from datetime import datetime

from pydantic import BaseModel

from social.application.usecase.common import PostResponse
from social.domain.service import SavedPostService
from social.domain.value import PostId, UserId


class SavePostRequest(BaseModel):
    """Save or unsave post request."""

    user_id: int  # From authenticated user
    post_id: str


class SavedPostResponse(BaseModel):
    """Save post response."""

    id: int
    user_id: int
    post_id: str
    created_at: datetime


class ListSavedPostsRequest(BaseModel):
    """List saved posts request."""

    user_id: int  # From authenticated user


class ListSavedPostsResponse(BaseModel):
    """List saved posts response."""

    posts: list[PostResponse]


class SavePostUseCase:
    """Use case for bookmarking a post."""

    def __init__(self, saved_post_service: SavedPostService) -> None:
        """Initialize save post use case.

        Args:
            saved_post_service: Saved post domain service
        """
        self.saved_post_service = saved_post_service

    async def execute(self, request: SavePostRequest) -> SavedPostResponse:
        """Save a post.

        Raises:
            NotFoundError: If the post does not exist
            ConflictError: If already saved
        """
        saved = await self.saved_post_service.save(
            UserId(request.user_id), PostId(request.post_id)
        )
        return SavedPostResponse(**saved.model_dump())


class UnsavePostUseCase:
    """Use case for removing a bookmark."""

    def __init__(self, saved_post_service: SavedPostService) -> None:
        """Initialize unsave post use case.

        Args:
            saved_post_service: Saved post domain service
        """
        self.saved_post_service = saved_post_service

    async def execute(self, request: SavePostRequest) -> None:
        await self.saved_post_service.unsave(
            UserId(request.user_id), PostId(request.post_id)
        )


class ListSavedPostsUseCase:
    """Use case for listing the caller's bookmarks."""

    def __init__(self, saved_post_service: SavedPostService) -> None:
        """Initialize list saved posts use case.

        Args:
            saved_post_service: Saved post domain service
        """
        self.saved_post_service = saved_post_service

    async def execute(self, request: ListSavedPostsRequest) -> ListSavedPostsResponse:
        posts = await self.saved_post_service.saved_posts(UserId(request.user_id))
        return ListSavedPostsResponse(posts=[PostResponse.from_post(p) for p in posts])

"""Post like use cases."""

from datetime import datetime

from pydantic import BaseModel

from social.domain.service import LikeService
from social.domain.value import PostId, UserId


class PostLikeRequest(BaseModel):
    """Like, unlike or like-status request."""

    post_id: str
    user_id: int  # From authenticated user


class LikeResponse(BaseModel):
    """Like post response."""

    id: int
    post_id: str
    user_id: int
    created_at: datetime


class LikeCountRequest(BaseModel):
    """Like count request."""

    post_id: str


class LikeCountResponse(BaseModel):
    """Like count response."""

    post_id: str
    count: int


class LikeStatusResponse(BaseModel):
    """Like status response."""

    post_id: str
    is_liked: bool


class LikePostUseCase:
    """Use case for liking a post."""

    def __init__(self, like_service: LikeService) -> None:
        """Initialize like post use case.

        Args:
            like_service: Like domain service
        """
        self.like_service = like_service

    async def execute(self, request: PostLikeRequest) -> LikeResponse:
        """Execute like flow.

        Steps:
        1. Check the post exists
        2. Store the like (unique per user and post)
        3. Increment the post's like count and notify its author

        Raises:
            NotFoundError: If the post does not exist
            ConflictError: If already liked
        """
        like = await self.like_service.like_post(
            PostId(request.post_id), UserId(request.user_id)
        )
        return LikeResponse(**like.model_dump())


class UnlikePostUseCase:
    """Use case for removing a post like."""

    def __init__(self, like_service: LikeService) -> None:
        """Initialize unlike post use case.

        Args:
            like_service: Like domain service
        """
        self.like_service = like_service

    async def execute(self, request: PostLikeRequest) -> None:
        """Remove the caller's like.

        Raises:
            NotFoundError: If the post does not exist or was not liked
        """
        await self.like_service.unlike_post(
            PostId(request.post_id), UserId(request.user_id)
        )


class LikeCountUseCase:
    """Use case for counting a post's likes."""

    def __init__(self, like_service: LikeService) -> None:
        """Initialize like count use case.

        Args:
            like_service: Like domain service
        """
        self.like_service = like_service

    async def execute(self, request: LikeCountRequest) -> LikeCountResponse:
        count = await self.like_service.count(PostId(request.post_id))
        return LikeCountResponse(post_id=request.post_id, count=count)


class LikeStatusUseCase:
    """Use case for checking whether the caller liked a post."""

    def __init__(self, like_service: LikeService) -> None:
        """Initialize like status use case.

        Args:
            like_service: Like domain service
        """
        self.like_service = like_service

    async def execute(self, request: PostLikeRequest) -> LikeStatusResponse:
        is_liked = await self.like_service.has_liked(
            PostId(request.post_id), UserId(request.user_id)
        )
        return LikeStatusResponse(post_id=request.post_id, is_liked=is_liked)

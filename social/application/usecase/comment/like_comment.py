"""Comment like use cases."""

from datetime import datetime

from pydantic import BaseModel

from social.domain.service import CommentService
from social.domain.value import CommentId, UserId


class CommentLikeRequest(BaseModel):
    """Like or unlike comment request."""

    comment_id: int
    user_id: int  # From authenticated user


class CommentLikeResponse(BaseModel):
    """Like comment response."""

    id: int
    comment_id: int
    user_id: int
    created_at: datetime


class LikeCommentUseCase:
    """Use case for liking a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize like comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CommentLikeRequest) -> CommentLikeResponse:
        """Like a comment.

        Raises:
            NotFoundError: If the comment does not exist
            ConflictError: If already liked
        """
        like = await self.comment_service.like_comment(
            CommentId(request.comment_id), UserId(request.user_id)
        )
        return CommentLikeResponse(**like.model_dump())


class UnlikeCommentUseCase:
    """Use case for removing a comment like."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize unlike comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CommentLikeRequest) -> None:
        await self.comment_service.unlike_comment(
            CommentId(request.comment_id), UserId(request.user_id)
        )

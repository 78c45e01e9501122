"""Update and delete comment use cases."""

from pydantic import BaseModel, Field

from social.domain.service import CommentService
from social.domain.value import CommentId, UserId

from .create_comment import CommentResponse


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: int
    user_id: int  # From authenticated user
    content: str = Field(min_length=1, max_length=500)


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: int
    user_id: int  # From authenticated user


class UpdateCommentUseCase:
    """Use case for editing a comment.

    Only the author can edit.
    """

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: UpdateCommentRequest) -> CommentResponse:
        """Execute update comment flow.

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the caller is not the author
        """
        comment = await self.comment_service.update_comment(
            CommentId(request.comment_id), UserId(request.user_id), request.content
        )
        return CommentResponse.from_comment(comment)


class DeleteCommentUseCase:
    """Use case for deleting a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize delete comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> None:
        await self.comment_service.delete_comment(
            CommentId(request.comment_id), UserId(request.user_id)
        )

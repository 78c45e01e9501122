"""Create comment use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from social.application.usecase.common import UserCompact
from social.domain.model import Comment, User
from social.domain.service import CommentService, UserService
from social.domain.value import PostId, UserId


class CommentResponse(BaseModel):
    """Comment with its author and like state."""

    id: int
    post_id: str
    user_id: int
    content: str
    created_at: datetime
    updated_at: datetime
    author: UserCompact | None = None
    likes_count: int = 0
    is_liked: bool = False

    @classmethod
    def from_comment(
        cls,
        comment: Comment,
        author: User | None = None,
        likes_count: int = 0,
        is_liked: bool = False,
    ) -> "CommentResponse":
        return cls(
            id=comment.id,
            post_id=comment.post_id,
            user_id=comment.user_id,
            content=comment.content,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
            author=UserCompact.from_user(author) if author else None,
            likes_count=likes_count,
            is_liked=is_liked,
        )


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: str
    user_id: int  # From authenticated user
    content: str = Field(min_length=1, max_length=500)


class CreateCommentUseCase:
    """Use case for commenting on a post."""

    def __init__(
        self, comment_service: CommentService, user_service: UserService
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            user_service: User domain service, for the author projection
        """
        self.comment_service = comment_service
        self.user_service = user_service

    async def execute(self, request: CreateCommentRequest) -> CommentResponse:
        """Execute create comment flow.

        Steps:
        1. Check the post exists
        2. Store the comment
        3. Increment the post's comment count and notify its author

        Raises:
            NotFoundError: If the post does not exist
        """
        comment = await self.comment_service.create_comment(
            post_id=PostId(request.post_id),
            author_id=UserId(request.user_id),
            content=request.content,
        )
        author = await self.user_service.get_by_id(comment.user_id)
        return CommentResponse.from_comment(comment, author=author)

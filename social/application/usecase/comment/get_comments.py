"""Get comments use case."""

import logfire
from pydantic import BaseModel

from social.domain.service import CommentService, UserService
from social.domain.value import PostId, UserId

from .create_comment import CommentResponse


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    post_id: str
    user_id: int | None = None  # Current user ID (if authenticated)


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    comments: list[CommentResponse]


class GetCommentsUseCase:
    """Use case for listing the comments on a post."""

    def __init__(
        self, comment_service: CommentService, user_service: UserService
    ) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
            user_service: User domain service, for authors
        """
        self.comment_service = comment_service
        self.user_service = user_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """List comments oldest first.

        Authors and like state are loaded in batches.

        Raises:
            NotFoundError: If the post does not exist
        """
        post_id = PostId(request.post_id)
        viewer = UserId(request.user_id) if request.user_id is not None else None

        with logfire.span("get_comments.execute", post_id=post_id):
            comments = await self.comment_service.list_for_post(post_id)
            authors = await self.user_service.get_many([c.user_id for c in comments])
            counts, liked = await self.comment_service.like_stats(
                [c.id for c in comments], viewer
            )

            return GetCommentsResponse(
                comments=[
                    CommentResponse.from_comment(
                        comment,
                        author=authors.get(comment.user_id),
                        likes_count=counts.get(comment.id, 0),
                        is_liked=comment.id in liked,
                    )
                    for comment in comments
                ]
            )

"""Comment routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Response, status
from pydantic import BaseModel, Field

from social.application.usecase.comment import (
    CommentLikeRequest,
    CommentLikeResponse,
    CommentResponse,
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
    LikeCommentUseCase,
    UnlikeCommentUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from social.interface.api.dependencies import CurrentIdentity, OptionalIdentity

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


class CommentAPIRequest(BaseModel):
    """API request for creating or editing a comment."""

    content: str = Field(min_length=1, max_length=500)


@router.post(
    "/posts/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: str,
    request: CommentAPIRequest,
    identity: CurrentIdentity,
    use_case: FromDishka[CreateCommentUseCase],
) -> CommentResponse:
    """Comment on a post and notify its author."""
    return await use_case.execute(
        CreateCommentRequest(
            post_id=post_id, user_id=identity.user_id, content=request.content
        )
    )


@router.get("/posts/{post_id}/comments", response_model=GetCommentsResponse)
async def get_comments(
    post_id: str,
    identity: OptionalIdentity,
    use_case: FromDishka[GetCommentsUseCase],
) -> GetCommentsResponse:
    """Comments on a post, oldest first.

    Authentication is optional; `is_liked` is false for anonymous callers.
    """
    return await use_case.execute(
        GetCommentsRequest(
            post_id=post_id, user_id=identity.user_id if identity else None
        )
    )


@router.put("/comments/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: int,
    request: CommentAPIRequest,
    identity: CurrentIdentity,
    use_case: FromDishka[UpdateCommentUseCase],
) -> CommentResponse:
    """Edit a comment. Only the author can edit (403 otherwise)."""
    return await use_case.execute(
        UpdateCommentRequest(
            comment_id=comment_id, user_id=identity.user_id, content=request.content
        )
    )


@router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: int,
    identity: CurrentIdentity,
    use_case: FromDishka[DeleteCommentUseCase],
) -> Response:
    """Delete a comment. Only the author can delete (403 otherwise)."""
    await use_case.execute(
        DeleteCommentRequest(comment_id=comment_id, user_id=identity.user_id)
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/comments/{comment_id}/like",
    response_model=CommentLikeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def like_comment(
    comment_id: int,
    identity: CurrentIdentity,
    use_case: FromDishka[LikeCommentUseCase],
) -> CommentLikeResponse:
    """Like a comment (409 if already liked)."""
    return await use_case.execute(
        CommentLikeRequest(comment_id=comment_id, user_id=identity.user_id)
    )


@router.delete("/comments/{comment_id}/like", status_code=status.HTTP_204_NO_CONTENT)
async def unlike_comment(
    comment_id: int,
    identity: CurrentIdentity,
    use_case: FromDishka[UnlikeCommentUseCase],
) -> Response:
    """Remove the caller's like from a comment."""
    await use_case.execute(
        CommentLikeRequest(comment_id=comment_id, user_id=identity.user_id)
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)

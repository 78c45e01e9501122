"""Post like routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Response, status

from social.application.usecase.like import (
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
from social.interface.api.dependencies import CurrentIdentity

router = APIRouter(
    prefix="/posts/{post_id}/likes", tags=["likes"], route_class=DishkaRoute
)


@router.post("", response_model=LikeResponse, status_code=status.HTTP_201_CREATED)
async def like_post(
    post_id: str, identity: CurrentIdentity, use_case: FromDishka[LikePostUseCase]
) -> LikeResponse:
    """Like a post and notify its author (409 if already liked)."""
    return await use_case.execute(
        PostLikeRequest(post_id=post_id, user_id=identity.user_id)
    )


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def unlike_post(
    post_id: str, identity: CurrentIdentity, use_case: FromDishka[UnlikePostUseCase]
) -> Response:
    """Remove the caller's like from a post."""
    await use_case.execute(PostLikeRequest(post_id=post_id, user_id=identity.user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/count", response_model=LikeCountResponse)
async def like_count(
    post_id: str, identity: CurrentIdentity, use_case: FromDishka[LikeCountUseCase]
) -> LikeCountResponse:
    """Number of likes on a post."""
    return await use_case.execute(LikeCountRequest(post_id=post_id))


@router.get("/status", response_model=LikeStatusResponse)
async def like_status(
    post_id: str, identity: CurrentIdentity, use_case: FromDishka[LikeStatusUseCase]
) -> LikeStatusResponse:
    """Whether the caller liked a post."""
    return await use_case.execute(
        PostLikeRequest(post_id=post_id, user_id=identity.user_id)
    )

"""Saved post routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Response, status

from social.application.usecase.saved_post import (
    ListSavedPostsRequest,
    ListSavedPostsResponse,
    ListSavedPostsUseCase,
    SavedPostResponse,
    SavePostRequest,
    SavePostUseCase,
    UnsavePostUseCase,
)
from social.interface.api.dependencies import CurrentIdentity

router = APIRouter(tags=["saved posts"], route_class=DishkaRoute)


@router.post(
    "/posts/{post_id}/save",
    response_model=SavedPostResponse,
    status_code=status.HTTP_201_CREATED,
)
async def save_post(
    post_id: str, identity: CurrentIdentity, use_case: FromDishka[SavePostUseCase]
) -> SavedPostResponse:
    """Bookmark a post (409 if already saved)."""
    return await use_case.execute(
        SavePostRequest(user_id=identity.user_id, post_id=post_id)
    )


@router.delete("/posts/{post_id}/save", status_code=status.HTTP_204_NO_CONTENT)
async def unsave_post(
    post_id: str, identity: CurrentIdentity, use_case: FromDishka[UnsavePostUseCase]
) -> Response:
    """Remove a bookmark."""
    await use_case.execute(SavePostRequest(user_id=identity.user_id, post_id=post_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/saved-posts", response_model=ListSavedPostsResponse)
async def list_saved_posts(
    identity: CurrentIdentity, use_case: FromDishka[ListSavedPostsUseCase]
) -> ListSavedPostsResponse:
    """The caller's saved posts, most recently saved first."""
    return await use_case.execute(ListSavedPostsRequest(user_id=identity.user_id))

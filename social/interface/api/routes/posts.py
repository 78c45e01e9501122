"""Post routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, Response, status
from pydantic import BaseModel, Field

from social.application.usecase.common import PostResponse
from social.application.usecase.post import (
    CreatePostRequest,
    CreatePostUseCase,
    DeletePostRequest,
    DeletePostUseCase,
    GetPostRequest,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
    UpdatePostRequest,
    UpdatePostUseCase,
)
from social.interface.api.dependencies import CurrentIdentity

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


class CreatePostAPIRequest(BaseModel):
    """API request for creating a post."""

    content: str = Field(min_length=1, max_length=280)
    image_urls: list[str] = Field(default_factory=list, max_length=10)
    video_urls: list[str] = Field(default_factory=list, max_length=4)


class UpdatePostAPIRequest(BaseModel):
    """API request for updating a post."""

    content: str | None = Field(default=None, min_length=1, max_length=280)
    image_urls: list[str] | None = Field(default=None, max_length=10)
    video_urls: list[str] | None = Field(default=None, max_length=4)


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: CreatePostAPIRequest,
    identity: CurrentIdentity,
    use_case: FromDishka[CreatePostUseCase],
) -> PostResponse:
    """Publish a post.

    Requires authentication.
    """
    return await use_case.execute(
        CreatePostRequest(user_id=identity.user_id, **request.model_dump())
    )


@router.get("", response_model=ListPostsResponse)
async def list_posts(
    identity: CurrentIdentity,
    use_case: FromDishka[ListPostsUseCase],
    user_id: int | None = None,
    skip: int = Query(default=0, ge=0),
    limit: int | None = None,
) -> ListPostsResponse:
    """List posts newest first, optionally by one author.

    `limit` defaults to 10 and is capped at 50.
    """
    return await use_case.execute(
        ListPostsRequest(user_id=user_id, skip=skip, limit=limit)
    )


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: str, identity: CurrentIdentity, use_case: FromDishka[GetPostUseCase]
) -> PostResponse:
    """A single post."""
    return await use_case.execute(GetPostRequest(post_id=post_id))


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: str,
    request: UpdatePostAPIRequest,
    identity: CurrentIdentity,
    use_case: FromDishka[UpdatePostUseCase],
) -> PostResponse:
    """Edit a post.

    Only the author can edit (403 otherwise).
    """
    return await use_case.execute(
        UpdatePostRequest(
            post_id=post_id,
            user_id=identity.user_id,
            **request.model_dump(exclude_unset=True),
        )
    )


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: str, identity: CurrentIdentity, use_case: FromDishka[DeletePostUseCase]
) -> Response:
    """Delete a post. Only the author can delete (403 otherwise)."""
    await use_case.execute(DeletePostRequest(post_id=post_id, user_id=identity.user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

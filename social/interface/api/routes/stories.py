"""Story routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Response, status
from pydantic import BaseModel, Field

from social.application.usecase.story import (
    CreateStoryRequest,
    CreateStoryUseCase,
    GetStoryRequest,
    GetStoryUseCase,
    ListStoriesRequest,
    ListStoriesResponse,
    ListStoriesUseCase,
    MarkStorySeenUseCase,
    ReactToStoryRequest,
    ReactToStoryUseCase,
    StoryReactionResponse,
    StoryResponse,
    StorySeenRequest,
)
from social.domain.value import StoryItemType
from social.interface.api.dependencies import CurrentIdentity, OptionalIdentity

router = APIRouter(prefix="/stories", tags=["stories"], route_class=DishkaRoute)


class CreateStoryAPIRequest(BaseModel):
    """API request for publishing a story."""

    media_url: str = Field(min_length=1, max_length=2048)
    type: StoryItemType


class ReactToStoryAPIRequest(BaseModel):
    """API request for reacting to a story."""

    reaction: str = Field(min_length=1, max_length=32)


@router.get("", response_model=ListStoriesResponse)
async def list_stories(
    identity: OptionalIdentity, use_case: FromDishka[ListStoriesUseCase]
) -> ListStoriesResponse:
    """Active stories, newest first.

    The caller's own newest story is returned as `currentUserStory`.
    """
    return await use_case.execute(
        ListStoriesRequest(user_id=identity.user_id if identity else None)
    )


@router.post("", response_model=StoryResponse, status_code=status.HTTP_201_CREATED)
async def create_story(
    request: CreateStoryAPIRequest,
    identity: CurrentIdentity,
    use_case: FromDishka[CreateStoryUseCase],
) -> StoryResponse:
    """Publish a story that expires after 24 hours."""
    return await use_case.execute(
        CreateStoryRequest(
            user_id=identity.user_id, media_url=request.media_url, type=request.type
        )
    )


@router.get("/{story_id}", response_model=StoryResponse)
async def get_story(
    story_id: str, identity: CurrentIdentity, use_case: FromDishka[GetStoryUseCase]
) -> StoryResponse:
    """An active story (404 once expired)."""
    return await use_case.execute(GetStoryRequest(story_id=story_id))


@router.post("/{story_id}/seen", status_code=status.HTTP_204_NO_CONTENT)
async def mark_story_seen(
    story_id: str,
    identity: CurrentIdentity,
    use_case: FromDishka[MarkStorySeenUseCase],
) -> Response:
    """Mark a story as seen by the caller."""
    await use_case.execute(StorySeenRequest(story_id=story_id, user_id=identity.user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{story_id}/react",
    response_model=StoryReactionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def react_to_story(
    story_id: str,
    request: ReactToStoryAPIRequest,
    identity: CurrentIdentity,
    use_case: FromDishka[ReactToStoryUseCase],
) -> StoryReactionResponse:
    """React to a story and notify its author."""
    return await use_case.execute(
        ReactToStoryRequest(
            story_id=story_id, user_id=identity.user_id, reaction=request.reaction
        )
    )

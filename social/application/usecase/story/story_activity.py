"""Story creation and interaction use cases."""

from datetime import datetime

from pydantic import BaseModel, Field

from social.domain.service import StoryService, UserService
from social.domain.value import StoryId, StoryItemType, UserId

from .list_stories import StoryResponse


class CreateStoryRequest(BaseModel):
    """Create story request."""

    user_id: int  # From authenticated user
    media_url: str = Field(min_length=1, max_length=2048)
    type: StoryItemType


class StorySeenRequest(BaseModel):
    """Mark story seen request."""

    story_id: str
    user_id: int  # From authenticated user


class ReactToStoryRequest(BaseModel):
    """React to story request."""

    story_id: str
    user_id: int  # From authenticated user
    reaction: str = Field(min_length=1, max_length=32)


class StoryReactionResponse(BaseModel):
    """React to story response."""

    id: int
    story_id: str
    user_id: int
    reaction: str
    created_at: datetime


class CreateStoryUseCase:
    """Use case for publishing a story."""

    def __init__(self, story_service: StoryService, user_service: UserService) -> None:
        """Initialize create story use case.

        Args:
            story_service: Story domain service
            user_service: User domain service, for the author
        """
        self.story_service = story_service
        self.user_service = user_service

    async def execute(self, request: CreateStoryRequest) -> StoryResponse:
        """Publish a single-item story that expires after 24 hours."""
        author = await self.user_service.get_by_id(UserId(request.user_id))
        story = await self.story_service.create_story(
            UserId(request.user_id), request.media_url, request.type
        )
        return StoryResponse.from_story(story, author, has_unseen_items=False)


class MarkStorySeenUseCase:
    """Use case for recording that the caller viewed a story."""

    def __init__(self, story_service: StoryService) -> None:
        """Initialize mark story seen use case.

        Args:
            story_service: Story domain service
        """
        self.story_service = story_service

    async def execute(self, request: StorySeenRequest) -> None:
        """Mark a story as seen; repeating the call has no further effect.

        Raises:
            NotFoundError: If the story does not exist or has expired
        """
        await self.story_service.mark_seen(
            StoryId(request.story_id), UserId(request.user_id)
        )


class ReactToStoryUseCase:
    """Use case for reacting to a story."""

    def __init__(self, story_service: StoryService) -> None:
        """Initialize react to story use case.

        Args:
            story_service: Story domain service
        """
        self.story_service = story_service

    async def execute(self, request: ReactToStoryRequest) -> StoryReactionResponse:
        """Record a reaction and notify the story's author.

        Raises:
            NotFoundError: If the story does not exist or has expired
        """
        reaction = await self.story_service.react(
            StoryId(request.story_id), UserId(request.user_id), request.reaction
        )
        return StoryReactionResponse(**reaction.model_dump())

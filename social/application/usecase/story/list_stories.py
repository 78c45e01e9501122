"""Story listing use cases."""

from datetime import datetime
from typing import Optional

import logfire
from pydantic import BaseModel, ConfigDict, Field

from social.application.usecase.common import UserCompact
from social.domain.model import Story, StoryItem, User
from social.domain.service import StoryService, UserService
from social.domain.value import StoryId, UserId


class StoryResponse(BaseModel):
    """Story with its author and the viewer's seen state."""

    id: str
    user_id: int
    author: UserCompact | None
    items: list[StoryItem]
    has_unseen_items: bool
    created_at: datetime
    expires_at: datetime

    @classmethod
    def from_story(
        cls, story: Story, author: Optional[User], has_unseen_items: bool = True
    ) -> "StoryResponse":
        return cls(
            id=story.id,
            user_id=story.user_id,
            author=UserCompact.from_user(author) if author else None,
            items=story.items,
            has_unseen_items=has_unseen_items,
            created_at=story.created_at,
            expires_at=story.expires_at,
        )


class ListStoriesRequest(BaseModel):
    """List stories request."""

    user_id: int | None = None  # Current user ID (if authenticated)


class ListStoriesResponse(BaseModel):
    """Active stories, with the caller's own latest story split out."""

    model_config = ConfigDict(populate_by_name=True)

    stories: list[StoryResponse]
    current_user_story: StoryResponse | None = Field(
        default=None, alias="currentUserStory"
    )


class GetStoryRequest(BaseModel):
    """Get story request."""

    story_id: str


class ListStoriesUseCase:
    """Use case for the story tray."""

    def __init__(self, story_service: StoryService, user_service: UserService) -> None:
        """Initialize list stories use case.

        Args:
            story_service: Story domain service
            user_service: User domain service, for authors
        """
        self.story_service = story_service
        self.user_service = user_service

    async def execute(self, request: ListStoriesRequest) -> ListStoriesResponse:
        """Execute list stories flow.

        Steps:
        1. Load active stories, newest first
        2. Batch-load authors and the viewer's seen markers
        3. Split out the viewer's newest story

        Anonymous viewers see every story as unseen.
        """
        viewer = UserId(request.user_id) if request.user_id is not None else None

        with logfire.span("list_stories.execute", user_id=viewer):
            stories = await self.story_service.active_stories()
            authors = await self.user_service.get_many([s.user_id for s in stories])
            seen = (
                await self.story_service.seen_story_ids(viewer, [s.id for s in stories])
                if viewer is not None
                else set()
            )

            current: StoryResponse | None = None
            others: list[StoryResponse] = []
            for story in stories:
                item = StoryResponse.from_story(
                    story,
                    authors.get(story.user_id),
                    has_unseen_items=story.id not in seen,
                )
                if viewer is not None and story.user_id == viewer:
                    current = current or item
                    continue
                others.append(item)

            return ListStoriesResponse(stories=others, current_user_story=current)


class GetStoryUseCase:
    """Use case for viewing one story."""

    def __init__(self, story_service: StoryService, user_service: UserService) -> None:
        """Initialize get story use case.

        Args:
            story_service: Story domain service
            user_service: User domain service, for the author
        """
        self.story_service = story_service
        self.user_service = user_service

    async def execute(self, request: GetStoryRequest) -> StoryResponse:
        """Load an active story.

        Raises:
            NotFoundError: If the story does not exist or has expired
        """
        story = await self.story_service.get_story(StoryId(request.story_id))
        authors = await self.user_service.get_many([story.user_id])
        return StoryResponse.from_story(story, authors.get(story.user_id))

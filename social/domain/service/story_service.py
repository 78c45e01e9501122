"""Story domain service."""

from datetime import datetime
from typing import Optional, Sequence

import logfire

from social.domain.error import NotFoundError
from social.domain.model import Story, StoryItem, StoryReaction, StorySeen
from social.domain.model.common import utc_now
from social.domain.model.story import STORY_LIFETIME
from social.domain.repository import StoryActivityRepository, StoryRepository
from social.domain.value import (
    NotificationType,
    StoryId,
    StoryItemId,
    StoryItemType,
    TargetType,
    UserId,
)

from .base import Service
from .notification_service import NotificationService
from .post_service import new_document_id
from .user_service import UserService


class StoryService(Service):
    """Domain service for ephemeral stories."""

    def __init__(
        self,
        story_repository: StoryRepository,
        story_activity_repository: StoryActivityRepository,
        user_service: UserService,
        notification_service: NotificationService,
    ) -> None:
        """Initialize story service.

        Args:
            story_repository: Story repository (document store)
            story_activity_repository: Seen markers and reactions
            user_service: User domain service
            notification_service: Notification domain service
        """
        self.story_repository = story_repository
        self.story_activity_repository = story_activity_repository
        self.user_service = user_service
        self.notification_service = notification_service

    async def create_story(
        self, user_id: UserId, media_url: str, media_type: StoryItemType
    ) -> Story:
        """Publish a single-item story that expires in 24 hours.

        Args:
            user_id: Author
            media_url: Image or video URL
            media_type: Media type

        Returns:
            Created story
        """
        with logfire.span("story_service.create_story", user_id=user_id):
            now = utc_now()
            story = Story(
                id=StoryId(new_document_id()),
                user_id=user_id,
                items=[
                    StoryItem(
                        id=StoryItemId(new_document_id()),
                        type=media_type,
                        url=media_url,
                        created_at=now,
                    )
                ],
                created_at=now,
                expires_at=now + STORY_LIFETIME,
            )
            created = await self.story_repository.create(story)
            logfire.info("Story created", story_id=created.id, user_id=user_id)
            return created

    async def active_stories(self, now: Optional[datetime] = None) -> list[Story]:
        """Stories that have not expired, newest first."""
        return await self.story_repository.list_active(now or utc_now())

    async def get_story(self, story_id: StoryId) -> Story:
        """Get an active story.

        Raises:
            NotFoundError: If the story does not exist or has expired
        """
        story = await self.story_repository.find_by_id(story_id)
        if story is None or not story.is_active(utc_now()):
            raise NotFoundError("Story", story_id)
        return story

    async def seen_story_ids(
        self, user_id: UserId, story_ids: Sequence[StoryId]
    ) -> set[StoryId]:
        if not story_ids:
            return set()
        return await self.story_activity_repository.find_seen_story_ids(
            user_id, story_ids
        )

    async def mark_seen(self, story_id: StoryId, user_id: UserId) -> None:
        """Record that the caller viewed a story (idempotent).

        Raises:
            NotFoundError: If the story does not exist or has expired
        """
        await self.get_story(story_id)
        created = await self.story_activity_repository.mark_seen(
            StorySeen(story_id=story_id, user_id=user_id)
        )
        if created:
            logfire.info("Story seen", story_id=story_id, user_id=user_id)

    async def react(
        self, story_id: StoryId, user_id: UserId, reaction: str
    ) -> StoryReaction:
        """React to a story and notify its author.

        Raises:
            NotFoundError: If the story does not exist or has expired
        """
        with logfire.span("story_service.react", story_id=story_id, user_id=user_id):
            story = await self.get_story(story_id)
            actor = await self.user_service.get_by_id(user_id)

            stored = await self.story_activity_repository.add_reaction(
                StoryReaction(story_id=story_id, user_id=user_id, reaction=reaction)
            )
            await self.notification_service.notify(
                actor=actor,
                recipient_id=story.user_id,
                type=NotificationType.STORY_REACTION,
                target_id=story_id,
                target_type=TargetType.STORY,
                preview_image_url=story.items[0].url,
            )
            return stored

    async def purge_expired(self, now: Optional[datetime] = None) -> int:
        """Delete expired stories from the document store.

        Returns:
            Number of stories deleted
        """
        with logfire.span("story_service.purge_expired"):
            deleted = await self.story_repository.delete_expired(now or utc_now())
            logfire.info("Expired stories purged", count=deleted)
            return deleted

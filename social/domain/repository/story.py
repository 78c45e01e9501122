"""Story repository interfaces."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Sequence

from social.domain.model.story import Story, StoryReaction, StorySeen
from social.domain.value import StoryId, UserId


class StoryRepository(ABC):
    """Repository for Story documents (document store)."""

    @abstractmethod
    async def find_by_id(self, story_id: StoryId) -> Optional[Story]:
        """Find a story by ID, whether or not it has expired."""
        pass

    @abstractmethod
    async def list_active(self, now: datetime) -> list[Story]:
        """List stories that have not expired at `now`, newest first.

        Args:
            now: Reference time

        Returns:
            Active stories
        """
        pass

    @abstractmethod
    async def create(self, story: Story) -> Story:
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Delete stories that expired before `now`.

        Returns:
            Number of stories deleted
        """
        pass


class StoryActivityRepository(ABC):
    """Repository for seen markers and reactions on stories (relational)."""

    @abstractmethod
    async def mark_seen(self, seen: StorySeen) -> bool:
        """Record that a user viewed a story (idempotent).

        Returns:
            True if the marker was new
        """
        pass

    @abstractmethod
    async def find_seen_story_ids(
        self, user_id: UserId, story_ids: Sequence[StoryId]
    ) -> set[StoryId]:
        """Which of the given stories the user has viewed (batch query)."""
        pass

    @abstractmethod
    async def add_reaction(self, reaction: StoryReaction) -> StoryReaction:
        pass

"""Story aggregate.

Stories are ephemeral: they expire 24 hours after creation. The story
document lives in the document store, while per-viewer seen markers and
reactions are relational.
"""

from datetime import datetime, timedelta
from typing import Optional

from pydantic import Field

from social.domain.model.common import DomainModel, utc_now
from social.domain.value import StoryId, StoryItemId, StoryItemType, UserId

STORY_LIFETIME = timedelta(hours=24)
DEFAULT_ITEM_DURATION = 5


class StoryItem(DomainModel):
    """Single media item in a story."""

    id: StoryItemId
    type: StoryItemType
    url: str = Field(min_length=1)
    duration: int = Field(default=DEFAULT_ITEM_DURATION, gt=0)
    created_at: datetime = Field(default_factory=utc_now)


class Story(DomainModel):
    """Story aggregate root."""

    id: StoryId
    user_id: UserId
    items: list[StoryItem] = Field(min_length=1)
    created_at: datetime = Field(default_factory=utc_now)
    expires_at: datetime

    def is_active(self, now: datetime) -> bool:
        return self.expires_at > now


class StorySeen(DomainModel):
    """Marker that a user has viewed a story."""

    id: Optional[int] = None
    story_id: StoryId
    user_id: UserId
    seen_at: datetime = Field(default_factory=utc_now)


class StoryReaction(DomainModel):
    """A user's reaction (e.g. an emoji) to a story."""

    id: Optional[int] = None
    story_id: StoryId
    user_id: UserId
    reaction: str = Field(min_length=1, max_length=32)
    created_at: datetime = Field(default_factory=utc_now)

"""In-memory notification and story activity repositories for testing."""

from datetime import datetime
from itertools import count
from typing import Optional, Sequence

from social.domain.model import Notification, StoryReaction, StorySeen
from social.domain.repository import NotificationRepository, StoryActivityRepository
from social.domain.value import NotificationId, StoryId, UserId


class InMemoryNotificationRepository(NotificationRepository):
    """In-memory implementation of NotificationRepository for testing."""

    def __init__(self) -> None:
        self._notifications: dict[NotificationId, Notification] = {}
        self._ids = count(1)

    def _for(self, recipient_id: UserId) -> list[Notification]:
        mine = [
            n for n in self._notifications.values() if n.recipient_id == recipient_id
        ]
        return sorted(mine, key=lambda n: (n.created_at, n.id), reverse=True)

    async def create(self, notification: Notification) -> Notification:
        stored = notification.model_copy(
            update={"id": NotificationId(next(self._ids))}
        )
        self._notifications[stored.id] = stored
        return stored

    async def find_by_id(
        self, notification_id: NotificationId
    ) -> Optional[Notification]:
        return self._notifications.get(notification_id)

    async def list_for_recipient(
        self, recipient_id: UserId, skip: int, limit: int
    ) -> list[Notification]:
        return self._for(recipient_id)[skip : skip + limit]

    async def count_for_recipient(self, recipient_id: UserId) -> int:
        return len(self._for(recipient_id))

    async def list_between(
        self,
        recipient_id: UserId,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> list[Notification]:
        window = [
            n
            for n in self._for(recipient_id)
            if (start is None or n.created_at >= start)
            and (end is None or n.created_at < end)
        ]
        return window if limit is None else window[:limit]

    async def count_unread(self, recipient_id: UserId) -> int:
        return sum(1 for n in self._for(recipient_id) if not n.is_read)

    async def mark_read(
        self, notification_id: NotificationId, recipient_id: UserId
    ) -> bool:
        notification = self._notifications.get(notification_id)
        if notification is None or notification.recipient_id != recipient_id:
            return False
        self._notifications[notification_id] = notification.model_copy(
            update={"is_read": True}
        )
        return True

    async def mark_all_read(self, recipient_id: UserId) -> int:
        changed = 0
        for notification in self._for(recipient_id):
            if not notification.is_read:
                self._notifications[notification.id] = notification.model_copy(
                    update={"is_read": True}
                )
                changed += 1
        return changed


class InMemoryStoryActivityRepository(StoryActivityRepository):
    """In-memory implementation of StoryActivityRepository for testing."""

    def __init__(self) -> None:
        self._seen: dict[tuple[StoryId, UserId], StorySeen] = {}
        self._reactions: list[StoryReaction] = []
        self._ids = count(1)

    async def mark_seen(self, seen: StorySeen) -> bool:
        key = (seen.story_id, seen.user_id)
        if key in self._seen:
            return False
        self._seen[key] = seen.model_copy(update={"id": next(self._ids)})
        return True

    async def find_seen_story_ids(
        self, user_id: UserId, story_ids: Sequence[StoryId]
    ) -> set[StoryId]:
        return {sid for sid, uid in self._seen if uid == user_id and sid in story_ids}

    async def add_reaction(self, reaction: StoryReaction) -> StoryReaction:
        stored = reaction.model_copy(update={"id": next(self._ids)})
        self._reactions.append(stored)
        return stored

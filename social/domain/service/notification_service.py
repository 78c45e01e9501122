"""Notification domain service."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

import logfire

from social.domain.error import NotFoundError
from social.domain.model import Notification, User
from social.domain.model.common import utc_now
from social.domain.repository import NotificationRepository
from social.domain.value import NotificationId, NotificationType, TargetType, UserId

from .base import Service

MESSAGE_TEMPLATES: dict[NotificationType, str] = {
    NotificationType.LIKE: "{name} liked your post",
    NotificationType.COMMENT: "{name} commented on your post",
    NotificationType.FOLLOW: "{name} started following you",
    NotificationType.FRIEND_REQUEST: "{name} sent you a friend request",
    NotificationType.STORY_REACTION: "{name} reacted to your story",
    NotificationType.MENTION: "{name} mentioned you",
}

OLDER_LIMIT = 50


@dataclass
class GroupedNotifications:
    """Notifications bucketed by age (UTC day boundaries)."""

    today: list[Notification] = field(default_factory=list)
    yesterday: list[Notification] = field(default_factory=list)
    this_week: list[Notification] = field(default_factory=list)
    older: list[Notification] = field(default_factory=list)
    unread_count: int = 0


class NotificationService(Service):
    """Domain service for notifications."""

    def __init__(self, notification_repository: NotificationRepository) -> None:
        """Initialize notification service.

        Args:
            notification_repository: Notification repository
        """
        self.notification_repository = notification_repository

    async def notify(
        self,
        actor: User,
        recipient_id: UserId,
        type: NotificationType,
        target_id: Optional[str] = None,
        target_type: Optional[TargetType] = None,
        preview_image_url: Optional[str] = None,
    ) -> bool:
        """Notify a user about an action by another user.

        Self-actions are skipped. Storage failures are logged and do not
        fail the action that triggered the notification.

        Args:
            actor: User who performed the action
            recipient_id: User to notify
            type: Notification type
            target_id: Affected entity
            target_type: Kind of affected entity
            preview_image_url: Optional thumbnail

        Returns:
            True if a notification was stored
        """
        if actor.id == recipient_id:
            return False

        notification = Notification(
            recipient_id=recipient_id,
            actor_id=actor.id,
            type=type,
            target_id=target_id,
            target_type=target_type,
            preview_image_url=preview_image_url,
            message=MESSAGE_TEMPLATES[type].format(name=actor.display_name),
        )
        return await self._best_effort(
            "notification",
            self._store(notification),
            recipient_id=recipient_id,
            type=type.value,
        )

    async def _store(self, notification: Notification) -> None:
        stored = await self.notification_repository.create(notification)
        logfire.info(
            "Notification created",
            notification_id=stored.id,
            recipient_id=stored.recipient_id,
            type=stored.type.value,
        )

    async def list_page(
        self, recipient_id: UserId, page: int, limit: int
    ) -> tuple[list[Notification], int]:
        """Page through a user's notifications, newest first.

        Args:
            recipient_id: Recipient user
            page: 1-based page number
            limit: Page size

        Returns:
            Notifications on the page and the total count
        """
        with logfire.span("notification_service.list_page", recipient_id=recipient_id):
            skip = (page - 1) * limit
            items = await self.notification_repository.list_for_recipient(
                recipient_id, skip=skip, limit=limit
            )
            total = await self.notification_repository.count_for_recipient(recipient_id)
            return items, total

    async def grouped(
        self, recipient_id: UserId, now: Optional[datetime] = None
    ) -> GroupedNotifications:
        """Bucket a user's notifications into today, yesterday, this week and older.

        "This week" covers the seven days before today, excluding yesterday.
        "Older" is capped at 50 entries.

        Args:
            recipient_id: Recipient user
            now: Reference time, defaults to the current UTC time

        Returns:
            Grouped notifications with the unread count
        """
        now = now or utc_now()
        today_start = now.replace(hour=0, minute=0, second=0, microsecond=0)
        yesterday_start = today_start - timedelta(days=1)
        week_start = today_start - timedelta(days=7)

        repo = self.notification_repository
        with logfire.span("notification_service.grouped", recipient_id=recipient_id):
            return GroupedNotifications(
                today=await repo.list_between(recipient_id, start=today_start),
                yesterday=await repo.list_between(
                    recipient_id, start=yesterday_start, end=today_start
                ),
                this_week=await repo.list_between(
                    recipient_id, start=week_start, end=yesterday_start
                ),
                older=await repo.list_between(
                    recipient_id, end=week_start, limit=OLDER_LIMIT
                ),
                unread_count=await repo.count_unread(recipient_id),
            )

    async def unread_count(self, recipient_id: UserId) -> int:
        return await self.notification_repository.count_unread(recipient_id)

    async def mark_read(
        self, notification_id: NotificationId, recipient_id: UserId
    ) -> None:
        """Mark one notification as read.

        Raises:
            NotFoundError: If the notification does not exist or belongs to
                someone else
        """
        with logfire.span(
            "notification_service.mark_read",
            notification_id=notification_id,
            recipient_id=recipient_id,
        ):
            if not await self.notification_repository.mark_read(
                notification_id, recipient_id
            ):
                raise NotFoundError("Notification", str(notification_id))

    async def mark_all_read(self, recipient_id: UserId) -> int:
        """Mark all of a user's notifications as read.

        Returns:
            Number of notifications changed
        """
        with logfire.span("notification_service.mark_all_read", recipient_id=recipient_id):
            changed = await self.notification_repository.mark_all_read(recipient_id)
            logfire.info("Notifications marked read", recipient_id=recipient_id, count=changed)
            return changed

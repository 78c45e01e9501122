"""Notification repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from social.domain.model.notification import Notification
from social.domain.value import NotificationId, UserId


class NotificationRepository(ABC):
    """Repository for notifications. Listing is always newest first."""

    @abstractmethod
    async def create(self, notification: Notification) -> Notification:
        pass

    @abstractmethod
    async def find_by_id(
        self, notification_id: NotificationId
    ) -> Optional[Notification]:
        pass

    @abstractmethod
    async def list_for_recipient(
        self, recipient_id: UserId, skip: int, limit: int
    ) -> list[Notification]:
        """Page through a recipient's notifications.

        Args:
            recipient_id: Recipient user
            skip: Number of notifications to skip
            limit: Maximum number of notifications

        Returns:
            Page of notifications
        """
        pass

    @abstractmethod
    async def count_for_recipient(self, recipient_id: UserId) -> int:
        pass

    @abstractmethod
    async def list_between(
        self,
        recipient_id: UserId,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> list[Notification]:
        """List notifications created in `[start, end)`.

        Args:
            recipient_id: Recipient user
            start: Inclusive lower bound, unbounded if None
            end: Exclusive upper bound, unbounded if None
            limit: Maximum number of notifications, unbounded if None

        Returns:
            Notifications in the window
        """
        pass

    @abstractmethod
    async def count_unread(self, recipient_id: UserId) -> int:
        pass

    @abstractmethod
    async def mark_read(
        self, notification_id: NotificationId, recipient_id: UserId
    ) -> bool:
        """Mark one of the recipient's notifications as read.

        Returns:
            True if the notification exists and belongs to the recipient
        """
        pass

    @abstractmethod
    async def mark_all_read(self, recipient_id: UserId) -> int:
        """Mark all of a recipient's notifications as read.

        Returns:
            Number of notifications changed
        """
        pass

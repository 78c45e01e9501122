"""Notification read-state use cases."""

from pydantic import BaseModel, ConfigDict, Field

from social.domain.service import NotificationService
from social.domain.value import NotificationId, UserId


class UnreadCountRequest(BaseModel):
    """Unread count request."""

    user_id: int  # From authenticated user


class UnreadCountResponse(BaseModel):
    """Unread count response."""

    model_config = ConfigDict(populate_by_name=True)

    unread_count: int = Field(alias="unreadCount")


class MarkReadRequest(BaseModel):
    """Mark notification read request."""

    notification_id: int
    user_id: int  # From authenticated user


class MarkAllReadRequest(BaseModel):
    """Mark all notifications read request."""

    user_id: int  # From authenticated user


class MarkAllReadResponse(BaseModel):
    """Mark all notifications read response."""

    updated: int


class UnreadCountUseCase:
    """Use case for the unread badge."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize unread count use case.

        Args:
            notification_service: Notification domain service
        """
        self.notification_service = notification_service

    async def execute(self, request: UnreadCountRequest) -> UnreadCountResponse:
        count = await self.notification_service.unread_count(UserId(request.user_id))
        return UnreadCountResponse(unread_count=count)


class MarkReadUseCase:
    """Use case for marking one notification as read."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize mark read use case.

        Args:
            notification_service: Notification domain service
        """
        self.notification_service = notification_service

    async def execute(self, request: MarkReadRequest) -> None:
        """Mark a notification read.

        Raises:
            NotFoundError: If the notification is missing or not the caller's
        """
        await self.notification_service.mark_read(
            NotificationId(request.notification_id), UserId(request.user_id)
        )


class MarkAllReadUseCase:
    """Use case for clearing the unread badge."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize mark all read use case.

        Args:
            notification_service: Notification domain service
        """
        self.notification_service = notification_service

    async def execute(self, request: MarkAllReadRequest) -> MarkAllReadResponse:
        updated = await self.notification_service.mark_all_read(
            UserId(request.user_id)
        )
        return MarkAllReadResponse(updated=updated)

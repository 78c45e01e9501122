"""Notification listing use cases."""

from typing import Sequence

import logfire
from pydantic import BaseModel, ConfigDict, Field

from social.application.usecase.base import BaseUseCase
from social.application.usecase.common import (
    NotificationResponse,
    PageMeta,
    clamp_page_size,
)
from social.domain.model import Notification
from social.domain.service import NotificationService, UserService
from social.domain.value import UserId

NOTIFICATION_PAGE_SIZE = 20


class ListNotificationsRequest(BaseModel):
    """List notifications request."""

    user_id: int  # From authenticated user
    page: int = Field(default=1, ge=1)
    limit: int | None = None


class ListNotificationsResponse(BaseModel):
    """List notifications response."""

    notifications: list[NotificationResponse]
    meta: PageMeta


class GroupedNotificationsRequest(BaseModel):
    """Grouped notifications request."""

    user_id: int  # From authenticated user


class GroupedNotificationsResponse(BaseModel):
    """Notifications bucketed by age."""

    model_config = ConfigDict(populate_by_name=True)

    today: list[NotificationResponse]
    yesterday: list[NotificationResponse]
    this_week: list[NotificationResponse] = Field(alias="thisWeek")
    older: list[NotificationResponse]
    unread_count: int = Field(alias="unreadCount")


class NotificationListing:
    """Attaches actors to notifications with one batch lookup."""

    def __init__(
        self, notification_service: NotificationService, user_service: UserService
    ) -> None:
        self.notification_service = notification_service
        self.user_service = user_service

    async def _with_actors(
        self, *groups: Sequence[Notification]
    ) -> list[list[NotificationResponse]]:
        actor_ids = [n.actor_id for group in groups for n in group]
        actors = await self.user_service.get_many(actor_ids)
        return [
            [
                NotificationResponse.from_notification(n, actors.get(n.actor_id))
                for n in group
            ]
            for group in groups
        ]


class ListNotificationsUseCase(NotificationListing, BaseUseCase):
    """Use case for paging through the caller's notifications."""

    async def execute(
        self, request: ListNotificationsRequest
    ) -> ListNotificationsResponse:
        """List notifications newest first.

        Page size defaults to 20 and is capped at 50.
        """
        limit = clamp_page_size(request.limit, default=NOTIFICATION_PAGE_SIZE)
        with logfire.span(
            "list_notifications.execute", user_id=request.user_id, page=request.page
        ):
            items, total = await self.notification_service.list_page(
                UserId(request.user_id), request.page, limit
            )
            (notifications,) = await self._with_actors(items)
            return ListNotificationsResponse(
                notifications=notifications,
                meta=PageMeta.build(request.page, limit, total),
            )


class GroupedNotificationsUseCase(NotificationListing, BaseUseCase):
    """Use case for the grouped notification inbox."""

    async def execute(
        self, request: GroupedNotificationsRequest
    ) -> GroupedNotificationsResponse:
        """Group notifications by UTC day.

        Returns:
            Today, yesterday, the rest of the past week, older (at most 50),
            and the unread count
        """
        grouped = await self.notification_service.grouped(UserId(request.user_id))
        today, yesterday, this_week, older = await self._with_actors(
            grouped.today, grouped.yesterday, grouped.this_week, grouped.older
        )
        return GroupedNotificationsResponse(
            today=today,
            yesterday=yesterday,
            this_week=this_week,
            older=older,
            unread_count=grouped.unread_count,
        )

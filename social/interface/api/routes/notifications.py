"""Notification routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Response, status

from social.application.usecase.notification import (
    GroupedNotificationsRequest,
    GroupedNotificationsResponse,
    GroupedNotificationsUseCase,
    ListNotificationsRequest,
    ListNotificationsResponse,
    ListNotificationsUseCase,
    MarkAllReadRequest,
    MarkAllReadResponse,
    MarkAllReadUseCase,
    MarkReadRequest,
    MarkReadUseCase,
    UnreadCountRequest,
    UnreadCountResponse,
    UnreadCountUseCase,
)
from social.interface.api.dependencies import CurrentIdentity

router = APIRouter(
    prefix="/notifications", tags=["notifications"], route_class=DishkaRoute
)


@router.get("", response_model=ListNotificationsResponse)
async def list_notifications(
    identity: CurrentIdentity,
    use_case: FromDishka[ListNotificationsUseCase],
    page: int = 1,
    limit: int | None = None,
) -> ListNotificationsResponse:
    """The caller's notifications, newest first.

    `limit` defaults to 20 and is capped at 50.
    """
    return await use_case.execute(
        ListNotificationsRequest(user_id=identity.user_id, page=max(page, 1), limit=limit)
    )


@router.get("/grouped", response_model=GroupedNotificationsResponse)
async def grouped_notifications(
    identity: CurrentIdentity, use_case: FromDishka[GroupedNotificationsUseCase]
) -> GroupedNotificationsResponse:
    """Notifications grouped into today, yesterday, this week and older."""
    return await use_case.execute(GroupedNotificationsRequest(user_id=identity.user_id))


@router.get("/unread-count", response_model=UnreadCountResponse)
async def unread_count(
    identity: CurrentIdentity, use_case: FromDishka[UnreadCountUseCase]
) -> UnreadCountResponse:
    """Number of unread notifications."""
    return await use_case.execute(UnreadCountRequest(user_id=identity.user_id))


# Registered before /{notification_id}/read so "read-all" is not taken as an id
@router.put("/read-all", response_model=MarkAllReadResponse)
async def mark_all_read(
    identity: CurrentIdentity, use_case: FromDishka[MarkAllReadUseCase]
) -> MarkAllReadResponse:
    """Mark all of the caller's notifications as read."""
    return await use_case.execute(MarkAllReadRequest(user_id=identity.user_id))


@router.put("/{notification_id}/read", status_code=status.HTTP_204_NO_CONTENT)
async def mark_read(
    notification_id: int,
    identity: CurrentIdentity,
    use_case: FromDishka[MarkReadUseCase],
) -> Response:
    """Mark one of the caller's notifications as read."""
    await use_case.execute(
        MarkReadRequest(notification_id=notification_id, user_id=identity.user_id)
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)

"""Notification use cases."""

from .list_notifications import (
    GroupedNotificationsRequest,
    GroupedNotificationsResponse,
    GroupedNotificationsUseCase,
    ListNotificationsRequest,
    ListNotificationsResponse,
    ListNotificationsUseCase,
)
from .read_notifications import (
    MarkAllReadRequest,
    MarkAllReadResponse,
    MarkAllReadUseCase,
    MarkReadRequest,
    MarkReadUseCase,
    UnreadCountRequest,
    UnreadCountResponse,
    UnreadCountUseCase,
)

__all__ = [
    "GroupedNotificationsRequest",
    "GroupedNotificationsResponse",
    "GroupedNotificationsUseCase",
    "ListNotificationsRequest",
    "ListNotificationsResponse",
    "ListNotificationsUseCase",
    "MarkAllReadRequest",
    "MarkAllReadResponse",
    "MarkAllReadUseCase",
    "MarkReadRequest",
    "MarkReadUseCase",
    "UnreadCountRequest",
    "UnreadCountResponse",
    "UnreadCountUseCase",
]

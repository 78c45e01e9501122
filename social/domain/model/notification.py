"""Notification entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from social.domain.model.common import DomainModel, utc_now
from social.domain.value import NotificationId, NotificationType, TargetType, UserId


class Notification(DomainModel):
    """Activity notification delivered to a recipient.

    `target_id` is a string so it can reference both document ids (posts,
    stories) and relational ids (comments, users).
    """

    id: Optional[NotificationId] = None
    recipient_id: UserId
    actor_id: UserId
    type: NotificationType
    target_id: Optional[str] = None
    target_type: Optional[TargetType] = None
    preview_image_url: Optional[str] = None
    message: str
    is_read: bool = False
    created_at: datetime = Field(default_factory=utc_now)

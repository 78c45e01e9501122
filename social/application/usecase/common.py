"""Response projections shared by several use cases.

User projections never carry the password hash.
"""

from datetime import datetime
from math import ceil
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from social.domain.model import Notification, Post, User

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 50


class UserResponse(BaseModel):
    """Public profile of a user."""

    id: int
    username: str
    display_name: str
    email: str | None
    firebase_uid: str | None
    age: int | None
    bio: str
    avatar_url: str | None
    is_private: bool
    is_verified: bool
    followers_count: int
    following_count: int
    posts_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username.root,
            display_name=user.display_name,
            email=user.email,
            firebase_uid=user.firebase_uid,
            age=user.age,
            bio=user.bio,
            avatar_url=user.avatar_url,
            is_private=user.is_private,
            is_verified=user.is_verified,
            followers_count=user.followers_count,
            following_count=user.following_count,
            posts_count=user.posts_count,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class UserCompact(BaseModel):
    """Minimal user projection embedded in lists and content."""

    id: int
    username: str
    display_name: str
    avatar_url: str | None
    is_verified: bool

    @classmethod
    def from_user(cls, user: User) -> "UserCompact":
        return cls(
            id=user.id,
            username=user.username.root,
            display_name=user.display_name,
            avatar_url=user.avatar_url,
            is_verified=user.is_verified,
        )


class PostResponse(BaseModel):
    """Post as returned by the API."""

    id: str
    user_id: int
    content: str
    image_urls: list[str]
    video_urls: list[str]
    likes_count: int
    comments_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_post(cls, post: Post) -> "PostResponse":
        return cls(**post.model_dump())


class NotificationResponse(BaseModel):
    """Notification with its actor."""

    id: int
    type: str
    target_id: str | None
    target_type: str | None
    preview_image_url: str | None
    message: str
    is_read: bool
    created_at: datetime
    actor: Optional[UserCompact]

    @classmethod
    def from_notification(
        cls, notification: Notification, actor: Optional[User]
    ) -> "NotificationResponse":
        return cls(
            id=notification.id,
            type=notification.type.value,
            target_id=notification.target_id,
            target_type=(
                notification.target_type.value if notification.target_type else None
            ),
            preview_image_url=notification.preview_image_url,
            message=notification.message,
            is_read=notification.is_read,
            created_at=notification.created_at,
            actor=UserCompact.from_user(actor) if actor else None,
        )


class PageMeta(BaseModel):
    """Pagination block for page-numbered listings."""

    model_config = ConfigDict(populate_by_name=True)

    current_page: int = Field(alias="currentPage")
    total_pages: int = Field(alias="totalPages")
    total_items: int = Field(alias="totalItems")
    items_per_page: int = Field(alias="itemsPerPage")
    has_next_page: bool = Field(alias="hasNextPage")
    has_previous_page: bool = Field(alias="hasPreviousPage")

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "PageMeta":
        total_pages = ceil(total / limit) if total else 0
        return cls(
            current_page=page,
            total_pages=total_pages,
            total_items=total,
            items_per_page=limit,
            has_next_page=page < total_pages,
            has_previous_page=page > 1,
        )


def clamp_page_size(limit: int | None, default: int = DEFAULT_PAGE_SIZE) -> int:
    """Page size in [1, 50]; missing or non-positive values fall back to default."""
    if limit is None or limit < 1:
        return default
    return min(limit, MAX_PAGE_SIZE)

"""Relationship entities between users and content.

Each relationship is unique per pair, enforced by the store.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from social.domain.model.common import DomainModel, utc_now
from social.domain.value import (
    FollowId,
    FriendRequestId,
    FriendRequestStatus,
    LikeId,
    PostId,
    SavedPostId,
    UserId,
)


class Like(DomainModel):
    """A user's like on a post."""

    id: Optional[LikeId] = None
    post_id: PostId
    user_id: UserId
    created_at: datetime = Field(default_factory=utc_now)


class Follow(DomainModel):
    """Directed follow edge: follower -> following."""

    id: Optional[FollowId] = None
    follower_id: UserId
    following_id: UserId
    created_at: datetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def validate_not_self(self) -> "Follow":
        if self.follower_id == self.following_id:
            raise ValueError("Users cannot follow themselves")
        return self


class FriendRequest(DomainModel):
    """Friend request between two users.

    An accepted request is the friendship itself.
    """

    id: Optional[FriendRequestId] = None
    sender_id: UserId
    receiver_id: UserId
    status: FriendRequestStatus = FriendRequestStatus.PENDING
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def involves(self, user_id: UserId) -> bool:
        return user_id in (self.sender_id, self.receiver_id)

    def counterpart(self, user_id: UserId) -> UserId:
        """The other party of the request."""
        return self.receiver_id if user_id == self.sender_id else self.sender_id


class SavedPost(DomainModel):
    """A post bookmarked by a user."""

    id: Optional[SavedPostId] = None
    user_id: UserId
    post_id: PostId
    created_at: datetime = Field(default_factory=utc_now)

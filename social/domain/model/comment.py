"""Comment entity and comment likes."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from social.domain.model.common import DomainModel, utc_now
from social.domain.value import CommentId, CommentLikeId, PostId, UserId


class Comment(DomainModel):
    """Comment on a post.

    Stored relationally, referencing the post by its document id.
    """

    id: Optional[CommentId] = None
    post_id: PostId
    user_id: UserId
    content: str = Field(min_length=1, max_length=500)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class CommentLike(DomainModel):
    """A user's like on a comment (one per user per comment)."""

    id: Optional[CommentLikeId] = None
    comment_id: CommentId
    user_id: UserId
    created_at: datetime = Field(default_factory=utc_now)

"""Post aggregate root.

Posts live in the document store, keyed by a hex document id.
"""

from datetime import datetime

from pydantic import Field

from social.domain.model.common import DomainModel, utc_now
from social.domain.value import PostId, UserId


class Post(DomainModel):
    """Post aggregate root."""

    id: PostId
    user_id: UserId
    content: str = Field(min_length=1, max_length=280)
    image_urls: list[str] = Field(default_factory=list)
    video_urls: list[str] = Field(default_factory=list)
    likes_count: int = Field(default=0, ge=0)
    comments_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

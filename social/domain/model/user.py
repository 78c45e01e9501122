"""User aggregate root.

A user authenticates with a local password, an external identity provider
subject, or both. Counters are denormalized and only changed by domain
services.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from social.domain.model.common import DomainModel, utc_now
from social.domain.value import UserId
from social.domain.value.types import Username


class User(DomainModel):
    """User aggregate root.

    `id` is None until the store assigns it on create.
    """

    id: Optional[UserId] = None
    username: Username
    display_name: str = Field(min_length=1, max_length=128)
    email: Optional[str] = None
    password_hash: Optional[str] = Field(default=None, repr=False)
    firebase_uid: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=0, le=150)
    bio: str = ""
    avatar_url: Optional[str] = None
    is_private: bool = False
    is_verified: bool = False
    followers_count: int = Field(default=0, ge=0)
    following_count: int = Field(default=0, ge=0)
    posts_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def validate_authentication_method(self) -> "User":
        """A user must be able to log in somehow."""
        if not self.password_hash and not self.firebase_uid:
            raise ValueError("User requires a password hash or an external subject id")
        return self

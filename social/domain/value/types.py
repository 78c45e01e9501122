"""Domain value objects.

Value objects are immutable and defined by their values, not identity.
"""

import re
from enum import Enum

from pydantic import field_validator

from social.domain.value.common import RootValueObject, ValueObject
from social.domain.value.identifiers import UserId

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 128


class NotificationType(str, Enum):
    """Kind of event a notification reports."""

    LIKE = "like"
    COMMENT = "comment"
    FOLLOW = "follow"
    FRIEND_REQUEST = "friend_request"
    STORY_REACTION = "story_reaction"
    MENTION = "mention"


class TargetType(str, Enum):
    """Kind of entity a notification points at."""

    POST = "post"
    COMMENT = "comment"
    USER = "user"
    STORY = "story"


class FriendRequestStatus(str, Enum):
    """Lifecycle of a friend request."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class StoryItemType(str, Enum):
    """Media type of a story item."""

    IMAGE = "image"
    VIDEO = "video"


class UserCounter(str, Enum):
    """Denormalized counters on the user record."""

    FOLLOWERS = "followers_count"
    FOLLOWING = "following_count"
    POSTS = "posts_count"


class PostCounter(str, Enum):
    """Denormalized counters on the post document."""

    LIKES = "likes_count"
    COMMENTS = "comments_count"


class Username(RootValueObject[str]):
    """Unique public handle.

    3-128 characters of letters, digits, dots, underscores and hyphens.
    Identity-provider subject ids are not constrained to this format; use
    `from_subject_id` to derive a handle from one.
    """

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username format."""
        if not re.match(r"^[A-Za-z0-9._-]{3,128}$", v):
            raise ValueError(
                "Username must be 3-128 characters of letters, digits, '.', '_' or '-'"
            )
        return v

    @classmethod
    def from_subject_id(cls, subject_id: str, suffix: str = "") -> "Username":
        """Derive a valid handle from an external subject id.

        Disallowed characters become underscores, short ids are padded and
        long ones truncated so that the optional suffix still fits.

        Args:
            subject_id: Verified or client-supplied subject id
            suffix: Appended after a hyphen to make the handle unique

        Returns:
            Username derived from the subject id
        """
        tail = f"-{suffix}" if suffix else ""
        base = re.sub(r"[^A-Za-z0-9._-]", "_", subject_id)
        base = base[: USERNAME_MAX_LENGTH - len(tail)].ljust(USERNAME_MIN_LENGTH, "_")
        return cls(base + tail)


class ExternalIdentityClaim(ValueObject):
    """Verified identity asserted by the external identity provider.

    Only produced by a successful ID token verification.
    """

    subject_id: str
    email: str | None = None
    display_name: str | None = None


class AuthenticatedIdentity(ValueObject):
    """Identity of the caller, established from a verified session token."""

    user_id: UserId
    email: str

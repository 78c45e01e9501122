"""Domain model entities."""

from social.domain.model.comment import Comment, CommentLike
from social.domain.model.notification import Notification
from social.domain.model.post import Post
from social.domain.model.social_graph import Follow, FriendRequest, Like, SavedPost
from social.domain.model.story import Story, StoryItem, StoryReaction, StorySeen
from social.domain.model.user import User

__all__ = [
    "User",
    "Post",
    "Comment",
    "CommentLike",
    "Like",
    "Follow",
    "FriendRequest",
    "SavedPost",
    "Story",
    "StoryItem",
    "StorySeen",
    "StoryReaction",
    "Notification",
]

"""Strongly typed identifiers for domain entities.

Relational entities use integer keys assigned by the database.
Document-store entities (posts, stories) use 32-char hex ids.
"""

from typing import NewType

# Relational store
UserId = NewType("UserId", int)
CommentId = NewType("CommentId", int)
CommentLikeId = NewType("CommentLikeId", int)
LikeId = NewType("LikeId", int)
FollowId = NewType("FollowId", int)
FriendRequestId = NewType("FriendRequestId", int)
SavedPostId = NewType("SavedPostId", int)
NotificationId = NewType("NotificationId", int)

# Document store
PostId = NewType("PostId", str)
StoryId = NewType("StoryId", str)
StoryItemId = NewType("StoryItemId", str)

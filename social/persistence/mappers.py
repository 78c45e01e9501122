"""Mappers for converting between database rows and domain models.

Domain models are immutable Pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM mapping.
"""

from typing import Any, Dict

from social.domain.model import (
    Comment,
    CommentLike,
    Follow,
    FriendRequest,
    Like,
    Notification,
    Post,
    SavedPost,
    Story,
    StoryItem,
    StoryReaction,
    User,
)
from social.domain.value import (
    CommentId,
    CommentLikeId,
    FollowId,
    FriendRequestId,
    FriendRequestStatus,
    LikeId,
    NotificationId,
    NotificationType,
    PostId,
    SavedPostId,
    StoryId,
    TargetType,
    UserId,
)
from social.domain.value.types import Username


def _without_id(values: Dict[str, Any]) -> Dict[str, Any]:
    """Drop an unassigned id so the database generates one."""
    if values.get("id") is None:
        values.pop("id", None)
    return values


# ============================================================================
# Relational store
# ============================================================================


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(row["id"]),
        username=Username(row["username"]),
        display_name=row["display_name"],
        email=row.get("email"),
        password_hash=row.get("password_hash"),
        firebase_uid=row.get("firebase_uid"),
        age=row.get("age"),
        bio=row.get("bio") or "",
        avatar_url=row.get("avatar_url"),
        is_private=row["is_private"],
        is_verified=row["is_verified"],
        followers_count=row["followers_count"],
        following_count=row["following_count"],
        posts_count=row["posts_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return _without_id(user.model_dump())


def row_to_comment(row: Dict[str, Any]) -> Comment:
    return Comment(
        id=CommentId(row["id"]),
        post_id=PostId(row["post_id"]),
        user_id=UserId(row["user_id"]),
        content=row["content"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    return _without_id(comment.model_dump())


def row_to_comment_like(row: Dict[str, Any]) -> CommentLike:
    return CommentLike(
        id=CommentLikeId(row["id"]),
        comment_id=CommentId(row["comment_id"]),
        user_id=UserId(row["user_id"]),
        created_at=row["created_at"],
    )


def comment_like_to_dict(like: CommentLike) -> Dict[str, Any]:
    return _without_id(like.model_dump())


def row_to_like(row: Dict[str, Any]) -> Like:
    return Like(
        id=LikeId(row["id"]),
        post_id=PostId(row["post_id"]),
        user_id=UserId(row["user_id"]),
        created_at=row["created_at"],
    )


def like_to_dict(like: Like) -> Dict[str, Any]:
    return _without_id(like.model_dump())


def row_to_follow(row: Dict[str, Any]) -> Follow:
    return Follow(
        id=FollowId(row["id"]),
        follower_id=UserId(row["follower_id"]),
        following_id=UserId(row["following_id"]),
        created_at=row["created_at"],
    )


def follow_to_dict(follow: Follow) -> Dict[str, Any]:
    return _without_id(follow.model_dump())


def row_to_friend_request(row: Dict[str, Any]) -> FriendRequest:
    return FriendRequest(
        id=FriendRequestId(row["id"]),
        sender_id=UserId(row["sender_id"]),
        receiver_id=UserId(row["receiver_id"]),
        status=FriendRequestStatus(row["status"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def friend_request_to_dict(request: FriendRequest) -> Dict[str, Any]:
    values = _without_id(request.model_dump())
    values["status"] = request.status.value
    return values


def row_to_saved_post(row: Dict[str, Any]) -> SavedPost:
    return SavedPost(
        id=SavedPostId(row["id"]),
        user_id=UserId(row["user_id"]),
        post_id=PostId(row["post_id"]),
        created_at=row["created_at"],
    )


def saved_post_to_dict(saved: SavedPost) -> Dict[str, Any]:
    return _without_id(saved.model_dump())


def row_to_story_reaction(row: Dict[str, Any]) -> StoryReaction:
    return StoryReaction(
        id=row["id"],
        story_id=StoryId(row["story_id"]),
        user_id=UserId(row["user_id"]),
        reaction=row["reaction"],
        created_at=row["created_at"],
    )


def row_to_notification(row: Dict[str, Any]) -> Notification:
    """Convert database row to Notification domain model.

    Args:
        row: Database row as dict

    Returns:
        Notification domain model
    """
    return Notification(
        id=NotificationId(row["id"]),
        recipient_id=UserId(row["recipient_id"]),
        actor_id=UserId(row["actor_id"]),
        type=NotificationType(row["type"]),
        target_id=row.get("target_id"),
        target_type=TargetType(row["target_type"]) if row.get("target_type") else None,
        preview_image_url=row.get("preview_image_url"),
        message=row["message"],
        is_read=row["is_read"],
        created_at=row["created_at"],
    )


def notification_to_dict(notification: Notification) -> Dict[str, Any]:
    values = _without_id(notification.model_dump())
    values["type"] = notification.type.value
    values["target_type"] = (
        notification.target_type.value if notification.target_type else None
    )
    return values


# ============================================================================
# Document store
# ============================================================================


def document_to_post(row: Dict[str, Any]) -> Post:
    """Convert a post document to Post domain model.

    Args:
        row: Document row as dict, content fields under `body`

    Returns:
        Post domain model
    """
    body = row["body"]
    return Post(
        id=PostId(row["id"]),
        user_id=UserId(row["user_id"]),
        content=body["content"],
        image_urls=body.get("image_urls", []),
        video_urls=body.get("video_urls", []),
        likes_count=row["likes_count"],
        comments_count=row["comments_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def post_to_document(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to a document row.

    Args:
        post: Post domain model

    Returns:
        Dict suitable for document insertion/update
    """
    return {
        "id": post.id,
        "user_id": post.user_id,
        "likes_count": post.likes_count,
        "comments_count": post.comments_count,
        "created_at": post.created_at,
        "updated_at": post.updated_at,
        "body": {
            "content": post.content,
            "image_urls": list(post.image_urls),
            "video_urls": list(post.video_urls),
        },
    }


def document_to_story(row: Dict[str, Any]) -> Story:
    """Convert a story document to Story domain model.

    Args:
        row: Document row as dict, items under `body`

    Returns:
        Story domain model
    """
    return Story(
        id=StoryId(row["id"]),
        user_id=UserId(row["user_id"]),
        items=[StoryItem.model_validate(item) for item in row["body"]["items"]],
        created_at=row["created_at"],
        expires_at=row["expires_at"],
    )


def story_to_document(story: Story) -> Dict[str, Any]:
    return {
        "id": story.id,
        "user_id": story.user_id,
        "created_at": story.created_at,
        "expires_at": story.expires_at,
        # JSON mode so item timestamps are stored as ISO strings
        "body": {"items": [item.model_dump(mode="json") for item in story.items]},
    }

"""In-memory comment repositories for testing."""

from itertools import count
from typing import Optional, Sequence

from social.domain.model import Comment, CommentLike
from social.domain.model.common import utc_now
from social.domain.repository import CommentLikeRepository, CommentRepository
from social.domain.value import CommentId, CommentLikeId, PostId, UserId

from .user import duplicate


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}
        self._ids = count(1)

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        return self._comments.get(comment_id)

    async def list_by_post(self, post_id: PostId) -> list[Comment]:
        comments = [c for c in self._comments.values() if c.post_id == post_id]
        return sorted(comments, key=lambda c: (c.created_at, c.id))

    async def create(self, comment: Comment) -> Comment:
        stored = comment.model_copy(update={"id": CommentId(next(self._ids))})
        self._comments[stored.id] = stored
        return stored

    async def update(self, comment: Comment) -> Comment:
        stored = comment.model_copy(update={"updated_at": utc_now()})
        self._comments[comment.id] = stored
        return stored

    async def delete(self, comment_id: CommentId) -> bool:
        return self._comments.pop(comment_id, None) is not None


class InMemoryCommentLikeRepository(CommentLikeRepository):
    """In-memory implementation of CommentLikeRepository for testing."""

    def __init__(self) -> None:
        self._likes: dict[tuple[CommentId, UserId], CommentLike] = {}
        self._ids = count(1)

    async def create(self, like: CommentLike) -> CommentLike:
        key = (like.comment_id, like.user_id)
        if key in self._likes:
            raise duplicate("uq_comment_likes_comment_user")
        stored = like.model_copy(update={"id": CommentLikeId(next(self._ids))})
        self._likes[key] = stored
        return stored

    async def delete(self, comment_id: CommentId, user_id: UserId) -> bool:
        return self._likes.pop((comment_id, user_id), None) is not None

    async def count_by_comments(
        self, comment_ids: Sequence[CommentId]
    ) -> dict[CommentId, int]:
        counts: dict[CommentId, int] = {}
        for comment_id, _ in self._likes:
            if comment_id in comment_ids:
                counts[comment_id] = counts.get(comment_id, 0) + 1
        return counts

    async def find_liked_comment_ids(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> set[CommentId]:
        return {
            comment_id
            for comment_id, liker in self._likes
            if liker == user_id and comment_id in comment_ids
        }

"""Comment and comment-like repository interfaces."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from social.domain.model.comment import Comment, CommentLike
from social.domain.value import CommentId, PostId, UserId


class CommentRepository(ABC):
    """Repository for Comment entities."""

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_by_post(self, post_id: PostId) -> list[Comment]:
        """List comments on a post, oldest first.

        Args:
            post_id: Post document id

        Returns:
            Comments on the post
        """
        pass

    @abstractmethod
    async def create(self, comment: Comment) -> Comment:
        pass

    @abstractmethod
    async def update(self, comment: Comment) -> Comment:
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> bool:
        pass


class CommentLikeRepository(ABC):
    """Repository for likes on comments.

    One like per user per comment; duplicates raise IntegrityError.
    """

    @abstractmethod
    async def create(self, like: CommentLike) -> CommentLike:
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Remove a user's like.

        Returns:
            True if a like was removed
        """
        pass

    @abstractmethod
    async def count_by_comments(
        self, comment_ids: Sequence[CommentId]
    ) -> dict[CommentId, int]:
        """Count likes per comment (batch query).

        Comments without likes may be missing from the result.
        """
        pass

    @abstractmethod
    async def find_liked_comment_ids(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> set[CommentId]:
        """Which of the given comments the user has liked (batch query)."""
        pass

"""Comment domain service."""

from typing import Sequence

import logfire
from sqlalchemy.exc import IntegrityError

from social.domain.error import ConflictError, NotAuthorizedError, NotFoundError
from social.domain.model import Comment, CommentLike
from social.domain.model.common import utc_now
from social.domain.repository import CommentLikeRepository, CommentRepository
from social.domain.value import (
    CommentId,
    NotificationType,
    PostCounter,
    PostId,
    TargetType,
    UserId,
)

from .base import Service
from .notification_service import NotificationService
from .post_service import PostService
from .user_service import UserService


class CommentService(Service):
    """Domain service for comments and comment likes."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        comment_like_repository: CommentLikeRepository,
        post_service: PostService,
        user_service: UserService,
        notification_service: NotificationService,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            comment_like_repository: Comment like repository
            post_service: Post domain service
            user_service: User domain service
            notification_service: Notification domain service
        """
        self.comment_repository = comment_repository
        self.comment_like_repository = comment_like_repository
        self.post_service = post_service
        self.user_service = user_service
        self.notification_service = notification_service

    async def create_comment(
        self, post_id: PostId, author_id: UserId, content: str
    ) -> Comment:
        """Comment on a post.

        Increments the post's comment count and notifies the post author.

        Args:
            post_id: Post ID
            author_id: Comment author
            content: Comment text (1-500 characters)

        Returns:
            Created comment

        Raises:
            NotFoundError: If the post or author does not exist
        """
        with logfire.span(
            "comment_service.create_comment", post_id=post_id, author_id=author_id
        ):
            post = await self.post_service.get_post(post_id)
            author = await self.user_service.get_by_id(author_id)

            comment = await self.comment_repository.create(
                Comment(post_id=post_id, user_id=author_id, content=content)
            )
            logfire.info("Comment created", comment_id=comment.id, post_id=post_id)

            await self.post_service.adjust_counter(post_id, PostCounter.COMMENTS, 1)
            await self.notification_service.notify(
                actor=author,
                recipient_id=post.user_id,
                type=NotificationType.COMMENT,
                target_id=post_id,
                target_type=TargetType.POST,
                preview_image_url=post.image_urls[0] if post.image_urls else None,
            )
            return comment

    async def get_comment(self, comment_id: CommentId) -> Comment:
        """Get comment by ID.

        Raises:
            NotFoundError: If comment not found
        """
        comment = await self.comment_repository.find_by_id(comment_id)
        if not comment:
            raise NotFoundError("Comment", str(comment_id))
        return comment

    async def list_for_post(self, post_id: PostId) -> list[Comment]:
        """List comments on a post, oldest first.

        Raises:
            NotFoundError: If the post does not exist
        """
        await self.post_service.get_post(post_id)
        return await self.comment_repository.list_by_post(post_id)

    async def update_comment(
        self, comment_id: CommentId, user_id: UserId, content: str
    ) -> Comment:
        """Edit a comment owned by the caller.

        Raises:
            NotFoundError: If comment not found
            NotAuthorizedError: If the caller is not the author
        """
        with logfire.span(
            "comment_service.update_comment", comment_id=comment_id, user_id=user_id
        ):
            comment = await self.get_comment(comment_id)
            if comment.user_id != user_id:
                raise NotAuthorizedError("Comment", str(comment_id), str(user_id))

            updated = Comment.model_validate(
                {**comment.model_dump(), "content": content, "updated_at": utc_now()}
            )
            return await self.comment_repository.update(updated)

    async def delete_comment(self, comment_id: CommentId, user_id: UserId) -> None:
        """Delete a comment owned by the caller.

        Raises:
            NotFoundError: If comment not found
            NotAuthorizedError: If the caller is not the author
        """
        with logfire.span(
            "comment_service.delete_comment", comment_id=comment_id, user_id=user_id
        ):
            comment = await self.get_comment(comment_id)
            if comment.user_id != user_id:
                raise NotAuthorizedError("Comment", str(comment_id), str(user_id))

            await self.comment_repository.delete(comment_id)
            await self.post_service.adjust_counter(
                comment.post_id, PostCounter.COMMENTS, -1
            )
            logfire.info("Comment deleted", comment_id=comment_id)

    async def like_comment(self, comment_id: CommentId, user_id: UserId) -> CommentLike:
        """Like a comment.

        Raises:
            NotFoundError: If comment not found
            ConflictError: If already liked
        """
        with logfire.span(
            "comment_service.like_comment", comment_id=comment_id, user_id=user_id
        ):
            await self.get_comment(comment_id)
            try:
                return await self.comment_like_repository.create(
                    CommentLike(comment_id=comment_id, user_id=user_id)
                )
            except IntegrityError:
                logfire.warn(
                    "Duplicate comment like", comment_id=comment_id, user_id=user_id
                )
                raise ConflictError("Comment already liked")

    async def unlike_comment(self, comment_id: CommentId, user_id: UserId) -> None:
        """Remove a like from a comment.

        Raises:
            NotFoundError: If the comment is not liked by the caller
        """
        if not await self.comment_like_repository.delete(comment_id, user_id):
            raise NotFoundError("Comment like", str(comment_id), "Like not found")

    async def like_stats(
        self, comment_ids: Sequence[CommentId], viewer_id: UserId | None
    ) -> tuple[dict[CommentId, int], set[CommentId]]:
        """Like counts and the viewer's liked set for a batch of comments.

        Args:
            comment_ids: Comments to describe
            viewer_id: Caller, or None when anonymous

        Returns:
            Like count per comment and the ids the viewer has liked
        """
        if not comment_ids:
            return {}, set()
        counts = await self.comment_like_repository.count_by_comments(comment_ids)
        liked = (
            await self.comment_like_repository.find_liked_comment_ids(
                viewer_id, comment_ids
            )
            if viewer_id is not None
            else set()
        )
        return counts, liked

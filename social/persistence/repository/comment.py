"""PostgreSQL implementation of Comment and CommentLike repositories."""

from typing import Optional, Sequence

from sqlalchemy import and_, delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from social.domain.model import Comment, CommentLike
from social.domain.repository import CommentLikeRepository, CommentRepository
from social.domain.value import CommentId, PostId, UserId
from social.persistence.mappers import (
    comment_like_to_dict,
    comment_to_dict,
    row_to_comment,
    row_to_comment_like,
)
from social.persistence.tables import comment_likes_table, comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_comment(dict(row)) if row else None

    async def list_by_post(self, post_id: PostId) -> list[Comment]:
        """List comments on a post, oldest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.post_id == post_id)
            .order_by(comments_table.c.created_at, comments_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(dict(row)) for row in result.mappings().all()]

    async def create(self, comment: Comment) -> Comment:
        """Insert a comment and return it with its assigned id."""
        stmt = (
            insert(comments_table)
            .values(**comment_to_dict(comment))
            .returning(*comments_table.c)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return row_to_comment(dict(result.mappings().one()))

    async def update(self, comment: Comment) -> Comment:
        """Update a comment's content."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment.id)
            .values(content=comment.content, updated_at=func.now())
            .returning(*comments_table.c)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return row_to_comment(dict(result.mappings().one()))

    async def delete(self, comment_id: CommentId) -> bool:
        """Delete a comment (its likes cascade)."""
        stmt = delete(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]


class PostgresCommentLikeRepository(CommentLikeRepository):
    """PostgreSQL implementation of CommentLikeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create(self, like: CommentLike) -> CommentLike:
        """Insert a comment like.

        Raises:
            IntegrityError: If the user already liked the comment
        """
        stmt = (
            insert(comment_likes_table)
            .values(**comment_like_to_dict(like))
            .returning(*comment_likes_table.c)
        )
        async with self.session.begin_nested():
            result = await self.session.execute(stmt)
            row = result.mappings().one()
        return row_to_comment_like(dict(row))

    async def delete(self, comment_id: CommentId, user_id: UserId) -> bool:
        stmt = delete(comment_likes_table).where(
            and_(
                comment_likes_table.c.comment_id == comment_id,
                comment_likes_table.c.user_id == user_id,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def count_by_comments(
        self, comment_ids: Sequence[CommentId]
    ) -> dict[CommentId, int]:
        """Count likes per comment (batch query)."""
        if not comment_ids:
            return {}

        stmt = (
            select(comment_likes_table.c.comment_id, func.count().label("likes"))
            .where(comment_likes_table.c.comment_id.in_(list(comment_ids)))
            .group_by(comment_likes_table.c.comment_id)
        )
        result = await self.session.execute(stmt)
        return {CommentId(row.comment_id): row.likes for row in result.all()}

    async def find_liked_comment_ids(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> set[CommentId]:
        """Which of the given comments the user has liked (batch query)."""
        if not comment_ids:
            return set()

        stmt = select(comment_likes_table.c.comment_id).where(
            and_(
                comment_likes_table.c.user_id == user_id,
                comment_likes_table.c.comment_id.in_(list(comment_ids)),
            )
        )
        result = await self.session.execute(stmt)
        return {CommentId(comment_id) for comment_id in result.scalars().all()}

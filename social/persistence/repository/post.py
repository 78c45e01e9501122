"""Document store implementation of Post repository."""

from typing import Optional, Sequence

import logfire
from sqlalchemy import case, delete, func, insert, select, update

from social.domain.model import Post
from social.domain.repository import PostRepository
from social.domain.value import PostCounter, PostId, UserId
from social.persistence.database import DocumentSession
from social.persistence.documents import post_documents
from social.persistence.mappers import document_to_post, post_to_document


class DocumentPostRepository(PostRepository):
    """PostRepository backed by the `post_documents` collection."""

    def __init__(self, session: DocumentSession) -> None:
        """Initialize repository with a document store session.

        Args:
            session: Document store session
        """
        self.session = session

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        stmt = select(post_documents).where(post_documents.c.id == post_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return document_to_post(dict(row)) if row else None

    async def find_by_ids(self, post_ids: Sequence[PostId]) -> list[Post]:
        """Find several posts at once (batch query)."""
        if not post_ids:
            return []

        stmt = select(post_documents).where(post_documents.c.id.in_(list(post_ids)))
        result = await self.session.execute(stmt)
        return [document_to_post(dict(row)) for row in result.mappings().all()]

    async def list_posts(
        self, user_id: Optional[UserId] = None, skip: int = 0, limit: int = 10
    ) -> list[Post]:
        """List posts newest first.

        Args:
            user_id: Only posts by this author, all posts if None
            skip: Number of posts to skip
            limit: Maximum number of posts

        Returns:
            Page of posts
        """
        with logfire.span(
            "post_repository.list_posts", user_id=user_id, skip=skip, limit=limit
        ):
            stmt = (
                select(post_documents)
                .order_by(post_documents.c.created_at.desc(), post_documents.c.id)
                .offset(skip)
                .limit(limit)
            )
            if user_id is not None:
                stmt = stmt.where(post_documents.c.user_id == user_id)

            result = await self.session.execute(stmt)
            return [document_to_post(dict(row)) for row in result.mappings().all()]

    async def count(self, user_id: Optional[UserId] = None) -> int:
        stmt = select(func.count()).select_from(post_documents)
        if user_id is not None:
            stmt = stmt.where(post_documents.c.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def create(self, post: Post) -> Post:
        stmt = insert(post_documents).values(**post_to_document(post))
        await self.session.execute(stmt)
        await self.session.flush()
        return post

    async def update(self, post: Post) -> Post:
        """Replace a post's content.

        Counters are left untouched so concurrent likes and comments are
        not overwritten.
        """
        document = post_to_document(post)
        stmt = (
            update(post_documents)
            .where(post_documents.c.id == post.id)
            .values(body=document["body"], updated_at=document["updated_at"])
            .returning(*post_documents.c)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return document_to_post(dict(result.mappings().one()))

    async def delete(self, post_id: PostId) -> bool:
        stmt = delete(post_documents).where(post_documents.c.id == post_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def adjust_counter(
        self, post_id: PostId, counter: PostCounter, delta: int
    ) -> None:
        """Atomically add `delta` to a post counter (minimum 0).

        Args:
            post_id: Post ID to update
            counter: Counter column
            delta: Amount to add
        """
        column = post_documents.c[counter.value]
        stmt = (
            update(post_documents)
            .where(post_documents.c.id == post_id)
            .values({column: case((column + delta > 0, column + delta), else_=0)})
        )
        async with self.session.begin_nested():
            await self.session.execute(stmt)

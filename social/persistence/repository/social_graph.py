"""PostgreSQL implementations of the social graph repositories.

Likes, follows, friend requests and saved posts. Inserts run inside a
savepoint so a pair uniqueness violation can be reported as a conflict
without aborting the request transaction.
"""

from typing import Optional, Sequence

from sqlalchemy import and_, delete, func, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from social.domain.model import Follow, FriendRequest, Like, SavedPost
from social.domain.repository import (
    FollowRepository,
    FriendRequestRepository,
    LikeRepository,
    SavedPostRepository,
)
from social.domain.value import FriendRequestId, FriendRequestStatus, PostId, UserId
from social.persistence.mappers import (
    follow_to_dict,
    friend_request_to_dict,
    like_to_dict,
    row_to_follow,
    row_to_friend_request,
    row_to_like,
    row_to_saved_post,
    saved_post_to_dict,
)
from social.persistence.tables import (
    follows_table,
    friend_requests_table,
    likes_table,
    saved_posts_table,
)


class PostgresLikeRepository(LikeRepository):
    """PostgreSQL implementation of LikeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _match(self, post_id: PostId, user_id: UserId):
        return and_(likes_table.c.post_id == post_id, likes_table.c.user_id == user_id)

    async def create(self, like: Like) -> Like:
        """Insert a like.

        Raises:
            IntegrityError: If the user already liked the post
        """
        stmt = (
            insert(likes_table).values(**like_to_dict(like)).returning(*likes_table.c)
        )
        async with self.session.begin_nested():
            result = await self.session.execute(stmt)
            row = result.mappings().one()
        return row_to_like(dict(row))

    async def delete(self, post_id: PostId, user_id: UserId) -> bool:
        stmt = delete(likes_table).where(self._match(post_id, user_id))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def exists(self, post_id: PostId, user_id: UserId) -> bool:
        stmt = select(likes_table.c.id).where(self._match(post_id, user_id))
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def count(self, post_id: PostId) -> int:
        stmt = (
            select(func.count())
            .select_from(likes_table)
            .where(likes_table.c.post_id == post_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def find_liked_post_ids(
        self, user_id: UserId, post_ids: Sequence[PostId]
    ) -> set[PostId]:
        """Which of the given posts the user has liked (batch query)."""
        if not post_ids:
            return set()

        stmt = select(likes_table.c.post_id).where(
            and_(
                likes_table.c.user_id == user_id,
                likes_table.c.post_id.in_(list(post_ids)),
            )
        )
        result = await self.session.execute(stmt)
        return {PostId(post_id) for post_id in result.scalars().all()}


class PostgresFollowRepository(FollowRepository):
    """PostgreSQL implementation of FollowRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _match(self, follower_id: UserId, following_id: UserId):
        return and_(
            follows_table.c.follower_id == follower_id,
            follows_table.c.following_id == following_id,
        )

    async def create(self, follow: Follow) -> Follow:
        """Insert a follow edge.

        Raises:
            IntegrityError: If the edge already exists
        """
        stmt = (
            insert(follows_table)
            .values(**follow_to_dict(follow))
            .returning(*follows_table.c)
        )
        async with self.session.begin_nested():
            result = await self.session.execute(stmt)
            row = result.mappings().one()
        return row_to_follow(dict(row))

    async def delete(self, follower_id: UserId, following_id: UserId) -> bool:
        stmt = delete(follows_table).where(self._match(follower_id, following_id))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def exists(self, follower_id: UserId, following_id: UserId) -> bool:
        stmt = select(follows_table.c.id).where(self._match(follower_id, following_id))
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def list_follower_ids(self, user_id: UserId) -> list[UserId]:
        stmt = (
            select(follows_table.c.follower_id)
            .where(follows_table.c.following_id == user_id)
            .order_by(follows_table.c.created_at.desc(), follows_table.c.id.desc())
        )
        result = await self.session.execute(stmt)
        return [UserId(user_id) for user_id in result.scalars().all()]

    async def list_following_ids(self, user_id: UserId) -> list[UserId]:
        stmt = (
            select(follows_table.c.following_id)
            .where(follows_table.c.follower_id == user_id)
            .order_by(follows_table.c.created_at.desc(), follows_table.c.id.desc())
        )
        result = await self.session.execute(stmt)
        return [UserId(user_id) for user_id in result.scalars().all()]


class PostgresFriendRequestRepository(FriendRequestRepository):
    """PostgreSQL implementation of FriendRequestRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, request_id: FriendRequestId) -> Optional[FriendRequest]:
        stmt = select(friend_requests_table).where(
            friend_requests_table.c.id == request_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_friend_request(dict(row)) if row else None

    async def find_between(
        self, user_a: UserId, user_b: UserId
    ) -> Optional[FriendRequest]:
        """Find the request between two users, in either direction."""
        table = friend_requests_table
        stmt = (
            select(table)
            .where(
                or_(
                    and_(table.c.sender_id == user_a, table.c.receiver_id == user_b),
                    and_(table.c.sender_id == user_b, table.c.receiver_id == user_a),
                )
            )
            .order_by(table.c.created_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_friend_request(dict(row)) if row else None

    async def list_pending_for(self, receiver_id: UserId) -> list[FriendRequest]:
        table = friend_requests_table
        stmt = (
            select(table)
            .where(
                and_(
                    table.c.receiver_id == receiver_id,
                    table.c.status == FriendRequestStatus.PENDING.value,
                )
            )
            .order_by(table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_friend_request(dict(row)) for row in result.mappings().all()]

    async def list_accepted_for(self, user_id: UserId) -> list[FriendRequest]:
        table = friend_requests_table
        stmt = (
            select(table)
            .where(
                and_(
                    or_(table.c.sender_id == user_id, table.c.receiver_id == user_id),
                    table.c.status == FriendRequestStatus.ACCEPTED.value,
                )
            )
            .order_by(table.c.updated_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_friend_request(dict(row)) for row in result.mappings().all()]

    async def create(self, request: FriendRequest) -> FriendRequest:
        """Insert a friend request.

        Raises:
            IntegrityError: If a request between the pair already exists
        """
        stmt = (
            insert(friend_requests_table)
            .values(**friend_request_to_dict(request))
            .returning(*friend_requests_table.c)
        )
        async with self.session.begin_nested():
            result = await self.session.execute(stmt)
            row = result.mappings().one()
        return row_to_friend_request(dict(row))

    async def update(self, request: FriendRequest) -> FriendRequest:
        """Persist a status change."""
        stmt = (
            update(friend_requests_table)
            .where(friend_requests_table.c.id == request.id)
            .values(status=request.status.value, updated_at=func.now())
            .returning(*friend_requests_table.c)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return row_to_friend_request(dict(result.mappings().one()))

    async def delete(self, request_id: FriendRequestId) -> bool:
        stmt = delete(friend_requests_table).where(
            friend_requests_table.c.id == request_id
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]


class PostgresSavedPostRepository(SavedPostRepository):
    """PostgreSQL implementation of SavedPostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create(self, saved: SavedPost) -> SavedPost:
        """Insert a saved post.

        Raises:
            IntegrityError: If the user already saved the post
        """
        stmt = (
            insert(saved_posts_table)
            .values(**saved_post_to_dict(saved))
            .returning(*saved_posts_table.c)
        )
        async with self.session.begin_nested():
            result = await self.session.execute(stmt)
            row = result.mappings().one()
        return row_to_saved_post(dict(row))

    async def delete(self, user_id: UserId, post_id: PostId) -> bool:
        stmt = delete(saved_posts_table).where(
            and_(
                saved_posts_table.c.user_id == user_id,
                saved_posts_table.c.post_id == post_id,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def list_by_user(self, user_id: UserId) -> list[SavedPost]:
        stmt = (
            select(saved_posts_table)
            .where(saved_posts_table.c.user_id == user_id)
            .order_by(
                saved_posts_table.c.created_at.desc(), saved_posts_table.c.id.desc()
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_saved_post(dict(row)) for row in result.mappings().all()]

    async def find_saved_post_ids(
        self, user_id: UserId, post_ids: Sequence[PostId]
    ) -> set[PostId]:
        """Which of the given posts the user has saved (batch query)."""
        if not post_ids:
            return set()

        stmt = select(saved_posts_table.c.post_id).where(
            and_(
                saved_posts_table.c.user_id == user_id,
                saved_posts_table.c.post_id.in_(list(post_ids)),
            )
        )
        result = await self.session.execute(stmt)
        return {PostId(post_id) for post_id in result.scalars().all()}

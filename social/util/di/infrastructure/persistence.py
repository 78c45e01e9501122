"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from social.config import Settings
from social.domain.repository import (
    CommentLikeRepository,
    CommentRepository,
    FollowRepository,
    FriendRequestRepository,
    LikeRepository,
    NotificationRepository,
    PostRepository,
    SavedPostRepository,
    StoryActivityRepository,
    StoryRepository,
    UserRepository,
)
from social.persistence.database import (
    DocumentEngine,
    DocumentSession,
    create_document_engine,
    create_document_session_factory,
    create_engine,
    create_session_factory,
)
from social.persistence.documents import ensure_collections
from social.persistence.repository import (
    DocumentPostRepository,
    DocumentStoryRepository,
    PostgresCommentLikeRepository,
    PostgresCommentRepository,
    PostgresFollowRepository,
    PostgresFriendRequestRepository,
    PostgresLikeRepository,
    PostgresNotificationRepository,
    PostgresSavedPostRepository,
    PostgresStoryActivityRepository,
    PostgresUserRepository,
)
from social.util.di.base import ProviderBase
from social.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider.

    PostgreSQL for users and relationships, a second database with JSONB
    collections for posts and stories.
    """

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide relational database engine."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine, store="relational")
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    async def get_document_engine(
        self, settings: Settings
    ) -> AsyncIterator[DocumentEngine]:
        """Provide document store engine, creating missing collections."""
        engine = create_document_engine(settings)
        instrument_sqlalchemy(engine, store="documents")
        await ensure_collections(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide relational session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.APP)
    def get_document_session_factory(
        self, engine: DocumentEngine
    ) -> async_sessionmaker[DocumentSession]:
        """Provide document store session factory."""
        return create_document_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide relational session for request scope.

        The session is automatically committed at the end of the request
        if no exception occurred, or rolled back if an exception was raised.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.debug("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=type(e).__name__)
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    async def get_document_session(
        self, session_factory: async_sessionmaker[DocumentSession]
    ) -> AsyncIterator[DocumentSession]:
        """Provide document store session for request scope (same commit rules)."""
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.debug("Document session committed")
            except Exception as e:
                logfire.warn("Document session rollback", error=type(e).__name__)
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_post_repository(self, session: DocumentSession) -> PostRepository:
        """Provide Post repository (document store)."""
        return DocumentPostRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_story_repository(self, session: DocumentSession) -> StoryRepository:
        """Provide Story repository (document store)."""
        return DocumentStoryRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, session: AsyncSession) -> CommentRepository:
        """Provide Comment repository."""
        return PostgresCommentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_comment_like_repository(
        self, session: AsyncSession
    ) -> CommentLikeRepository:
        """Provide CommentLike repository."""
        return PostgresCommentLikeRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_like_repository(self, session: AsyncSession) -> LikeRepository:
        """Provide Like repository."""
        return PostgresLikeRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_follow_repository(self, session: AsyncSession) -> FollowRepository:
        """Provide Follow repository."""
        return PostgresFollowRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_friend_request_repository(
        self, session: AsyncSession
    ) -> FriendRequestRepository:
        """Provide FriendRequest repository."""
        return PostgresFriendRequestRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_saved_post_repository(self, session: AsyncSession) -> SavedPostRepository:
        """Provide SavedPost repository."""
        return PostgresSavedPostRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_story_activity_repository(
        self, session: AsyncSession
    ) -> StoryActivityRepository:
        """Provide StoryActivity repository."""
        return PostgresStoryActivityRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_notification_repository(
        self, session: AsyncSession
    ) -> NotificationRepository:
        """Provide Notification repository."""
        return PostgresNotificationRepository(session)

"""Database connection and session management.

Two async engines: the relational store (users and relationships) and the
document store (posts and stories). Each gets its own session type so
they can be injected independently.
"""

from typing import NewType

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from social.config import Settings

DocumentEngine = NewType("DocumentEngine", AsyncEngine)


class DocumentSession(AsyncSession):
    """Session bound to the document store."""

    pass


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the relational store engine.

    Args:
        settings: Application settings with database URL

    Returns:
        Configured async engine
    """
    return create_async_engine(
        settings.database.url,
        echo=settings.debug,  # Log SQL queries in debug mode
        pool_pre_ping=True,  # Verify connections before using
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def create_document_engine(settings: Settings) -> DocumentEngine:
    """Create the document store engine.

    Args:
        settings: Application settings with document store URL

    Returns:
        Configured async engine
    """
    return DocumentEngine(
        create_async_engine(
            settings.documents.url,
            echo=settings.debug,
            pool_pre_ping=True,
            pool_size=settings.documents.pool_size,
            max_overflow=settings.documents.max_overflow,
        )
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create relational session factory.

    Args:
        engine: Database engine

    Returns:
        Session factory for creating database sessions
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Don't expire objects after commit
        autoflush=False,  # Manual flushing for better control
    )


def create_document_session_factory(
    engine: DocumentEngine,
) -> async_sessionmaker[DocumentSession]:
    """Create document store session factory.

    Args:
        engine: Document store engine

    Returns:
        Session factory for document sessions
    """
    return async_sessionmaker(
        engine,
        class_=DocumentSession,
        expire_on_commit=False,
        autoflush=False,
    )

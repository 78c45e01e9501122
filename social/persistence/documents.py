"""Document store collections.

Posts and stories are stored as JSONB documents in a separate database.
Each collection keeps the fields it is queried or atomically updated by
as columns and the schema-flexible content in `body`.

Collections are created on first connection when missing, so the
document store needs no migrations.
"""

from sqlalchemy import (
    BigInteger,
    Column,
    Index,
    Integer,
    MetaData,
    String,
    Table,
)
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP
from sqlalchemy.ext.asyncio import AsyncEngine

document_metadata = MetaData()

# ============================================================================
# POSTS COLLECTION
# body: {content, image_urls, video_urls}
# ============================================================================
post_documents = Table(
    "post_documents",
    document_metadata,
    Column("id", String(32), primary_key=True),
    Column("user_id", BigInteger, nullable=False),
    Column("likes_count", Integer, nullable=False, server_default="0"),
    Column("comments_count", Integer, nullable=False, server_default="0"),
    Column("created_at", TIMESTAMP(timezone=True), nullable=False),
    Column("updated_at", TIMESTAMP(timezone=True), nullable=False),
    Column("body", JSONB, nullable=False),
)

Index("idx_post_documents_created", post_documents.c.created_at.desc())
Index(
    "idx_post_documents_user_created",
    post_documents.c.user_id,
    post_documents.c.created_at.desc(),
)

# ============================================================================
# STORIES COLLECTION
# body: {items: [{id, type, url, duration, created_at}]}
# ============================================================================
story_documents = Table(
    "story_documents",
    document_metadata,
    Column("id", String(32), primary_key=True),
    Column("user_id", BigInteger, nullable=False),
    Column("created_at", TIMESTAMP(timezone=True), nullable=False),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column("body", JSONB, nullable=False),
)

Index("idx_story_documents_expires", story_documents.c.expires_at)


async def ensure_collections(engine: AsyncEngine) -> None:
    """Create missing document collections and their indexes.

    Args:
        engine: Document store engine
    """
    async with engine.begin() as conn:
        await conn.run_sync(document_metadata.create_all, checkfirst=True)

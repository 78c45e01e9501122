"""SQLAlchemy table definitions for the relational store.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Identity,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP

# Metadata object for all relational tables
metadata = MetaData()

# Post and story ids reference the document store and have no foreign key
DOCUMENT_ID = String(32)

# ============================================================================
# USERS TABLE (credential store)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", BigInteger, Identity(), primary_key=True),
    Column("username", String(128), nullable=False),
    Column("display_name", String(128), nullable=False),
    Column("email", String(255), nullable=True),
    Column("password_hash", String(255), nullable=True),  # Local accounts only
    Column("firebase_uid", String(128), nullable=True),  # External subject id
    Column("age", Integer, nullable=True),
    Column("bio", Text, nullable=False, server_default=""),
    Column("avatar_url", Text, nullable=True),
    Column("is_private", Boolean, nullable=False, server_default="false"),
    Column("is_verified", Boolean, nullable=False, server_default="false"),
    Column("followers_count", Integer, nullable=False, server_default="0"),
    Column("following_count", Integer, nullable=False, server_default="0"),
    Column("posts_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("username", name="uq_users_username"),
    UniqueConstraint("email", name="uq_users_email"),
    UniqueConstraint("firebase_uid", name="uq_users_firebase_uid"),
    CheckConstraint(
        "password_hash IS NOT NULL OR firebase_uid IS NOT NULL",
        name="ck_users_auth_method",
    ),
    CheckConstraint(
        "followers_count >= 0 AND following_count >= 0 AND posts_count >= 0",
        name="ck_users_counters_non_negative",
    ),
)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", BigInteger, Identity(), primary_key=True),
    Column("post_id", DOCUMENT_ID, nullable=False),
    Column(
        "user_id",
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("content", Text, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "char_length(content) BETWEEN 1 AND 500", name="ck_comments_content_length"
    ),
)

Index("idx_comments_post_created", comments_table.c.post_id, comments_table.c.created_at)

# ============================================================================
# COMMENT LIKES TABLE
# ============================================================================
comment_likes_table = Table(
    "comment_likes",
    metadata,
    Column("id", BigInteger, Identity(), primary_key=True),
    Column(
        "comment_id",
        BigInteger,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "user_id",
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("comment_id", "user_id", name="uq_comment_likes_comment_user"),
)

# ============================================================================
# LIKES TABLE (post likes)
# ============================================================================
likes_table = Table(
    "likes",
    metadata,
    Column("id", BigInteger, Identity(), primary_key=True),
    Column("post_id", DOCUMENT_ID, nullable=False),
    Column(
        "user_id",
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("post_id", "user_id", name="uq_likes_post_user"),
)

Index("idx_likes_user", likes_table.c.user_id)

# ============================================================================
# FOLLOWS TABLE
# ============================================================================
follows_table = Table(
    "follows",
    metadata,
    Column("id", BigInteger, Identity(), primary_key=True),
    Column(
        "follower_id",
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "following_id",
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("follower_id", "following_id", name="uq_follows_pair"),
    CheckConstraint("follower_id <> following_id", name="ck_follows_not_self"),
)

Index("idx_follows_following", follows_table.c.following_id)

# ============================================================================
# FRIEND REQUESTS TABLE
# ============================================================================
friend_requests_table = Table(
    "friend_requests",
    metadata,
    Column("id", BigInteger, Identity(), primary_key=True),
    Column(
        "sender_id",
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "receiver_id",
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("status", String(16), nullable=False, server_default="pending"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "status IN ('pending', 'accepted', 'rejected')",
        name="ck_friend_requests_status",
    ),
    CheckConstraint("sender_id <> receiver_id", name="ck_friend_requests_not_self"),
)

# One request per unordered pair of users
Index(
    "uq_friend_requests_pair",
    func.least(friend_requests_table.c.sender_id, friend_requests_table.c.receiver_id),
    func.greatest(
        friend_requests_table.c.sender_id, friend_requests_table.c.receiver_id
    ),
    unique=True,
)
Index(
    "idx_friend_requests_receiver_status",
    friend_requests_table.c.receiver_id,
    friend_requests_table.c.status,
)

# ============================================================================
# SAVED POSTS TABLE
# ============================================================================
saved_posts_table = Table(
    "saved_posts",
    metadata,
    Column("id", BigInteger, Identity(), primary_key=True),
    Column(
        "user_id",
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("post_id", DOCUMENT_ID, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "post_id", name="uq_saved_posts_user_post"),
)

# ============================================================================
# STORY ACTIVITY TABLES
# ============================================================================
story_seen_table = Table(
    "story_seen",
    metadata,
    Column("id", BigInteger, Identity(), primary_key=True),
    Column("story_id", DOCUMENT_ID, nullable=False),
    Column(
        "user_id",
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "seen_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("story_id", "user_id", name="uq_story_seen_story_user"),
)

story_reactions_table = Table(
    "story_reactions",
    metadata,
    Column("id", BigInteger, Identity(), primary_key=True),
    Column("story_id", DOCUMENT_ID, nullable=False),
    Column(
        "user_id",
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("reaction", String(32), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_story_reactions_story", story_reactions_table.c.story_id)

# ============================================================================
# NOTIFICATIONS TABLE
# ============================================================================
notifications_table = Table(
    "notifications",
    metadata,
    Column("id", BigInteger, Identity(), primary_key=True),
    Column(
        "recipient_id",
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "actor_id",
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("type", String(32), nullable=False),
    Column("target_id", String(64), nullable=True),
    Column("target_type", String(16), nullable=True),
    Column("preview_image_url", Text, nullable=True),
    Column("message", Text, nullable=False),
    Column("is_read", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_notifications_recipient_created",
    notifications_table.c.recipient_id,
    notifications_table.c.created_at.desc(),
)
Index(
    "idx_notifications_recipient_unread",
    notifications_table.c.recipient_id,
    notifications_table.c.is_read,
)

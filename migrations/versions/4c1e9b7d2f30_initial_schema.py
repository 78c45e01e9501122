"""initial_schema

Create the relational schema for the social API:
- Users (local password and/or external identity provider subject)
- Comments and comment likes
- Post likes, follows, friend requests and saved posts
- Story seen markers and reactions
- Notifications

Posts and stories live in the document store and are referenced by
their 32-char hex ids without foreign keys.

Revision ID: 4c1e9b7d2f30
Revises:
Create Date: 2026-10-19 10:12:44.318205

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "4c1e9b7d2f30"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_column() -> sa.Column:
    return sa.Column("id", sa.BigInteger(), sa.Identity(), nullable=False)


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def _user_fk(name: str) -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint([name], ["users.id"], ondelete="CASCADE")


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # USERS table (credential store)
    # ========================================================================
    op.create_table(
        "users",
        _id_column(),
        sa.Column("username", sa.String(128), nullable=False),
        sa.Column("display_name", sa.String(128), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("password_hash", sa.String(255), nullable=True),
        sa.Column("firebase_uid", sa.String(128), nullable=True),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("bio", sa.Text(), nullable=False, server_default=""),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("is_private", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("followers_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("following_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("posts_count", sa.Integer(), nullable=False, server_default="0"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username", name="uq_users_username"),
        sa.UniqueConstraint("email", name="uq_users_email"),
        sa.UniqueConstraint("firebase_uid", name="uq_users_firebase_uid"),
        sa.CheckConstraint(
            "password_hash IS NOT NULL OR firebase_uid IS NOT NULL",
            name="ck_users_auth_method",
        ),
        sa.CheckConstraint(
            "followers_count >= 0 AND following_count >= 0 AND posts_count >= 0",
            name="ck_users_counters_non_negative",
        ),
    )

    # ========================================================================
    # COMMENTS and COMMENT_LIKES tables
    # ========================================================================
    op.create_table(
        "comments",
        _id_column(),
        sa.Column("post_id", sa.String(32), nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        _user_fk("user_id"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "char_length(content) BETWEEN 1 AND 500",
            name="ck_comments_content_length",
        ),
    )
    op.create_index(
        "idx_comments_post_created", "comments", ["post_id", "created_at"]
    )

    op.create_table(
        "comment_likes",
        _id_column(),
        sa.Column("comment_id", sa.BigInteger(), nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        _timestamp("created_at"),
        sa.ForeignKeyConstraint(["comment_id"], ["comments.id"], ondelete="CASCADE"),
        _user_fk("user_id"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "comment_id", "user_id", name="uq_comment_likes_comment_user"
        ),
    )

    # ========================================================================
    # LIKES table (post likes)
    # ========================================================================
    op.create_table(
        "likes",
        _id_column(),
        sa.Column("post_id", sa.String(32), nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        _timestamp("created_at"),
        _user_fk("user_id"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("post_id", "user_id", name="uq_likes_post_user"),
    )
    op.create_index("idx_likes_user", "likes", ["user_id"])

    # ========================================================================
    # FOLLOWS table
    # ========================================================================
    op.create_table(
        "follows",
        _id_column(),
        sa.Column("follower_id", sa.BigInteger(), nullable=False),
        sa.Column("following_id", sa.BigInteger(), nullable=False),
        _timestamp("created_at"),
        _user_fk("follower_id"),
        _user_fk("following_id"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("follower_id", "following_id", name="uq_follows_pair"),
        sa.CheckConstraint("follower_id <> following_id", name="ck_follows_not_self"),
    )
    op.create_index("idx_follows_following", "follows", ["following_id"])

    # ========================================================================
    # FRIEND_REQUESTS table
    # ========================================================================
    op.create_table(
        "friend_requests",
        _id_column(),
        sa.Column("sender_id", sa.BigInteger(), nullable=False),
        sa.Column("receiver_id", sa.BigInteger(), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="pending"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        _user_fk("sender_id"),
        _user_fk("receiver_id"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'rejected')",
            name="ck_friend_requests_status",
        ),
        sa.CheckConstraint(
            "sender_id <> receiver_id", name="ck_friend_requests_not_self"
        ),
    )
    # One request per unordered pair of users
    op.execute(
        "CREATE UNIQUE INDEX uq_friend_requests_pair ON friend_requests "
        "(LEAST(sender_id, receiver_id), GREATEST(sender_id, receiver_id))"
    )
    op.create_index(
        "idx_friend_requests_receiver_status",
        "friend_requests",
        ["receiver_id", "status"],
    )

    # ========================================================================
    # SAVED_POSTS table
    # ========================================================================
    op.create_table(
        "saved_posts",
        _id_column(),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("post_id", sa.String(32), nullable=False),
        _timestamp("created_at"),
        _user_fk("user_id"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "post_id", name="uq_saved_posts_user_post"),
    )

    # ========================================================================
    # STORY activity tables
    # ========================================================================
    op.create_table(
        "story_seen",
        _id_column(),
        sa.Column("story_id", sa.String(32), nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        _timestamp("seen_at"),
        _user_fk("user_id"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("story_id", "user_id", name="uq_story_seen_story_user"),
    )

    op.create_table(
        "story_reactions",
        _id_column(),
        sa.Column("story_id", sa.String(32), nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("reaction", sa.String(32), nullable=False),
        _timestamp("created_at"),
        _user_fk("user_id"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_story_reactions_story", "story_reactions", ["story_id"])

    # ========================================================================
    # NOTIFICATIONS table
    # ========================================================================
    op.create_table(
        "notifications",
        _id_column(),
        sa.Column("recipient_id", sa.BigInteger(), nullable=False),
        sa.Column("actor_id", sa.BigInteger(), nullable=False),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("target_id", sa.String(64), nullable=True),
        sa.Column("target_type", sa.String(16), nullable=True),
        sa.Column("preview_image_url", sa.Text(), nullable=True),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default="false"),
        _timestamp("created_at"),
        _user_fk("recipient_id"),
        _user_fk("actor_id"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_notifications_recipient_created",
        "notifications",
        ["recipient_id", sa.text("created_at DESC")],
    )
    op.create_index(
        "idx_notifications_recipient_unread",
        "notifications",
        ["recipient_id", "is_read"],
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("notifications")
    op.drop_table("story_reactions")
    op.drop_table("story_seen")
    op.drop_table("saved_posts")
    op.drop_table("friend_requests")
    op.drop_table("follows")
    op.drop_table("likes")
    op.drop_table("comment_likes")
    op.drop_table("comments")
    op.drop_table("users")

"""initial_schema

Create the schema for the comments service:
- Users and owners (mirrors of host platform records, read only)
- Comments (moderation status, guest identity, emoji as shortcodes)
- Flags and votes (one per user, or per guest session)
- Subscriptions (whole thread or replies to one comment)
- Structure elements (thread order as a materialized path)

Revision ID: 3c7d1f9a2b64
Revises:
Create Date: 2026-10-17 09:12:44.318205

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c7d1f9a2b64"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE comment_status AS ENUM
                ('pending', 'approved', 'spam', 'trashed');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE comment_vote_type AS ENUM ('up', 'down');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # USERS table (synced from the host platform)
    # ========================================================================
    op.create_table(
        "users",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("first_name", sa.String(255), nullable=True),
        sa.Column("last_name", sa.String(255), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_users_email", "users", ["email"])

    # ========================================================================
    # OWNERS table (content items comments attach to, synced from the host)
    # ========================================================================
    op.create_table(
        "owners",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("site_id", sa.Integer(), nullable=False),
        sa.Column("type", sa.String(255), nullable=False),  # 'entry', 'product'...
        sa.Column("title", sa.Text(), nullable=False, server_default=""),
        sa.Column("author_id", sa.UUID(), nullable=True),
        sa.Column(
            "comments_enabled", sa.Boolean(), nullable=False, server_default="true"
        ),
        sa.Column("deleted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id", "site_id"),
    )

    # ========================================================================
    # COMMENTS table
    # ========================================================================
    op.create_table(
        "comments",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("owner_id", sa.UUID(), nullable=False),
        sa.Column("owner_type", sa.String(255), nullable=False, server_default=""),
        sa.Column("owner_site_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=True),  # NULL for guests
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("url", sa.Text(), nullable=True),
        sa.Column("comment", sa.Text(), nullable=False),
        sa.Column(
            "status",
            postgresql.ENUM(
                "pending",
                "approved",
                "spam",
                "trashed",
                name="comment_status",
                create_type=False,
            ),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("ip_address", sa.String(45), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.Column("comment_date", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_comments_owner", "comments", ["owner_id", "owner_site_id", "status"]
    )
    op.create_index("idx_comments_user_id", "comments", ["user_id"])
    op.create_index("idx_comments_comment_date", "comments", ["comment_date"])

    # ========================================================================
    # COMMENT_FLAGS table
    # ========================================================================
    op.create_table(
        "comment_flags",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("comment_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=True),
        sa.Column("session_id", sa.String(64), nullable=True),  # Guest identity
        sa.Column("last_ip", sa.String(45), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["comment_id"], ["comments.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("comment_id", "user_id", name="uq_flag_user"),
        sa.CheckConstraint(
            "user_id IS NOT NULL OR session_id IS NOT NULL", name="flag_has_identity"
        ),
    )
    op.create_index("idx_comment_flags_comment_id", "comment_flags", ["comment_id"])
    op.create_index(
        "uq_flag_session",
        "comment_flags",
        ["comment_id", "session_id"],
        unique=True,
        postgresql_where=sa.text("user_id IS NULL"),
    )

    # ========================================================================
    # COMMENT_VOTES table
    # ========================================================================
    op.create_table(
        "comment_votes",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("comment_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=True),
        sa.Column("session_id", sa.String(64), nullable=True),
        sa.Column(
            "vote_type",
            postgresql.ENUM(
                "up", "down", name="comment_vote_type", create_type=False
            ),
            nullable=False,
            server_default="up",
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["comment_id"], ["comments.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("comment_id", "user_id", name="uq_vote_user"),
        sa.CheckConstraint(
            "user_id IS NOT NULL OR session_id IS NOT NULL", name="vote_has_identity"
        ),
    )
    op.create_index(
        "idx_comment_votes_comment", "comment_votes", ["comment_id", "vote_type"]
    )
    op.create_index(
        "uq_vote_session",
        "comment_votes",
        ["comment_id", "session_id"],
        unique=True,
        postgresql_where=sa.text("user_id IS NULL"),
    )

    # ========================================================================
    # COMMENT_SUBSCRIPTIONS table
    # ========================================================================
    op.create_table(
        "comment_subscriptions",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("owner_id", sa.UUID(), nullable=False),
        sa.Column("owner_site_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=True),
        sa.Column("comment_id", sa.UUID(), nullable=True),  # NULL = whole thread
        sa.Column("subscribed", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "owner_id",
            "owner_site_id",
            "user_id",
            "comment_id",
            name="uq_subscription_key",
            postgresql_nulls_not_distinct=True,
        ),
    )
    op.create_index(
        "idx_comment_subscriptions_owner",
        "comment_subscriptions",
        ["owner_id", "owner_site_id"],
    )

    # ========================================================================
    # STRUCTURE_ELEMENTS table (thread order)
    # ========================================================================
    op.create_table(
        "structure_elements",
        sa.Column("structure_id", sa.UUID(), nullable=False),
        sa.Column("element_id", sa.UUID(), nullable=False),
        sa.Column("parent_id", sa.UUID(), nullable=True),
        sa.Column("level", sa.Integer(), nullable=False),
        # Zero-padded segment per level; ordering by path is depth-first
        sa.Column("path", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("structure_id", "element_id"),
        sa.CheckConstraint("level >= 1", name="level_positive"),
    )
    op.create_index(
        "idx_structure_elements_path", "structure_elements", ["structure_id", "path"]
    )
    op.create_index(
        "idx_structure_elements_parent",
        "structure_elements",
        ["structure_id", "parent_id"],
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("structure_elements")
    op.drop_table("comment_subscriptions")
    op.drop_table("comment_votes")
    op.drop_table("comment_flags")
    op.drop_table("comments")
    op.drop_table("owners")
    op.drop_table("users")

    op.execute("DROP TYPE IF EXISTS comment_vote_type")
    op.execute("DROP TYPE IF EXISTS comment_status")

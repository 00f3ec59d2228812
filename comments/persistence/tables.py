"""SQLAlchemy table definitions for the comments service.

These table definitions are used for Core queries and manual mapping.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (owned by the host platform, read only here)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("email", String(255), nullable=True),
    Column("first_name", String(255), nullable=True),
    Column("last_name", String(255), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# OWNERS TABLE (content items of the host platform, read only here)
# ============================================================================
owners_table = Table(
    "owners",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("site_id", Integer, primary_key=True),
    Column("type", String(255), nullable=False),  # e.g. 'entry', 'product'
    Column("title", Text, nullable=False, server_default=""),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    ),
    Column("comments_enabled", Boolean, nullable=False, server_default="true"),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("owner_id", UUID, nullable=False),
    Column("owner_type", String(255), nullable=False, server_default=""),
    Column("owner_site_id", Integer, nullable=False),
    Column(
        "user_id", UUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    ),
    Column("name", String(255), nullable=True),  # Guests only
    Column("email", String(255), nullable=True),  # Guests only
    Column("url", Text, nullable=True),  # Guests only
    Column("comment", Text, nullable=False),  # Emoji stored as shortcodes
    Column(
        "status",
        Enum(
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
    Column("ip_address", String(45), nullable=True),
    Column("user_agent", Text, nullable=True),
    Column("comment_date", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_comments_owner",
    comments_table.c.owner_id,
    comments_table.c.owner_site_id,
    comments_table.c.status,
)
Index("idx_comments_user_id", comments_table.c.user_id)
Index("idx_comments_comment_date", comments_table.c.comment_date)

# ============================================================================
# FLAGS TABLE
# ============================================================================
comment_flags_table = Table(
    "comment_flags",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "comment_id",
        UUID,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=True),
    Column("session_id", String(64), nullable=True),  # Guest identity
    Column("last_ip", String(45), nullable=True),  # Only with IP retention on
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("comment_id", "user_id", name="uq_flag_user"),
    CheckConstraint(
        "user_id IS NOT NULL OR session_id IS NOT NULL", name="flag_has_identity"
    ),
)

Index("idx_comment_flags_comment_id", comment_flags_table.c.comment_id)
# One flag per guest session, only where no user is attached
Index(
    "uq_flag_session",
    comment_flags_table.c.comment_id,
    comment_flags_table.c.session_id,
    unique=True,
    postgresql_where=comment_flags_table.c.user_id.is_(None),
)

# ============================================================================
# VOTES TABLE
# ============================================================================
comment_votes_table = Table(
    "comment_votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "comment_id",
        UUID,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=True),
    Column("session_id", String(64), nullable=True),
    Column(
        "vote_type",
        Enum("up", "down", name="comment_vote_type", create_type=False),
        nullable=False,
        server_default="up",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("comment_id", "user_id", name="uq_vote_user"),
    CheckConstraint(
        "user_id IS NOT NULL OR session_id IS NOT NULL", name="vote_has_identity"
    ),
)

Index(
    "idx_comment_votes_comment",
    comment_votes_table.c.comment_id,
    comment_votes_table.c.vote_type,
)
Index(
    "uq_vote_session",
    comment_votes_table.c.comment_id,
    comment_votes_table.c.session_id,
    unique=True,
    postgresql_where=comment_votes_table.c.user_id.is_(None),
)

# ============================================================================
# SUBSCRIPTIONS TABLE
# ============================================================================
comment_subscriptions_table = Table(
    "comment_subscriptions",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("owner_id", UUID, nullable=False),
    Column("owner_site_id", Integer, nullable=False),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=True),
    Column("comment_id", UUID, nullable=True),  # NULL = whole thread
    Column("subscribed", Boolean, nullable=False, server_default="true"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint(
        "owner_id",
        "owner_site_id",
        "user_id",
        "comment_id",
        name="uq_subscription_key",
        postgresql_nulls_not_distinct=True,
    ),
)

Index(
    "idx_comment_subscriptions_owner",
    comment_subscriptions_table.c.owner_id,
    comment_subscriptions_table.c.owner_site_id,
)

# ============================================================================
# STRUCTURE ELEMENTS TABLE (hierarchical ordering, materialized path)
# ============================================================================
structure_elements_table = Table(
    "structure_elements",
    metadata,
    Column("structure_id", UUID, primary_key=True),
    Column("element_id", UUID, primary_key=True),
    Column("parent_id", UUID, nullable=True),
    Column("level", Integer, nullable=False),
    # Zero-padded segments, one per level: sorts in depth-first order
    Column("path", String, nullable=False),
    CheckConstraint("level >= 1", name="level_positive"),
)

Index(
    "idx_structure_elements_path",
    structure_elements_table.c.structure_id,
    structure_elements_table.c.path,
)
Index(
    "idx_structure_elements_parent",
    structure_elements_table.c.structure_id,
    structure_elements_table.c.parent_id,
)

"""SQLAlchemy table definitions for DealSpark.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# DEALS TABLE
# ============================================================================
deals_table = Table(
    "deals",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("slug", String(120), nullable=False, unique=True),
    Column("title", String(300), nullable=False),
    Column("description", Text, nullable=True),
    Column("original_price", Numeric(12, 2), nullable=True),
    Column("discounted_price", Numeric(12, 2), nullable=True),
    Column("discount_percentage", Integer, nullable=True),
    Column("affiliate_link", Text, nullable=True),
    Column("image_url", Text, nullable=True),
    # Owned by the catalogue; not enforced here
    Column("category_id", UUID, nullable=True),
    Column("shop_id", UUID, nullable=True),
    # Issued by the external identity provider
    Column("submitter_id", UUID, nullable=False),
    Column(
        "status",
        Enum(
            "draft",
            "pending_review",
            "published",
            "rejected",
            "expired",
            "removed",
            name="deal_status",
            create_type=False,
        ),
        nullable=False,
        server_default="draft",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("published_at", TIMESTAMP(timezone=True), nullable=True),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint(
        "discount_percentage IS NULL OR "
        "(discount_percentage >= 0 AND discount_percentage <= 100)",
        name="discount_percentage_range",
    ),
)

Index("idx_deals_status_created_at", deals_table.c.status, deals_table.c.created_at.desc())
Index("idx_deals_submitter_id", deals_table.c.submitter_id)
Index("idx_deals_category_id", deals_table.c.category_id)
Index("idx_deals_shop_id", deals_table.c.shop_id)
Index("idx_deals_expires_at", deals_table.c.expires_at)

# ============================================================================
# DEAL_VOTES TABLE (the vote ledger)
# ============================================================================
deal_votes_table = Table(
    "deal_votes",
    metadata,
    Column("deal_id", UUID, ForeignKey("deals.id", ondelete="CASCADE"), nullable=False),
    Column("user_id", UUID, nullable=False),
    Column(
        "direction",
        Enum("up", "down", name="vote_direction", create_type=False),
        nullable=False,
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("deal_id", "user_id", name="uq_deal_vote"),
)

Index("idx_deal_votes_user_id", deal_votes_table.c.user_id)

# ============================================================================
# DEAL_ENGAGEMENT TABLE (derived counters, rebuildable from the ledger)
# ============================================================================
deal_engagement_table = Table(
    "deal_engagement",
    metadata,
    Column(
        "deal_id",
        UUID,
        ForeignKey("deals.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("upvote_count", Integer, nullable=False, server_default="0"),
    Column("downvote_count", Integer, nullable=False, server_default="0"),
    Column("view_count", Integer, nullable=False, server_default="0"),
    Column("comment_count", Integer, nullable=False, server_default="0"),
    CheckConstraint(
        "upvote_count >= 0 AND downvote_count >= 0 "
        "AND view_count >= 0 AND comment_count >= 0",
        name="engagement_non_negative",
    ),
)

# ============================================================================
# DEAL_VIEWS TABLE (view deduplication window per viewer)
# ============================================================================
deal_views_table = Table(
    "deal_views",
    metadata,
    Column("deal_id", UUID, ForeignKey("deals.id", ondelete="CASCADE"), nullable=False),
    Column("viewer_key", String(255), nullable=False),
    Column("last_counted_at", TIMESTAMP(timezone=True), nullable=False),
    UniqueConstraint("deal_id", "viewer_key", name="uq_deal_viewer"),
)

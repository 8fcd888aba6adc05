"""initial_schema

Create the schema of the deal engine:
- Deals (moderation status, prices, expiry)
- Deal votes (the vote ledger: one current vote per user and deal)
- Deal engagement (derived counters, rebuildable from the ledger)
- Deal views (view deduplication window per viewer)

Users, categories and shops live in other services; their IDs are stored
without foreign keys.

Revision ID: 3f2c9a7d1e40
Revises:
Create Date: 2026-10-19 09:12:44.318205

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f2c9a7d1e40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE deal_status AS ENUM (
                'draft', 'pending_review', 'published',
                'rejected', 'expired', 'removed'
            );
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE vote_direction AS ENUM ('up', 'down');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # DEALS table
    # ========================================================================
    op.create_table(
        "deals",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("slug", sa.String(120), nullable=False),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("original_price", sa.Numeric(12, 2), nullable=True),
        sa.Column("discounted_price", sa.Numeric(12, 2), nullable=True),
        sa.Column("discount_percentage", sa.Integer(), nullable=True),
        sa.Column("affiliate_link", sa.Text(), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("category_id", sa.UUID(), nullable=True),
        sa.Column("shop_id", sa.UUID(), nullable=True),
        sa.Column("submitter_id", sa.UUID(), nullable=False),
        sa.Column(
            "status",
            postgresql.ENUM(
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
        sa.Column("published_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug", name="deals_slug_key"),
        sa.CheckConstraint(
            "discount_percentage IS NULL OR "
            "(discount_percentage >= 0 AND discount_percentage <= 100)",
            name="discount_percentage_range",
        ),
    )
    # Newest listing and moderation queue
    op.create_index(
        "idx_deals_status_created_at",
        "deals",
        ["status", sa.text("created_at DESC")],
    )
    op.create_index("idx_deals_submitter_id", "deals", ["submitter_id"])
    op.create_index("idx_deals_category_id", "deals", ["category_id"])
    op.create_index("idx_deals_shop_id", "deals", ["shop_id"])
    # Expiry sweep
    op.create_index("idx_deals_expires_at", "deals", ["expires_at"])

    # ========================================================================
    # DEAL_VOTES table (the vote ledger)
    # ========================================================================
    op.create_table(
        "deal_votes",
        sa.Column("deal_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column(
            "direction",
            postgresql.ENUM("up", "down", name="vote_direction", create_type=False),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["deal_id"], ["deals.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("deal_id", "user_id", name="uq_deal_vote"),
    )
    # Batch vote-state lookups for listings
    op.create_index("idx_deal_votes_user_id", "deal_votes", ["user_id"])

    # ========================================================================
    # DEAL_ENGAGEMENT table (derived counters)
    # ========================================================================
    op.create_table(
        "deal_engagement",
        sa.Column("deal_id", sa.UUID(), nullable=False),
        sa.Column("upvote_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("downvote_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("view_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("comment_count", sa.Integer(), nullable=False, server_default="0"),
        sa.ForeignKeyConstraint(["deal_id"], ["deals.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("deal_id"),
        sa.CheckConstraint(
            "upvote_count >= 0 AND downvote_count >= 0 "
            "AND view_count >= 0 AND comment_count >= 0",
            name="engagement_non_negative",
        ),
    )

    # ========================================================================
    # DEAL_VIEWS table (view deduplication)
    # ========================================================================
    op.create_table(
        "deal_views",
        sa.Column("deal_id", sa.UUID(), nullable=False),
        sa.Column("viewer_key", sa.String(255), nullable=False),
        sa.Column("last_counted_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["deal_id"], ["deals.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("deal_id", "viewer_key", name="uq_deal_viewer"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("deal_views")
    op.drop_table("deal_engagement")
    op.drop_index("idx_deal_votes_user_id", table_name="deal_votes")
    op.drop_table("deal_votes")
    op.drop_index("idx_deals_expires_at", table_name="deals")
    op.drop_index("idx_deals_shop_id", table_name="deals")
    op.drop_index("idx_deals_category_id", table_name="deals")
    op.drop_index("idx_deals_submitter_id", table_name="deals")
    op.drop_index("idx_deals_status_created_at", table_name="deals")
    op.drop_table("deals")

    op.execute("DROP TYPE IF EXISTS vote_direction")
    op.execute("DROP TYPE IF EXISTS deal_status")

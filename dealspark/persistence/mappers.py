"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from dealspark.domain.model import Deal, EngagementSnapshot, Vote
from dealspark.domain.value import (
    CategoryId,
    DealId,
    DealStatus,
    ShopId,
    Slug,
    UserId,
    VoteDirection,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_deal(row: Dict[str, Any]) -> Deal:
    """Convert database row to Deal domain model.

    Args:
        row: Database row as dict

    Returns:
        Deal domain model
    """
    return Deal(
        id=DealId(_uuid(row["id"])),
        slug=Slug(row["slug"]),
        title=row["title"],
        description=row.get("description"),
        original_price=row.get("original_price"),
        discounted_price=row.get("discounted_price"),
        discount_percentage=row.get("discount_percentage"),
        affiliate_link=row.get("affiliate_link"),
        image_url=row.get("image_url"),
        category_id=(
            CategoryId(_uuid(row["category_id"])) if row.get("category_id") else None
        ),
        shop_id=ShopId(_uuid(row["shop_id"])) if row.get("shop_id") else None,
        submitter_id=UserId(_uuid(row["submitter_id"])),
        status=DealStatus(row["status"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        published_at=row.get("published_at"),
        expires_at=row.get("expires_at"),
    )


def deal_to_dict(deal: Deal) -> Dict[str, Any]:
    """Convert Deal domain model to database dict.

    Args:
        deal: Deal domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = deal.model_dump()
    data["slug"] = str(deal.slug)
    data["status"] = deal.status.value
    return data


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model."""
    return Vote(
        deal_id=DealId(_uuid(row["deal_id"])),
        user_id=UserId(_uuid(row["user_id"])),
        direction=VoteDirection(row["direction"]),
        updated_at=row["updated_at"],
    )


def row_to_snapshot(row: Dict[str, Any]) -> EngagementSnapshot:
    """Convert an engagement row to an EngagementSnapshot."""
    return EngagementSnapshot(
        deal_id=DealId(_uuid(row["deal_id"])),
        upvote_count=row["upvote_count"],
        downvote_count=row["downvote_count"],
        view_count=row["view_count"],
        comment_count=row["comment_count"],
    )

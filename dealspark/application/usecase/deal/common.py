"""Response models shared by the deal use cases."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from dealspark.domain.model import Deal, EngagementSnapshot
from dealspark.domain.value import DealStatus, VoteState


class EngagementItem(BaseModel):
    """Engagement counters of a deal."""

    upvote_count: int
    downvote_count: int
    net_score: int
    view_count: int
    comment_count: int

    @classmethod
    def from_snapshot(cls, snapshot: EngagementSnapshot) -> "EngagementItem":
        return cls(
            upvote_count=snapshot.upvote_count,
            downvote_count=snapshot.downvote_count,
            net_score=snapshot.net_score,
            view_count=snapshot.view_count,
            comment_count=snapshot.comment_count,
        )


class DealItem(BaseModel):
    """Deal as returned by the API."""

    deal_id: str
    slug: str
    title: str
    description: Optional[str]
    original_price: Optional[Decimal]
    discounted_price: Optional[Decimal]
    discount_percentage: Optional[int]
    affiliate_link: Optional[str]
    image_url: Optional[str]
    category_id: Optional[str]
    shop_id: Optional[str]
    submitter_id: str
    status: DealStatus
    created_at: datetime
    updated_at: datetime
    published_at: Optional[datetime]
    expires_at: Optional[datetime]

    @classmethod
    def from_deal(cls, deal: Deal) -> "DealItem":
        return cls(
            deal_id=str(deal.id),
            slug=str(deal.slug),
            title=deal.title,
            description=deal.description,
            original_price=deal.original_price,
            discounted_price=deal.discounted_price,
            discount_percentage=deal.discount_percentage,
            affiliate_link=deal.affiliate_link,
            image_url=deal.image_url,
            category_id=str(deal.category_id) if deal.category_id else None,
            shop_id=str(deal.shop_id) if deal.shop_id else None,
            submitter_id=str(deal.submitter_id),
            status=deal.status,
            created_at=deal.created_at,
            updated_at=deal.updated_at,
            published_at=deal.published_at,
            expires_at=deal.expires_at,
        )


class RankedDealItem(BaseModel):
    """Listing entry: deal, counters, score and the caller's vote."""

    deal: DealItem
    engagement: EngagementItem
    heat_score: float
    vote_state: VoteState = VoteState.NO_VOTE

"""Deal aggregate root.

Deals are user-submitted offers that travel through the moderation
workflow before they become publicly visible.
"""

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

from pydantic import Field, model_validator

from dealspark.domain.model.common import DomainModel
from dealspark.domain.value import (
    CategoryId,
    DealId,
    DealStatus,
    ShopId,
    Slug,
    UserId,
)


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def calculate_discount(
    original_price: Decimal | None, discounted_price: Decimal | None
) -> int | None:
    """Whole-percent discount, or None when it cannot be computed."""
    if original_price is None or discounted_price is None:
        return None
    if original_price <= 0 or discounted_price >= original_price:
        return None
    ratio = (original_price - discounted_price) / original_price * 100
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class Deal(DomainModel):
    """Deal aggregate root.

    Business rules:
    - Status changes only through the moderation workflow
    - published_at is set once, on first publication, and never cleared
    - Engagement counters are not stored here (see EngagementSnapshot)
    """

    id: DealId
    slug: Slug
    title: str = Field(min_length=1, max_length=300)
    description: Optional[str] = Field(default=None, max_length=10000)
    original_price: Optional[Decimal] = Field(default=None, ge=0)
    discounted_price: Optional[Decimal] = Field(default=None, ge=0)
    discount_percentage: Optional[int] = Field(default=None, ge=0, le=100)
    affiliate_link: Optional[str] = None
    image_url: Optional[str] = None
    category_id: Optional[CategoryId] = None
    shop_id: Optional[ShopId] = None
    submitter_id: UserId
    status: DealStatus = DealStatus.DRAFT
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    published_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def derive_discount(cls, data: Any) -> Any:
        """Derive the discount percentage from the two prices when absent."""
        if not isinstance(data, dict) or data.get("discount_percentage") is not None:
            return data
        original = data.get("original_price")
        discounted = data.get("discounted_price")
        if original is None or discounted is None:
            return data
        try:
            discount = calculate_discount(
                Decimal(str(original)), Decimal(str(discounted))
            )
        except InvalidOperation:
            # Leave malformed prices to field validation
            return data
        return {**data, "discount_percentage": discount}

    def is_expired(self, now: datetime) -> bool:
        """Whether the deal's expiry time has passed."""
        return self.expires_at is not None and self.expires_at <= now

    def is_visible(self, now: datetime) -> bool:
        """Whether the deal is publicly listed at ``now``."""
        return self.status == DealStatus.PUBLISHED and not self.is_expired(now)

    def with_status(self, status: DealStatus, now: datetime) -> "Deal":
        """Return a copy in ``status``; stamps published_at on first publish."""
        published_at = self.published_at
        if status == DealStatus.PUBLISHED and published_at is None:
            published_at = now
        return self.model_copy(
            update={"status": status, "updated_at": now, "published_at": published_at}
        )

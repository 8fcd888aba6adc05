"""Create deal use case."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

import logfire
from pydantic import BaseModel

from dealspark.domain.service import DealService, IdentityService
from dealspark.domain.value import CategoryId, ShopId

from .common import DealItem


class CreateDealRequest(BaseModel):
    """Create deal request."""

    token: Optional[str] = None
    title: str
    description: Optional[str] = None
    original_price: Optional[Decimal] = None
    discounted_price: Optional[Decimal] = None
    affiliate_link: Optional[str] = None
    image_url: Optional[str] = None
    category_id: Optional[UUID] = None
    shop_id: Optional[UUID] = None
    expires_at: Optional[datetime] = None


class CreateDealResponse(BaseModel):
    """Create deal response."""

    deal: DealItem


class CreateDealUseCase:
    """Use case for submitting a new deal as a draft."""

    def __init__(
        self, identity_service: IdentityService, deal_service: DealService
    ) -> None:
        """Initialize create deal use case.

        Args:
            identity_service: Identity gate
            deal_service: Deal domain service
        """
        self.identity_service = identity_service
        self.deal_service = deal_service

    async def execute(self, request: CreateDealRequest) -> CreateDealResponse:
        """Execute create deal flow.

        Steps:
        1. Resolve the caller from the identity token
        2. Create the draft with a generated slug and derived discount

        Raises:
            Unauthenticated: If the token is missing or invalid
            Forbidden: If the caller is not at least a member
            ValidationError: If the deal fields are invalid
        """
        with logfire.span("create_deal.execute", title=request.title):
            principal = self.identity_service.resolve(request.token)
            deal = await self.deal_service.create_deal(
                principal,
                title=request.title,
                description=request.description,
                original_price=request.original_price,
                discounted_price=request.discounted_price,
                affiliate_link=request.affiliate_link,
                image_url=request.image_url,
                category_id=CategoryId(request.category_id)
                if request.category_id
                else None,
                shop_id=ShopId(request.shop_id) if request.shop_id else None,
                expires_at=request.expires_at,
            )
            return CreateDealResponse(deal=DealItem.from_deal(deal))

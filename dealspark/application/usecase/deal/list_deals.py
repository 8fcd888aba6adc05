"""List deals use case."""

from typing import Optional
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from dealspark.domain.service import IdentityService, RankingService, VoteService
from dealspark.domain.value import CategoryId, DealFilter, DealSort, ShopId

from .common import DealItem, EngagementItem, RankedDealItem


class ListDealsRequest(BaseModel):
    """List deals request."""

    token: Optional[str] = None
    sort: DealSort = DealSort.HOT
    category_id: Optional[UUID] = None
    shop_id: Optional[UUID] = None
    page: int = Field(default=1, ge=1)
    page_size: Optional[int] = Field(default=None, ge=1, le=100)


class ListDealsResponse(BaseModel):
    """List deals response."""

    deals: list[RankedDealItem]
    sort: DealSort
    total: int
    page: int
    page_size: int
    has_next: bool


class ListDealsUseCase:
    """Use case for the public "Hot" and "Newest" listings."""

    def __init__(
        self,
        identity_service: IdentityService,
        ranking_service: RankingService,
        vote_service: VoteService,
    ) -> None:
        """Initialize list deals use case.

        Args:
            identity_service: Identity gate
            ranking_service: Ranking domain service
            vote_service: Vote domain service (caller's vote states)
        """
        self.identity_service = identity_service
        self.ranking_service = ranking_service
        self.vote_service = vote_service

    async def execute(self, request: ListDealsRequest) -> ListDealsResponse:
        """Execute list deals flow.

        Args:
            request: Sort, filters and pagination

        Returns:
            One page of visible deals with the caller's vote on each
        """
        with logfire.span(
            "list_deals.execute", sort=request.sort.value, page=request.page
        ):
            principal = self.identity_service.resolve_optional(request.token)

            deal_filter = None
            if request.category_id or request.shop_id:
                deal_filter = DealFilter(
                    category_id=CategoryId(request.category_id)
                    if request.category_id
                    else None,
                    shop_id=ShopId(request.shop_id) if request.shop_id else None,
                )

            page = await self.ranking_service.list_deals(
                sort=request.sort,
                deal_filter=deal_filter,
                page=request.page,
                page_size=request.page_size,
            )

            vote_states = {}
            if principal.user_id is not None and page.items:
                vote_states = await self.vote_service.get_vote_states(
                    principal.user_id, [item.deal.id for item in page.items]
                )

            items = []
            for item in page.items:
                entry = RankedDealItem(
                    deal=DealItem.from_deal(item.deal),
                    engagement=EngagementItem.from_snapshot(item.snapshot),
                    heat_score=item.heat_score,
                )
                if item.deal.id in vote_states:
                    entry = entry.model_copy(
                        update={"vote_state": vote_states[item.deal.id]}
                    )
                items.append(entry)

            return ListDealsResponse(
                deals=items,
                sort=page.sort,
                total=page.total,
                page=page.page,
                page_size=page.page_size,
                has_next=page.has_next,
            )

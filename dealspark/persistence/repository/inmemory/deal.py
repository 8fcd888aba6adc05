"""In-memory deal repository for testing."""

from datetime import datetime
from typing import Optional

from dealspark.domain.model import Deal, EngagementSnapshot, RankedDeal
from dealspark.domain.repository import DealRepository
from dealspark.domain.service.heat import deal_age_hours, heat_score
from dealspark.domain.value import (
    DealFilter,
    DealId,
    DealSort,
    DealStatus,
    HeatParams,
    UserId,
)

from .database import InMemoryDatabase


def _newest_first(deals: list[Deal]) -> list[Deal]:
    # created_at DESC, id ASC
    ordered = sorted(deals, key=lambda d: d.id)
    ordered.sort(key=lambda d: d.created_at, reverse=True)
    return ordered


class InMemoryDealRepository(DealRepository):
    """In-memory implementation of DealRepository for testing."""

    def __init__(self, database: Optional[InMemoryDatabase] = None) -> None:
        self.database = database or InMemoryDatabase()

    def _visible(
        self,
        now: datetime,
        deal_filter: Optional[DealFilter] = None,
    ) -> list[Deal]:
        deals = [d for d in self.database.deals.values() if d.is_visible(now)]
        if deal_filter is not None and deal_filter.category_id is not None:
            deals = [d for d in deals if d.category_id == deal_filter.category_id]
        if deal_filter is not None and deal_filter.shop_id is not None:
            deals = [d for d in deals if d.shop_id == deal_filter.shop_id]
        return deals

    async def find_by_id(self, deal_id: DealId) -> Optional[Deal]:
        """Find a deal by ID."""
        return self.database.deals.get(deal_id)

    async def save(self, deal: Deal) -> Deal:
        """Save a deal; status and published_at are kept on update."""
        existing = self.database.deals.get(deal.id)
        if existing is not None:
            deal = deal.model_copy(
                update={
                    "status": existing.status,
                    "published_at": existing.published_at,
                }
            )
        self.database.deals[deal.id] = deal
        return deal

    async def transition_status(
        self,
        deal_id: DealId,
        from_status: DealStatus,
        to_status: DealStatus,
        now: datetime,
    ) -> Optional[Deal]:
        """Compare-and-set the deal status."""
        deal = self.database.deals.get(deal_id)
        if deal is None or deal.status != from_status:
            return None

        updated = deal.with_status(to_status, now)
        self.database.deals[deal_id] = updated
        return updated

    async def find_published(
        self,
        sort: DealSort,
        now: datetime,
        params: HeatParams,
        deal_filter: Optional[DealFilter] = None,
        limit: int = 30,
        offset: int = 0,
    ) -> list[RankedDeal]:
        """Find visible deals in ranking order."""
        ranked = []
        for deal in _newest_first(self._visible(now, deal_filter)):
            snapshot = self.database.engagement.get(
                deal.id, EngagementSnapshot.empty(deal.id)
            )
            ranked.append(
                RankedDeal(
                    deal=deal,
                    snapshot=snapshot,
                    heat_score=heat_score(snapshot, deal_age_hours(deal, now), params),
                )
            )

        if sort == DealSort.HOT:
            # Stable: ties keep the created_at DESC, id ASC order
            ranked.sort(key=lambda r: r.heat_score, reverse=True)

        return ranked[offset : offset + limit]

    async def count_published(
        self,
        now: datetime,
        deal_filter: Optional[DealFilter] = None,
        created_since: Optional[datetime] = None,
    ) -> int:
        """Count visible deals."""
        deals = self._visible(now, deal_filter)
        if created_since is not None:
            deals = [d for d in deals if d.created_at >= created_since]
        return len(deals)

    async def find_by_status(
        self, status: DealStatus, limit: int = 30, offset: int = 0
    ) -> list[Deal]:
        """Find deals in a status, newest first."""
        deals = [d for d in self.database.deals.values() if d.status == status]
        return _newest_first(deals)[offset : offset + limit]

    async def count_by_status(self, status: DealStatus) -> int:
        """Count deals in a status."""
        return sum(1 for d in self.database.deals.values() if d.status == status)

    async def find_by_submitter(
        self,
        submitter_id: UserId,
        status: Optional[DealStatus] = None,
        limit: int = 30,
        offset: int = 0,
    ) -> list[Deal]:
        """Find deals submitted by a user, newest first."""
        deals = [
            d
            for d in self.database.deals.values()
            if d.submitter_id == submitter_id and (status is None or d.status == status)
        ]
        return _newest_first(deals)[offset : offset + limit]

    async def find_due_for_expiry(self, now: datetime) -> list[Deal]:
        """Find published deals whose expires_at is at or before ``now``."""
        return [
            d
            for d in self.database.deals.values()
            if d.status == DealStatus.PUBLISHED and d.is_expired(now)
        ]

"""Ranking domain service."""

from datetime import datetime, time
from typing import Optional

import logfire

from dealspark.config import RankingSettings
from dealspark.domain.model import RankedDeal
from dealspark.domain.model.common import DomainModel
from dealspark.domain.model.deal import utcnow
from dealspark.domain.repository import DealRepository
from dealspark.domain.value import DealFilter, DealSort

from .base import Service


class DealPage(DomainModel):
    """One page of a public listing."""

    sort: DealSort
    items: list[RankedDeal]
    total: int
    page: int
    page_size: int

    @property
    def has_next(self) -> bool:
        return self.page * self.page_size < self.total


class DealStats(DomainModel):
    """Headline numbers of the public listing."""

    total_published: int
    published_today: int
    hottest: Optional[RankedDeal] = None


class RankingService(Service):
    """Orders visible deals for the "Hot" and "Newest" views.

    Scores are computed from one snapshot per request. A deal's rank may
    shift between separate page requests as votes arrive; pages of a single
    request are always consistent.
    """

    def __init__(
        self, deal_repository: DealRepository, ranking_settings: RankingSettings
    ) -> None:
        """Initialize ranking service.

        Args:
            deal_repository: Deal repository
            ranking_settings: Ranking configuration
        """
        self.deal_repository = deal_repository
        self.ranking_settings = ranking_settings

    async def list_deals(
        self,
        sort: DealSort = DealSort.HOT,
        deal_filter: Optional[DealFilter] = None,
        page: int = 1,
        page_size: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> DealPage:
        """List visible deals in ranking order.

        Args:
            sort: HOT (heat score) or NEWEST (creation time)
            deal_filter: Optional category/shop filter
            page: 1-based page number
            page_size: Deals per page (defaults to the configured size)
            now: Reference time (defaults to the current time)

        Returns:
            The requested page with the total number of visible deals

        Raises:
            ValidationError: If page or page_size is out of range
        """
        size = (
            page_size
            if page_size is not None
            else self.ranking_settings.default_page_size
        )
        self.check_page(page, size, self.ranking_settings.max_page_size)

        now = now or utcnow()
        with logfire.span(
            "ranking_service.list_deals",
            sort=sort.value,
            category_id=str(deal_filter.category_id) if deal_filter else None,
            shop_id=str(deal_filter.shop_id) if deal_filter else None,
            page=page,
            page_size=size,
        ):
            total = await self.deal_repository.count_published(now, deal_filter)
            items = await self.deal_repository.find_published(
                sort=sort,
                now=now,
                params=self.ranking_settings.heat_params,
                deal_filter=deal_filter,
                limit=size,
                offset=(page - 1) * size,
            )

            logfire.info("Deals listed", count=len(items), total=total)
            return DealPage(
                sort=sort, items=items, total=total, page=page, page_size=size
            )

    async def hottest(self, now: Optional[datetime] = None) -> Optional[RankedDeal]:
        """The single hottest visible deal, if any."""
        items = await self.deal_repository.find_published(
            sort=DealSort.HOT,
            now=now or utcnow(),
            params=self.ranking_settings.heat_params,
            limit=1,
        )
        return items[0] if items else None

    async def stats(self, now: Optional[datetime] = None) -> DealStats:
        """Headline numbers: visible deals, those created today, the hottest."""
        now = now or utcnow()
        start_of_day = datetime.combine(now.date(), time.min, tzinfo=now.tzinfo)

        with logfire.span("ranking_service.stats"):
            total = await self.deal_repository.count_published(now)
            today = await self.deal_repository.count_published(
                now, created_since=start_of_day
            )
            hottest = await self.hottest(now)
            return DealStats(
                total_published=total, published_today=today, hottest=hottest
            )

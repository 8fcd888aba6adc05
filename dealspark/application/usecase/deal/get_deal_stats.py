"""Deal stats use case."""

from typing import Optional

from pydantic import BaseModel

from dealspark.domain.service import RankingService

from .common import DealItem, EngagementItem, RankedDealItem


class GetDealStatsResponse(BaseModel):
    """Deal stats response."""

    total_published: int
    published_today: int
    hottest: Optional[RankedDealItem] = None


class GetDealStatsUseCase:
    """Use case for the headline numbers of the listing."""

    def __init__(self, ranking_service: RankingService) -> None:
        """Initialize deal stats use case.

        Args:
            ranking_service: Ranking domain service
        """
        self.ranking_service = ranking_service

    async def execute(self) -> GetDealStatsResponse:
        """Execute deal stats flow."""
        stats = await self.ranking_service.stats()

        hottest = None
        if stats.hottest is not None:
            hottest = RankedDealItem(
                deal=DealItem.from_deal(stats.hottest.deal),
                engagement=EngagementItem.from_snapshot(stats.hottest.snapshot),
                heat_score=stats.hottest.heat_score,
            )

        return GetDealStatsResponse(
            total_published=stats.total_published,
            published_today=stats.published_today,
            hottest=hottest,
        )

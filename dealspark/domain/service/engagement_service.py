"""Engagement counter domain service."""

from datetime import timedelta

import logfire

from dealspark.config import EngagementSettings
from dealspark.domain.error import NotFoundError
from dealspark.domain.model import EngagementSnapshot
from dealspark.domain.model.deal import utcnow
from dealspark.domain.repository import (
    DealRepository,
    EngagementRepository,
    TransactionManager,
    VoteRepository,
)
from dealspark.domain.value import DealId, ViewerKey

from .base import Service


class EngagementService(Service):
    """Domain service for views, comments and counter reads."""

    def __init__(
        self,
        deal_repository: DealRepository,
        vote_repository: VoteRepository,
        engagement_repository: EngagementRepository,
        transactions: TransactionManager,
        engagement_settings: EngagementSettings,
    ) -> None:
        """Initialize engagement service.

        Args:
            deal_repository: Deal repository
            vote_repository: Vote repository (for rebuilds)
            engagement_repository: Engagement counter repository
            transactions: Per-deal transaction manager
            engagement_settings: Engagement configuration
        """
        self.deal_repository = deal_repository
        self.vote_repository = vote_repository
        self.engagement_repository = engagement_repository
        self.transactions = transactions
        self.engagement_settings = engagement_settings

    @property
    def view_window(self) -> timedelta:
        return timedelta(minutes=self.engagement_settings.view_dedup_window_minutes)

    async def _require_deal(self, deal_id: DealId) -> None:
        deal = await self.deal_repository.find_by_id(deal_id)
        if deal is None:
            logfire.warn("Engagement on non-existent deal", deal_id=str(deal_id))
            raise NotFoundError("Deal", str(deal_id))

    async def record_view(self, deal_id: DealId, viewer: ViewerKey) -> bool:
        """Count a view of a live deal, at most once per viewer per window.

        Views are advisory ranking input: failures are logged and swallowed.

        Args:
            deal_id: Deal ID
            viewer: Viewer identity (user or anonymous fingerprint)

        Returns:
            True if the view was counted
        """
        with logfire.span(
            "engagement_service.record_view", deal_id=str(deal_id), viewer=str(viewer)
        ):
            try:
                now = utcnow()
                deal = await self.deal_repository.find_by_id(deal_id)
                if deal is None or not deal.is_visible(now):
                    logfire.debug("View on deal that is not live", deal_id=str(deal_id))
                    return False

                counted = await self.engagement_repository.register_view(
                    deal_id, viewer, now, self.view_window
                )
                logfire.debug("View recorded", deal_id=str(deal_id), counted=counted)
                return counted
            except Exception as e:
                logfire.error(
                    "Failed to record view",
                    deal_id=str(deal_id),
                    error=str(e),
                    error_type=type(e).__name__,
                )
                return False

    async def record_comment(self, deal_id: DealId) -> EngagementSnapshot:
        """Count a newly created comment.

        Raises:
            NotFoundError: If the deal does not exist
        """
        with logfire.span("engagement_service.record_comment", deal_id=str(deal_id)):
            await self._require_deal(deal_id)
            snapshot = await self.engagement_repository.adjust_comment_count(deal_id, 1)
            logfire.info(
                "Comment counted",
                deal_id=str(deal_id),
                comment_count=snapshot.comment_count,
            )
            return snapshot

    async def remove_comment(self, deal_id: DealId) -> EngagementSnapshot:
        """Uncount a deleted comment (never below zero).

        Raises:
            NotFoundError: If the deal does not exist
        """
        with logfire.span("engagement_service.remove_comment", deal_id=str(deal_id)):
            await self._require_deal(deal_id)
            snapshot = await self.engagement_repository.adjust_comment_count(deal_id, -1)
            logfire.info(
                "Comment uncounted",
                deal_id=str(deal_id),
                comment_count=snapshot.comment_count,
            )
            return snapshot

    async def snapshot(self, deal_id: DealId) -> EngagementSnapshot:
        """Read the latest committed counters of a deal.

        Raises:
            NotFoundError: If the deal does not exist
        """
        await self._require_deal(deal_id)
        return await self.engagement_repository.get_snapshot(deal_id)

    async def rebuild(self, deal_id: DealId) -> EngagementSnapshot:
        """Recompute the vote counters of a deal from its ledger rows.

        View and comment counters are left untouched.

        Raises:
            NotFoundError: If the deal does not exist
        """
        with logfire.span("engagement_service.rebuild", deal_id=str(deal_id)):
            async with self.transactions.deal_scope(deal_id):
                await self._require_deal(deal_id)
                upvotes, downvotes = await self.vote_repository.count_by_direction(
                    deal_id
                )
                snapshot = await self.engagement_repository.set_vote_counts(
                    deal_id, upvotes, downvotes
                )

            logfire.info(
                "Vote counters rebuilt",
                deal_id=str(deal_id),
                upvotes=upvotes,
                downvotes=downvotes,
            )
            return snapshot

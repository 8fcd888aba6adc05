"""Engagement counter repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Dict, Sequence

from dealspark.domain.model import EngagementSnapshot
from dealspark.domain.value import DealId, ViewerKey


class EngagementRepository(ABC):
    """Repository for per-deal engagement counters.

    Counter updates are SQL-level increments; vote deltas must be applied
    inside TransactionManager.deal_scope together with the ledger write.
    """

    @abstractmethod
    async def get_snapshot(self, deal_id: DealId) -> EngagementSnapshot:
        """Read a deal's counters (all zero if none were recorded yet)."""
        pass

    @abstractmethod
    async def get_snapshots(
        self, deal_ids: Sequence[DealId]
    ) -> Dict[DealId, EngagementSnapshot]:
        """Read counters of several deals (batch query)."""
        pass

    @abstractmethod
    async def apply_vote_delta(
        self, deal_id: DealId, upvote_delta: int, downvote_delta: int
    ) -> EngagementSnapshot:
        """Move the vote counters by the given deltas.

        Args:
            deal_id: The deal's ID
            upvote_delta: Change of the upvote count (-1, 0 or 1)
            downvote_delta: Change of the downvote count (-1, 0 or 1)

        Returns:
            The snapshot after the update

        Raises:
            ValueError: If a counter would become negative
        """
        pass

    @abstractmethod
    async def set_vote_counts(
        self, deal_id: DealId, upvotes: int, downvotes: int
    ) -> EngagementSnapshot:
        """Overwrite the vote counters (ledger rebuild only)."""
        pass

    @abstractmethod
    async def adjust_comment_count(
        self, deal_id: DealId, delta: int
    ) -> EngagementSnapshot:
        """Move the comment counter by ``delta``, never below zero."""
        pass

    @abstractmethod
    async def register_view(
        self,
        deal_id: DealId,
        viewer: ViewerKey,
        now: datetime,
        window: timedelta,
    ) -> bool:
        """Count a view unless the viewer was counted within ``window``.

        Args:
            deal_id: The deal's ID
            viewer: Who viewed the deal
            now: View time
            window: Deduplication window

        Returns:
            True if the view counter was incremented
        """
        pass

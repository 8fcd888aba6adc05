"""In-memory engagement repository for testing."""

from datetime import datetime, timedelta
from typing import Optional, Sequence

from dealspark.domain.model import EngagementSnapshot
from dealspark.domain.repository import EngagementRepository
from dealspark.domain.value import DealId, ViewerKey

from .database import InMemoryDatabase


class InMemoryEngagementRepository(EngagementRepository):
    """In-memory implementation of EngagementRepository for testing."""

    def __init__(self, database: Optional[InMemoryDatabase] = None) -> None:
        self.database = database or InMemoryDatabase()

    def _store(self, snapshot: EngagementSnapshot) -> EngagementSnapshot:
        self.database.engagement[snapshot.deal_id] = snapshot
        return snapshot

    async def get_snapshot(self, deal_id: DealId) -> EngagementSnapshot:
        """Read a deal's counters (all zero if none were recorded yet)."""
        return self.database.engagement.get(deal_id) or EngagementSnapshot.empty(
            deal_id
        )

    async def get_snapshots(
        self, deal_ids: Sequence[DealId]
    ) -> dict[DealId, EngagementSnapshot]:
        """Read counters of several deals."""
        return {deal_id: await self.get_snapshot(deal_id) for deal_id in deal_ids}

    async def apply_vote_delta(
        self, deal_id: DealId, upvote_delta: int, downvote_delta: int
    ) -> EngagementSnapshot:
        """Move the vote counters by the given deltas."""
        current = await self.get_snapshot(deal_id)
        upvotes = current.upvote_count + upvote_delta
        downvotes = current.downvote_count + downvote_delta
        if upvotes < 0 or downvotes < 0:
            raise ValueError(f"Vote counters of deal {deal_id} would become negative")
        return self._store(
            current.model_copy(
                update={"upvote_count": upvotes, "downvote_count": downvotes}
            )
        )

    async def set_vote_counts(
        self, deal_id: DealId, upvotes: int, downvotes: int
    ) -> EngagementSnapshot:
        """Overwrite the vote counters."""
        current = await self.get_snapshot(deal_id)
        return self._store(
            current.model_copy(
                update={"upvote_count": upvotes, "downvote_count": downvotes}
            )
        )

    async def adjust_comment_count(
        self, deal_id: DealId, delta: int
    ) -> EngagementSnapshot:
        """Move the comment counter by ``delta``, never below zero."""
        current = await self.get_snapshot(deal_id)
        return self._store(
            current.model_copy(
                update={"comment_count": max(current.comment_count + delta, 0)}
            )
        )

    async def register_view(
        self,
        deal_id: DealId,
        viewer: ViewerKey,
        now: datetime,
        window: timedelta,
    ) -> bool:
        """Count a view unless the viewer was counted within ``window``."""
        key = (deal_id, str(viewer))
        last_counted = self.database.views.get(key)
        if last_counted is not None and last_counted > now - window:
            return False

        self.database.views[key] = now
        current = await self.get_snapshot(deal_id)
        self._store(current.model_copy(update={"view_count": current.view_count + 1}))
        return True

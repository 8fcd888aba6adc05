"""PostgreSQL implementation of Engagement repository."""

from datetime import datetime, timedelta
from typing import Any, Dict, Optional, Sequence

import logfire
from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from dealspark.domain.model import EngagementSnapshot
from dealspark.domain.repository import EngagementRepository
from dealspark.domain.value import DealId, ViewerKey
from dealspark.persistence.mappers import row_to_snapshot
from dealspark.persistence.tables import deal_engagement_table, deal_views_table


class PostgresEngagementRepository(EngagementRepository):
    """PostgreSQL implementation of EngagementRepository.

    Counters are moved with SQL-level increments on a single row per deal.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _ensure_row(self, deal_id: DealId) -> None:
        stmt = (
            pg_insert(deal_engagement_table)
            .values(deal_id=deal_id)
            .on_conflict_do_nothing(index_elements=["deal_id"])
        )
        await self.session.execute(stmt)

    async def _update(
        self, deal_id: DealId, *conditions: Any, **values: Any
    ) -> Optional[EngagementSnapshot]:
        """Update the counter row; None if a condition did not hold."""
        await self._ensure_row(deal_id)
        stmt = (
            deal_engagement_table.update()
            .where(deal_engagement_table.c.deal_id == deal_id, *conditions)
            .values(**values)
            .returning(*deal_engagement_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_snapshot(row._asdict()) if row else None

    async def get_snapshot(self, deal_id: DealId) -> EngagementSnapshot:
        """Read a deal's counters (all zero if none were recorded yet)."""
        stmt = select(deal_engagement_table).where(
            deal_engagement_table.c.deal_id == deal_id
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        if row is None:
            return EngagementSnapshot.empty(deal_id)
        return row_to_snapshot(row._asdict())

    async def get_snapshots(
        self, deal_ids: Sequence[DealId]
    ) -> Dict[DealId, EngagementSnapshot]:
        """Read counters of several deals (batch query)."""
        if not deal_ids:
            return {}

        stmt = select(deal_engagement_table).where(
            deal_engagement_table.c.deal_id.in_(deal_ids)
        )
        result = await self.session.execute(stmt)
        found = {
            snapshot.deal_id: snapshot
            for snapshot in (row_to_snapshot(row._asdict()) for row in result.fetchall())
        }
        return {
            deal_id: found.get(deal_id, EngagementSnapshot.empty(deal_id))
            for deal_id in deal_ids
        }

    async def apply_vote_delta(
        self, deal_id: DealId, upvote_delta: int, downvote_delta: int
    ) -> EngagementSnapshot:
        """Move the vote counters by the given deltas."""
        up = deal_engagement_table.c.upvote_count
        down = deal_engagement_table.c.downvote_count
        snapshot = await self._update(
            deal_id,
            up + upvote_delta >= 0,
            down + downvote_delta >= 0,
            upvote_count=up + upvote_delta,
            downvote_count=down + downvote_delta,
        )
        if snapshot is None:
            logfire.error(
                "Vote delta would make a counter negative",
                deal_id=str(deal_id),
                upvote_delta=upvote_delta,
                downvote_delta=downvote_delta,
            )
            raise ValueError(f"Vote counters of deal {deal_id} would become negative")
        return snapshot

    async def set_vote_counts(
        self, deal_id: DealId, upvotes: int, downvotes: int
    ) -> EngagementSnapshot:
        """Overwrite the vote counters (ledger rebuild only)."""
        snapshot = await self._update(
            deal_id, upvote_count=upvotes, downvote_count=downvotes
        )
        return snapshot or EngagementSnapshot.empty(deal_id)

    async def adjust_comment_count(
        self, deal_id: DealId, delta: int
    ) -> EngagementSnapshot:
        """Move the comment counter by ``delta``, never below zero."""
        snapshot = await self._update(
            deal_id,
            comment_count=func.greatest(
                deal_engagement_table.c.comment_count + delta, 0
            ),
        )
        return snapshot or EngagementSnapshot.empty(deal_id)

    async def register_view(
        self,
        deal_id: DealId,
        viewer: ViewerKey,
        now: datetime,
        window: timedelta,
    ) -> bool:
        """Count a view unless the viewer was counted within ``window``.

        Runs in a savepoint so a failure leaves the request's transaction
        usable.
        """
        async with self.session.begin_nested():
            stmt = pg_insert(deal_views_table).values(
                deal_id=deal_id, viewer_key=str(viewer), last_counted_at=now
            )
            stmt = stmt.on_conflict_do_update(
                constraint="uq_deal_viewer",
                set_={"last_counted_at": now},
                where=deal_views_table.c.last_counted_at <= now - window,
            ).returning(deal_views_table.c.deal_id)
            result = await self.session.execute(stmt)
            if result.fetchone() is None:
                return False

            await self._update(
                deal_id, view_count=deal_engagement_table.c.view_count + 1
            )
            return True

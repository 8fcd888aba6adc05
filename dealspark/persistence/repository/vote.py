"""PostgreSQL implementation of Vote repository."""

from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy import and_, delete, func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from dealspark.domain.model import Vote
from dealspark.domain.repository import VoteRepository
from dealspark.domain.value import DealId, UserId, VoteDirection
from dealspark.persistence.mappers import row_to_vote
from dealspark.persistence.tables import deal_votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find(self, deal_id: DealId, user_id: UserId) -> Optional[Vote]:
        """Find a user's current vote on a deal."""
        stmt = select(deal_votes_table).where(
            and_(
                deal_votes_table.c.deal_id == deal_id,
                deal_votes_table.c.user_id == user_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_by_user_and_deals(
        self, user_id: UserId, deal_ids: Sequence[DealId]
    ) -> List[Vote]:
        """Find a user's votes on multiple deals (batch query)."""
        if not deal_ids:
            return []

        stmt = select(deal_votes_table).where(
            and_(
                deal_votes_table.c.user_id == user_id,
                deal_votes_table.c.deal_id.in_(deal_ids),
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def upsert(
        self,
        deal_id: DealId,
        user_id: UserId,
        direction: Optional[VoteDirection],
        now: datetime,
    ) -> None:
        """Write the user's current vote (None deletes the row)."""
        if direction is None:
            await self.session.execute(
                delete(deal_votes_table).where(
                    and_(
                        deal_votes_table.c.deal_id == deal_id,
                        deal_votes_table.c.user_id == user_id,
                    )
                )
            )
            await self.session.flush()
            return

        stmt = pg_insert(deal_votes_table).values(
            deal_id=deal_id,
            user_id=user_id,
            direction=direction.value,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            constraint="uq_deal_vote",
            set_={"direction": stmt.excluded.direction, "updated_at": now},
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def count_by_direction(self, deal_id: DealId) -> tuple[int, int]:
        """Count ledger rows of a deal as (upvotes, downvotes)."""
        stmt = (
            select(deal_votes_table.c.direction, func.count())
            .where(deal_votes_table.c.deal_id == deal_id)
            .group_by(deal_votes_table.c.direction)
        )
        result = await self.session.execute(stmt)
        counts = {direction: count for direction, count in result.fetchall()}
        return (
            counts.get(VoteDirection.UP.value, 0),
            counts.get(VoteDirection.DOWN.value, 0),
        )

"""In-memory vote repository for testing."""

from datetime import datetime
from typing import Optional, Sequence

from dealspark.domain.model import Vote
from dealspark.domain.repository import VoteRepository
from dealspark.domain.value import DealId, UserId, VoteDirection

from .database import InMemoryDatabase


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self, database: Optional[InMemoryDatabase] = None) -> None:
        self.database = database or InMemoryDatabase()

    async def find(self, deal_id: DealId, user_id: UserId) -> Optional[Vote]:
        """Find a user's current vote on a deal."""
        return self.database.votes.get((deal_id, user_id))

    async def find_by_user_and_deals(
        self, user_id: UserId, deal_ids: Sequence[DealId]
    ) -> list[Vote]:
        """Find a user's votes on multiple deals (batch query)."""
        if not deal_ids:
            return []

        wanted = set(deal_ids)
        return [
            vote
            for (deal_id, voter), vote in self.database.votes.items()
            if voter == user_id and deal_id in wanted
        ]

    async def upsert(
        self,
        deal_id: DealId,
        user_id: UserId,
        direction: Optional[VoteDirection],
        now: datetime,
    ) -> None:
        """Write the user's current vote (None deletes the row)."""
        key = (deal_id, user_id)
        if direction is None:
            self.database.votes.pop(key, None)
            return
        self.database.votes[key] = Vote(
            deal_id=deal_id, user_id=user_id, direction=direction, updated_at=now
        )

    async def count_by_direction(self, deal_id: DealId) -> tuple[int, int]:
        """Count ledger rows of a deal as (upvotes, downvotes)."""
        directions = [
            vote.direction
            for (vote_deal_id, _), vote in self.database.votes.items()
            if vote_deal_id == deal_id
        ]
        return (
            directions.count(VoteDirection.UP),
            directions.count(VoteDirection.DOWN),
        )

"""Vote repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence

from dealspark.domain.model import Vote
from dealspark.domain.value import DealId, UserId, VoteDirection


class VoteRepository(ABC):
    """Repository for the vote ledger.

    Writes must happen inside TransactionManager.deal_scope so that the
    ledger and the engagement counters change together.
    """

    @abstractmethod
    async def find(self, deal_id: DealId, user_id: UserId) -> Optional[Vote]:
        """Find a user's current vote on a deal.

        Args:
            deal_id: The deal's ID
            user_id: The user's ID

        Returns:
            The vote if one exists, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_and_deals(
        self, user_id: UserId, deal_ids: Sequence[DealId]
    ) -> List[Vote]:
        """Find a user's votes on multiple deals (batch query).

        Args:
            user_id: The user's ID
            deal_ids: Deal IDs to check

        Returns:
            The user's votes on the given deals
        """
        pass

    @abstractmethod
    async def upsert(
        self,
        deal_id: DealId,
        user_id: UserId,
        direction: Optional[VoteDirection],
        now: datetime,
    ) -> None:
        """Write the user's current vote.

        Args:
            deal_id: The deal's ID
            user_id: The user's ID
            direction: New direction, or None to delete the row
            now: Write time (stored as updated_at)
        """
        pass

    @abstractmethod
    async def count_by_direction(self, deal_id: DealId) -> tuple[int, int]:
        """Count ledger rows of a deal.

        Returns:
            (upvotes, downvotes)
        """
        pass

"""Deal repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from dealspark.domain.model import Deal, RankedDeal
from dealspark.domain.value import (
    DealFilter,
    DealId,
    DealSort,
    DealStatus,
    HeatParams,
    UserId,
)


class DealRepository(ABC):
    """Repository for Deal aggregate.

    Defines the contract for deal persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, deal_id: DealId) -> Optional[Deal]:
        """Find a deal by ID.

        Args:
            deal_id: The deal's unique identifier

        Returns:
            The deal if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, deal: Deal) -> Deal:
        """Save a deal (create or update).

        Status and published_at are written on create only; afterwards they
        change exclusively through transition_status.

        Args:
            deal: The deal to save

        Returns:
            The saved deal
        """
        pass

    @abstractmethod
    async def transition_status(
        self,
        deal_id: DealId,
        from_status: DealStatus,
        to_status: DealStatus,
        now: datetime,
    ) -> Optional[Deal]:
        """Compare-and-set the deal status.

        The update only applies if the deal is still in from_status.
        Moving into PUBLISHED stamps published_at unless it is already set.

        Args:
            deal_id: The deal ID
            from_status: Status the caller observed
            to_status: Target status
            now: Transition time

        Returns:
            The updated deal, or None if the status had already changed
            (conflict) or the deal does not exist
        """
        pass

    @abstractmethod
    async def find_published(
        self,
        sort: DealSort,
        now: datetime,
        params: HeatParams,
        deal_filter: Optional[DealFilter] = None,
        limit: int = 30,
        offset: int = 0,
    ) -> List[RankedDeal]:
        """Find visible deals in ranking order.

        Visible means status PUBLISHED and not expired at ``now``.
        HOT orders by heat score DESC, created_at DESC, id ASC.
        NEWEST orders by created_at DESC, id ASC.

        Args:
            sort: Sort order
            now: Reference time for expiry and deal age
            params: Heat score weights
            deal_filter: Optional category/shop filter
            limit: Maximum number of deals to return
            offset: Number of deals to skip

        Returns:
            Ranked deals with the snapshot each score was computed from
        """
        pass

    @abstractmethod
    async def count_published(
        self,
        now: datetime,
        deal_filter: Optional[DealFilter] = None,
        created_since: Optional[datetime] = None,
    ) -> int:
        """Count visible deals.

        Args:
            now: Reference time for expiry
            deal_filter: Optional category/shop filter
            created_since: Only count deals created at or after this time

        Returns:
            Number of visible deals matching the criteria
        """
        pass

    @abstractmethod
    async def find_by_status(
        self, status: DealStatus, limit: int = 30, offset: int = 0
    ) -> List[Deal]:
        """Find deals in a status, newest first (moderation queue).

        Args:
            status: Status to filter by
            limit: Maximum number of deals to return
            offset: Number of deals to skip

        Returns:
            Deals in the given status
        """
        pass

    @abstractmethod
    async def count_by_status(self, status: DealStatus) -> int:
        """Count deals in a status."""
        pass

    @abstractmethod
    async def find_by_submitter(
        self,
        submitter_id: UserId,
        status: Optional[DealStatus] = None,
        limit: int = 30,
        offset: int = 0,
    ) -> List[Deal]:
        """Find deals submitted by a user, newest first.

        Args:
            submitter_id: The submitter's user ID
            status: Optional status filter
            limit: Maximum number of deals to return
            offset: Number of deals to skip

        Returns:
            The user's deals
        """
        pass

    @abstractmethod
    async def find_due_for_expiry(self, now: datetime) -> List[Deal]:
        """Find published deals whose expires_at is at or before ``now``."""
        pass

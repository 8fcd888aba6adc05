"""Per-deal transaction interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager

from dealspark.domain.value import DealId


class TransactionManager(ABC):
    """Serializes writes to a single deal.

    Inside ``deal_scope`` the caller holds the deal's row lock; every write
    made there commits together or not at all. Scopes on different deals
    never block each other.
    """

    @abstractmethod
    def deal_scope(self, deal_id: DealId) -> AbstractAsyncContextManager[None]:
        """Open an all-or-nothing scope holding the deal's lock.

        Usage:
            async with transactions.deal_scope(deal_id):
                vote = await votes.find(deal_id, user_id)
                ...
        """
        pass

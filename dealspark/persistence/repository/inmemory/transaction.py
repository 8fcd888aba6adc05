"""In-memory per-deal transaction manager for testing."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from dealspark.domain.repository import TransactionManager
from dealspark.domain.value import DealId

from .database import InMemoryDatabase


class InMemoryTransactionManager(TransactionManager):
    """One asyncio.Lock per deal; restores the deal's rows on error."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    @asynccontextmanager
    async def deal_scope(self, deal_id: DealId) -> AsyncIterator[None]:
        async with self.database.locks[deal_id]:
            checkpoint = self.database.checkpoint(deal_id)
            try:
                yield
            except BaseException:
                self.database.restore(deal_id, checkpoint)
                raise

"""PostgreSQL implementation of the per-deal transaction manager."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dealspark.domain.repository import TransactionManager
from dealspark.domain.value import DealId
from dealspark.persistence.tables import deals_table


class PostgresTransactionManager(TransactionManager):
    """Row lock on the deal inside a savepoint.

    The lock is held until the request's transaction ends; an exception in
    the scope rolls back to the savepoint, undoing every write made there.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize transaction manager with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @asynccontextmanager
    async def deal_scope(self, deal_id: DealId) -> AsyncIterator[None]:
        async with self.session.begin_nested():
            await self.session.execute(
                select(deals_table.c.id)
                .where(deals_table.c.id == deal_id)
                .with_for_update()
            )
            yield

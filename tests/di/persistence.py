"""Mock persistence providers for testing."""

from dishka import Scope, provide

from dealspark.domain.repository import (
    DealRepository,
    EngagementRepository,
    TransactionManager,
    VoteRepository,
)
from dealspark.persistence.repository.inmemory import (
    InMemoryDatabase,
    InMemoryDealRepository,
    InMemoryEngagementRepository,
    InMemoryTransactionManager,
    InMemoryVoteRepository,
)
from dealspark.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    One InMemoryDatabase per container: every test builds its own container,
    and requests within it (e.g. several HTTP calls) see the same data.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_database(self) -> InMemoryDatabase:
        """Provide the shared in-memory store."""
        return InMemoryDatabase()

    @provide(scope=Scope.REQUEST)
    def get_deal_repository(self, database: InMemoryDatabase) -> DealRepository:
        """Provide in-memory deal repository."""
        return InMemoryDealRepository(database)

    @provide(scope=Scope.REQUEST)
    def get_vote_repository(self, database: InMemoryDatabase) -> VoteRepository:
        """Provide in-memory vote repository."""
        return InMemoryVoteRepository(database)

    @provide(scope=Scope.REQUEST)
    def get_engagement_repository(
        self, database: InMemoryDatabase
    ) -> EngagementRepository:
        """Provide in-memory engagement repository."""
        return InMemoryEngagementRepository(database)

    @provide(scope=Scope.REQUEST)
    def get_transaction_manager(
        self, database: InMemoryDatabase
    ) -> TransactionManager:
        """Provide in-memory per-deal transaction manager."""
        return InMemoryTransactionManager(database)

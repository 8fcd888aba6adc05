"""PostgreSQL repository implementations."""

from dealspark.persistence.repository.deal import PostgresDealRepository
from dealspark.persistence.repository.engagement import PostgresEngagementRepository
from dealspark.persistence.repository.transaction import PostgresTransactionManager
from dealspark.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresDealRepository",
    "PostgresEngagementRepository",
    "PostgresTransactionManager",
    "PostgresVoteRepository",
]

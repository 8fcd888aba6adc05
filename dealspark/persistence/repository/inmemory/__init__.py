"""In-memory repository implementations for testing."""

from .database import InMemoryDatabase
from .deal import InMemoryDealRepository
from .engagement import InMemoryEngagementRepository
from .transaction import InMemoryTransactionManager
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryDatabase",
    "InMemoryDealRepository",
    "InMemoryEngagementRepository",
    "InMemoryTransactionManager",
    "InMemoryVoteRepository",
]

"""Repository interfaces for DealSpark domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from dealspark.domain.repository.deal import DealRepository
from dealspark.domain.repository.engagement import EngagementRepository
from dealspark.domain.repository.transaction import TransactionManager
from dealspark.domain.repository.vote import VoteRepository

__all__ = [
    "DealRepository",
    "VoteRepository",
    "EngagementRepository",
    "TransactionManager",
]

"""Domain model entities for DealSpark."""

from dealspark.domain.model.deal import Deal
from dealspark.domain.model.engagement import EngagementSnapshot
from dealspark.domain.model.principal import Principal
from dealspark.domain.model.ranking import RankedDeal
from dealspark.domain.model.vote import Vote, VoteChange

__all__ = [
    "Deal",
    "Vote",
    "VoteChange",
    "EngagementSnapshot",
    "Principal",
    "RankedDeal",
]

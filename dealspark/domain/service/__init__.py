"""Domain services."""

from .base import Service
from .deal_service import DealService
from .engagement_service import EngagementService
from .heat import deal_age_hours, heat_score
from .identity_service import IdentityService
from .moderation_service import ModerationQueue, ModerationService
from .ranking_service import DealPage, DealStats, RankingService
from .vote_service import VoteResult, VoteService

__all__ = [
    "DealPage",
    "DealService",
    "DealStats",
    "EngagementService",
    "IdentityService",
    "ModerationQueue",
    "ModerationService",
    "RankingService",
    "Service",
    "VoteResult",
    "VoteService",
    "deal_age_hours",
    "heat_score",
]

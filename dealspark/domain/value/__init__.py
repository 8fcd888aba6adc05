"""Domain value objects for DealSpark."""

from dealspark.domain.value.identifiers import CategoryId, DealId, ShopId, UserId
from dealspark.domain.value.ranking import DealFilter, HeatParams
from dealspark.domain.value.types import (
    DealSort,
    DealStatus,
    ModerationAction,
    RepeatCastPolicy,
    Role,
    Slug,
    ViewerKey,
    VoteDirection,
    VoteState,
)

__all__ = [
    # Identifiers
    "UserId",
    "DealId",
    "CategoryId",
    "ShopId",
    # Types
    "Role",
    "VoteDirection",
    "VoteState",
    "RepeatCastPolicy",
    "DealStatus",
    "ModerationAction",
    "DealSort",
    "Slug",
    "ViewerKey",
    # Ranking
    "HeatParams",
    "DealFilter",
]

"""Deal use cases."""

from .common import DealItem, EngagementItem, RankedDealItem
from .create_deal import CreateDealRequest, CreateDealResponse, CreateDealUseCase
from .get_deal import GetDealRequest, GetDealResponse, GetDealUseCase
from .get_deal_stats import GetDealStatsResponse, GetDealStatsUseCase
from .list_deals import ListDealsRequest, ListDealsResponse, ListDealsUseCase
from .list_my_deals import ListMyDealsRequest, ListMyDealsResponse, ListMyDealsUseCase

__all__ = [
    "CreateDealRequest",
    "CreateDealResponse",
    "CreateDealUseCase",
    "DealItem",
    "EngagementItem",
    "GetDealRequest",
    "GetDealResponse",
    "GetDealStatsResponse",
    "GetDealStatsUseCase",
    "GetDealUseCase",
    "ListDealsRequest",
    "ListDealsResponse",
    "ListDealsUseCase",
    "ListMyDealsRequest",
    "ListMyDealsResponse",
    "ListMyDealsUseCase",
    "RankedDealItem",
]

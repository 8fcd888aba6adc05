"""Moderation use cases."""

from .expire_deals import ExpireDealsRequest, ExpireDealsResponse, ExpireDealsUseCase
from .moderate_deal import (
    ModerateDealRequest,
    ModerateDealResponse,
    ModerateDealUseCase,
)
from .moderation_queue import (
    ModerationQueueRequest,
    ModerationQueueResponse,
    ModerationQueueUseCase,
)

__all__ = [
    "ExpireDealsRequest",
    "ExpireDealsResponse",
    "ExpireDealsUseCase",
    "ModerateDealRequest",
    "ModerateDealResponse",
    "ModerateDealUseCase",
    "ModerationQueueRequest",
    "ModerationQueueResponse",
    "ModerationQueueUseCase",
]

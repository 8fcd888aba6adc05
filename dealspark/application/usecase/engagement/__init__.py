"""Engagement use cases."""

from .rebuild_engagement import (
    RebuildEngagementRequest,
    RebuildEngagementResponse,
    RebuildEngagementUseCase,
)
from .record_comment import (
    RecordCommentRequest,
    RecordCommentResponse,
    RecordCommentUseCase,
)

__all__ = [
    "RebuildEngagementRequest",
    "RebuildEngagementResponse",
    "RebuildEngagementUseCase",
    "RecordCommentRequest",
    "RecordCommentResponse",
    "RecordCommentUseCase",
]

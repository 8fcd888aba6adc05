"""Engagement snapshot.

Derived per-deal counters. They are maintained in the same transaction as
the vote ledger and can always be rebuilt from it.
"""

from pydantic import Field

from dealspark.domain.model.common import DomainModel
from dealspark.domain.value import DealId


class EngagementSnapshot(DomainModel):
    """Aggregate engagement counts of a deal at one point in time."""

    deal_id: DealId
    upvote_count: int = Field(default=0, ge=0)
    downvote_count: int = Field(default=0, ge=0)
    view_count: int = Field(default=0, ge=0)
    comment_count: int = Field(default=0, ge=0)

    @property
    def net_score(self) -> int:
        return self.upvote_count - self.downvote_count

    @classmethod
    def empty(cls, deal_id: DealId) -> "EngagementSnapshot":
        return cls(deal_id=deal_id)

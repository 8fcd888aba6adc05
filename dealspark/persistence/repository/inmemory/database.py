"""Shared in-memory store backing the in-memory repositories."""

import asyncio
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from dealspark.domain.model import Deal, EngagementSnapshot, Vote
from dealspark.domain.value import DealId, UserId


@dataclass
class DealCheckpoint:
    """A deal with its ledger rows and vote counters at a point in time.

    Views and comments are counted outside deal scopes and are not captured.
    """

    deal: Optional[Deal]
    votes: dict[tuple[DealId, UserId], Vote]
    engagement: Optional[EngagementSnapshot]


class InMemoryDatabase:
    """Tables as dicts, plus one lock per deal.

    Repositories of one test share a single instance so that a deal scope
    can roll back the ledger and the vote counters together.
    """

    def __init__(self) -> None:
        self.deals: dict[DealId, Deal] = {}
        self.votes: dict[tuple[DealId, UserId], Vote] = {}
        self.engagement: dict[DealId, EngagementSnapshot] = {}
        self.views: dict[tuple[DealId, str], datetime] = {}
        self.locks: defaultdict[DealId, asyncio.Lock] = defaultdict(asyncio.Lock)

    def checkpoint(self, deal_id: DealId) -> DealCheckpoint:
        return DealCheckpoint(
            deal=self.deals.get(deal_id),
            votes={k: v for k, v in self.votes.items() if k[0] == deal_id},
            engagement=self.engagement.get(deal_id),
        )

    def restore(self, deal_id: DealId, checkpoint: DealCheckpoint) -> None:
        if checkpoint.deal is None:
            self.deals.pop(deal_id, None)
        else:
            self.deals[deal_id] = checkpoint.deal

        self.votes = {k: v for k, v in self.votes.items() if k[0] != deal_id}
        self.votes.update(checkpoint.votes)

        current = self.engagement.get(deal_id)
        if current is None:
            return
        saved = checkpoint.engagement or EngagementSnapshot.empty(deal_id)
        self.engagement[deal_id] = current.model_copy(
            update={
                "upvote_count": saved.upvote_count,
                "downvote_count": saved.downvote_count,
            }
        )

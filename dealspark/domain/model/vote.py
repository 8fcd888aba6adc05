"""Vote entity.

Votes are the community's curation signal on deals. Each user holds at
most one current vote per deal, which can change direction or be
withdrawn.
"""

from datetime import datetime

from pydantic import Field

from dealspark.domain.model.common import DomainModel
from dealspark.domain.model.deal import utcnow
from dealspark.domain.value import (
    DealId,
    RepeatCastPolicy,
    UserId,
    VoteDirection,
    VoteState,
)


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One row per (deal, user) (enforced by database unique constraint)
    - Mutated only through the vote ledger
    """

    deal_id: DealId
    user_id: UserId
    direction: VoteDirection
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def state(self) -> VoteState:
        return VoteState.from_direction(self.direction)


class VoteChange(DomainModel):
    """Outcome of applying a cast or withdrawal to the current vote.

    The deltas are what the engagement counters must move by so that they
    keep matching the ledger.
    """

    previous: VoteDirection | None
    current: VoteDirection | None
    upvote_delta: int = 0
    downvote_delta: int = 0

    @property
    def changed(self) -> bool:
        return self.previous != self.current

    @property
    def state(self) -> VoteState:
        return VoteState.from_direction(self.current)

    @classmethod
    def between(
        cls, previous: VoteDirection | None, current: VoteDirection | None
    ) -> "VoteChange":
        """Build the change from ``previous`` to ``current`` with its deltas."""
        up = down = 0
        if previous == VoteDirection.UP:
            up -= 1
        elif previous == VoteDirection.DOWN:
            down -= 1
        if current == VoteDirection.UP:
            up += 1
        elif current == VoteDirection.DOWN:
            down += 1
        return cls(
            previous=previous, current=current, upvote_delta=up, downvote_delta=down
        )


def resolve_cast(
    current: VoteDirection | None,
    requested: VoteDirection,
    policy: RepeatCastPolicy = RepeatCastPolicy.TOGGLE,
) -> VoteChange:
    """Apply a cast of ``requested`` on top of the ``current`` vote.

    - No vote: the requested direction is recorded
    - Opposite direction: the vote is replaced
    - Same direction: withdrawn under TOGGLE, unchanged under IDEMPOTENT
    """
    if current == requested:
        if policy == RepeatCastPolicy.TOGGLE:
            return VoteChange.between(current, None)
        return VoteChange.between(current, current)
    return VoteChange.between(current, requested)


def resolve_withdrawal(current: VoteDirection | None) -> VoteChange:
    """Withdraw the current vote (no-op when there is none)."""
    return VoteChange.between(current, None)

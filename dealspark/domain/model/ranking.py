"""Ranked deal: a listing entry with its engagement and score."""

from dealspark.domain.model.common import DomainModel
from dealspark.domain.model.deal import Deal
from dealspark.domain.model.engagement import EngagementSnapshot


class RankedDeal(DomainModel):
    """A visible deal together with the snapshot its score was computed from."""

    deal: Deal
    snapshot: EngagementSnapshot
    heat_score: float

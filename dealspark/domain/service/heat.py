"""Heat score calculator.

A decaying popularity score in the style of classic link-aggregator
rankings: the order of magnitude of the net vote count, minus a linear
age penalty, plus small engagement tie-breakers.

    net       = up - down
    magnitude = log10(max(1, |net| + 1))
    score     = sign(net) * magnitude
                - age_hours / decay_half_life_hours
                + log10(1 + views) * view_weight
                + comments * comment_weight

The score is strictly increasing in net votes and strictly decreasing in
age, and defined for every input (zero votes, zero age, huge view counts).
"""

import math
from datetime import datetime

from dealspark.domain.model import Deal, EngagementSnapshot
from dealspark.domain.value import HeatParams

DEFAULT_HEAT_PARAMS = HeatParams()


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def heat_score(
    snapshot: EngagementSnapshot,
    age_hours: float,
    params: HeatParams = DEFAULT_HEAT_PARAMS,
) -> float:
    """Compute the heat score of a deal.

    Args:
        snapshot: Engagement counters of the deal
        age_hours: Deal age in hours; negative ages (clock skew) count as 0
        params: Tunable weights

    Returns:
        Heat score (higher is hotter)
    """
    net = snapshot.net_score
    magnitude = math.log10(max(1, abs(net) + 1))
    age = max(0.0, age_hours)

    score = _sign(net) * magnitude - age / params.decay_half_life_hours
    score += math.log10(1 + snapshot.view_count) * params.view_weight
    score += snapshot.comment_count * params.comment_weight
    return score


def deal_age_hours(deal: Deal, now: datetime) -> float:
    """Age of a deal in hours at ``now``."""
    return (now - deal.created_at).total_seconds() / 3600

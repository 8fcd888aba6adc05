"""Unit tests for the heat score."""

import math
from datetime import timedelta
from uuid import uuid4

import pytest

from dealspark.domain.model import EngagementSnapshot
from dealspark.domain.service import deal_age_hours, heat_score
from dealspark.domain.value import DealId, HeatParams
from tests.conftest import NOW, make_deal


def snapshot(up: int = 0, down: int = 0, views: int = 0, comments: int = 0):
    return EngagementSnapshot(
        deal_id=DealId(uuid4()),
        upvote_count=up,
        downvote_count=down,
        view_count=views,
        comment_count=comments,
    )


class TestHeatScore:
    """Tests for heat_score."""

    def test_fresh_deal_without_engagement_scores_zero(self):
        assert heat_score(snapshot(), 0.0) == 0.0

    def test_strictly_increasing_in_net_votes(self):
        scores = [heat_score(snapshot(up=n), 5.0) for n in range(0, 50)]
        assert all(a < b for a, b in zip(scores, scores[1:]))

    def test_negative_net_scores_below_zero_net(self):
        assert heat_score(snapshot(down=3), 1.0) < heat_score(snapshot(), 1.0)

    def test_strictly_decreasing_in_age(self):
        engagement = snapshot(up=10)
        scores = [heat_score(engagement, float(h)) for h in range(0, 100)]
        assert all(a > b for a, b in zip(scores, scores[1:]))

    def test_order_of_magnitude_of_votes(self):
        """Nine net upvotes weigh exactly one point at age zero."""
        assert heat_score(snapshot(up=9), 0.0) == pytest.approx(1.0)
        assert heat_score(snapshot(up=99), 0.0) == pytest.approx(2.0)

    def test_age_penalty_uses_half_life(self):
        params = HeatParams(decay_half_life_hours=10, view_weight=0, comment_weight=0)
        assert heat_score(snapshot(), 25.0, params) == pytest.approx(-2.5)

    def test_negative_age_counts_as_zero(self):
        """Clock skew must not push a deal above its fresh score."""
        assert heat_score(snapshot(up=4), -3.0) == heat_score(snapshot(up=4), 0.0)

    def test_huge_inputs_stay_finite(self):
        score = heat_score(
            snapshot(up=10**9, views=10**12, comments=10**6), 10**6 * 1.0
        )
        assert math.isfinite(score)

    def test_views_and_comments_break_ties(self):
        base = heat_score(snapshot(up=5), 2.0)
        assert heat_score(snapshot(up=5, views=100), 2.0) > base
        assert heat_score(snapshot(up=5, comments=3), 2.0) > base

    def test_traffic_does_not_outweigh_a_vote_magnitude(self):
        """Ten thousand views are worth less than one order of vote magnitude."""
        quiet = heat_score(snapshot(up=99), 0.0)
        busy = heat_score(snapshot(up=9, views=10_000), 0.0)
        assert quiet > busy


class TestDealAge:
    """Tests for deal_age_hours."""

    def test_age_in_hours(self):
        deal = make_deal(created_at=NOW - timedelta(hours=6, minutes=30))
        assert deal_age_hours(deal, NOW) == pytest.approx(6.5)

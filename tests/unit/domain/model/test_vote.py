"""Unit tests for vote resolution."""

import pytest

from dealspark.domain.model.vote import VoteChange, resolve_cast, resolve_withdrawal
from dealspark.domain.value import RepeatCastPolicy, VoteDirection, VoteState

UP = VoteDirection.UP
DOWN = VoteDirection.DOWN


class TestResolveCast:
    """Tests for resolve_cast under both repeat-cast policies."""

    @pytest.mark.parametrize("policy", list(RepeatCastPolicy))
    def test_first_vote_is_recorded(self, policy):
        change = resolve_cast(None, UP, policy)
        assert change.current == UP
        assert change.changed
        assert (change.upvote_delta, change.downvote_delta) == (1, 0)

    @pytest.mark.parametrize("policy", list(RepeatCastPolicy))
    def test_opposite_direction_replaces_vote(self, policy):
        change = resolve_cast(UP, DOWN, policy)
        assert change.state == VoteState.DOWNVOTED
        assert (change.upvote_delta, change.downvote_delta) == (-1, 1)

    def test_same_direction_toggles_off(self):
        change = resolve_cast(DOWN, DOWN, RepeatCastPolicy.TOGGLE)
        assert change.state == VoteState.NO_VOTE
        assert change.changed
        assert (change.upvote_delta, change.downvote_delta) == (0, -1)

    def test_same_direction_is_idempotent(self):
        change = resolve_cast(UP, UP, RepeatCastPolicy.IDEMPOTENT)
        assert change.state == VoteState.UPVOTED
        assert not change.changed
        assert (change.upvote_delta, change.downvote_delta) == (0, 0)


class TestResolveWithdrawal:
    """Tests for resolve_withdrawal."""

    def test_withdraw_existing_vote(self):
        change = resolve_withdrawal(UP)
        assert change == VoteChange.between(UP, None)
        assert change.upvote_delta == -1

    def test_withdraw_without_vote_is_noop(self):
        change = resolve_withdrawal(None)
        assert not change.changed
        assert (change.upvote_delta, change.downvote_delta) == (0, 0)

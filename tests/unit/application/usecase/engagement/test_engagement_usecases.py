"""Tests for the engagement use cases."""

from datetime import timedelta

import pytest

from dealspark.application.usecase.engagement import (
    RebuildEngagementRequest,
    RebuildEngagementUseCase,
    RecordCommentRequest,
    RecordCommentUseCase,
)
from dealspark.config import AuthSettings
from dealspark.domain.error import Forbidden, NotFoundError
from dealspark.domain.repository import (
    DealRepository,
    EngagementRepository,
    VoteRepository,
)
from dealspark.domain.service import RankingService
from dealspark.domain.value import DealSort, Role, UserId, VoteDirection
from tests.conftest import NOW, make_deal, make_token
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestRecordComment:
    """Tests for RecordCommentUseCase."""

    @pytest.mark.asyncio
    async def test_created_and_removed_comments(self, unit_env):
        use_case = await unit_env.get(RecordCommentUseCase)
        deal_repo = await unit_env.get(DealRepository)
        auth_settings = await unit_env.get(AuthSettings)
        deal = await deal_repo.save(make_deal())
        token = make_token(auth_settings, role=Role.ADMIN)

        await use_case.execute(RecordCommentRequest(deal_id=deal.id, token=token))
        added = await use_case.execute(
            RecordCommentRequest(deal_id=deal.id, token=token)
        )
        removed = await use_case.execute(
            RecordCommentRequest(deal_id=deal.id, token=token, removed=True)
        )

        assert added.engagement.comment_count == 2
        assert removed.engagement.comment_count == 1

    @pytest.mark.asyncio
    async def test_unknown_deal(self, unit_env):
        use_case = await unit_env.get(RecordCommentUseCase)
        auth_settings = await unit_env.get(AuthSettings)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                RecordCommentRequest(
                    deal_id=make_deal().id,
                    token=make_token(auth_settings, role=Role.ADMIN),
                )
            )

    @pytest.mark.asyncio
    async def test_member_cannot_move_comment_counter(self, unit_env):
        use_case = await unit_env.get(RecordCommentUseCase)
        deal_repo = await unit_env.get(DealRepository)
        engagement_repo = await unit_env.get(EngagementRepository)
        auth_settings = await unit_env.get(AuthSettings)
        deal = await deal_repo.save(make_deal())
        await engagement_repo.adjust_comment_count(deal.id, 1)
        token = make_token(auth_settings, role=Role.MEMBER)

        for removed in (False, True):
            with pytest.raises(Forbidden):
                await use_case.execute(
                    RecordCommentRequest(deal_id=deal.id, token=token, removed=removed)
                )

        snapshot = await engagement_repo.get_snapshot(deal.id)
        assert snapshot.comment_count == 1

    @pytest.mark.asyncio
    async def test_replayed_member_calls_do_not_lift_a_deal_in_hot(self, unit_env):
        use_case = await unit_env.get(RecordCommentUseCase)
        ranking_service = await unit_env.get(RankingService)
        deal_repo = await unit_env.get(DealRepository)
        engagement_repo = await unit_env.get(EngagementRepository)
        auth_settings = await unit_env.get(AuthSettings)
        created_at = NOW - timedelta(hours=2)
        popular = await deal_repo.save(make_deal(created_at=created_at))
        await engagement_repo.set_vote_counts(popular.id, 50, 0)
        unvoted = await deal_repo.save(make_deal(created_at=created_at))
        token = make_token(auth_settings, role=Role.MEMBER)

        for _ in range(60):
            with pytest.raises(Forbidden):
                await use_case.execute(
                    RecordCommentRequest(deal_id=unvoted.id, token=token)
                )

        page = await ranking_service.list_deals(DealSort.HOT, now=NOW)
        assert [item.deal.id for item in page.items] == [popular.id, unvoted.id]
        assert page.items[1].snapshot.comment_count == 0


class TestRebuildEngagement:
    """Tests for RebuildEngagementUseCase."""

    @pytest.mark.asyncio
    async def test_admin_rebuilds_from_ledger(self, unit_env):
        use_case = await unit_env.get(RebuildEngagementUseCase)
        deal_repo = await unit_env.get(DealRepository)
        vote_repo = await unit_env.get(VoteRepository)
        engagement_repo = await unit_env.get(EngagementRepository)
        auth_settings = await unit_env.get(AuthSettings)
        deal = await deal_repo.save(make_deal())
        await vote_repo.upsert(
            deal.id, UserId(deal.submitter_id), VoteDirection.UP, deal.created_at
        )
        await engagement_repo.set_vote_counts(deal.id, 7, 3)

        response = await use_case.execute(
            RebuildEngagementRequest(
                deal_id=deal.id, token=make_token(auth_settings, role=Role.ADMIN)
            )
        )

        assert response.engagement.upvote_count == 1
        assert response.engagement.downvote_count == 0

    @pytest.mark.asyncio
    async def test_moderator_is_forbidden(self, unit_env):
        use_case = await unit_env.get(RebuildEngagementUseCase)
        deal_repo = await unit_env.get(DealRepository)
        auth_settings = await unit_env.get(AuthSettings)
        deal = await deal_repo.save(make_deal())

        with pytest.raises(Forbidden):
            await use_case.execute(
                RebuildEngagementRequest(
                    deal_id=deal.id, token=make_token(auth_settings, role=Role.MODERATOR)
                )
            )

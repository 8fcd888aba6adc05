"""Unit tests for EngagementService."""

import pytest

from dealspark.config import EngagementSettings
from dealspark.domain.error import NotFoundError
from dealspark.domain.repository import (
    DealRepository,
    EngagementRepository,
    TransactionManager,
    VoteRepository,
)
from dealspark.domain.service import EngagementService, VoteService
from dealspark.domain.value import DealStatus, ViewerKey, VoteDirection
from dealspark.persistence.repository.inmemory import InMemoryEngagementRepository
from tests.conftest import make_deal, make_principal
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def seed(env, **kwargs):
    deal_repo = await env.get(DealRepository)
    return await deal_repo.save(make_deal(**kwargs))


class BrokenViewRepository(InMemoryEngagementRepository):
    async def register_view(self, deal_id, viewer, now, window):
        raise ConnectionError("view store unavailable")


class TestRecordView:
    """Tests for record_view."""

    @pytest.mark.asyncio
    async def test_first_view_is_counted(self, unit_env):
        engagement_service = await unit_env.get(EngagementService)
        deal = await seed(unit_env)

        counted = await engagement_service.record_view(
            deal.id, ViewerKey.for_fingerprint("browser-1")
        )

        assert counted
        assert (await engagement_service.snapshot(deal.id)).view_count == 1

    @pytest.mark.asyncio
    async def test_repeat_view_within_window_is_not_counted(self, unit_env):
        engagement_service = await unit_env.get(EngagementService)
        deal = await seed(unit_env)
        viewer = ViewerKey.for_fingerprint("browser-1")

        await engagement_service.record_view(deal.id, viewer)
        counted = await engagement_service.record_view(deal.id, viewer)

        assert not counted
        assert (await engagement_service.snapshot(deal.id)).view_count == 1

    @pytest.mark.asyncio
    async def test_distinct_viewers_are_counted(self, unit_env):
        engagement_service = await unit_env.get(EngagementService)
        deal = await seed(unit_env)

        for i in range(3):
            await engagement_service.record_view(
                deal.id, ViewerKey.for_fingerprint(f"browser-{i}")
            )
        await engagement_service.record_view(
            deal.id, ViewerKey.for_user(make_principal().user_id)
        )

        assert (await engagement_service.snapshot(deal.id)).view_count == 4

    @pytest.mark.asyncio
    async def test_zero_window_counts_every_view(self, unit_env):
        engagement_service = EngagementService(
            deal_repository=await unit_env.get(DealRepository),
            vote_repository=await unit_env.get(VoteRepository),
            engagement_repository=await unit_env.get(EngagementRepository),
            transactions=await unit_env.get(TransactionManager),
            engagement_settings=EngagementSettings(view_dedup_window_minutes=0),
        )
        deal = await seed(unit_env)
        viewer = ViewerKey.for_fingerprint("browser-1")

        await engagement_service.record_view(deal.id, viewer)
        await engagement_service.record_view(deal.id, viewer)

        assert (await engagement_service.snapshot(deal.id)).view_count == 2

    @pytest.mark.asyncio
    async def test_view_of_hidden_deal_is_ignored(self, unit_env):
        engagement_service = await unit_env.get(EngagementService)
        deal = await seed(unit_env, status=DealStatus.PENDING_REVIEW)

        counted = await engagement_service.record_view(
            deal.id, ViewerKey.for_fingerprint("browser-1")
        )

        assert not counted
        assert (await engagement_service.snapshot(deal.id)).view_count == 0

    @pytest.mark.asyncio
    async def test_view_store_failure_is_swallowed(self, unit_env):
        deal_repo = await unit_env.get(DealRepository)
        engagement_service = EngagementService(
            deal_repository=deal_repo,
            vote_repository=await unit_env.get(VoteRepository),
            engagement_repository=BrokenViewRepository(),
            transactions=await unit_env.get(TransactionManager),
            engagement_settings=EngagementSettings(),
        )
        deal = await deal_repo.save(make_deal())

        counted = await engagement_service.record_view(
            deal.id, ViewerKey.for_fingerprint("browser-1")
        )

        assert counted is False


class TestComments:
    """Tests for record_comment and remove_comment."""

    @pytest.mark.asyncio
    async def test_comments_are_counted(self, unit_env):
        engagement_service = await unit_env.get(EngagementService)
        deal = await seed(unit_env)

        await engagement_service.record_comment(deal.id)
        snapshot = await engagement_service.record_comment(deal.id)

        assert snapshot.comment_count == 2

    @pytest.mark.asyncio
    async def test_comment_count_never_goes_below_zero(self, unit_env):
        engagement_service = await unit_env.get(EngagementService)
        deal = await seed(unit_env)
        await engagement_service.record_comment(deal.id)

        await engagement_service.remove_comment(deal.id)
        snapshot = await engagement_service.remove_comment(deal.id)

        assert snapshot.comment_count == 0

    @pytest.mark.asyncio
    async def test_comment_on_unknown_deal_raises(self, unit_env):
        engagement_service = await unit_env.get(EngagementService)

        with pytest.raises(NotFoundError):
            await engagement_service.record_comment(make_deal().id)


class TestRebuild:
    """Tests for rebuilding vote counters from the ledger."""

    @pytest.mark.asyncio
    async def test_rebuild_restores_counters_from_ledger(self, unit_env):
        engagement_service = await unit_env.get(EngagementService)
        vote_service = await unit_env.get(VoteService)
        engagement_repo = await unit_env.get(EngagementRepository)
        deal = await seed(unit_env)
        for direction in (VoteDirection.UP, VoteDirection.UP, VoteDirection.DOWN):
            await vote_service.cast_vote(deal.id, make_principal(), direction)
        await engagement_service.record_comment(deal.id)
        # Simulate drift
        await engagement_repo.set_vote_counts(deal.id, 17, 4)

        snapshot = await engagement_service.rebuild(deal.id)

        assert (snapshot.upvote_count, snapshot.downvote_count) == (2, 1)
        assert snapshot.comment_count == 1

    @pytest.mark.asyncio
    async def test_rebuild_unknown_deal_raises(self, unit_env):
        engagement_service = await unit_env.get(EngagementService)

        with pytest.raises(NotFoundError):
            await engagement_service.rebuild(make_deal().id)

"""Integration tests for the PostgreSQL repositories.

Need a database at DATABASE__URL with migrations applied.
"""

import os
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from dealspark.domain.repository import (
    DealRepository,
    EngagementRepository,
    TransactionManager,
    VoteRepository,
)
from dealspark.domain.value import (
    DealFilter,
    DealSort,
    DealStatus,
    HeatParams,
    UserId,
    ViewerKey,
    VoteDirection,
)
from tests.conftest import make_deal
from tests.harness import create_env_fixture

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        not os.environ.get("DATABASE__URL"), reason="DATABASE__URL is not set"
    ),
]

integration_env = create_env_fixture(unmock={"persistence"})


class TestPostgresDealRepository:
    """Integration tests for PostgresDealRepository."""

    @pytest.mark.asyncio
    async def test_save_and_find(self, integration_env):
        deal_repo = await integration_env.get(DealRepository)
        deal = make_deal(DealStatus.DRAFT, category_id=uuid4())

        await deal_repo.save(deal)
        found = await deal_repo.find_by_id(deal.id)

        assert found is not None
        assert found.slug == deal.slug
        assert found.status == DealStatus.DRAFT
        assert found.discount_percentage == 25
        assert found.category_id == deal.category_id

    @pytest.mark.asyncio
    async def test_transition_status_is_compare_and_set(self, integration_env):
        deal_repo = await integration_env.get(DealRepository)
        deal = await deal_repo.save(make_deal(DealStatus.PENDING_REVIEW))
        now = datetime.now(timezone.utc)

        published = await deal_repo.transition_status(
            deal.id, DealStatus.PENDING_REVIEW, DealStatus.PUBLISHED, now
        )
        lost = await deal_repo.transition_status(
            deal.id, DealStatus.PENDING_REVIEW, DealStatus.REJECTED, now
        )

        assert published.status == DealStatus.PUBLISHED
        assert published.published_at == now
        assert lost is None

    @pytest.mark.asyncio
    async def test_hot_ranking_uses_engagement(self, integration_env):
        deal_repo = await integration_env.get(DealRepository)
        engagement_repo = await integration_env.get(EngagementRepository)
        shop_id = uuid4()
        now = datetime.now(timezone.utc)
        quiet = await deal_repo.save(make_deal(shop_id=shop_id))
        loud = await deal_repo.save(
            make_deal(shop_id=shop_id, created_at=now - timedelta(hours=2))
        )
        await engagement_repo.set_vote_counts(loud.id, 100, 0)

        ranked = await deal_repo.find_published(
            DealSort.HOT, now, HeatParams(), DealFilter(shop_id=shop_id)
        )

        assert [r.deal.id for r in ranked] == [loud.id, quiet.id]
        assert ranked[0].snapshot.upvote_count == 100


class TestPostgresVoteLedger:
    """Integration tests for votes, counters and deal scopes."""

    @pytest.mark.asyncio
    async def test_upsert_and_count(self, integration_env):
        deal_repo = await integration_env.get(DealRepository)
        vote_repo = await integration_env.get(VoteRepository)
        deal = await deal_repo.save(make_deal())
        user_id = UserId(uuid4())
        now = datetime.now(timezone.utc)

        await vote_repo.upsert(deal.id, user_id, VoteDirection.UP, now)
        await vote_repo.upsert(deal.id, user_id, VoteDirection.DOWN, now)

        assert await vote_repo.count_by_direction(deal.id) == (0, 1)
        votes = await vote_repo.find_by_user_and_deals(user_id, [deal.id])
        assert [v.direction for v in votes] == [VoteDirection.DOWN]

    @pytest.mark.asyncio
    async def test_deal_scope_rolls_back(self, integration_env):
        deal_repo = await integration_env.get(DealRepository)
        engagement_repo = await integration_env.get(EngagementRepository)
        transactions = await integration_env.get(TransactionManager)
        deal = await deal_repo.save(make_deal())

        with pytest.raises(RuntimeError):
            async with transactions.deal_scope(deal.id):
                await engagement_repo.apply_vote_delta(deal.id, 1, 0)
                raise RuntimeError("boom")

        assert (await engagement_repo.get_snapshot(deal.id)).upvote_count == 0

    @pytest.mark.asyncio
    async def test_register_view_window(self, integration_env):
        deal_repo = await integration_env.get(DealRepository)
        engagement_repo = await integration_env.get(EngagementRepository)
        deal = await deal_repo.save(make_deal())
        viewer = ViewerKey.for_fingerprint(str(uuid4()))
        start = datetime.now(timezone.utc)
        window = timedelta(minutes=30)

        assert await engagement_repo.register_view(deal.id, viewer, start, window)
        assert not await engagement_repo.register_view(
            deal.id, viewer, start + timedelta(minutes=1), window
        )
        assert await engagement_repo.register_view(
            deal.id, viewer, start + window, window
        )
        assert (await engagement_repo.get_snapshot(deal.id)).view_count == 2

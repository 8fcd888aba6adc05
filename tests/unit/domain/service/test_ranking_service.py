"""Unit tests for RankingService."""

from datetime import timedelta
from uuid import UUID, uuid4

import pytest

from dealspark.config import RankingSettings
from dealspark.domain.error import ValidationError
from dealspark.domain.repository import DealRepository, EngagementRepository
from dealspark.domain.service import RankingService
from dealspark.domain.value import (
    CategoryId,
    DealFilter,
    DealId,
    DealSort,
    DealStatus,
    ShopId,
)
from tests.conftest import NOW, make_deal
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def seed(env, age_hours: float = 1.0, up: int = 0, down: int = 0, **kwargs):
    """Save a deal created ``age_hours`` before NOW with the given votes."""
    deal_repo = await env.get(DealRepository)
    engagement_repo = await env.get(EngagementRepository)
    deal = await deal_repo.save(
        make_deal(created_at=NOW - timedelta(hours=age_hours), **kwargs)
    )
    if up or down:
        await engagement_repo.set_vote_counts(deal.id, up, down)
    return deal


def ids(page):
    return [item.deal.id for item in page.items]


class TestHotOrdering:
    """Tests for the "Hot" listing."""

    @pytest.mark.asyncio
    async def test_fresh_deal_outranks_old_deal_with_same_votes(self, unit_env):
        ranking_service = await unit_env.get(RankingService)
        old = await seed(unit_env, age_hours=48, up=50)
        fresh = await seed(unit_env, age_hours=1, up=50)

        page = await ranking_service.list_deals(DealSort.HOT, now=NOW)

        assert ids(page) == [fresh.id, old.id]

    @pytest.mark.asyncio
    async def test_more_votes_rank_higher_at_same_age(self, unit_env):
        ranking_service = await unit_env.get(RankingService)
        few = await seed(unit_env, age_hours=3, up=2)
        many = await seed(unit_env, age_hours=3, up=40)
        negative = await seed(unit_env, age_hours=3, down=5)

        page = await ranking_service.list_deals(DealSort.HOT, now=NOW)

        assert ids(page) == [many.id, few.id, negative.id]

    @pytest.mark.asyncio
    async def test_scores_are_reported_with_items(self, unit_env):
        ranking_service = await unit_env.get(RankingService)
        await seed(unit_env, age_hours=0, up=9)

        page = await ranking_service.list_deals(DealSort.HOT, now=NOW)

        assert page.items[0].heat_score == pytest.approx(1.0)
        assert page.items[0].snapshot.upvote_count == 9

    @pytest.mark.asyncio
    async def test_ties_break_by_newest_then_id(self, unit_env):
        ranking_service = await unit_env.get(RankingService)
        low_id = DealId(UUID(int=1))
        high_id = DealId(UUID(int=2))
        # Same age and votes: identical scores
        second = await seed(unit_env, age_hours=2, id=high_id)
        first = await seed(unit_env, age_hours=2, id=low_id)

        page = await ranking_service.list_deals(DealSort.HOT, now=NOW)

        assert ids(page) == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_custom_decay_changes_order(self, unit_env):
        """With very slow decay, votes dominate age."""
        deal_repo = await unit_env.get(DealRepository)
        ranking_service = RankingService(
            deal_repo, RankingSettings(decay_half_life_hours=10_000)
        )
        fresh = await seed(unit_env, age_hours=1, up=5)
        old_popular = await seed(unit_env, age_hours=72, up=500)

        page = await ranking_service.list_deals(DealSort.HOT, now=NOW)

        assert ids(page) == [old_popular.id, fresh.id]


class TestNewestOrdering:
    """Tests for the "Newest" listing."""

    @pytest.mark.asyncio
    async def test_newest_ignores_votes(self, unit_env):
        ranking_service = await unit_env.get(RankingService)
        old_popular = await seed(unit_env, age_hours=5, up=900)
        middle = await seed(unit_env, age_hours=2)
        newest = await seed(unit_env, age_hours=0.5, down=3)

        page = await ranking_service.list_deals(DealSort.NEWEST, now=NOW)

        assert ids(page) == [newest.id, middle.id, old_popular.id]


class TestVisibility:
    """Only published, unexpired deals are listed."""

    @pytest.mark.asyncio
    async def test_hidden_deals_are_excluded(self, unit_env):
        ranking_service = await unit_env.get(RankingService)
        live = await seed(unit_env)
        for status in (
            DealStatus.DRAFT,
            DealStatus.PENDING_REVIEW,
            DealStatus.REJECTED,
            DealStatus.EXPIRED,
            DealStatus.REMOVED,
        ):
            await seed(unit_env, status=status, up=100)
        await seed(unit_env, up=100, expires_at=NOW)
        future = await seed(unit_env, expires_at=NOW + timedelta(minutes=1))

        for sort in DealSort:
            page = await ranking_service.list_deals(sort, now=NOW)
            assert set(ids(page)) == {live.id, future.id}
            assert page.total == 2

    @pytest.mark.asyncio
    async def test_filter_by_category_and_shop(self, unit_env):
        ranking_service = await unit_env.get(RankingService)
        category = CategoryId(uuid4())
        shop = ShopId(uuid4())
        both = await seed(unit_env, category_id=category, shop_id=shop)
        await seed(unit_env, category_id=category)
        await seed(unit_env, shop_id=shop)
        await seed(unit_env)

        by_category = await ranking_service.list_deals(
            deal_filter=DealFilter(category_id=category), now=NOW
        )
        by_both = await ranking_service.list_deals(
            deal_filter=DealFilter(category_id=category, shop_id=shop), now=NOW
        )

        assert by_category.total == 2
        assert ids(by_both) == [both.id]


class TestPagination:
    """Tests for pages and their bounds."""

    @pytest.mark.asyncio
    async def test_pages_partition_the_listing(self, unit_env):
        ranking_service = await unit_env.get(RankingService)
        for hours in range(5):
            await seed(unit_env, age_hours=hours)

        first = await ranking_service.list_deals(
            DealSort.NEWEST, page=1, page_size=2, now=NOW
        )
        second = await ranking_service.list_deals(
            DealSort.NEWEST, page=2, page_size=2, now=NOW
        )
        last = await ranking_service.list_deals(
            DealSort.NEWEST, page=3, page_size=2, now=NOW
        )

        assert len(first.items) == len(second.items) == 2
        assert len(last.items) == 1
        assert first.has_next and second.has_next and not last.has_next
        assert len(set(ids(first) + ids(second) + ids(last))) == 5
        assert first.total == 5

    @pytest.mark.asyncio
    async def test_page_beyond_end_is_empty(self, unit_env):
        ranking_service = await unit_env.get(RankingService)
        await seed(unit_env)

        page = await ranking_service.list_deals(page=4, page_size=10, now=NOW)

        assert page.items == []
        assert page.total == 1
        assert not page.has_next

    @pytest.mark.asyncio
    async def test_default_page_size_comes_from_settings(self, unit_env):
        ranking_service = await unit_env.get(RankingService)

        page = await ranking_service.list_deals(now=NOW)

        assert page.page_size == RankingSettings().default_page_size

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page,page_size", [(0, 10), (-1, 10), (1, 0), (1, 101)])
    async def test_out_of_range_paging_raises(self, unit_env, page, page_size):
        ranking_service = await unit_env.get(RankingService)

        with pytest.raises(ValidationError):
            await ranking_service.list_deals(page=page, page_size=page_size, now=NOW)


class TestStats:
    """Tests for stats and hottest."""

    @pytest.mark.asyncio
    async def test_stats_count_visible_deals(self, unit_env):
        ranking_service = await unit_env.get(RankingService)
        hot = await seed(unit_env, age_hours=1, up=30)
        await seed(unit_env, age_hours=2)
        await seed(unit_env, age_hours=36)
        await seed(unit_env, status=DealStatus.PENDING_REVIEW)

        stats = await ranking_service.stats(NOW)

        assert stats.total_published == 3
        # NOW is noon, so deals up to 12 hours old were created today
        assert stats.published_today == 2
        assert stats.hottest is not None
        assert stats.hottest.deal.id == hot.id

    @pytest.mark.asyncio
    async def test_stats_of_empty_listing(self, unit_env):
        ranking_service = await unit_env.get(RankingService)

        stats = await ranking_service.stats(NOW)

        assert stats.total_published == 0
        assert stats.hottest is None

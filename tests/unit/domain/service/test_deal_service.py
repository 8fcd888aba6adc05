"""Unit tests for DealService."""

import re
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from dealspark.domain.error import Forbidden, NotFoundError, ValidationError
from dealspark.domain.repository import DealRepository
from dealspark.domain.service import DealService
from dealspark.domain.value import DealStatus, Role
from tests.conftest import make_deal, make_principal
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCreateDeal:
    """Tests for deal submission."""

    @pytest.mark.asyncio
    async def test_creates_draft_owned_by_caller(self, unit_env):
        deal_service = await unit_env.get(DealService)
        deal_repo = await unit_env.get(DealRepository)
        member = make_principal()

        deal = await deal_service.create_deal(
            member,
            title="Noise Cancelling Headphones",
            original_price=Decimal("200.00"),
            discounted_price=Decimal("149.00"),
        )

        assert deal.status == DealStatus.DRAFT
        assert deal.submitter_id == member.user_id
        assert deal.published_at is None
        assert deal.discount_percentage == 26
        assert re.fullmatch(r"noise-cancelling-headphones-\d+", str(deal.slug))
        assert await deal_repo.find_by_id(deal.id) == deal

    @pytest.mark.asyncio
    async def test_title_without_slug_characters_falls_back(self, unit_env):
        deal_service = await unit_env.get(DealService)

        deal = await deal_service.create_deal(make_principal(), title="!!! ???")

        assert re.fullmatch(r"deal-\d+", str(deal.slug))

    @pytest.mark.asyncio
    async def test_anonymous_cannot_create(self, unit_env):
        deal_service = await unit_env.get(DealService)

        with pytest.raises(Forbidden):
            await deal_service.create_deal(
                make_principal(Role.ANONYMOUS), title="Cheap TV"
            )

    @pytest.mark.asyncio
    async def test_empty_title_is_rejected(self, unit_env):
        deal_service = await unit_env.get(DealService)

        with pytest.raises(ValidationError):
            await deal_service.create_deal(make_principal(), title="")

    @pytest.mark.asyncio
    async def test_expiry_in_the_past_is_rejected(self, unit_env):
        deal_service = await unit_env.get(DealService)

        with pytest.raises(ValidationError):
            await deal_service.create_deal(
                make_principal(),
                title="Yesterday's deal",
                expires_at=datetime.now(timezone.utc) - timedelta(minutes=1),
            )


class TestGenerateSlug:
    """Tests for slug generation."""

    def test_millisecond_suffix(self):
        now = datetime(2026, 3, 14, 12, 0, tzinfo=timezone.utc)

        slug = DealService.generate_slug("Hello, World!", now)

        assert str(slug) == f"hello-world-{int(now.timestamp() * 1000)}"

    def test_long_titles_are_truncated(self):
        now = datetime(2026, 3, 14, 12, 0, tzinfo=timezone.utc)

        slug = DealService.generate_slug("word " * 100, now)

        assert len(str(slug)) <= 120
        assert not str(slug).startswith("-")
        assert "--" not in str(slug)


class TestGetDeal:
    """Tests for deal visibility on detail reads."""

    @pytest.mark.asyncio
    async def test_live_deal_is_public(self, unit_env):
        deal_service = await unit_env.get(DealService)
        deal_repo = await unit_env.get(DealRepository)
        deal = await deal_repo.save(make_deal())

        found = await deal_service.get_deal(deal.id, make_principal(Role.ANONYMOUS))

        assert found.id == deal.id

    @pytest.mark.asyncio
    async def test_draft_visible_to_submitter_and_moderators(self, unit_env):
        deal_service = await unit_env.get(DealService)
        deal_repo = await unit_env.get(DealRepository)
        submitter = make_principal()
        deal = await deal_repo.save(
            make_deal(DealStatus.DRAFT, submitter_id=submitter.user_id)
        )

        assert (await deal_service.get_deal(deal.id, submitter)).id == deal.id
        moderator = make_principal(Role.MODERATOR)
        assert (await deal_service.get_deal(deal.id, moderator)).id == deal.id

    @pytest.mark.asyncio
    async def test_hidden_deal_is_not_found_for_others(self, unit_env):
        deal_service = await unit_env.get(DealService)
        deal_repo = await unit_env.get(DealRepository)
        deal = await deal_repo.save(make_deal(DealStatus.REMOVED))

        with pytest.raises(NotFoundError):
            await deal_service.get_deal(deal.id, make_principal())

    @pytest.mark.asyncio
    async def test_expired_by_time_is_hidden(self, unit_env):
        deal_service = await unit_env.get(DealService)
        deal_repo = await unit_env.get(DealRepository)
        now = datetime.now(timezone.utc)
        deal = await deal_repo.save(
            make_deal(
                created_at=now - timedelta(days=2),
                expires_at=now - timedelta(hours=1),
            )
        )

        with pytest.raises(NotFoundError):
            await deal_service.get_deal(deal.id, make_principal(Role.ANONYMOUS))

    @pytest.mark.asyncio
    async def test_unknown_deal(self, unit_env):
        deal_service = await unit_env.get(DealService)

        with pytest.raises(NotFoundError):
            await deal_service.get_deal(make_deal().id, make_principal(Role.ADMIN))


class TestListMyDeals:
    """Tests for a member's own submissions."""

    @pytest.mark.asyncio
    async def test_lists_only_own_deals_newest_first(self, unit_env):
        deal_service = await unit_env.get(DealService)
        deal_repo = await unit_env.get(DealRepository)
        member = make_principal()
        now = datetime.now(timezone.utc)
        older = await deal_repo.save(
            make_deal(
                DealStatus.DRAFT,
                created_at=now - timedelta(hours=5),
                submitter_id=member.user_id,
            )
        )
        newer = await deal_repo.save(
            make_deal(
                DealStatus.REJECTED,
                created_at=now - timedelta(hours=1),
                submitter_id=member.user_id,
            )
        )
        await deal_repo.save(make_deal())

        deals = await deal_service.list_my_deals(member)
        drafts = await deal_service.list_my_deals(member, status=DealStatus.DRAFT)

        assert [d.id for d in deals] == [newer.id, older.id]
        assert [d.id for d in drafts] == [older.id]

    @pytest.mark.asyncio
    async def test_anonymous_has_no_deals_to_list(self, unit_env):
        deal_service = await unit_env.get(DealService)

        with pytest.raises(Forbidden):
            await deal_service.list_my_deals(make_principal(Role.ANONYMOUS))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page,page_size", [(1, 0), (1, -1), (0, 20), (1, 101)])
    async def test_out_of_range_pages_are_rejected(self, unit_env, page, page_size):
        deal_service = await unit_env.get(DealService)

        with pytest.raises(ValidationError):
            await deal_service.list_my_deals(
                make_principal(), page=page, page_size=page_size
            )

"""Unit tests for the Deal aggregate."""

from datetime import timedelta
from decimal import Decimal

import pytest

from dealspark.domain.model.deal import calculate_discount
from dealspark.domain.value import DealStatus
from tests.conftest import NOW, make_deal


class TestDiscount:
    """Tests for the derived discount percentage."""

    def test_discount_is_derived_from_prices(self):
        deal = make_deal(
            original_price=Decimal("200.00"), discounted_price=Decimal("150.00")
        )
        assert deal.discount_percentage == 25

    def test_discount_rounds_half_up(self):
        assert calculate_discount(Decimal("3"), Decimal("2")) == 33
        assert calculate_discount(Decimal("8"), Decimal("7")) == 13

    @pytest.mark.parametrize(
        "original,discounted",
        [
            (None, Decimal("10")),
            (Decimal("10"), None),
            (Decimal("0"), Decimal("0")),
            (Decimal("10"), Decimal("10")),
            (Decimal("10"), Decimal("12")),
        ],
    )
    def test_no_discount_when_not_computable(self, original, discounted):
        assert calculate_discount(original, discounted) is None

    def test_explicit_discount_is_kept(self):
        deal = make_deal(discount_percentage=40)
        assert deal.discount_percentage == 40


class TestVisibility:
    """Tests for Deal.is_visible."""

    def test_published_without_expiry_is_visible(self):
        assert make_deal(DealStatus.PUBLISHED).is_visible(NOW)

    @pytest.mark.parametrize(
        "status",
        [
            DealStatus.DRAFT,
            DealStatus.PENDING_REVIEW,
            DealStatus.REJECTED,
            DealStatus.EXPIRED,
            DealStatus.REMOVED,
        ],
    )
    def test_other_statuses_are_hidden(self, status):
        assert not make_deal(status).is_visible(NOW)

    def test_expiry_boundary_is_exclusive(self):
        """A deal expiring exactly now is no longer visible."""
        deal = make_deal(created_at=NOW - timedelta(days=1), expires_at=NOW)
        assert deal.is_expired(NOW)
        assert not deal.is_visible(NOW)
        assert deal.is_visible(NOW - timedelta(seconds=1))


class TestWithStatus:
    """Tests for Deal.with_status."""

    def test_first_publish_stamps_published_at(self):
        deal = make_deal(DealStatus.PENDING_REVIEW)
        published = deal.with_status(DealStatus.PUBLISHED, NOW)
        assert published.published_at == NOW
        assert published.updated_at == NOW

    def test_republish_keeps_original_published_at(self):
        first = NOW - timedelta(days=3)
        deal = make_deal(DealStatus.PENDING_REVIEW, published_at=first)
        published = deal.with_status(DealStatus.PUBLISHED, NOW)
        assert published.published_at == first

    def test_leaving_published_keeps_published_at(self):
        deal = make_deal(DealStatus.PUBLISHED, published_at=NOW - timedelta(hours=5))
        expired = deal.with_status(DealStatus.EXPIRED, NOW)
        assert expired.published_at == NOW - timedelta(hours=5)

"""Deal domain service."""

import re
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from dealspark.domain.error import Forbidden, NotFoundError, ValidationError
from dealspark.domain.model import Deal, Principal
from dealspark.domain.model.deal import utcnow
from dealspark.domain.repository import DealRepository
from dealspark.domain.value import (
    CategoryId,
    DealId,
    DealStatus,
    Role,
    ShopId,
    Slug,
)

from .base import Service


class DealService(Service):
    """Domain service for deal submissions and detail reads."""

    def __init__(self, deal_repository: DealRepository) -> None:
        """Initialize deal service.

        Args:
            deal_repository: Deal repository
        """
        self.deal_repository = deal_repository

    async def create_deal(
        self,
        principal: Principal,
        title: str,
        description: Optional[str] = None,
        original_price: Optional[Decimal] = None,
        discounted_price: Optional[Decimal] = None,
        affiliate_link: Optional[str] = None,
        image_url: Optional[str] = None,
        category_id: Optional[CategoryId] = None,
        shop_id: Optional[ShopId] = None,
        expires_at: Optional[datetime] = None,
    ) -> Deal:
        """Create a new deal as a draft owned by the caller.

        Args:
            principal: Caller (member or above)
            title: Deal title
            description: Optional description
            original_price: Optional list price
            discounted_price: Optional deal price
            affiliate_link: Optional link to the offer
            image_url: Optional image
            category_id: Optional category
            shop_id: Optional shop
            expires_at: Optional expiry time (must be in the future)

        Returns:
            The saved draft

        Raises:
            Forbidden: If the caller is not at least a member
            ValidationError: If the deal fields are invalid
        """
        if principal.user_id is None or not principal.has_role(Role.MEMBER):
            raise Forbidden("submit deals", Role.MEMBER.value, principal.role.value)

        now = utcnow()
        if expires_at is not None and expires_at <= now:
            raise ValidationError("expires_at must be in the future")

        deal_id = DealId(uuid4())
        with logfire.span(
            "deal_service.create_deal",
            deal_id=str(deal_id),
            submitter_id=str(principal.user_id),
            title=title,
        ):
            try:
                deal = Deal(
                    id=deal_id,
                    slug=self.generate_slug(title, now),
                    title=title,
                    description=description,
                    original_price=original_price,
                    discounted_price=discounted_price,
                    affiliate_link=affiliate_link,
                    image_url=image_url,
                    category_id=category_id,
                    shop_id=shop_id,
                    submitter_id=principal.user_id,
                    status=DealStatus.DRAFT,
                    created_at=now,
                    updated_at=now,
                    expires_at=expires_at,
                )
            except PydanticValidationError as e:
                logfire.warn("Invalid deal submission", error=str(e))
                raise ValidationError(str(e)) from e

            saved = await self.deal_repository.save(deal)
            logfire.info("Deal created", deal_id=str(saved.id), slug=str(saved.slug))
            return saved

    async def get_deal(self, deal_id: DealId, principal: Principal) -> Deal:
        """Get a deal for display.

        Live deals are public. Any other status is only visible to its
        submitter and to moderators; everyone else gets NotFound.

        Raises:
            NotFoundError: If the deal does not exist or is hidden from the caller
        """
        with logfire.span("deal_service.get_deal", deal_id=str(deal_id)):
            deal = await self.deal_repository.find_by_id(deal_id)
            if deal is None:
                logfire.warn("Deal not found", deal_id=str(deal_id))
                raise NotFoundError("Deal", str(deal_id))

            if deal.is_visible(utcnow()):
                return deal

            is_submitter = (
                principal.user_id is not None
                and principal.user_id == deal.submitter_id
            )
            if is_submitter or principal.has_role(Role.MODERATOR):
                return deal

            logfire.warn(
                "Hidden deal requested",
                deal_id=str(deal_id),
                status=deal.status.value,
            )
            raise NotFoundError("Deal", str(deal_id))

    async def list_my_deals(
        self,
        principal: Principal,
        status: Optional[DealStatus] = None,
        page: int = 1,
        page_size: int = 20,
    ) -> list[Deal]:
        """List the caller's own submissions, newest first.

        Raises:
            Forbidden: If the caller is anonymous
            ValidationError: If page or page_size is out of range
        """
        if principal.user_id is None or not principal.has_role(Role.MEMBER):
            raise Forbidden("list own deals", Role.MEMBER.value, principal.role.value)
        self.check_page(page, page_size)

        return await self.deal_repository.find_by_submitter(
            principal.user_id,
            status=status,
            limit=page_size,
            offset=(page - 1) * page_size,
        )

    @classmethod
    def generate_slug(cls, title: str, now: datetime) -> Slug:
        """Slug of the form ``<title-slug>-<epoch-millis>``."""
        millis = int(now.timestamp() * 1000)
        suffix = f"-{millis}"
        base = cls._slugify(title)[: 120 - len(suffix)].strip("-")
        return Slug(f"{base or 'deal'}{suffix}")

    @staticmethod
    def _slugify(title: str) -> str:
        """Convert title to URL-safe slug format.

        Args:
            title: Title to slugify

        Returns:
            URL-safe slug string (may be empty if title has no valid chars)
        """
        slug = re.sub(r"[^a-z0-9]+", "-", title.lower())
        slug = re.sub(r"-+", "-", slug)
        return slug.strip("-")

"""PostgreSQL implementation of Deal repository."""

from datetime import datetime
from typing import Any, List, Optional

import logfire
from sqlalchemy import (
    Float,
    Select,
    and_,
    asc,
    cast,
    desc,
    func,
    literal,
    or_,
    select,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP
from sqlalchemy.ext.asyncio import AsyncSession

from dealspark.domain.model import Deal, EngagementSnapshot, RankedDeal
from dealspark.domain.repository import DealRepository
from dealspark.domain.value import (
    DealFilter,
    DealId,
    DealSort,
    DealStatus,
    HeatParams,
    UserId,
)
from dealspark.persistence.mappers import deal_to_dict, row_to_deal
from dealspark.persistence.tables import deal_engagement_table, deals_table

# Written only through transition_status
_STATUS_COLUMNS = {"status", "published_at"}


def _visible(now: datetime) -> Any:
    return and_(
        deals_table.c.status == DealStatus.PUBLISHED.value,
        or_(deals_table.c.expires_at.is_(None), deals_table.c.expires_at > now),
    )


def _apply_filter(stmt: Select, deal_filter: Optional[DealFilter]) -> Select:
    if deal_filter is None:
        return stmt
    if deal_filter.category_id is not None:
        stmt = stmt.where(deals_table.c.category_id == deal_filter.category_id)
    if deal_filter.shop_id is not None:
        stmt = stmt.where(deals_table.c.shop_id == deal_filter.shop_id)
    return stmt


def _heat_expression(now: datetime, params: HeatParams) -> Any:
    """SQL rendition of the heat score (PostgreSQL ``log`` is base 10)."""
    up = func.coalesce(deal_engagement_table.c.upvote_count, 0)
    down = func.coalesce(deal_engagement_table.c.downvote_count, 0)
    views = func.coalesce(deal_engagement_table.c.view_count, 0)
    comments = func.coalesce(deal_engagement_table.c.comment_count, 0)

    net = cast(up - down, Float)
    magnitude = func.log(func.greatest(1.0, func.abs(net) + 1.0))
    age_hours = func.greatest(
        0.0,
        func.extract(
            "epoch", literal(now, TIMESTAMP(timezone=True)) - deals_table.c.created_at
        )
        / 3600.0,
    )

    return (
        func.sign(net) * magnitude
        - cast(age_hours, Float) / params.decay_half_life_hours
        + func.log(1.0 + cast(views, Float)) * params.view_weight
        + cast(comments, Float) * params.comment_weight
    )


def _row_to_ranked(row: dict[str, Any]) -> RankedDeal:
    deal = row_to_deal(row)
    snapshot = EngagementSnapshot(
        deal_id=deal.id,
        upvote_count=row["upvote_count"] or 0,
        downvote_count=row["downvote_count"] or 0,
        view_count=row["view_count"] or 0,
        comment_count=row["comment_count"] or 0,
    )
    return RankedDeal(deal=deal, snapshot=snapshot, heat_score=row["heat_score"])


class PostgresDealRepository(DealRepository):
    """PostgreSQL implementation of DealRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, deal_id: DealId) -> Optional[Deal]:
        """Find a deal by ID."""
        stmt = select(deals_table).where(deals_table.c.id == deal_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_deal(row._asdict()) if row else None

    async def save(self, deal: Deal) -> Deal:
        """Save a deal (create or update)."""
        with logfire.span("deal_repository.save", deal_id=str(deal.id)):
            existing = await self.find_by_id(deal.id)
            deal_dict = deal_to_dict(deal)

            if existing:
                logfire.info("Updating existing deal", deal_id=str(deal.id))
                values = {
                    k: v for k, v in deal_dict.items() if k not in _STATUS_COLUMNS
                }
                stmt = (
                    deals_table.update()
                    .where(deals_table.c.id == deal.id)
                    .values(**values)
                )
                await self.session.execute(stmt)
                await self.session.flush()
                return deal.model_copy(
                    update={
                        "status": existing.status,
                        "published_at": existing.published_at,
                    }
                )

            logfire.info(
                "Inserting new deal", deal_id=str(deal.id), status=deal.status.value
            )
            await self.session.execute(deals_table.insert().values(**deal_dict))
            await self.session.flush()
            return deal

    async def transition_status(
        self,
        deal_id: DealId,
        from_status: DealStatus,
        to_status: DealStatus,
        now: datetime,
    ) -> Optional[Deal]:
        """Compare-and-set the deal status."""
        values: dict[str, Any] = {"status": to_status.value, "updated_at": now}
        if to_status == DealStatus.PUBLISHED:
            values["published_at"] = func.coalesce(deals_table.c.published_at, now)

        stmt = (
            deals_table.update()
            .where(
                deals_table.c.id == deal_id,
                deals_table.c.status == from_status.value,
            )
            .values(**values)
            .returning(*deals_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_deal(row._asdict()) if row else None

    async def find_published(
        self,
        sort: DealSort,
        now: datetime,
        params: HeatParams,
        deal_filter: Optional[DealFilter] = None,
        limit: int = 30,
        offset: int = 0,
    ) -> List[RankedDeal]:
        """Find visible deals in ranking order."""
        with logfire.span(
            "deal_repository.find_published",
            sort=sort.value,
            limit=limit,
            offset=offset,
        ):
            score = _heat_expression(now, params).label("heat_score")
            stmt = (
                select(
                    deals_table,
                    deal_engagement_table.c.upvote_count,
                    deal_engagement_table.c.downvote_count,
                    deal_engagement_table.c.view_count,
                    deal_engagement_table.c.comment_count,
                    score,
                )
                .select_from(
                    deals_table.outerjoin(
                        deal_engagement_table,
                        deal_engagement_table.c.deal_id == deals_table.c.id,
                    )
                )
                .where(_visible(now))
            )
            stmt = _apply_filter(stmt, deal_filter)

            if sort == DealSort.HOT:
                stmt = stmt.order_by(
                    desc(score),
                    desc(deals_table.c.created_at),
                    asc(deals_table.c.id),
                )
            else:
                stmt = stmt.order_by(
                    desc(deals_table.c.created_at), asc(deals_table.c.id)
                )

            stmt = stmt.limit(limit).offset(offset)
            result = await self.session.execute(stmt)
            ranked = [_row_to_ranked(row._asdict()) for row in result.fetchall()]

            logfire.info("Found published deals", count=len(ranked))
            return ranked

    async def count_published(
        self,
        now: datetime,
        deal_filter: Optional[DealFilter] = None,
        created_since: Optional[datetime] = None,
    ) -> int:
        """Count visible deals."""
        stmt = select(func.count()).select_from(deals_table).where(_visible(now))
        stmt = _apply_filter(stmt, deal_filter)
        if created_since is not None:
            stmt = stmt.where(deals_table.c.created_at >= created_since)

        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_by_status(
        self, status: DealStatus, limit: int = 30, offset: int = 0
    ) -> List[Deal]:
        """Find deals in a status, newest first."""
        stmt = (
            select(deals_table)
            .where(deals_table.c.status == status.value)
            .order_by(desc(deals_table.c.created_at), asc(deals_table.c.id))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_deal(row._asdict()) for row in result.fetchall()]

    async def count_by_status(self, status: DealStatus) -> int:
        """Count deals in a status."""
        stmt = (
            select(func.count())
            .select_from(deals_table)
            .where(deals_table.c.status == status.value)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_by_submitter(
        self,
        submitter_id: UserId,
        status: Optional[DealStatus] = None,
        limit: int = 30,
        offset: int = 0,
    ) -> List[Deal]:
        """Find deals submitted by a user, newest first."""
        stmt = select(deals_table).where(deals_table.c.submitter_id == submitter_id)
        if status is not None:
            stmt = stmt.where(deals_table.c.status == status.value)

        stmt = (
            stmt.order_by(desc(deals_table.c.created_at), asc(deals_table.c.id))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_deal(row._asdict()) for row in result.fetchall()]

    async def find_due_for_expiry(self, now: datetime) -> List[Deal]:
        """Find published deals whose expires_at is at or before ``now``."""
        stmt = select(deals_table).where(
            deals_table.c.status == DealStatus.PUBLISHED.value,
            deals_table.c.expires_at.is_not(None),
            deals_table.c.expires_at <= now,
        )
        result = await self.session.execute(stmt)
        return [row_to_deal(row._asdict()) for row in result.fetchall()]

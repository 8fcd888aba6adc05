"""Deal routes."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Query, status
from pydantic import BaseModel, Field

from dealspark.application.usecase.deal import (
    CreateDealRequest,
    CreateDealResponse,
    CreateDealUseCase,
    GetDealRequest,
    GetDealResponse,
    GetDealStatsResponse,
    GetDealStatsUseCase,
    GetDealUseCase,
    ListDealsRequest,
    ListDealsResponse,
    ListDealsUseCase,
    ListMyDealsRequest,
    ListMyDealsResponse,
    ListMyDealsUseCase,
)
from dealspark.application.usecase.engagement import (
    RebuildEngagementRequest,
    RebuildEngagementResponse,
    RebuildEngagementUseCase,
    RecordCommentRequest,
    RecordCommentResponse,
    RecordCommentUseCase,
)
from dealspark.domain.error import DomainError
from dealspark.domain.value import DealSort, DealStatus
from dealspark.interface.error import to_http_exception

router = APIRouter(prefix="/deals", tags=["deals"], route_class=DishkaRoute)


class CreateDealAPIRequest(BaseModel):
    """API request for creating a deal."""

    title: str = Field(min_length=1, max_length=300)
    description: str | None = Field(default=None, max_length=10000)
    original_price: Decimal | None = Field(default=None, ge=0)
    discounted_price: Decimal | None = Field(default=None, ge=0)
    affiliate_link: str | None = None
    image_url: str | None = None
    category_id: UUID | None = None
    shop_id: UUID | None = None
    expires_at: datetime | None = None


class RecordCommentAPIRequest(BaseModel):
    """API request from the comment store."""

    removed: bool = False


@router.get("", response_model=ListDealsResponse)
async def list_deals(
    list_deals_use_case: FromDishka[ListDealsUseCase],
    sort: DealSort = Query(default=DealSort.HOT),
    category_id: UUID | None = Query(default=None),
    shop_id: UUID | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    page_size: int | None = Query(default=None, ge=1, le=100),
    auth_token: str | None = Cookie(default=None),
) -> ListDealsResponse:
    """List visible deals ("hot" or "newest").

    Authentication is optional; signed-in callers also get their vote on
    each deal.

    Args:
        list_deals_use_case: List deals use case from DI
        sort: hot (heat score) or newest (creation time)
        category_id: Optional category filter
        shop_id: Optional shop filter
        page: 1-based page number
        page_size: Deals per page
        auth_token: JWT token from cookie (optional)

    Returns:
        One page of ranked deals
    """
    try:
        return await list_deals_use_case.execute(
            ListDealsRequest(
                token=auth_token,
                sort=sort,
                category_id=category_id,
                shop_id=shop_id,
                page=page,
                page_size=page_size,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/stats", response_model=GetDealStatsResponse)
async def deal_stats(
    deal_stats_use_case: FromDishka[GetDealStatsUseCase],
) -> GetDealStatsResponse:
    """Headline numbers of the public listing."""
    return await deal_stats_use_case.execute()


@router.post("", response_model=CreateDealResponse, status_code=status.HTTP_201_CREATED)
async def create_deal(
    request: CreateDealAPIRequest,
    create_deal_use_case: FromDishka[CreateDealUseCase],
    auth_token: str | None = Cookie(default=None),
) -> CreateDealResponse:
    """Submit a new deal as a draft.

    Requires a member session. The draft is invisible until it is submitted
    for review and approved.

    Args:
        request: Deal data
        create_deal_use_case: Create deal use case from DI
        auth_token: JWT token from cookie

    Returns:
        The created draft
    """
    try:
        return await create_deal_use_case.execute(
            CreateDealRequest(token=auth_token, **request.model_dump())
        )
    except DomainError as e:
        logfire.warn("Deal creation failed", error=str(e))
        raise to_http_exception(e)


@router.get("/mine", response_model=ListMyDealsResponse)
async def list_my_deals(
    list_my_deals_use_case: FromDishka[ListMyDealsUseCase],
    status: DealStatus | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=20, ge=1, le=100),
    auth_token: str | None = Cookie(default=None),
) -> ListMyDealsResponse:
    """List the caller's own submissions in any status."""
    try:
        return await list_my_deals_use_case.execute(
            ListMyDealsRequest(
                token=auth_token, status=status, page=page, page_size=page_size
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/{deal_id}", response_model=GetDealResponse)
async def get_deal(
    deal_id: UUID,
    get_deal_use_case: FromDishka[GetDealUseCase],
    x_viewer_fingerprint: str | None = Header(default=None, max_length=200),
    auth_token: str | None = Cookie(default=None),
) -> GetDealResponse:
    """Get a deal and count the view.

    Args:
        deal_id: Deal UUID
        get_deal_use_case: Get deal use case from DI
        x_viewer_fingerprint: Client fingerprint for anonymous view dedup
        auth_token: JWT token from cookie (optional)

    Returns:
        Deal with counters and the caller's vote
    """
    try:
        return await get_deal_use_case.execute(
            GetDealRequest(
                deal_id=deal_id,
                token=auth_token,
                viewer_fingerprint=x_viewer_fingerprint,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.post("/{deal_id}/comments", response_model=RecordCommentResponse)
async def record_comment(
    deal_id: UUID,
    request: RecordCommentAPIRequest,
    record_comment_use_case: FromDishka[RecordCommentUseCase],
    auth_token: str | None = Cookie(default=None),
) -> RecordCommentResponse:
    """Count a created (or, with ``removed``, deleted) comment (admin)."""
    try:
        return await record_comment_use_case.execute(
            RecordCommentRequest(
                deal_id=deal_id, token=auth_token, removed=request.removed
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.post("/{deal_id}/engagement/rebuild", response_model=RebuildEngagementResponse)
async def rebuild_engagement(
    deal_id: UUID,
    rebuild_engagement_use_case: FromDishka[RebuildEngagementUseCase],
    auth_token: str | None = Cookie(default=None),
) -> RebuildEngagementResponse:
    """Recompute a deal's vote counters from the ledger (admin)."""
    try:
        return await rebuild_engagement_use_case.execute(
            RebuildEngagementRequest(deal_id=deal_id, token=auth_token)
        )
    except DomainError as e:
        raise to_http_exception(e)

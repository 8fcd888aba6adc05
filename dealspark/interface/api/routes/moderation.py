"""Moderation routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query

from dealspark.application.usecase.moderation import (
    ExpireDealsRequest,
    ExpireDealsResponse,
    ExpireDealsUseCase,
    ModerateDealRequest,
    ModerateDealResponse,
    ModerateDealUseCase,
    ModerationQueueRequest,
    ModerationQueueResponse,
    ModerationQueueUseCase,
)
from dealspark.domain.error import DomainError
from dealspark.domain.value import DealStatus, ModerationAction
from dealspark.interface.error import to_http_exception

router = APIRouter(tags=["moderation"], route_class=DishkaRoute)


@router.post(
    "/deals/{deal_id}/moderation/{action}", response_model=ModerateDealResponse
)
async def moderate_deal(
    deal_id: UUID,
    action: ModerationAction,
    moderate_deal_use_case: FromDishka[ModerateDealUseCase],
    auth_token: str | None = Cookie(default=None),
) -> ModerateDealResponse:
    """Apply a moderation action (submit, approve, reject, expire, remove, reopen).

    Args:
        deal_id: Deal UUID
        action: Moderation action
        moderate_deal_use_case: Moderate deal use case from DI
        auth_token: JWT token from cookie

    Returns:
        The deal in its new status

    Raises:
        HTTPException: 403 if the role is too low, 409 if the transition is
            not allowed or lost a race
    """
    try:
        return await moderate_deal_use_case.execute(
            ModerateDealRequest(deal_id=deal_id, action=action, token=auth_token)
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/moderation/queue", response_model=ModerationQueueResponse)
async def moderation_queue(
    moderation_queue_use_case: FromDishka[ModerationQueueUseCase],
    status: DealStatus = Query(default=DealStatus.PENDING_REVIEW),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=20, ge=1, le=100),
    auth_token: str | None = Cookie(default=None),
) -> ModerationQueueResponse:
    """List deals by status for moderators, newest first."""
    try:
        return await moderation_queue_use_case.execute(
            ModerationQueueRequest(
                token=auth_token, status=status, page=page, page_size=page_size
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.post("/moderation/expire", response_model=ExpireDealsResponse)
async def expire_deals(
    expire_deals_use_case: FromDishka[ExpireDealsUseCase],
    auth_token: str | None = Cookie(default=None),
) -> ExpireDealsResponse:
    """Run the expiry sweep now (moderator+)."""
    try:
        return await expire_deals_use_case.execute(
            ExpireDealsRequest(token=auth_token)
        )
    except DomainError as e:
        raise to_http_exception(e)

"""Vote routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie
from pydantic import BaseModel

from dealspark.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
    RemoveVoteRequest,
    RemoveVoteResponse,
    RemoveVoteUseCase,
)
from dealspark.domain.error import DomainError
from dealspark.domain.value import VoteDirection
from dealspark.interface.error import to_http_exception

router = APIRouter(prefix="/deals", tags=["votes"], route_class=DishkaRoute)


class CastVoteAPIRequest(BaseModel):
    """API request for casting a vote."""

    direction: VoteDirection


@router.post("/{deal_id}/vote", response_model=CastVoteResponse)
async def cast_vote(
    deal_id: UUID,
    request: CastVoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    auth_token: str | None = Cookie(default=None),
) -> CastVoteResponse:
    """Vote a deal up or down.

    Requires a member session. Casting the current direction again follows
    the configured repeat-cast rule.

    Args:
        deal_id: Deal UUID
        request: Vote direction
        cast_vote_use_case: Cast vote use case from DI
        auth_token: JWT token from cookie

    Returns:
        The caller's vote state and the deal's counters

    Raises:
        HTTPException: 401/403 on identity, 404 if missing, 409 if not live
    """
    try:
        return await cast_vote_use_case.execute(
            CastVoteRequest(
                deal_id=deal_id, direction=request.direction, token=auth_token
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.delete("/{deal_id}/vote", response_model=RemoveVoteResponse)
async def remove_vote(
    deal_id: UUID,
    remove_vote_use_case: FromDishka[RemoveVoteUseCase],
    auth_token: str | None = Cookie(default=None),
) -> RemoveVoteResponse:
    """Withdraw the caller's vote on a deal.

    Args:
        deal_id: Deal UUID
        remove_vote_use_case: Remove vote use case from DI
        auth_token: JWT token from cookie

    Returns:
        The caller's vote state (no_vote) and the deal's counters
    """
    try:
        return await remove_vote_use_case.execute(
            RemoveVoteRequest(deal_id=deal_id, token=auth_token)
        )
    except DomainError as e:
        raise to_http_exception(e)

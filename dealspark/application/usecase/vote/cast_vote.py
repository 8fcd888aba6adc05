"""Cast vote use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from dealspark.application.usecase.deal.common import EngagementItem
from dealspark.domain.service import IdentityService, VoteService
from dealspark.domain.value import DealId, VoteDirection, VoteState


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    deal_id: UUID
    direction: VoteDirection
    token: Optional[str] = None


class CastVoteResponse(BaseModel):
    """Cast vote response."""

    deal_id: str
    vote_state: VoteState
    changed: bool
    engagement: EngagementItem


class CastVoteUseCase:
    """Use case for voting a deal up or down."""

    def __init__(
        self, identity_service: IdentityService, vote_service: VoteService
    ) -> None:
        """Initialize cast vote use case.

        Args:
            identity_service: Identity gate
            vote_service: Vote domain service
        """
        self.identity_service = identity_service
        self.vote_service = vote_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Args:
            request: Cast vote request

        Returns:
            The caller's vote state and the deal's fresh counters

        Raises:
            Unauthenticated: If the token is missing or invalid
            Forbidden: If the caller is a guest
            NotFoundError: If the deal does not exist
            InvalidState: If the deal is not live
        """
        principal = self.identity_service.resolve(request.token)
        result = await self.vote_service.cast_vote(
            DealId(request.deal_id), principal, request.direction
        )
        return CastVoteResponse(
            deal_id=str(result.deal_id),
            vote_state=result.state,
            changed=result.changed,
            engagement=EngagementItem.from_snapshot(result.snapshot),
        )

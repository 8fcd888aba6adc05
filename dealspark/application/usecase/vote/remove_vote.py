"""Remove vote use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from dealspark.application.usecase.deal.common import EngagementItem
from dealspark.domain.service import IdentityService, VoteService
from dealspark.domain.value import DealId

from .cast_vote import CastVoteResponse


class RemoveVoteRequest(BaseModel):
    """Remove vote request."""

    deal_id: UUID
    token: Optional[str] = None


class RemoveVoteResponse(CastVoteResponse):
    """Remove vote response."""

    pass


class RemoveVoteUseCase:
    """Use case for withdrawing a vote."""

    def __init__(
        self, identity_service: IdentityService, vote_service: VoteService
    ) -> None:
        """Initialize remove vote use case.

        Args:
            identity_service: Identity gate
            vote_service: Vote domain service
        """
        self.identity_service = identity_service
        self.vote_service = vote_service

    async def execute(self, request: RemoveVoteRequest) -> RemoveVoteResponse:
        """Execute remove vote flow (no-op if the caller has no vote).

        Raises:
            Unauthenticated: If the token is missing or invalid
            Forbidden: If the caller is a guest
            NotFoundError: If the deal does not exist
        """
        principal = self.identity_service.resolve(request.token)
        result = await self.vote_service.remove_vote(
            DealId(request.deal_id), principal
        )
        return RemoveVoteResponse(
            deal_id=str(result.deal_id),
            vote_state=result.state,
            changed=result.changed,
            engagement=EngagementItem.from_snapshot(result.snapshot),
        )

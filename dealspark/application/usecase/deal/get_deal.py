"""Get deal use case."""

from typing import Optional
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from dealspark.domain.service import (
    DealService,
    EngagementService,
    IdentityService,
    VoteService,
)
from dealspark.domain.value import DealId, ViewerKey, VoteState

from .common import DealItem, EngagementItem


class GetDealRequest(BaseModel):
    """Get deal request."""

    deal_id: UUID
    token: Optional[str] = None
    # Anonymous viewers are deduplicated by a client fingerprint
    viewer_fingerprint: Optional[str] = Field(default=None, max_length=200)


class GetDealResponse(BaseModel):
    """Get deal response."""

    deal: DealItem
    engagement: EngagementItem
    vote_state: VoteState
    view_counted: bool


class GetDealUseCase:
    """Use case for displaying a deal and counting the view."""

    def __init__(
        self,
        identity_service: IdentityService,
        deal_service: DealService,
        engagement_service: EngagementService,
        vote_service: VoteService,
    ) -> None:
        """Initialize get deal use case.

        Args:
            identity_service: Identity gate
            deal_service: Deal domain service
            engagement_service: Engagement domain service
            vote_service: Vote domain service
        """
        self.identity_service = identity_service
        self.deal_service = deal_service
        self.engagement_service = engagement_service
        self.vote_service = vote_service

    async def execute(self, request: GetDealRequest) -> GetDealResponse:
        """Execute get deal flow.

        Steps:
        1. Resolve the caller (anonymous if no valid token)
        2. Load the deal (hidden deals only for submitter and staff)
        3. Record the view, keyed by user or fingerprint
        4. Read the counters and the caller's vote

        Raises:
            NotFoundError: If the deal does not exist or is hidden
        """
        deal_id = DealId(request.deal_id)
        with logfire.span("get_deal.execute", deal_id=str(deal_id)):
            principal = self.identity_service.resolve_optional(request.token)
            deal = await self.deal_service.get_deal(deal_id, principal)

            viewer: Optional[ViewerKey] = None
            if principal.user_id is not None:
                viewer = ViewerKey.for_user(principal.user_id)
            elif request.viewer_fingerprint:
                viewer = ViewerKey.for_fingerprint(request.viewer_fingerprint)

            view_counted = False
            if viewer is not None:
                view_counted = await self.engagement_service.record_view(
                    deal_id, viewer
                )

            snapshot = await self.engagement_service.snapshot(deal_id)

            vote_state = VoteState.NO_VOTE
            if principal.user_id is not None:
                vote_state = await self.vote_service.get_vote_state(
                    deal_id, principal.user_id
                )

            return GetDealResponse(
                deal=DealItem.from_deal(deal),
                engagement=EngagementItem.from_snapshot(snapshot),
                vote_state=vote_state,
                view_counted=view_counted,
            )

"""Rebuild engagement use case."""

from typing import Optional
from uuid import UUID

import logfire
from pydantic import BaseModel

from dealspark.application.usecase.deal.common import EngagementItem
from dealspark.domain.error import Forbidden
from dealspark.domain.service import EngagementService, IdentityService
from dealspark.domain.value import DealId, Role


class RebuildEngagementRequest(BaseModel):
    """Rebuild engagement request."""

    deal_id: UUID
    token: Optional[str] = None


class RebuildEngagementResponse(BaseModel):
    """Rebuild engagement response."""

    deal_id: str
    engagement: EngagementItem


class RebuildEngagementUseCase:
    """Use case for recomputing a deal's vote counters from the ledger."""

    def __init__(
        self,
        identity_service: IdentityService,
        engagement_service: EngagementService,
    ) -> None:
        self.identity_service = identity_service
        self.engagement_service = engagement_service

    async def execute(
        self, request: RebuildEngagementRequest
    ) -> RebuildEngagementResponse:
        """Execute counter rebuild (admin only).

        Raises:
            Unauthenticated: If the token is missing or invalid
            Forbidden: If the caller is below admin
            NotFoundError: If the deal does not exist
        """
        principal = self.identity_service.resolve(request.token)
        if not principal.has_role(Role.ADMIN):
            raise Forbidden(
                "rebuild engagement counters", Role.ADMIN.value, principal.role.value
            )

        deal_id = DealId(request.deal_id)
        snapshot = await self.engagement_service.rebuild(deal_id)
        logfire.info(
            "Engagement rebuilt on request",
            deal_id=str(deal_id),
            user_id=str(principal.user_id),
        )
        return RebuildEngagementResponse(
            deal_id=str(deal_id), engagement=EngagementItem.from_snapshot(snapshot)
        )

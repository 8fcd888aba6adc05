"""Moderate deal use case."""

from typing import Optional
from uuid import UUID

import logfire
from pydantic import BaseModel

from dealspark.application.usecase.base import BaseUseCase
from dealspark.application.usecase.deal.common import DealItem
from dealspark.domain.service import IdentityService, ModerationService
from dealspark.domain.value import DealId, ModerationAction


class ModerateDealRequest(BaseModel):
    """Moderate deal request."""

    deal_id: UUID
    action: ModerationAction
    token: Optional[str] = None


class ModerateDealResponse(BaseModel):
    """Moderate deal response."""

    deal: DealItem


class ModerateDealUseCase(BaseUseCase):
    """Use case for applying a moderation action to a deal."""

    def __init__(
        self,
        identity_service: IdentityService,
        moderation_service: ModerationService,
    ) -> None:
        """Initialize moderate deal use case.

        Args:
            identity_service: Identity gate
            moderation_service: Moderation workflow
        """
        self.identity_service = identity_service
        self.moderation_service = moderation_service

    async def execute(self, request: ModerateDealRequest) -> ModerateDealResponse:
        """Execute moderation flow.

        Raises:
            Unauthenticated: If the token is missing or invalid
            NotFoundError: If the deal does not exist
            InvalidTransition: If the action is not allowed in the deal's status
            Forbidden: If the caller's role is too low
            ConflictError: If another moderator kept winning the race
        """
        with logfire.span(
            "moderate_deal.execute",
            deal_id=str(request.deal_id),
            action=request.action.value,
        ):
            principal = self.identity_service.resolve(request.token)
            deal = await self.moderation_service.apply(
                DealId(request.deal_id), request.action, principal
            )
            return ModerateDealResponse(deal=DealItem.from_deal(deal))

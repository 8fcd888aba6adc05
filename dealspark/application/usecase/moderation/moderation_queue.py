"""Moderation queue use case."""

from typing import Optional

from pydantic import BaseModel, Field

from dealspark.application.usecase.base import BaseUseCase
from dealspark.application.usecase.deal.common import DealItem
from dealspark.domain.service import IdentityService, ModerationService
from dealspark.domain.value import DealStatus


class ModerationQueueRequest(BaseModel):
    """Moderation queue request."""

    token: Optional[str] = None
    status: DealStatus = DealStatus.PENDING_REVIEW
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1, le=100)


class ModerationQueueResponse(BaseModel):
    """Moderation queue response."""

    deals: list[DealItem]
    status: DealStatus
    total: int
    page: int
    page_size: int


class ModerationQueueUseCase(BaseUseCase):
    """Use case for listing deals by status for moderators."""

    def __init__(
        self,
        identity_service: IdentityService,
        moderation_service: ModerationService,
    ) -> None:
        self.identity_service = identity_service
        self.moderation_service = moderation_service

    async def execute(self, request: ModerationQueueRequest) -> ModerationQueueResponse:
        """Execute moderation queue flow.

        Raises:
            Unauthenticated: If the token is missing or invalid
            Forbidden: If the caller is below moderator
        """
        principal = self.identity_service.resolve(request.token)
        queue = await self.moderation_service.moderation_queue(
            principal,
            status=request.status,
            page=request.page,
            page_size=request.page_size,
        )
        return ModerationQueueResponse(
            deals=[DealItem.from_deal(deal) for deal in queue.items],
            status=queue.status,
            total=queue.total,
            page=queue.page,
            page_size=queue.page_size,
        )

"""Record comment use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from dealspark.application.usecase.deal.common import EngagementItem
from dealspark.domain.error import Forbidden
from dealspark.domain.service import EngagementService, IdentityService
from dealspark.domain.value import DealId, Role


class RecordCommentRequest(BaseModel):
    """Record comment request."""

    deal_id: UUID
    token: Optional[str] = None
    # True when a comment was deleted
    removed: bool = False


class RecordCommentResponse(BaseModel):
    """Record comment response."""

    deal_id: str
    engagement: EngagementItem


class RecordCommentUseCase:
    """Use case for keeping the comment counter in step with the comment store.

    Only the comment store calls this, with an admin token. Members create
    comments through the store and never move the counter directly.
    """

    def __init__(
        self,
        identity_service: IdentityService,
        engagement_service: EngagementService,
    ) -> None:
        self.identity_service = identity_service
        self.engagement_service = engagement_service

    async def execute(self, request: RecordCommentRequest) -> RecordCommentResponse:
        """Count a created or deleted comment.

        Raises:
            Unauthenticated: If the token is missing or invalid
            Forbidden: If the caller is below admin
            NotFoundError: If the deal does not exist
        """
        principal = self.identity_service.resolve(request.token)
        if not principal.has_role(Role.ADMIN):
            raise Forbidden(
                "update comment counters", Role.ADMIN.value, principal.role.value
            )

        deal_id = DealId(request.deal_id)
        if request.removed:
            snapshot = await self.engagement_service.remove_comment(deal_id)
        else:
            snapshot = await self.engagement_service.record_comment(deal_id)

        return RecordCommentResponse(
            deal_id=str(deal_id), engagement=EngagementItem.from_snapshot(snapshot)
        )

"""Expire deals use case."""

from typing import Optional

import logfire
from pydantic import BaseModel

from dealspark.application.usecase.base import BaseUseCase
from dealspark.domain.error import Forbidden
from dealspark.domain.service import IdentityService, ModerationService
from dealspark.domain.value import Role


class ExpireDealsRequest(BaseModel):
    """Expire deals request."""

    token: Optional[str] = None


class ExpireDealsResponse(BaseModel):
    """Expire deals response."""

    expired_deal_ids: list[str]


class ExpireDealsUseCase(BaseUseCase):
    """Use case for running the expiry timer on demand.

    The sweep itself runs as the system actor; triggering it over the API
    requires a moderator.
    """

    def __init__(
        self,
        identity_service: IdentityService,
        moderation_service: ModerationService,
    ) -> None:
        self.identity_service = identity_service
        self.moderation_service = moderation_service

    async def execute(self, request: ExpireDealsRequest) -> ExpireDealsResponse:
        """Execute expiry sweep.

        Raises:
            Unauthenticated: If the token is missing or invalid
            Forbidden: If the caller is below moderator
        """
        principal = self.identity_service.resolve(request.token)
        if not principal.has_role(Role.MODERATOR):
            raise Forbidden(
                "run the expiry sweep", Role.MODERATOR.value, principal.role.value
            )

        expired = await self.moderation_service.expire_due()
        logfire.info(
            "Expiry sweep triggered",
            user_id=str(principal.user_id),
            expired=len(expired),
        )
        return ExpireDealsResponse(expired_deal_ids=[str(deal.id) for deal in expired])

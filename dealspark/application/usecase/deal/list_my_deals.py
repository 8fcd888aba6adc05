"""List my deals use case."""

from typing import Optional

from pydantic import BaseModel, Field

from dealspark.domain.service import DealService, IdentityService
from dealspark.domain.value import DealStatus

from .common import DealItem


class ListMyDealsRequest(BaseModel):
    """List my deals request."""

    token: Optional[str] = None
    status: Optional[DealStatus] = None
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1, le=100)


class ListMyDealsResponse(BaseModel):
    """List my deals response."""

    deals: list[DealItem]
    page: int
    page_size: int


class ListMyDealsUseCase:
    """Use case for listing the caller's own submissions."""

    def __init__(
        self, identity_service: IdentityService, deal_service: DealService
    ) -> None:
        self.identity_service = identity_service
        self.deal_service = deal_service

    async def execute(self, request: ListMyDealsRequest) -> ListMyDealsResponse:
        """Execute list my deals flow.

        Raises:
            Unauthenticated: If the token is missing or invalid
            Forbidden: If the caller is a guest
        """
        principal = self.identity_service.resolve(request.token)
        deals = await self.deal_service.list_my_deals(
            principal,
            status=request.status,
            page=request.page,
            page_size=request.page_size,
        )
        return ListMyDealsResponse(
            deals=[DealItem.from_deal(deal) for deal in deals],
            page=request.page,
            page_size=request.page_size,
        )

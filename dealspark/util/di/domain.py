"""Domain layer DI providers."""

from dishka import Scope, provide

from dealspark.config import (
    AuthSettings,
    EngagementSettings,
    RankingSettings,
    VotingSettings,
)
from dealspark.domain.repository import (
    DealRepository,
    EngagementRepository,
    TransactionManager,
    VoteRepository,
)
from dealspark.domain.service import (
    DealService,
    EngagementService,
    IdentityService,
    ModerationService,
    RankingService,
    VoteService,
)
from dealspark.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_identity_service(self, auth_settings: AuthSettings) -> IdentityService:
        """Provide identity gate."""
        return IdentityService(auth_settings=auth_settings)

    @provide
    def get_deal_service(self, deal_repository: DealRepository) -> DealService:
        """Provide deal domain service."""
        return DealService(deal_repository=deal_repository)

    @provide
    def get_vote_service(
        self,
        deal_repository: DealRepository,
        vote_repository: VoteRepository,
        engagement_repository: EngagementRepository,
        transactions: TransactionManager,
        voting_settings: VotingSettings,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            deal_repository=deal_repository,
            vote_repository=vote_repository,
            engagement_repository=engagement_repository,
            transactions=transactions,
            voting_settings=voting_settings,
        )

    @provide
    def get_engagement_service(
        self,
        deal_repository: DealRepository,
        vote_repository: VoteRepository,
        engagement_repository: EngagementRepository,
        transactions: TransactionManager,
        engagement_settings: EngagementSettings,
    ) -> EngagementService:
        """Provide engagement domain service."""
        return EngagementService(
            deal_repository=deal_repository,
            vote_repository=vote_repository,
            engagement_repository=engagement_repository,
            transactions=transactions,
            engagement_settings=engagement_settings,
        )

    @provide
    def get_ranking_service(
        self, deal_repository: DealRepository, ranking_settings: RankingSettings
    ) -> RankingService:
        """Provide ranking domain service."""
        return RankingService(
            deal_repository=deal_repository, ranking_settings=ranking_settings
        )

    @provide
    def get_moderation_service(
        self, deal_repository: DealRepository
    ) -> ModerationService:
        """Provide moderation workflow."""
        return ModerationService(deal_repository=deal_repository)

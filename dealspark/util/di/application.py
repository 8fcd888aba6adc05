"""Application layer DI providers."""

from dishka import Scope, provide

from dealspark.application.usecase.deal import (
    CreateDealUseCase,
    GetDealStatsUseCase,
    GetDealUseCase,
    ListDealsUseCase,
    ListMyDealsUseCase,
)
from dealspark.application.usecase.engagement import (
    RebuildEngagementUseCase,
    RecordCommentUseCase,
)
from dealspark.application.usecase.moderation import (
    ExpireDealsUseCase,
    ModerateDealUseCase,
    ModerationQueueUseCase,
)
from dealspark.application.usecase.vote import CastVoteUseCase, RemoveVoteUseCase
from dealspark.domain.service import (
    DealService,
    EngagementService,
    IdentityService,
    ModerationService,
    RankingService,
    VoteService,
)
from dealspark.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Deal use cases
    @provide(scope=Scope.REQUEST)
    def get_create_deal_use_case(
        self, identity_service: IdentityService, deal_service: DealService
    ) -> CreateDealUseCase:
        """Provide create deal use case."""
        return CreateDealUseCase(
            identity_service=identity_service, deal_service=deal_service
        )

    @provide(scope=Scope.REQUEST)
    def get_get_deal_use_case(
        self,
        identity_service: IdentityService,
        deal_service: DealService,
        engagement_service: EngagementService,
        vote_service: VoteService,
    ) -> GetDealUseCase:
        """Provide get deal use case."""
        return GetDealUseCase(
            identity_service=identity_service,
            deal_service=deal_service,
            engagement_service=engagement_service,
            vote_service=vote_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_deals_use_case(
        self,
        identity_service: IdentityService,
        ranking_service: RankingService,
        vote_service: VoteService,
    ) -> ListDealsUseCase:
        """Provide list deals use case."""
        return ListDealsUseCase(
            identity_service=identity_service,
            ranking_service=ranking_service,
            vote_service=vote_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_deal_stats_use_case(
        self, ranking_service: RankingService
    ) -> GetDealStatsUseCase:
        """Provide deal stats use case."""
        return GetDealStatsUseCase(ranking_service=ranking_service)

    @provide(scope=Scope.REQUEST)
    def get_list_my_deals_use_case(
        self, identity_service: IdentityService, deal_service: DealService
    ) -> ListMyDealsUseCase:
        """Provide list my deals use case."""
        return ListMyDealsUseCase(
            identity_service=identity_service, deal_service=deal_service
        )

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(
        self, identity_service: IdentityService, vote_service: VoteService
    ) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(
            identity_service=identity_service, vote_service=vote_service
        )

    @provide(scope=Scope.REQUEST)
    def get_remove_vote_use_case(
        self, identity_service: IdentityService, vote_service: VoteService
    ) -> RemoveVoteUseCase:
        """Provide remove vote use case."""
        return RemoveVoteUseCase(
            identity_service=identity_service, vote_service=vote_service
        )

    # Moderation use cases
    @provide(scope=Scope.REQUEST)
    def get_moderate_deal_use_case(
        self,
        identity_service: IdentityService,
        moderation_service: ModerationService,
    ) -> ModerateDealUseCase:
        """Provide moderate deal use case."""
        return ModerateDealUseCase(
            identity_service=identity_service, moderation_service=moderation_service
        )

    @provide(scope=Scope.REQUEST)
    def get_moderation_queue_use_case(
        self,
        identity_service: IdentityService,
        moderation_service: ModerationService,
    ) -> ModerationQueueUseCase:
        """Provide moderation queue use case."""
        return ModerationQueueUseCase(
            identity_service=identity_service, moderation_service=moderation_service
        )

    @provide(scope=Scope.REQUEST)
    def get_expire_deals_use_case(
        self,
        identity_service: IdentityService,
        moderation_service: ModerationService,
    ) -> ExpireDealsUseCase:
        """Provide expire deals use case."""
        return ExpireDealsUseCase(
            identity_service=identity_service, moderation_service=moderation_service
        )

    # Engagement use cases
    @provide(scope=Scope.REQUEST)
    def get_record_comment_use_case(
        self,
        identity_service: IdentityService,
        engagement_service: EngagementService,
    ) -> RecordCommentUseCase:
        """Provide record comment use case."""
        return RecordCommentUseCase(
            identity_service=identity_service, engagement_service=engagement_service
        )

    @provide(scope=Scope.REQUEST)
    def get_rebuild_engagement_use_case(
        self,
        identity_service: IdentityService,
        engagement_service: EngagementService,
    ) -> RebuildEngagementUseCase:
        """Provide rebuild engagement use case."""
        return RebuildEngagementUseCase(
            identity_service=identity_service, engagement_service=engagement_service
        )

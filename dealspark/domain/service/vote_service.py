"""Vote ledger domain service."""

from typing import Sequence

import logfire

from dealspark.config import VotingSettings
from dealspark.domain.error import Forbidden, InvalidState, NotFoundError
from dealspark.domain.model import EngagementSnapshot, Principal, VoteChange
from dealspark.domain.model.common import DomainModel
from dealspark.domain.model.deal import utcnow
from dealspark.domain.model.vote import resolve_cast, resolve_withdrawal
from dealspark.domain.repository import (
    DealRepository,
    EngagementRepository,
    TransactionManager,
    VoteRepository,
)
from dealspark.domain.value import DealId, Role, UserId, VoteDirection, VoteState

from .base import Service


class VoteResult(DomainModel):
    """Effective vote state of the caller after a ledger operation."""

    deal_id: DealId
    state: VoteState
    changed: bool
    snapshot: EngagementSnapshot


class VoteService(Service):
    """Domain service for the vote ledger.

    Each cast is an atomic read-modify-write under the deal's lock: the
    ledger row and the engagement counters change in the same transaction,
    so concurrent votes can neither lose updates nor double-count.
    """

    def __init__(
        self,
        deal_repository: DealRepository,
        vote_repository: VoteRepository,
        engagement_repository: EngagementRepository,
        transactions: TransactionManager,
        voting_settings: VotingSettings,
    ) -> None:
        """Initialize vote service.

        Args:
            deal_repository: Deal repository
            vote_repository: Vote repository
            engagement_repository: Engagement counter repository
            transactions: Per-deal transaction manager
            voting_settings: Vote ledger configuration
        """
        self.deal_repository = deal_repository
        self.vote_repository = vote_repository
        self.engagement_repository = engagement_repository
        self.transactions = transactions
        self.voting_settings = voting_settings

    @staticmethod
    def _require_voter(principal: Principal, action: str) -> UserId:
        if principal.user_id is None or not principal.has_role(Role.MEMBER):
            logfire.warn("Vote rejected for role", role=principal.role.value)
            raise Forbidden(action, Role.MEMBER.value, principal.role.value)
        return principal.user_id

    async def _apply(
        self, deal_id: DealId, user_id: UserId, change: VoteChange
    ) -> EngagementSnapshot:
        """Write the change to the ledger and the counters (inside the scope)."""
        if not change.changed:
            return await self.engagement_repository.get_snapshot(deal_id)

        await self.vote_repository.upsert(deal_id, user_id, change.current, utcnow())
        return await self.engagement_repository.apply_vote_delta(
            deal_id, change.upvote_delta, change.downvote_delta
        )

    async def cast_vote(
        self, deal_id: DealId, principal: Principal, direction: VoteDirection
    ) -> VoteResult:
        """Cast a vote on a published deal.

        Args:
            deal_id: Deal ID
            principal: Caller
            direction: Requested direction

        Returns:
            The caller's effective vote state and the fresh counters

        Raises:
            Forbidden: If the caller is not at least a member
            NotFoundError: If the deal does not exist
            InvalidState: If the deal is not published or has expired
        """
        user_id = self._require_voter(principal, "vote")

        with logfire.span(
            "vote_service.cast_vote",
            deal_id=str(deal_id),
            user_id=str(user_id),
            direction=direction.value,
        ):
            async with self.transactions.deal_scope(deal_id):
                deal = await self.deal_repository.find_by_id(deal_id)
                if deal is None:
                    logfire.warn("Vote on non-existent deal", deal_id=str(deal_id))
                    raise NotFoundError("Deal", str(deal_id))

                if not deal.is_visible(utcnow()):
                    logfire.warn(
                        "Vote on deal that is not live",
                        deal_id=str(deal_id),
                        status=deal.status.value,
                    )
                    raise InvalidState(str(deal_id), deal.status.value, "vote on")

                current = await self.vote_repository.find(deal_id, user_id)
                change = resolve_cast(
                    current.direction if current else None,
                    direction,
                    self.voting_settings.repeat_cast,
                )
                snapshot = await self._apply(deal_id, user_id, change)

            logfire.info(
                "Vote cast",
                deal_id=str(deal_id),
                user_id=str(user_id),
                state=change.state.value,
                changed=change.changed,
            )
            return VoteResult(
                deal_id=deal_id,
                state=change.state,
                changed=change.changed,
                snapshot=snapshot,
            )

    async def remove_vote(self, deal_id: DealId, principal: Principal) -> VoteResult:
        """Withdraw the caller's vote.

        Idempotent: removing a vote that does not exist changes nothing.
        Allowed in any deal status.

        Raises:
            Forbidden: If the caller is not at least a member
            NotFoundError: If the deal does not exist
        """
        user_id = self._require_voter(principal, "remove a vote")

        with logfire.span(
            "vote_service.remove_vote", deal_id=str(deal_id), user_id=str(user_id)
        ):
            async with self.transactions.deal_scope(deal_id):
                deal = await self.deal_repository.find_by_id(deal_id)
                if deal is None:
                    logfire.warn(
                        "Vote removal on non-existent deal", deal_id=str(deal_id)
                    )
                    raise NotFoundError("Deal", str(deal_id))

                current = await self.vote_repository.find(deal_id, user_id)
                change = resolve_withdrawal(current.direction if current else None)
                snapshot = await self._apply(deal_id, user_id, change)

            if change.changed:
                logfire.info(
                    "Vote removed", deal_id=str(deal_id), user_id=str(user_id)
                )
            else:
                logfire.info(
                    "No vote to remove", deal_id=str(deal_id), user_id=str(user_id)
                )

            return VoteResult(
                deal_id=deal_id,
                state=change.state,
                changed=change.changed,
                snapshot=snapshot,
            )

    async def get_vote_state(self, deal_id: DealId, user_id: UserId) -> VoteState:
        """Current vote state of a user on a deal."""
        vote = await self.vote_repository.find(deal_id, user_id)
        return vote.state if vote else VoteState.NO_VOTE

    async def get_vote_states(
        self, user_id: UserId, deal_ids: Sequence[DealId]
    ) -> dict[DealId, VoteState]:
        """Vote states of a user on several deals.

        Args:
            user_id: User ID
            deal_ids: Deal IDs to check

        Returns:
            Mapping of every requested deal ID to the user's vote state
        """
        if not deal_ids:
            return {}

        # Batch query to fetch all votes at once (avoid N+1)
        votes = await self.vote_repository.find_by_user_and_deals(user_id, deal_ids)
        by_deal = {vote.deal_id: vote.state for vote in votes}
        return {did: by_deal.get(did, VoteState.NO_VOTE) for did in deal_ids}

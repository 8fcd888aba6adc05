"""Moderation workflow domain service.

Deals move through a fixed state machine. Every transition is a
compare-and-set on the status column, so of two moderators acting on the
same deal exactly one wins.

    draft ──submit──> pending_review ──approve──> published ──expire──> expired
                           │                          └──────remove──> removed
                           └──reject──> rejected

    rejected | expired | removed ──reopen──> pending_review   (admin)
"""

from datetime import datetime
from typing import NamedTuple, Optional

import logfire

from dealspark.domain.error import (
    ConflictError,
    Forbidden,
    InvalidTransition,
    NotFoundError,
)
from dealspark.domain.model import Deal, Principal
from dealspark.domain.model.common import DomainModel
from dealspark.domain.model.deal import utcnow
from dealspark.domain.repository import DealRepository
from dealspark.domain.value import DealId, DealStatus, ModerationAction, Role

from .base import Service


class Transition(NamedTuple):
    """One row of the transition table."""

    target: DealStatus
    minimum_role: Role


TRANSITIONS: dict[tuple[DealStatus, ModerationAction], Transition] = {
    (DealStatus.DRAFT, ModerationAction.SUBMIT): Transition(
        DealStatus.PENDING_REVIEW, Role.MEMBER
    ),
    (DealStatus.PENDING_REVIEW, ModerationAction.APPROVE): Transition(
        DealStatus.PUBLISHED, Role.MODERATOR
    ),
    (DealStatus.PENDING_REVIEW, ModerationAction.REJECT): Transition(
        DealStatus.REJECTED, Role.MODERATOR
    ),
    (DealStatus.PUBLISHED, ModerationAction.EXPIRE): Transition(
        DealStatus.EXPIRED, Role.MODERATOR
    ),
    (DealStatus.PUBLISHED, ModerationAction.REMOVE): Transition(
        DealStatus.REMOVED, Role.ADMIN
    ),
    (DealStatus.REJECTED, ModerationAction.REOPEN): Transition(
        DealStatus.PENDING_REVIEW, Role.ADMIN
    ),
    (DealStatus.EXPIRED, ModerationAction.REOPEN): Transition(
        DealStatus.PENDING_REVIEW, Role.ADMIN
    ),
    (DealStatus.REMOVED, ModerationAction.REOPEN): Transition(
        DealStatus.PENDING_REVIEW, Role.ADMIN
    ),
}


def action_for(current: DealStatus, target: DealStatus) -> Optional[ModerationAction]:
    """The action that moves a deal from ``current`` to ``target``, if any."""
    for (from_status, action), transition in TRANSITIONS.items():
        if from_status == current and transition.target == target:
            return action
    return None


class ModerationQueue(DomainModel):
    """One page of deals awaiting (or past) moderation."""

    status: DealStatus
    items: list[Deal]
    total: int
    page: int
    page_size: int


class ModerationService(Service):
    """Role-gated state machine over deal status."""

    def __init__(self, deal_repository: DealRepository) -> None:
        """Initialize moderation service.

        Args:
            deal_repository: Deal repository
        """
        self.deal_repository = deal_repository

    async def _load(self, deal_id: DealId) -> Deal:
        deal = await self.deal_repository.find_by_id(deal_id)
        if deal is None:
            logfire.warn("Moderation of non-existent deal", deal_id=str(deal_id))
            raise NotFoundError("Deal", str(deal_id))
        return deal

    @staticmethod
    def _check(
        deal: Deal,
        action: ModerationAction,
        principal: Optional[Principal],
    ) -> Transition:
        """Validate an action against the table and the caller's role.

        A ``None`` principal is the system actor (expiry timer).
        """
        transition = TRANSITIONS.get((deal.status, action))
        if transition is None:
            raise InvalidTransition(str(deal.id), deal.status.value, action.value)

        if principal is None:
            return transition

        if not principal.has_role(transition.minimum_role):
            raise Forbidden(
                f"{action.value} deals",
                transition.minimum_role.value,
                principal.role.value,
            )

        # Only the submitter puts a draft up for review
        if action == ModerationAction.SUBMIT and principal.user_id != deal.submitter_id:
            raise Forbidden(
                "submit another user's deal", "submitter", principal.role.value
            )

        return transition

    async def _transition(
        self,
        deal_id: DealId,
        action: ModerationAction,
        principal: Optional[Principal],
        now: datetime,
    ) -> Deal:
        deal = await self._load(deal_id)

        # One retry: a lost compare-and-set is re-validated against the
        # latest status before it surfaces as a conflict
        for attempt in range(2):
            transition = self._check(deal, action, principal)
            updated = await self.deal_repository.transition_status(
                deal_id, deal.status, transition.target, now
            )
            if updated is not None:
                return updated

            logfire.warn(
                "Moderation transition lost a race",
                deal_id=str(deal_id),
                action=action.value,
                expected_status=deal.status.value,
                attempt=attempt + 1,
            )
            expected = deal.status
            deal = await self._load(deal_id)

        raise ConflictError(str(deal_id), expected.value)

    async def apply(
        self,
        deal_id: DealId,
        action: ModerationAction,
        principal: Principal,
        now: Optional[datetime] = None,
    ) -> Deal:
        """Apply a moderation action to a deal.

        The transition table is checked first, then the caller's role.

        Args:
            deal_id: Deal ID
            action: Moderation action
            principal: Caller
            now: Transition time (defaults to the current time)

        Returns:
            The deal in its new status

        Raises:
            NotFoundError: If the deal does not exist
            InvalidTransition: If the action is not allowed from the deal's status
            Forbidden: If the caller's role is below the action's minimum
            ConflictError: If the status kept changing underneath the action
        """
        with logfire.span(
            "moderation.apply",
            deal_id=str(deal_id),
            action=action.value,
            role=principal.role.value,
        ):
            try:
                deal = await self._transition(
                    deal_id, action, principal, now or utcnow()
                )
            except (InvalidTransition, Forbidden) as e:
                logfire.warn(
                    "Moderation action refused",
                    deal_id=str(deal_id),
                    action=action.value,
                    error=str(e),
                )
                raise

            logfire.info(
                "Deal moderated",
                deal_id=str(deal_id),
                action=action.value,
                status=deal.status.value,
            )
            return deal

    async def submit(self, deal_id: DealId, principal: Principal) -> Deal:
        """Submit a draft for review (submitter only)."""
        return await self.apply(deal_id, ModerationAction.SUBMIT, principal)

    async def approve(self, deal_id: DealId, principal: Principal) -> Deal:
        """Publish a deal under review (moderator+)."""
        return await self.apply(deal_id, ModerationAction.APPROVE, principal)

    async def reject(self, deal_id: DealId, principal: Principal) -> Deal:
        """Reject a deal under review (moderator+)."""
        return await self.apply(deal_id, ModerationAction.REJECT, principal)

    async def expire(self, deal_id: DealId, principal: Principal) -> Deal:
        """Manually expire a published deal (moderator+)."""
        return await self.apply(deal_id, ModerationAction.EXPIRE, principal)

    async def remove(self, deal_id: DealId, principal: Principal) -> Deal:
        """Take down a published deal (admin+)."""
        return await self.apply(deal_id, ModerationAction.REMOVE, principal)

    async def reopen(self, deal_id: DealId, principal: Principal) -> Deal:
        """Send a closed deal back to review (admin+)."""
        return await self.apply(deal_id, ModerationAction.REOPEN, principal)

    async def move_to(
        self, deal_id: DealId, target: DealStatus, principal: Principal
    ) -> Deal:
        """Move a deal to a target status through the matching action.

        Raises:
            NotFoundError: If the deal does not exist
            InvalidTransition: If no action leads from the current status to target
            Forbidden: If the caller's role is below the action's minimum
        """
        deal = await self._load(deal_id)
        action = action_for(deal.status, target)
        if action is None:
            logfire.warn(
                "No transition to target status",
                deal_id=str(deal_id),
                status=deal.status.value,
                target=target.value,
            )
            raise InvalidTransition(str(deal_id), deal.status.value, target.value)
        return await self.apply(deal_id, action, principal)

    async def expire_due(self, now: Optional[datetime] = None) -> list[Deal]:
        """Expire every published deal whose expiry time has passed.

        Runs as the system actor. Deals that changed status concurrently are
        skipped.

        Args:
            now: Reference time (defaults to the current time)

        Returns:
            The deals that were moved to EXPIRED
        """
        now = now or utcnow()
        with logfire.span("moderation.expire_due"):
            due = await self.deal_repository.find_due_for_expiry(now)
            expired: list[Deal] = []
            for deal in due:
                updated = await self.deal_repository.transition_status(
                    deal.id, DealStatus.PUBLISHED, DealStatus.EXPIRED, now
                )
                if updated is None:
                    logfire.debug("Deal changed before expiry", deal_id=str(deal.id))
                    continue
                expired.append(updated)

            logfire.info("Expired due deals", due=len(due), expired=len(expired))
            return expired

    async def moderation_queue(
        self,
        principal: Principal,
        status: DealStatus = DealStatus.PENDING_REVIEW,
        page: int = 1,
        page_size: int = 20,
    ) -> ModerationQueue:
        """List deals in a status for moderators, newest first.

        Raises:
            Forbidden: If the caller is below moderator
            ValidationError: If page or page_size is out of range
        """
        if not principal.has_role(Role.MODERATOR):
            raise Forbidden(
                "view the moderation queue", Role.MODERATOR.value, principal.role.value
            )
        self.check_page(page, page_size)

        with logfire.span(
            "moderation.queue", status=status.value, page=page, page_size=page_size
        ):
            total = await self.deal_repository.count_by_status(status)
            items = await self.deal_repository.find_by_status(
                status, limit=page_size, offset=(page - 1) * page_size
            )
            return ModerationQueue(
                status=status,
                items=items,
                total=total,
                page=page,
                page_size=page_size,
            )

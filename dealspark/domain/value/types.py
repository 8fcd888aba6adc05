"""Domain value objects for DealSpark.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from dealspark.domain.value.common import RootValueObject


class Role(str, Enum):
    """Capability level of a caller.

    Roles form a strict hierarchy: every role can do everything the roles
    below it can. Compare roles with ``includes`` rather than by name.
    """

    ANONYMOUS = "anonymous"
    MEMBER = "member"
    MODERATOR = "moderator"
    ADMIN = "admin"
    ROOT_ADMIN = "root_admin"

    @property
    def rank(self) -> int:
        """Position in the hierarchy (0 is the least privileged)."""
        return _ROLE_ORDER.index(self)

    def includes(self, other: "Role") -> bool:
        """Whether this role carries every capability of ``other``."""
        return self.rank >= other.rank

    @classmethod
    def parse(cls, value: str | None) -> "Role":
        """Parse a role claim.

        Missing or unknown claims resolve to MEMBER so a malformed claim can
        never escalate privileges.
        """
        if not value:
            return cls.MEMBER
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.MEMBER


_ROLE_ORDER = [
    Role.ANONYMOUS,
    Role.MEMBER,
    Role.MODERATOR,
    Role.ADMIN,
    Role.ROOT_ADMIN,
]


class VoteDirection(str, Enum):
    """Direction of a vote on a deal."""

    UP = "up"
    DOWN = "down"


class VoteState(str, Enum):
    """Effective vote of a user on a deal."""

    NO_VOTE = "no_vote"
    UPVOTED = "upvoted"
    DOWNVOTED = "downvoted"

    @classmethod
    def from_direction(cls, direction: VoteDirection | None) -> "VoteState":
        if direction is None:
            return cls.NO_VOTE
        if direction == VoteDirection.UP:
            return cls.UPVOTED
        return cls.DOWNVOTED


class RepeatCastPolicy(str, Enum):
    """What casting the current vote direction again does."""

    TOGGLE = "toggle"  # withdraws the vote
    IDEMPOTENT = "idempotent"  # keeps the vote


class DealStatus(str, Enum):
    """Lifecycle state of a deal."""

    DRAFT = "draft"
    PENDING_REVIEW = "pending_review"
    PUBLISHED = "published"
    REJECTED = "rejected"
    EXPIRED = "expired"
    REMOVED = "removed"

    @property
    def is_closed(self) -> bool:
        """Closed deals can only come back through an admin reopen."""
        return self in (DealStatus.REJECTED, DealStatus.EXPIRED, DealStatus.REMOVED)


class ModerationAction(str, Enum):
    """Trigger of a moderation transition."""

    SUBMIT = "submit"
    APPROVE = "approve"
    REJECT = "reject"
    EXPIRE = "expire"
    REMOVE = "remove"
    REOPEN = "reopen"


class DealSort(str, Enum):
    """Sort order for public deal listings."""

    HOT = "hot"  # Heat score DESC
    NEWEST = "newest"  # created_at DESC


class Slug(RootValueObject[str]):
    """URL-safe slug for deals.

    Must be lowercase, alphanumeric with hyphens, 1-120 characters.
    Examples: 'air-fryer-xl-1730000000000'
    """

    @field_validator("root")
    @classmethod
    def validate_slug_format(cls, v: str) -> str:
        """Validate slug format."""
        if not re.match(r"^[a-z0-9]+(?:-[a-z0-9]+)*$", v):
            raise ValueError(
                "Slug must be lowercase alphanumeric with hyphens, "
                "no leading/trailing hyphens or consecutive hyphens"
            )
        if len(v) < 1 or len(v) > 120:
            raise ValueError("Slug must be 1-120 characters")
        return v


class ViewerKey(RootValueObject[str]):
    """Identifies a viewer for view deduplication.

    Signed-in viewers are keyed by user ID ('user:<uuid>'), anonymous
    viewers by a client fingerprint ('anon:<fingerprint>').
    """

    @field_validator("root")
    @classmethod
    def validate_viewer_key(cls, v: str) -> str:
        """Validate viewer key is not empty and within length limits."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Viewer key must be 1-255 characters")
        return v

    @classmethod
    def for_user(cls, user_id: object) -> "ViewerKey":
        return cls(f"user:{user_id}")

    @classmethod
    def for_fingerprint(cls, fingerprint: str) -> "ViewerKey":
        return cls(f"anon:{fingerprint}")

"""Test configuration and helpers."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any
from uuid import UUID, uuid4

from dealspark.config import AuthSettings
from dealspark.domain.model import Deal, Principal
from dealspark.domain.value import DealId, DealStatus, Role, Slug, UserId
from dealspark.util.jwt import create_token

# Fixed reference time for ranking tests
NOW = datetime(2026, 3, 14, 12, 0, tzinfo=timezone.utc)


def make_principal(role: Role = Role.MEMBER, user_id: UUID | None = None) -> Principal:
    """Principal with the given role (anonymous principals have no user ID)."""
    if role == Role.ANONYMOUS:
        return Principal.anonymous()
    return Principal(user_id=UserId(user_id or uuid4()), role=role)


def make_token(
    auth_settings: AuthSettings,
    role: Role | str | None = Role.MEMBER,
    user_id: UUID | str | None = None,
    expires_in: timedelta = timedelta(hours=1),
) -> str:
    """Signed identity token as the identity provider would issue it."""
    role_claim = role.value if isinstance(role, Role) else role
    return create_token(
        str(user_id or uuid4()), role_claim, auth_settings, expires_in=expires_in
    )


def make_deal(
    status: DealStatus = DealStatus.PUBLISHED,
    created_at: datetime | None = None,
    submitter_id: UUID | None = None,
    **overrides: Any,
) -> Deal:
    """Deal with sensible defaults; published and live unless told otherwise."""
    created_at = created_at or datetime.now(timezone.utc) - timedelta(hours=1)
    deal_id = overrides.pop("id", None) or DealId(uuid4())
    fields: dict[str, Any] = {
        "id": deal_id,
        "slug": Slug(f"test-deal-{str(deal_id)[:8]}"),
        "title": "Test Deal",
        "original_price": Decimal("100.00"),
        "discounted_price": Decimal("75.00"),
        "submitter_id": UserId(submitter_id or uuid4()),
        "status": status,
        "created_at": created_at,
        "updated_at": created_at,
        "published_at": created_at if status == DealStatus.PUBLISHED else None,
    }
    fields.update(overrides)
    return Deal(**fields)

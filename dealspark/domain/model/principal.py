"""Principal: the resolved identity of a caller."""

from typing import Optional

from dealspark.domain.model.common import DomainModel
from dealspark.domain.value import Role, UserId


class Principal(DomainModel):
    """Caller identity as resolved by the identity gate.

    Anonymous principals have no user ID.
    """

    user_id: Optional[UserId] = None
    role: Role = Role.ANONYMOUS

    @classmethod
    def anonymous(cls) -> "Principal":
        return cls(user_id=None, role=Role.ANONYMOUS)

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None and self.role != Role.ANONYMOUS

    def has_role(self, minimum: Role) -> bool:
        """Whether the principal's role includes ``minimum``."""
        return self.role.includes(minimum)

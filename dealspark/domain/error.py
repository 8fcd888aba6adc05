"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class Unauthenticated(DomainError):
    """Raised when the caller presents no identity or an invalid one."""

    def __init__(self, reason: str = "Authentication required"):
        self.reason = reason
        super().__init__(reason)


class Forbidden(DomainError):
    """Raised when a valid identity lacks the role an operation requires."""

    def __init__(self, action: str, required_role: str, actual_role: str):
        self.action = action
        self.required_role = required_role
        self.actual_role = actual_role
        super().__init__(
            f"Role {actual_role} may not {action} (requires {required_role})"
        )


class InvalidState(DomainError):
    """Raised when an operation is not valid for the deal's current status."""

    def __init__(self, deal_id: str, status: str, operation: str):
        self.deal_id = deal_id
        self.status = status
        super().__init__(f"Cannot {operation} deal {deal_id} in status {status}")


class InvalidTransition(DomainError):
    """Raised when a moderation transition is not in the allowed table."""

    def __init__(self, deal_id: str, from_status: str, target: str):
        self.deal_id = deal_id
        self.from_status = from_status
        self.target = target
        super().__init__(
            f"Transition {target} is not allowed for deal {deal_id} "
            f"in status {from_status}"
        )


class ConflictError(DomainError):
    """Raised when a concurrent writer changed the deal first."""

    def __init__(self, deal_id: str, expected_status: str):
        self.deal_id = deal_id
        self.expected_status = expected_status
        super().__init__(
            f"Deal {deal_id} is no longer in status {expected_status}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")

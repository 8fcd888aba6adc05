"""Interface layer error mapping."""

import logfire
from fastapi import HTTPException, status

from dealspark.domain.error import (
    ConflictError,
    DomainError,
    Forbidden,
    InvalidState,
    InvalidTransition,
    NotFoundError,
    Unauthenticated,
    ValidationError,
)

_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (Unauthenticated, status.HTTP_401_UNAUTHORIZED),
    (Forbidden, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InvalidState, status.HTTP_409_CONFLICT),
    (InvalidTransition, status.HTTP_409_CONFLICT),
    (ConflictError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
]


def to_http_exception(error: DomainError) -> HTTPException:
    """Translate a domain error into the HTTP error reported to the client.

    Args:
        error: Domain error raised by a use case

    Returns:
        HTTPException with the matching status code and the error message
    """
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=str(error))

    logfire.error(
        "Unmapped domain error", error=str(error), error_type=type(error).__name__
    )
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))

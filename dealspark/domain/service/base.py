"""Base service class for domain services."""

from dealspark.domain.error import ValidationError

# Upper bound of page_size for listings without a configured maximum
MAX_PAGE_SIZE = 100


class Service:
    """Base class for all domain services.

    Domain services contain business logic that doesn't naturally belong
    to a single entity or spans multiple entities/aggregates.
    """

    @staticmethod
    def check_page(
        page: int, page_size: int, max_page_size: int = MAX_PAGE_SIZE
    ) -> None:
        """Reject out-of-range pagination before it reaches a repository.

        Raises:
            ValidationError: If page < 1 or page_size is outside 1..max_page_size
        """
        if page < 1:
            raise ValidationError("page must be >= 1")
        if page_size < 1 or page_size > max_page_size:
            raise ValidationError(f"page_size must be between 1 and {max_page_size}")

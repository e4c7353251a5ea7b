class DomainError(Exception):
    """Base exception for the analytics engine."""


class ValidationError(DomainError):
    """Raised when a caller passes an invalid parameter (date range, sort, page size).

    Malformed stored records never raise; they are dropped and counted instead.
    """

"""Domain-level exceptions.

Business rule violations are subclasses of DomainException so the HTTP and
CLI layers can catch them uniformly and display user-friendly messages.
Persistence failures are subclasses of StoreError; they carry no detail
meant for end users.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InsufficientStockError(DomainException):
    """The requested variant does not exist or has too little stock."""

    def __init__(self, message: str = "Insufficient stock") -> None:
        super().__init__(message)


class StoreError(Exception):
    """Base class for persistence failures."""


class StoreUnavailableError(StoreError):
    """The backing store could not be reached."""


class LedgerWriteError(StoreError):
    """An order could not be appended to the ledger."""

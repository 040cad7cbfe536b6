class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is missing or malformed."""


class DuplicateSessionError(DomainError):
    """Raised by a session store when an open session already exists for the employee and day."""


class StoreError(DomainError):
    """Raised when the session store cannot complete an operation."""

    retryable = False


class StoreTimeout(StoreError):
    """The store call exceeded its deadline. The outcome of a write is unknown."""

    retryable = True


class StoreUnavailable(StoreError):
    """The store could not be reached."""

class DomainError(Exception):
    """Base exception for business rule violations."""

    retryable = False


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class QueryTimeout(DomainError):
    """Raised when the event store does not answer within the time budget."""

    retryable = True

    def __init__(self, budget_seconds: float):
        super().__init__(
            f"Event query did not finish within {budget_seconds:g}s; try a narrower date range or filter"
        )
        self.budget_seconds = budget_seconds


class BackfillError(DomainError):
    """Raised when a manual attribution request cannot be honoured."""


class DuplicateAttribution(BackfillError):
    """Raised when the item already has an event for the target station."""


class EmployeeInvalid(BackfillError):
    """Raised when the chosen employee does not exist or is inactive."""


class ItemNotFound(BackfillError):
    """Raised when the production item to backfill does not exist."""


class ConfigurationError(DomainError):
    """Setup defect; not recoverable by the caller."""


class StationNotConfigured(ConfigurationError):
    """Raised when a station the engine relies on is missing from the system."""


class UnknownPolicy(ConfigurationError):
    """Raised when the configured time-credit policy name is not known."""


class SynthesisUnsafeWindow(DomainError):
    """Raised if a synthetic event window would not have a positive duration."""

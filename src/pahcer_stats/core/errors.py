"""Base exception class for all pahcer-stats-specific errors."""


class PahcerStatsError(Exception):
    """Base class for all pahcer-stats errors."""

    def __init__(self, message: str, retriable: bool = False) -> None:
        super().__init__(message)
        self.retriable = retriable


class DomainValidationError(PahcerStatsError):
    """Raised when a domain model invariant is violated at construction time."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to validate domain model: {reason}")

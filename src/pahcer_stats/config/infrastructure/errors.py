"""Error types raised by config infrastructure."""

from pathlib import Path

from pahcer_stats.core.errors import PahcerStatsError


class ConfigValidationError(PahcerStatsError):
    """Raised when the loaded view config fails validation."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to validate view config: {reason}")


class ConfigLoadError(PahcerStatsError):
    """Raised when the view config file cannot be parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to load view config {path}: {reason}")

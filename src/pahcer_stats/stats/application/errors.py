"""Error types raised by the stats application layer."""

from pahcer_stats.core.errors import PahcerStatsError


class MissingConfigurationError(PahcerStatsError):
    """Raised when the objective config required to build a snapshot is absent.

    Retriable: the caller may try again once the configuration is in place.
    """

    def __init__(self, config_id: str) -> None:
        self.config_id = config_id
        super().__init__(
            f"Failed to load snapshot: missing configuration '{config_id}'",
            retriable=True,
        )

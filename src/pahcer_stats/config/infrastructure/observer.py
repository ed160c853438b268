"""Structlog implementation of the ConfigObserver port."""

import structlog


class StructlogConfigObserver:
    """Delegates config domain events to structlog.

    Satisfies the ConfigObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def view_config_loaded(self, path: str, grouping_mode: str) -> None:
        self._log.info("config.view_loaded", path=path, grouping_mode=grouping_mode)

    def view_config_defaulted(self, path: str) -> None:
        self._log.info(
            "config.view_defaulted",
            path=path,
            message="View config file not found; using defaults",
        )

"""Observer port for the config domain — defines events in domain language."""

from typing import Protocol


class ConfigObserver(Protocol):
    def view_config_loaded(self, path: str, grouping_mode: str) -> None: ...

    def view_config_defaulted(self, path: str) -> None: ...

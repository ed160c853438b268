"""YAML view-config loader — parses, validates, and emits observer events."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from pahcer_stats.config.domain.observer import ConfigObserver
from pahcer_stats.config.domain.view_config import ViewConfig
from pahcer_stats.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
)


class YamlViewConfigLoader:
    """Loads a ViewConfig from a YAML file; a missing file yields the defaults.

    The file holds the same three keys the host editor exposes as settings::

        grouping_mode: bySeed
        execution_sort_order: relativeScoreDesc
        seed_sort_order: executionDesc
    """

    def __init__(self, observer: ConfigObserver) -> None:
        self._observer = observer

    def load(self, path: Path) -> ViewConfig:
        """
        Load and validate a ViewConfig from path.

        Raises:
            ConfigLoadError: if the file is not valid YAML or not a mapping.
            ConfigValidationError: if a value is not a known mode or order.
        """
        if not path.exists():
            self._observer.view_config_defaulted(path=str(path))
            return ViewConfig()

        raw = _parse_yaml(path=path)
        cfg = _build_config(raw=raw)
        self._observer.view_config_loaded(
            path=str(path), grouping_mode=cfg.grouping_mode.value
        )
        return cfg


def _parse_yaml(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        raise ConfigLoadError(path=path, reason=str(exc)) from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigLoadError(path=path, reason="top-level value must be a mapping")
    return raw


def _build_config(raw: dict[str, Any]) -> ViewConfig:
    try:
        return ViewConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigValidationError(str(exc)) from exc

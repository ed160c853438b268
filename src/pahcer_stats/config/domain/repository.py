"""PahcerConfigRepository port — external owner of the problem config file."""

from typing import Protocol

from pahcer_stats.config.domain.pahcer_config import ConfigId, PahcerConfig


class PahcerConfigRepository(Protocol):
    """Returns None when the requested config does not exist."""

    async def find_by_id(self, config_id: ConfigId) -> PahcerConfig | None: ...

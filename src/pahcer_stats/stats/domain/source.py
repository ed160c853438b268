"""SnapshotSource Protocol — anything that can produce a fresh Snapshot."""

from typing import Protocol

from pahcer_stats.stats.domain.snapshot import Snapshot


class SnapshotSource(Protocol):
    async def load(self) -> Snapshot: ...

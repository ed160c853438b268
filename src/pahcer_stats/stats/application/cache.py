"""SnapshotCache — serves the last built Snapshot until explicitly refreshed."""

import asyncio

from pahcer_stats.stats.domain.observer import SnapshotObserver
from pahcer_stats.stats.domain.snapshot import Snapshot
from pahcer_stats.stats.domain.source import SnapshotSource


class SnapshotCache:
    """Caches one Snapshot and rebuilds it on demand after ``refresh()``.

    Concurrent ``get()`` calls issued while a rebuild is in flight share the
    same load task. The cached reference is assigned once, after the new
    snapshot is fully built, so readers see either the old or the new one.
    A load started before a ``refresh()`` never overwrites the cache.
    """

    def __init__(self, source: SnapshotSource, observer: SnapshotObserver) -> None:
        self._source = source
        self._observer = observer
        self._snapshot: Snapshot | None = None
        self._pending: asyncio.Task[Snapshot] | None = None
        self._generation = 0

    @property
    def current(self) -> Snapshot | None:
        """The cached snapshot, or None if it was never built or was invalidated."""
        return self._snapshot

    async def get(self) -> Snapshot:
        """Return the cached snapshot, building it first if necessary.

        Raises:
            MissingConfigurationError: propagated from the source; nothing is cached.
        """
        snapshot = self._snapshot
        if snapshot is not None:
            return snapshot
        if self._pending is None:
            self._pending = asyncio.ensure_future(self._rebuild(self._generation))
        # Shielded so that one cancelled caller does not cancel the shared load.
        return await asyncio.shield(self._pending)

    def refresh(self) -> None:
        """Drop the cached snapshot; the next ``get()`` rebuilds from scratch."""
        self._generation += 1
        self._snapshot = None
        self._pending = None
        self._observer.snapshot_invalidated()

    async def _rebuild(self, generation: int) -> Snapshot:
        try:
            snapshot = await self._source.load()
        finally:
            if generation == self._generation:
                self._pending = None
        if generation == self._generation:
            self._snapshot = snapshot
        return snapshot

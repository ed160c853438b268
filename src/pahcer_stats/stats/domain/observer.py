"""Observer port for the stats domain — defines events in domain language."""

from typing import Protocol


class SnapshotObserver(Protocol):
    """Observer port emitting structured events while snapshots are built.

    Implementations may log to structlog or record for tests.
    """

    def snapshot_load_started(self) -> None: ...

    def snapshot_loaded(
        self,
        total_executions: int,
        total_test_cases: int,
        total_seeds_with_best: int,
        best_scores_source: str,
        elapsed_seconds: float,
    ) -> None: ...

    def snapshot_load_failed(self, reason: str) -> None: ...

    def orphan_test_cases_dropped(self, execution_ids: list[str], count: int) -> None: ...

    def snapshot_invalidated(self) -> None: ...

"""StructlogSnapshotObserver — production observer that delegates to structlog."""

import structlog


class StructlogSnapshotObserver:
    """Logs snapshot domain events to structlog.

    Does NOT inherit from SnapshotObserver (structural typing via Protocol).
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def snapshot_load_started(self) -> None:
        self._log.info("snapshot.load_started")

    def snapshot_loaded(
        self,
        total_executions: int,
        total_test_cases: int,
        total_seeds_with_best: int,
        best_scores_source: str,
        elapsed_seconds: float,
    ) -> None:
        self._log.info(
            "snapshot.loaded",
            total_executions=total_executions,
            total_test_cases=total_test_cases,
            total_seeds_with_best=total_seeds_with_best,
            best_scores_source=best_scores_source,
            elapsed_seconds=round(elapsed_seconds, 3),
        )

    def snapshot_load_failed(self, reason: str) -> None:
        self._log.error("snapshot.load_failed", reason=reason)

    def orphan_test_cases_dropped(self, execution_ids: list[str], count: int) -> None:
        self._log.warning(
            "snapshot.orphan_test_cases_dropped",
            execution_ids=execution_ids,
            count=count,
        )

    def snapshot_invalidated(self) -> None:
        self._log.debug("snapshot.invalidated")

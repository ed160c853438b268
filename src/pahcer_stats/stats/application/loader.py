"""SnapshotLoader — reads every repository and computes a fresh Snapshot."""

import asyncio
import time
from collections.abc import Mapping

from pahcer_stats.config.domain.repository import PahcerConfigRepository
from pahcer_stats.results.domain.repository import (
    BestScoreRepository,
    ExecutionRepository,
    TestCaseRepository,
)
from pahcer_stats.results.domain.test_case import Seed
from pahcer_stats.stats.application.errors import MissingConfigurationError
from pahcer_stats.stats.domain.best_score import resolve_best_scores
from pahcer_stats.stats.domain.execution_stats import aggregate_by_execution
from pahcer_stats.stats.domain.grouping import find_orphans
from pahcer_stats.stats.domain.observer import SnapshotObserver
from pahcer_stats.stats.domain.snapshot import Snapshot

_CONFIG_ID = "normal"


class SnapshotLoader:
    """Builds a Snapshot from external repositories.

    The loader holds no state between calls; caching belongs to SnapshotCache.
    """

    def __init__(
        self,
        execution_repository: ExecutionRepository,
        test_case_repository: TestCaseRepository,
        config_repository: PahcerConfigRepository,
        observer: SnapshotObserver,
        best_score_repository: BestScoreRepository | None = None,
    ) -> None:
        self._execution_repository = execution_repository
        self._test_case_repository = test_case_repository
        self._config_repository = config_repository
        self._best_score_repository = best_score_repository
        self._observer = observer

    async def load(self) -> Snapshot:
        """Load all executions and test cases and compute their statistics.

        Test cases of all executions are fetched concurrently. A persisted
        best-score table, when present and non-empty, takes precedence over
        one recomputed from the loaded test cases.

        Raises:
            MissingConfigurationError: if the objective config cannot be found.
                No partial snapshot is produced.
        """
        self._observer.snapshot_load_started()
        started_at = time.monotonic()

        executions = await self._execution_repository.find_all()
        config = await self._config_repository.find_by_id(_CONFIG_ID)
        if config is None:
            error = MissingConfigurationError(config_id=_CONFIG_ID)
            self._observer.snapshot_load_failed(reason=str(error))
            raise error

        async with asyncio.TaskGroup() as tg:
            tasks = [
                tg.create_task(
                    self._test_case_repository.find_by_execution_id(execution.id)
                )
                for execution in executions
            ]
        test_cases = [tc for task in tasks for tc in task.result()]

        orphans = find_orphans(executions, test_cases)
        if orphans:
            self._observer.orphan_test_cases_dropped(
                execution_ids=sorted({tc.execution_id for tc in orphans}),
                count=len(orphans),
            )

        persisted = (
            await self._best_score_repository.load()
            if self._best_score_repository is not None
            else {}
        )
        best_scores = resolve_best_scores(persisted, test_cases, config.objective)
        source = "persisted" if _is_persisted(persisted) else "computed"

        execution_stats = aggregate_by_execution(
            executions, test_cases, best_scores, config.objective
        )

        self._observer.snapshot_loaded(
            total_executions=len(executions),
            total_test_cases=len(test_cases),
            total_seeds_with_best=len(best_scores),
            best_scores_source=source,
            elapsed_seconds=time.monotonic() - started_at,
        )

        return Snapshot(
            executions=executions,
            test_cases=test_cases,
            config=config,
            best_scores=best_scores,
            execution_stats=execution_stats,
        )


def _is_persisted(persisted: Mapping[Seed, float]) -> bool:
    return any(score > 0 for score in persisted.values())

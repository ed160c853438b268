"""Snapshot — one consistent, immutable view of all loaded results."""

from dataclasses import dataclass

from pahcer_stats.config.domain.pahcer_config import PahcerConfig
from pahcer_stats.results.domain.execution import Execution, ExecutionId
from pahcer_stats.results.domain.test_case import Seed, TestCase
from pahcer_stats.stats.domain.execution_stats import ExecutionStats


@dataclass(frozen=True)
class Snapshot:
    """Everything the statistics view needs, computed once per load.

    A snapshot is replaced wholesale, never updated in place.
    ``execution_stats`` follows the order of ``executions``.
    """

    executions: list[Execution]
    test_cases: list[TestCase]
    config: PahcerConfig
    best_scores: dict[Seed, float]
    execution_stats: list[ExecutionStats]

    def stats_for(self, execution_id: ExecutionId) -> ExecutionStats | None:
        for stats in self.execution_stats:
            if stats.execution.id == execution_id:
                return stats
        return None

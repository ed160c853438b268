"""ExecutionStats — per-execution summary of its test cases."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from pahcer_stats.config.domain.objective import Objective
from pahcer_stats.results.domain.execution import Execution, ExecutionId
from pahcer_stats.results.domain.test_case import Seed, TestCase
from pahcer_stats.stats.domain.relative_score import relative_score


@dataclass(frozen=True)
class ExecutionStats:
    """One execution with its test cases and derived totals.

    ``total_score`` and ``average_score`` use raw scores, WA values included.
    ``average_relative_score`` counts every WA case as 0.
    """

    execution: Execution
    test_cases: list[TestCase]
    case_count: int
    total_score: float
    max_execution_time: float
    wa_seeds: list[Seed]
    ac_count: int
    average_score: float
    average_relative_score: float

    @property
    def all_accepted(self) -> bool:
        return not self.wa_seeds


def aggregate_by_execution(
    executions: Sequence[Execution],
    test_cases: Sequence[TestCase],
    best_scores: Mapping[Seed, float],
    objective: Objective,
) -> list[ExecutionStats]:
    """Return one ExecutionStats per execution, in input order."""
    by_execution: dict[ExecutionId, list[TestCase]] = {}
    for tc in test_cases:
        if tc.execution_id not in by_execution:
            by_execution[tc.execution_id] = []
        by_execution[tc.execution_id].append(tc)

    return [
        _summarize(
            execution=execution,
            cases=by_execution.get(execution.id, []),
            best_scores=best_scores,
            objective=objective,
        )
        for execution in executions
    ]


def _summarize(
    execution: Execution,
    cases: list[TestCase],
    best_scores: Mapping[Seed, float],
    objective: Objective,
) -> ExecutionStats:
    total_score = 0.0
    total_relative = 0.0
    max_execution_time = 0.0
    wa_seeds: list[Seed] = []

    for tc in cases:
        total_score += tc.score
        max_execution_time = max(max_execution_time, tc.execution_time)
        if tc.is_wa:
            wa_seeds.append(tc.seed)
        else:
            total_relative += relative_score(
                tc.score, best_scores.get(tc.seed), objective
            )

    case_count = len(cases)
    return ExecutionStats(
        execution=execution,
        test_cases=list(cases),
        case_count=case_count,
        total_score=total_score,
        max_execution_time=max_execution_time,
        wa_seeds=wa_seeds,
        ac_count=case_count - len(wa_seeds),
        average_score=total_score / case_count if case_count else 0.0,
        average_relative_score=total_relative / case_count if case_count else 0.0,
    )

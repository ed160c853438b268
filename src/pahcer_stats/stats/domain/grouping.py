"""Grouping — two orthogonal partitions of the same flat test-case collection."""

from collections.abc import Sequence
from dataclasses import dataclass

from pahcer_stats.results.domain.execution import Execution, ExecutionId
from pahcer_stats.results.domain.test_case import Seed, TestCase


@dataclass(frozen=True)
class ExecutionGroup:
    execution: Execution
    test_cases: list[TestCase]


@dataclass(frozen=True)
class SeedEntry:
    """One execution's result for a seed."""

    execution: Execution
    test_case: TestCase


@dataclass(frozen=True)
class SeedGroup:
    seed: Seed
    entries: list[SeedEntry]


def group_by_execution(
    executions: Sequence[Execution],
    test_cases: Sequence[TestCase],
) -> list[ExecutionGroup]:
    """One group per execution, in input order, carrying its own test cases."""
    by_execution: dict[ExecutionId, list[TestCase]] = {}
    for tc in test_cases:
        if tc.execution_id not in by_execution:
            by_execution[tc.execution_id] = []
        by_execution[tc.execution_id].append(tc)
    return [
        ExecutionGroup(execution=execution, test_cases=by_execution.get(execution.id, []))
        for execution in executions
    ]


def group_by_seed(
    executions: Sequence[Execution],
    test_cases: Sequence[TestCase],
) -> list[SeedGroup]:
    """Join each test case to its execution and group by seed, ascending.

    Test cases whose execution is not in executions are dropped; use
    ``find_orphans`` to report them.
    """
    executions_by_id = {execution.id: execution for execution in executions}
    by_seed: dict[Seed, list[SeedEntry]] = {}
    for tc in test_cases:
        execution = executions_by_id.get(tc.execution_id)
        if execution is None:
            continue
        if tc.seed not in by_seed:
            by_seed[tc.seed] = []
        by_seed[tc.seed].append(SeedEntry(execution=execution, test_case=tc))

    return [SeedGroup(seed=seed, entries=by_seed[seed]) for seed in sorted(by_seed)]


def find_orphans(
    executions: Sequence[Execution],
    test_cases: Sequence[TestCase],
) -> list[TestCase]:
    """Test cases that reference an execution absent from executions."""
    known = {execution.id for execution in executions}
    return [tc for tc in test_cases if tc.execution_id not in known]

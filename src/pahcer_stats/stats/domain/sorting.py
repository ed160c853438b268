"""Sorting — stable total orders over test cases and over a seed's executions.

Every function returns a new list; the input sequence is never mutated.
"""

from collections.abc import Mapping, Sequence

from pahcer_stats.results.domain.test_case import Seed, TestCase
from pahcer_stats.stats.domain.grouping import SeedEntry
from pahcer_stats.stats.domain.order import ExecutionSortOrder, SeedSortOrder

_RELATIVE_ORDERS = (
    ExecutionSortOrder.RELATIVE_SCORE_ASC,
    ExecutionSortOrder.RELATIVE_SCORE_DESC,
)
_DESCENDING_EXECUTION_ORDERS = (
    ExecutionSortOrder.SEED_DESC,
    ExecutionSortOrder.RELATIVE_SCORE_DESC,
    ExecutionSortOrder.ABSOLUTE_SCORE_DESC,
)
_DESCENDING_SEED_ORDERS = (SeedSortOrder.EXECUTION_DESC, SeedSortOrder.ABSOLUTE_SCORE_DESC)


def sort_test_cases(
    test_cases: Sequence[TestCase],
    order: ExecutionSortOrder,
    relative_scores: Mapping[Seed, float] | None = None,
) -> list[TestCase]:
    """Order test cases of one execution.

    The relative-score orders need relative_scores (seed -> percent). Without
    it the input order is returned unchanged; a seed missing from it sorts as 0.
    """
    descending = order in _DESCENDING_EXECUTION_ORDERS

    if order in _RELATIVE_ORDERS:
        if relative_scores is None:
            return list(test_cases)
        return sorted(
            test_cases,
            key=lambda tc: relative_scores.get(tc.seed, 0.0),
            reverse=descending,
        )
    if order in (ExecutionSortOrder.SEED_ASC, ExecutionSortOrder.SEED_DESC):
        return sorted(test_cases, key=lambda tc: tc.seed, reverse=descending)
    return sorted(test_cases, key=lambda tc: tc.score, reverse=descending)


def sort_seed_entries(
    entries: Sequence[SeedEntry],
    order: SeedSortOrder,
) -> list[SeedEntry]:
    """Order the executions recorded for one seed.

    Execution ids are time-ordered by construction, so comparing them
    lexicographically orders by recency.
    """
    descending = order in _DESCENDING_SEED_ORDERS

    if order in (SeedSortOrder.EXECUTION_ASC, SeedSortOrder.EXECUTION_DESC):
        return sorted(entries, key=lambda e: e.execution.id, reverse=descending)
    return sorted(entries, key=lambda e: e.test_case.score, reverse=descending)


def latest_execution_id(entries: Sequence[SeedEntry]) -> str | None:
    """Id of the most recent execution among entries, or None when empty."""
    return max((e.execution.id for e in entries), default=None)

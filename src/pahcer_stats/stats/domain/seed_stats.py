"""SeedStats — per-seed summary across all executions."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from pahcer_stats.results.domain.test_case import Seed, TestCase


@dataclass(frozen=True)
class SeedStats:
    seed: Seed
    test_cases: list[TestCase]
    best_score: float | None
    count: int
    average_score: float
    max_execution_time: float


def aggregate_by_seed(
    test_cases: Iterable[TestCase],
    best_scores: Mapping[Seed, float],
) -> dict[Seed, SeedStats]:
    """Group test cases by seed regardless of execution and summarize each group.

    ``best_score`` is looked up in best_scores, never recomputed.
    ``average_score`` is the unclamped mean, WA entries included.
    """
    groups: dict[Seed, list[TestCase]] = {}
    for tc in test_cases:
        if tc.seed not in groups:
            groups[tc.seed] = []
        groups[tc.seed].append(tc)

    stats: dict[Seed, SeedStats] = {}
    for seed, cases in groups.items():
        count = len(cases)
        stats[seed] = SeedStats(
            seed=seed,
            test_cases=cases,
            best_score=best_scores.get(seed),
            count=count,
            average_score=sum(tc.score for tc in cases) / count if count else 0.0,
            max_execution_time=max((tc.execution_time for tc in cases), default=0.0),
        )
    return stats


def sort_seed_stats(
    stats: Mapping[Seed, SeedStats],
    descending: bool = False,
) -> list[SeedStats]:
    """Return the SeedStats values ordered by seed number."""
    return sorted(stats.values(), key=lambda s: s.seed, reverse=descending)

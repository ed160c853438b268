"""Best score selection — the extremal valid score per seed."""

from collections.abc import Iterable, Mapping

from pahcer_stats.config.domain.objective import Objective
from pahcer_stats.results.domain.test_case import Seed, TestCase


def select_best_scores(
    test_cases: Iterable[TestCase],
    objective: Objective,
) -> dict[Seed, float]:
    """Return seed -> best valid score under objective.

    WA entries (``score <= 0``) never become or influence a best score, and a
    seed with no valid entry is absent from the result. The choice is made by
    comparison only, so input order does not matter.
    """
    best: dict[Seed, float] = {}
    for tc in test_cases:
        if tc.is_wa:
            continue
        current = best.get(tc.seed)
        if current is None or _is_better(tc.score, current, objective):
            best[tc.seed] = tc.score
    return best


def _is_better(candidate: float, current: float, objective: Objective) -> bool:
    if objective == Objective.MAX:
        return candidate > current
    return candidate < current


def resolve_best_scores(
    persisted: Mapping[Seed, float],
    test_cases: Iterable[TestCase],
    objective: Objective,
) -> dict[Seed, float]:
    """Merge a persisted best-score table with one recomputed from test_cases.

    The persisted table may include bests from executions no longer in memory,
    so a persisted entry always wins for its seed; recomputed values only fill
    seeds the table does not cover. Persisted entries that are not positive
    are discarded.
    """
    best = select_best_scores(test_cases, objective)
    for seed, score in persisted.items():
        if score > 0:
            best[seed] = score
    return best

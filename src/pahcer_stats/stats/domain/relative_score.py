"""Relative score — a seed's score as a percentage of its reference score."""

from collections.abc import Mapping

from pahcer_stats.config.domain.objective import Objective
from pahcer_stats.results.domain.test_case import Seed

# A valid run with no valid reference yet defines its own baseline.
BASELINE_PERCENT = 100.0


def relative_score(
    score: float,
    reference: float | None,
    objective: Objective,
) -> float:
    """Return score relative to reference, in percent.

    - ``score <= 0`` (WA) always yields 0.
    - A missing or non-positive reference yields ``BASELINE_PERCENT``: the run
      is treated as the first valid result for its seed.
    - Otherwise ``score / reference * 100`` for MAX and ``reference / score * 100``
      for MIN. Beating the reference legitimately gives more than 100.
    """
    if score <= 0:
        return 0.0
    if reference is None or reference <= 0:
        return BASELINE_PERCENT

    if objective == Objective.MAX:
        return score / reference * 100.0
    return reference / score * 100.0


def relative_scores_for_seeds(
    scores: Mapping[Seed, float],
    best_scores: Mapping[Seed, float],
    objective: Objective,
) -> dict[Seed, float]:
    """Map each seed's score to its relative score against best_scores."""
    return {
        seed: relative_score(score, best_scores.get(seed), objective)
        for seed, score in scores.items()
    }

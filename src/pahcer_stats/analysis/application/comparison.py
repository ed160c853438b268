"""Comparison — side-by-side data and summary rows for selected executions."""

import statistics
from dataclasses import dataclass

from pahcer_stats.analysis.domain.features import (
    evaluate_expression,
    extract_features,
    parse_feature_names,
)
from pahcer_stats.analysis.domain.stderr_parser import StderrVars
from pahcer_stats.config.domain.objective import Objective
from pahcer_stats.results.domain.execution import ExecutionId
from pahcer_stats.results.domain.test_case import Seed
from pahcer_stats.stats.domain.relative_score import relative_score
from pahcer_stats.stats.domain.snapshot import Snapshot


@dataclass(frozen=True)
class ComparisonCase:
    seed: Seed
    score: float
    relative_score: float
    execution_time: float


@dataclass(frozen=True)
class ComparisonResult:
    """One selected execution and its cases, in seed order."""

    execution_id: ExecutionId
    title: str
    cases: list[ComparisonCase]

    def case_for(self, seed: Seed) -> ComparisonCase | None:
        for case in self.cases:
            if case.seed == seed:
                return case
        return None


@dataclass(frozen=True)
class ComparisonData:
    """Everything the comparison view needs for a set of executions.

    ``input_lines`` holds the first input line per seed (empty when the case
    was never analysed); ``stderr_vars`` is keyed by execution, then seed.
    """

    objective: Objective
    results: list[ComparisonResult]
    seeds: list[Seed]
    input_lines: dict[Seed, str]
    stderr_vars: dict[ExecutionId, dict[Seed, StderrVars]]


@dataclass(frozen=True)
class ComparisonStatsRow:
    """Summary of one execution over the seeds that pass the filter.

    ``best_count`` counts seeds where this execution ties the best score among
    the compared executions; ``unique_best_count`` those where it holds it alone.
    """

    execution_id: ExecutionId
    title: str
    total_score: float
    mean: float
    sd: float
    best_count: int
    unique_best_count: int
    fail_count: int
    filtered_count: int
    total_count: int


def build_comparison(
    snapshot: Snapshot,
    execution_ids: list[ExecutionId],
) -> ComparisonData:
    """Collect the selected executions' cases from snapshot.

    Unknown execution ids are skipped; the selection order is kept.
    """
    executions_by_id = {execution.id: execution for execution in snapshot.executions}
    selected = [executions_by_id[eid] for eid in execution_ids if eid in executions_by_id]
    selected_ids = {execution.id for execution in selected}
    objective = snapshot.config.objective

    seeds: set[Seed] = set()
    input_lines: dict[Seed, str] = {}
    stderr_vars: dict[ExecutionId, dict[Seed, StderrVars]] = {
        execution.id: {} for execution in selected
    }
    cases_by_execution: dict[ExecutionId, list[ComparisonCase]] = {
        execution.id: [] for execution in selected
    }

    for tc in sorted(snapshot.test_cases, key=lambda tc: tc.seed):
        if tc.execution_id not in selected_ids:
            continue
        seeds.add(tc.seed)
        if not input_lines.get(tc.seed):
            input_lines[tc.seed] = tc.first_input_line or ""
        stderr_vars[tc.execution_id][tc.seed] = dict(tc.stderr_vars or {})
        cases_by_execution[tc.execution_id].append(
            ComparisonCase(
                seed=tc.seed,
                score=tc.score,
                relative_score=relative_score(
                    tc.score, snapshot.best_scores.get(tc.seed), objective
                ),
                execution_time=tc.execution_time,
            )
        )

    return ComparisonData(
        objective=objective,
        results=[
            ComparisonResult(
                execution_id=execution.id,
                title=execution.long_title(),
                cases=cases_by_execution[execution.id],
            )
            for execution in selected
        ],
        seeds=sorted(seeds),
        input_lines=input_lines,
        stderr_vars=stderr_vars,
    )


def case_variables(
    data: ComparisonData,
    result: ComparisonResult,
    seed: Seed,
    feature_names: list[str],
) -> dict[str, float] | None:
    """Variables a filter or axis expression may reference for one case.

    ``seed``, ``absScore``, ``relScore``, ``msec``, the named input features
    and ``$name`` stderr variables. None when result has no case for seed.
    """
    case = result.case_for(seed)
    if case is None:
        return None

    variables: dict[str, float] = {
        "seed": float(seed),
        "absScore": case.score,
        "relScore": case.relative_score,
        "msec": case.execution_time * 1000,
    }
    variables.update(extract_features(data.input_lines.get(seed, ""), feature_names))
    for name, value in data.stderr_vars.get(result.execution_id, {}).get(seed, {}).items():
        variables[f"${name}"] = value
    return variables


def summarize_comparison(
    data: ComparisonData,
    feature_string: str = "",
    filter_expression: str = "",
) -> list[ComparisonStatsRow]:
    """Return one ComparisonStatsRow per compared execution.

    A seed passes the filter for an execution when the expression evaluates
    to exactly 1; an empty filter passes every seed. Seeds missing from an
    execution or scored as WA count as failures.
    """
    feature_names = parse_feature_names(feature_string)
    rows: list[ComparisonStatsRow] = []

    for result in data.results:
        filtered = [
            seed
            for seed in data.seeds
            if _passes_filter(data, result, seed, feature_names, filter_expression)
        ]

        scores: list[float] = []
        best_count = 0
        unique_best_count = 0
        fail_count = 0
        for seed in filtered:
            case = result.case_for(seed)
            if case is None or case.score <= 0:
                fail_count += 1
                continue
            scores.append(case.score)
            best = _best_among(data, seed)
            if best is not None and case.score == best:
                best_count += 1
                if _scores_for(data, seed).count(best) == 1:
                    unique_best_count += 1

        rows.append(
            ComparisonStatsRow(
                execution_id=result.execution_id,
                title=result.title,
                total_score=sum(scores),
                mean=statistics.fmean(scores) if scores else 0.0,
                sd=statistics.pstdev(scores) if scores else 0.0,
                best_count=best_count,
                unique_best_count=unique_best_count,
                fail_count=fail_count,
                filtered_count=len(filtered),
                total_count=len(data.seeds),
            )
        )

    return rows


def _passes_filter(
    data: ComparisonData,
    result: ComparisonResult,
    seed: Seed,
    feature_names: list[str],
    filter_expression: str,
) -> bool:
    if not filter_expression.strip():
        return True
    variables = case_variables(data, result, seed, feature_names)
    if variables is None:
        return False
    return evaluate_expression(filter_expression, variables) == 1.0


def _best_among(data: ComparisonData, seed: Seed) -> float | None:
    """Best valid score for seed among the compared executions only."""
    valid = [score for score in _scores_for(data, seed) if score > 0]
    if not valid:
        return None
    return max(valid) if data.objective == Objective.MAX else min(valid)


def _scores_for(data: ComparisonData, seed: Seed) -> list[float]:
    scores: list[float] = []
    for result in data.results:
        case = result.case_for(seed)
        if case is not None:
            scores.append(case.score)
    return scores

"""Attach per-seed analysis (input first line, stderr variables) to test cases."""

from collections.abc import Mapping, Sequence

from pahcer_stats.analysis.domain.stderr_parser import merge_head_tail_variables
from pahcer_stats.results.domain.test_case import SeedAnalysis, TestCase, TestCaseId


def build_seed_analysis(
    input_first_line: str,
    stderr_head: str,
    stderr_tail: str = "",
) -> SeedAnalysis:
    """Build the enrichment for one case from raw text supplied by file adapters."""
    return SeedAnalysis(
        first_input_line=input_first_line.strip(),
        stderr_vars=merge_head_tail_variables(stderr_head, stderr_tail),
    )


def enrich_test_cases(
    test_cases: Sequence[TestCase],
    analyses: Mapping[TestCaseId, SeedAnalysis],
) -> list[TestCase]:
    """Return test cases with their analysis attached; identities are unchanged.

    Cases without an entry in analyses are returned as they are.
    """
    enriched: list[TestCase] = []
    for tc in test_cases:
        analysis = analyses.get(tc.id)
        enriched.append(tc if analysis is None else tc.with_analysis(analysis))
    return enriched

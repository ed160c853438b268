"""Tests for the test-case and seed-entry orderings."""

from datetime import datetime

import pytest

from pahcer_stats.results.domain.execution import Execution
from pahcer_stats.results.domain.test_case import TestCase, TestCaseId
from pahcer_stats.stats.domain.grouping import SeedEntry
from pahcer_stats.stats.domain.order import ExecutionSortOrder, SeedSortOrder
from pahcer_stats.stats.domain.sorting import (
    latest_execution_id,
    sort_seed_entries,
    sort_test_cases,
)


def _make_case(seed: int, score: float, execution_id: str = "A") -> TestCase:
    return TestCase(
        id=TestCaseId(execution_id=execution_id, seed=seed),
        score=score,
        execution_time=0.1,
    )


def _make_entry(execution_id: str, score: float, seed: int = 1) -> SeedEntry:
    return SeedEntry(
        execution=Execution(id=execution_id, start_time=datetime(2025, 1, 11)),
        test_case=_make_case(seed, score, execution_id),
    )


def _seeds(cases: list[TestCase]) -> list[int]:
    return [tc.seed for tc in cases]


class TestSortTestCases:
    def test_seed_asc(self) -> None:
        cases = [_make_case(3, 1), _make_case(1, 1), _make_case(2, 1)]

        assert _seeds(sort_test_cases(cases, ExecutionSortOrder.SEED_ASC)) == [1, 2, 3]

    def test_seed_desc(self) -> None:
        cases = [_make_case(3, 1), _make_case(1, 1), _make_case(2, 1)]

        assert _seeds(sort_test_cases(cases, ExecutionSortOrder.SEED_DESC)) == [3, 2, 1]

    def test_absolute_score_asc(self) -> None:
        cases = [_make_case(0, 30), _make_case(1, -1), _make_case(2, 10)]

        result = sort_test_cases(cases, ExecutionSortOrder.ABSOLUTE_SCORE_ASC)

        assert _seeds(result) == [1, 2, 0]

    def test_absolute_score_desc(self) -> None:
        cases = [_make_case(0, 30), _make_case(1, -1), _make_case(2, 10)]

        result = sort_test_cases(cases, ExecutionSortOrder.ABSOLUTE_SCORE_DESC)

        assert _seeds(result) == [0, 2, 1]

    def test_relative_score_asc_uses_map(self) -> None:
        cases = [_make_case(0, 1), _make_case(1, 1), _make_case(2, 1)]
        relative = {0: 90.0, 1: 40.0, 2: 100.0}

        result = sort_test_cases(cases, ExecutionSortOrder.RELATIVE_SCORE_ASC, relative)

        assert _seeds(result) == [1, 0, 2]

    def test_relative_score_desc_uses_map(self) -> None:
        cases = [_make_case(0, 1), _make_case(1, 1), _make_case(2, 1)]
        relative = {0: 90.0, 1: 40.0, 2: 100.0}

        result = sort_test_cases(cases, ExecutionSortOrder.RELATIVE_SCORE_DESC, relative)

        assert _seeds(result) == [2, 0, 1]

    @pytest.mark.parametrize(
        "order",
        [ExecutionSortOrder.RELATIVE_SCORE_ASC, ExecutionSortOrder.RELATIVE_SCORE_DESC],
    )
    def test_relative_order_without_map_keeps_input_order(
        self, order: ExecutionSortOrder
    ) -> None:
        cases = [_make_case(2, 1), _make_case(0, 1), _make_case(1, 1)]

        assert _seeds(sort_test_cases(cases, order)) == [2, 0, 1]

    def test_seed_missing_from_map_sorts_as_zero(self) -> None:
        cases = [_make_case(0, 1), _make_case(1, 1)]

        result = sort_test_cases(cases, ExecutionSortOrder.RELATIVE_SCORE_ASC, {0: 5.0})

        assert _seeds(result) == [1, 0]

    @pytest.mark.parametrize(
        "order",
        [ExecutionSortOrder.ABSOLUTE_SCORE_ASC, ExecutionSortOrder.ABSOLUTE_SCORE_DESC],
    )
    def test_equal_keys_keep_input_order(self, order: ExecutionSortOrder) -> None:
        cases = [_make_case(4, 7), _make_case(1, 7), _make_case(3, 7)]

        assert _seeds(sort_test_cases(cases, order)) == [4, 1, 3]

    @pytest.mark.parametrize(
        "order",
        [ExecutionSortOrder.RELATIVE_SCORE_ASC, ExecutionSortOrder.RELATIVE_SCORE_DESC],
    )
    def test_equal_relative_scores_keep_input_order(
        self, order: ExecutionSortOrder
    ) -> None:
        cases = [_make_case(4, 1), _make_case(1, 2), _make_case(3, 3)]
        relative = {4: 75.0, 1: 75.0, 3: 75.0}

        assert _seeds(sort_test_cases(cases, order, relative)) == [4, 1, 3]

    @pytest.mark.parametrize(
        "order",
        [ExecutionSortOrder.RELATIVE_SCORE_ASC, ExecutionSortOrder.RELATIVE_SCORE_DESC],
    )
    def test_seeds_missing_from_map_keep_input_order(
        self, order: ExecutionSortOrder
    ) -> None:
        cases = [_make_case(8, 1), _make_case(2, 2), _make_case(5, 3)]

        assert _seeds(sort_test_cases(cases, order, {})) == [8, 2, 5]

    @pytest.mark.parametrize("order", list(ExecutionSortOrder))
    def test_does_not_mutate_input(self, order: ExecutionSortOrder) -> None:
        cases = [_make_case(3, 5), _make_case(1, 9), _make_case(2, -1)]
        before = list(cases)

        result = sort_test_cases(cases, order, {1: 1.0, 2: 2.0, 3: 3.0})

        assert cases == before
        assert result is not cases

    @pytest.mark.parametrize("order", list(ExecutionSortOrder))
    def test_sorting_twice_is_idempotent(self, order: ExecutionSortOrder) -> None:
        cases = [_make_case(3, 5), _make_case(1, 9), _make_case(2, 9)]
        relative = {1: 50.0, 2: 50.0, 3: 10.0}

        once = sort_test_cases(cases, order, relative)
        twice = sort_test_cases(once, order, relative)

        assert once == twice


class TestSortSeedEntries:
    def test_execution_asc_orders_by_id(self) -> None:
        entries = [_make_entry("20250112_000000", 1), _make_entry("20250111_000000", 2)]

        result = sort_seed_entries(entries, SeedSortOrder.EXECUTION_ASC)

        assert [e.execution.id for e in result] == ["20250111_000000", "20250112_000000"]

    def test_execution_desc_orders_by_id(self) -> None:
        entries = [_make_entry("20250111_000000", 1), _make_entry("20250112_000000", 2)]

        result = sort_seed_entries(entries, SeedSortOrder.EXECUTION_DESC)

        assert [e.execution.id for e in result] == ["20250112_000000", "20250111_000000"]

    def test_absolute_score_orders(self) -> None:
        entries = [_make_entry("A", 5), _make_entry("B", -1), _make_entry("C", 9)]

        asc = sort_seed_entries(entries, SeedSortOrder.ABSOLUTE_SCORE_ASC)
        desc = sort_seed_entries(entries, SeedSortOrder.ABSOLUTE_SCORE_DESC)

        assert [e.execution.id for e in asc] == ["B", "A", "C"]
        assert [e.execution.id for e in desc] == ["C", "A", "B"]

    def test_equal_scores_keep_input_order(self) -> None:
        entries = [_make_entry("B", 5), _make_entry("A", 5)]

        result = sort_seed_entries(entries, SeedSortOrder.ABSOLUTE_SCORE_DESC)

        assert [e.execution.id for e in result] == ["B", "A"]

    def test_does_not_mutate_input(self) -> None:
        entries = [_make_entry("B", 1), _make_entry("A", 2)]
        before = list(entries)

        sort_seed_entries(entries, SeedSortOrder.EXECUTION_ASC)

        assert entries == before


class TestLatestExecutionId:
    def test_returns_most_recent_id(self) -> None:
        entries = [_make_entry("20250111_090000", 1), _make_entry("20250112_080000", 1)]

        assert latest_execution_id(entries) == "20250112_080000"

    def test_empty_entries_yield_none(self) -> None:
        assert latest_execution_id([]) is None

"""Tests for SnapshotLoader using in-memory repository fakes."""

from datetime import datetime

import pytest

from pahcer_stats.config.domain.objective import Objective
from pahcer_stats.config.domain.pahcer_config import PahcerConfig
from pahcer_stats.results.domain.execution import Execution, ExecutionId
from pahcer_stats.results.domain.test_case import TestCase, TestCaseId
from pahcer_stats.stats.application.errors import MissingConfigurationError
from pahcer_stats.stats.application.loader import SnapshotLoader
from tests.results.fake_repositories import (
    FakeBestScoreRepository,
    FakeExecutionRepository,
    FakePahcerConfigRepository,
    FakeTestCaseRepository,
)
from tests.stats.fake_observer import FakeSnapshotObserver


def _make_execution(execution_id: str) -> Execution:
    return Execution(id=execution_id, start_time=datetime(2025, 1, 11, 12, 0))


def _make_case(execution_id: str, seed: int, score: float) -> TestCase:
    return TestCase(
        id=TestCaseId(execution_id=execution_id, seed=seed),
        score=score,
        execution_time=0.1,
    )


def _make_config(objective: Objective = Objective.MAX) -> PahcerConfig:
    return PahcerConfig(
        problem_name="ahc001", start_seed=0, end_seed=9, objective=objective
    )


def _make_loader(
    executions: list[Execution],
    test_cases: list[TestCase],
    config: PahcerConfig | None = None,
    observer: FakeSnapshotObserver | None = None,
    best_scores: dict[int, float] | None = None,
) -> SnapshotLoader:
    return SnapshotLoader(
        execution_repository=FakeExecutionRepository(executions),
        test_case_repository=FakeTestCaseRepository(test_cases),
        config_repository=FakePahcerConfigRepository(config),
        observer=observer or FakeSnapshotObserver(),
        best_score_repository=(
            FakeBestScoreRepository(best_scores) if best_scores is not None else None
        ),
    )


class _MisfiledTestCaseRepository(FakeTestCaseRepository):
    """Returns an extra case belonging to an execution that no longer exists."""

    async def find_by_execution_id(self, execution_id: ExecutionId) -> list[TestCase]:
        cases = await super().find_by_execution_id(execution_id)
        return [*cases, _make_case("DELETED", 0, 1.0)]


class TestSnapshotLoaderHappyPath:
    async def test_snapshot_holds_all_executions_and_cases(self) -> None:
        executions = [_make_execution("A"), _make_execution("B")]
        cases = [_make_case("A", 0, 80), _make_case("B", 0, 100), _make_case("B", 1, 5)]

        snapshot = await _make_loader(executions, cases, _make_config()).load()

        assert [e.id for e in snapshot.executions] == ["A", "B"]
        assert len(snapshot.test_cases) == 3
        assert snapshot.config.objective is Objective.MAX

    async def test_best_scores_are_computed_from_cases(self) -> None:
        executions = [_make_execution("A"), _make_execution("B")]
        cases = [_make_case("A", 7, 80), _make_case("B", 7, 100)]

        snapshot = await _make_loader(executions, cases, _make_config()).load()

        assert snapshot.best_scores == {7: 100.0}

    async def test_execution_stats_use_best_scores(self) -> None:
        executions = [_make_execution("A"), _make_execution("B")]
        cases = [_make_case("A", 7, 80), _make_case("B", 7, 100)]

        snapshot = await _make_loader(executions, cases, _make_config()).load()

        stats = snapshot.stats_for("A")
        assert stats is not None
        assert stats.average_relative_score == pytest.approx(80.0)
        assert snapshot.stats_for("missing") is None

    async def test_persisted_best_scores_take_precedence(self) -> None:
        executions = [_make_execution("A")]
        cases = [_make_case("A", 7, 80)]

        snapshot = await _make_loader(
            executions, cases, _make_config(), best_scores={7: 160.0}
        ).load()

        assert snapshot.best_scores == {7: 160.0}
        assert snapshot.execution_stats[0].average_relative_score == pytest.approx(50.0)

    async def test_seeds_missing_from_persisted_table_are_recomputed(self) -> None:
        cases = [_make_case("A", 7, 80), _make_case("A", 8, 40)]

        snapshot = await _make_loader(
            [_make_execution("A")], cases, _make_config(), best_scores={7: 160.0}
        ).load()

        assert snapshot.best_scores == {7: 160.0, 8: 40.0}

    async def test_empty_result_set_builds_empty_snapshot(self) -> None:
        snapshot = await _make_loader([], [], _make_config()).load()

        assert snapshot.executions == []
        assert snapshot.test_cases == []
        assert snapshot.best_scores == {}


class TestSnapshotLoaderEvents:
    async def test_emits_started_and_loaded(self) -> None:
        observer = FakeSnapshotObserver()
        cases = [_make_case("A", 0, 1), _make_case("A", 1, -1)]

        await _make_loader([_make_execution("A")], cases, _make_config(), observer).load()

        assert observer.load_started == 1
        [event] = observer.loaded
        assert event.total_executions == 1
        assert event.total_test_cases == 2
        assert event.total_seeds_with_best == 1
        assert event.best_scores_source == "computed"
        assert event.elapsed_seconds >= 0

    async def test_loaded_event_reports_persisted_source(self) -> None:
        observer = FakeSnapshotObserver()

        await _make_loader(
            [_make_execution("A")],
            [_make_case("A", 0, 1)],
            _make_config(),
            observer,
            best_scores={0: 2.0},
        ).load()

        assert observer.loaded[0].best_scores_source == "persisted"

    async def test_non_positive_persisted_table_reports_computed_source(self) -> None:
        observer = FakeSnapshotObserver()

        await _make_loader(
            [_make_execution("A")],
            [_make_case("A", 0, 1)],
            _make_config(),
            observer,
            best_scores={0: 0.0, 1: -2.0},
        ).load()

        assert observer.loaded[0].best_scores_source == "computed"

    async def test_orphan_cases_are_reported(self) -> None:
        observer = FakeSnapshotObserver()
        loader = SnapshotLoader(
            execution_repository=FakeExecutionRepository([_make_execution("A")]),
            test_case_repository=_MisfiledTestCaseRepository([_make_case("A", 0, 1)]),
            config_repository=FakePahcerConfigRepository(_make_config()),
            observer=observer,
        )

        await loader.load()

        [event] = observer.orphans
        assert event.execution_ids == ["DELETED"]
        assert event.count == 1

    async def test_no_orphan_event_for_consistent_data(self) -> None:
        observer = FakeSnapshotObserver()

        await _make_loader(
            [_make_execution("A")], [_make_case("A", 0, 1)], _make_config(), observer
        ).load()

        assert observer.orphans == []


class TestSnapshotLoaderMissingConfiguration:
    async def test_missing_config_raises(self) -> None:
        loader = _make_loader([_make_execution("A")], [], config=None)

        with pytest.raises(MissingConfigurationError):
            await loader.load()

    async def test_missing_config_emits_failed_not_loaded(self) -> None:
        observer = FakeSnapshotObserver()
        loader = _make_loader([_make_execution("A")], [], None, observer)

        with pytest.raises(MissingConfigurationError):
            await loader.load()

        assert len(observer.failed) == 1
        assert "normal" in observer.failed[0].reason
        assert observer.loaded == []

    async def test_temporary_config_is_not_used(self) -> None:
        config = PahcerConfig(
            id="temporary",
            problem_name="ahc001",
            start_seed=0,
            end_seed=9,
            objective=Objective.MAX,
        )
        loader = _make_loader([], [], config)

        with pytest.raises(MissingConfigurationError):
            await loader.load()

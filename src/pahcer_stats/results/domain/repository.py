"""Repository ports — external collaborators that own the on-disk result files."""

from typing import Protocol

from pahcer_stats.results.domain.execution import Execution, ExecutionId
from pahcer_stats.results.domain.test_case import Seed, TestCase, TestCaseId


class ExecutionRepository(Protocol):
    """Reads and writes Execution metadata."""

    async def find_by_id(self, execution_id: ExecutionId) -> Execution | None: ...

    async def find_all(self) -> list[Execution]: ...

    async def upsert(self, execution: Execution) -> None: ...


class TestCaseRepository(Protocol):
    """Reads and writes TestCases keyed by (execution_id, seed)."""

    async def find_by_id(self, test_case_id: TestCaseId) -> TestCase | None: ...

    async def find_by_execution_id(self, execution_id: ExecutionId) -> list[TestCase]: ...

    async def upsert(self, test_case: TestCase) -> None: ...


class BestScoreRepository(Protocol):
    """Supplies the persisted seed -> best score table, if one exists.

    Returns an empty mapping when nothing has been persisted yet.
    """

    async def load(self) -> dict[Seed, float]: ...

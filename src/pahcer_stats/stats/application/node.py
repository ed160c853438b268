"""TreeNode — one display-ready row of the statistics tree."""

from enum import StrEnum

from pydantic import BaseModel

from pahcer_stats.results.domain.execution import ExecutionId
from pahcer_stats.results.domain.test_case import Seed


class NodeKind(StrEnum):
    EXECUTION = "execution"
    CASE = "case"
    SEED = "seed"
    SUMMARY = "summary"
    INFO = "info"


class NodeStatus(StrEnum):
    PASSED = "passed"
    PARTIAL = "partial"
    FAILED = "failed"
    NO_OUTPUT = "no_output"


class TreeNode(BaseModel, frozen=True):
    """A row the presentation layer renders as-is.

    ``execution_id`` and ``seed`` identify the node when it is passed back to
    ``StatsTree.children``.
    """

    kind: NodeKind
    label: str
    description: str = ""
    tooltip: str | None = None
    collapsible: bool = False
    status: NodeStatus | None = None
    execution_id: ExecutionId | None = None
    seed: Seed | None = None
    checked: bool | None = None
    has_commit: bool = False
    is_latest: bool = False

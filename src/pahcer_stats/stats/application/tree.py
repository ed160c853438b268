"""StatsTree — answers "children of this node" queries from the cached snapshot."""

from dataclasses import dataclass, field

from pahcer_stats.config.domain.view_config import ViewConfig
from pahcer_stats.results.domain.execution import ExecutionId
from pahcer_stats.results.domain.test_case import Seed, TestCase
from pahcer_stats.stats.application.cache import SnapshotCache
from pahcer_stats.stats.application.errors import MissingConfigurationError
from pahcer_stats.stats.application.node import NodeKind, NodeStatus, TreeNode
from pahcer_stats.stats.domain.execution_stats import ExecutionStats
from pahcer_stats.stats.domain.grouping import SeedGroup, group_by_seed
from pahcer_stats.stats.domain.order import GroupingMode, SeedSortOrder
from pahcer_stats.stats.domain.relative_score import (
    relative_score,
    relative_scores_for_seeds,
)
from pahcer_stats.stats.domain.seed_stats import (
    SeedStats,
    aggregate_by_seed,
    sort_seed_stats,
)
from pahcer_stats.stats.domain.snapshot import Snapshot
from pahcer_stats.stats.domain.sorting import (
    latest_execution_id,
    sort_seed_entries,
    sort_test_cases,
)

MISSING_CONFIG_LABEL = "pahcer config not found"
NO_RESULTS_LABEL = "No results found"
_TAG_PREFIX = "pahcer/"
_SCORE_ORDERS = (SeedSortOrder.ABSOLUTE_SCORE_ASC, SeedSortOrder.ABSOLUTE_SCORE_DESC)


@dataclass
class _SeedViews:
    """Seed-mode structures derived lazily from one snapshot."""

    snapshot: Snapshot
    stats: list[SeedStats] | None = None
    groups: dict[Seed, SeedGroup] = field(default_factory=dict)
    grouped: bool = False


class StatsTree:
    """Tree-shaped query interface over a SnapshotCache.

    The grouping mode and sort orders come from an explicit ViewConfig; changing
    it never invalidates the snapshot because ordering is applied per query.
    """

    def __init__(self, cache: SnapshotCache, view_config: ViewConfig) -> None:
        self._cache = cache
        self._view_config = view_config
        self._checked: dict[ExecutionId, None] = {}
        self._seed_views: _SeedViews | None = None

    @property
    def view_config(self) -> ViewConfig:
        return self._view_config

    def set_view_config(self, view_config: ViewConfig) -> None:
        self._view_config = view_config

    def refresh(self) -> None:
        self._seed_views = None
        self._cache.refresh()

    def toggle_checked(self, execution_id: ExecutionId) -> None:
        if execution_id in self._checked:
            del self._checked[execution_id]
        else:
            self._checked[execution_id] = None

    def checked_execution_ids(self) -> list[ExecutionId]:
        """Checked executions in the order they were checked."""
        return list(self._checked)

    async def children(self, node: TreeNode | None = None) -> list[TreeNode]:
        """Return the child rows of node, or the root rows when node is None."""
        try:
            snapshot = await self._cache.get()
        except MissingConfigurationError:
            if node is None:
                return [_info(MISSING_CONFIG_LABEL)]
            return []

        if self._view_config.grouping_mode == GroupingMode.BY_SEED:
            return self._children_by_seed(snapshot, node)
        return self._children_by_execution(snapshot, node)

    def _children_by_execution(
        self, snapshot: Snapshot, node: TreeNode | None
    ) -> list[TreeNode]:
        if node is None:
            if not snapshot.executions:
                return [_info(NO_RESULTS_LABEL)]
            return [self._execution_node(stats) for stats in snapshot.execution_stats]
        if node.kind == NodeKind.EXECUTION and node.execution_id is not None:
            stats = snapshot.stats_for(node.execution_id)
            if stats is None:
                return []
            return self._case_nodes(snapshot, stats)
        return []

    def _children_by_seed(
        self, snapshot: Snapshot, node: TreeNode | None
    ) -> list[TreeNode]:
        views = self._views_for(snapshot)
        if node is None:
            if not snapshot.test_cases:
                return [_info(NO_RESULTS_LABEL)]
            if views.stats is None:
                views.stats = sort_seed_stats(
                    aggregate_by_seed(snapshot.test_cases, snapshot.best_scores)
                )
            return [_seed_node(stats) for stats in views.stats]
        if node.kind == NodeKind.SEED and node.seed is not None:
            if not views.grouped:
                views.groups = {
                    group.seed: group
                    for group in group_by_seed(snapshot.executions, snapshot.test_cases)
                }
                views.grouped = True
            group = views.groups.get(node.seed)
            if group is None:
                return []
            return self._seed_execution_nodes(snapshot, group)
        return []

    def _views_for(self, snapshot: Snapshot) -> _SeedViews:
        if self._seed_views is None or self._seed_views.snapshot is not snapshot:
            self._seed_views = _SeedViews(snapshot=snapshot)
        return self._seed_views

    def _execution_node(self, stats: ExecutionStats) -> TreeNode:
        execution = stats.execution
        label = (
            f"{execution.short_title()} - Avg: {stats.average_score:.1f}"
            f" ({stats.average_relative_score:.2f}%)"
        )
        description = execution.comment or (execution.tag_name or "").replace(
            _TAG_PREFIX, ""
        )
        return TreeNode(
            kind=NodeKind.EXECUTION,
            label=label,
            description=description,
            collapsible=True,
            status=_execution_status(stats),
            execution_id=execution.id,
            checked=execution.id in self._checked,
            has_commit=bool(execution.commit_hash),
        )

    def _case_nodes(self, snapshot: Snapshot, stats: ExecutionStats) -> list[TreeNode]:
        objective = snapshot.config.objective
        relative = relative_scores_for_seeds(
            {tc.seed: tc.score for tc in stats.test_cases},
            snapshot.best_scores,
            objective,
        )
        ordered = sort_test_cases(
            stats.test_cases, self._view_config.execution_sort_order, relative
        )

        nodes = [_summary_node(stats)]
        for tc in ordered:
            status, tooltip = _case_status(tc)
            nodes.append(
                TreeNode(
                    kind=NodeKind.CASE,
                    label=f"{tc.seed:04d}: {_format_score(tc.score)}"
                    f" ({relative[tc.seed]:.3f}%)",
                    description=_format_millis(tc.execution_time),
                    tooltip=tooltip,
                    status=status,
                    execution_id=stats.execution.id,
                    seed=tc.seed,
                )
            )
        return nodes

    def _seed_execution_nodes(
        self, snapshot: Snapshot, group: SeedGroup
    ) -> list[TreeNode]:
        order = self._view_config.seed_sort_order
        latest_id = latest_execution_id(group.entries)
        reference = snapshot.best_scores.get(group.seed)

        nodes: list[TreeNode] = []
        for entry in sort_seed_entries(group.entries, order):
            tc = entry.test_case
            execution = entry.execution
            rel = relative_score(tc.score, reference, snapshot.config.objective)
            status, tooltip = _case_status(tc)
            nodes.append(
                TreeNode(
                    kind=NodeKind.EXECUTION,
                    label=f"{execution.short_title()}: {_format_score(tc.score, grouped=True)}"
                    f" ({rel:.3f}%)",
                    description=_format_millis(tc.execution_time),
                    tooltip=tooltip,
                    status=status,
                    execution_id=execution.id,
                    seed=group.seed,
                    checked=execution.id in self._checked,
                    has_commit=bool(execution.commit_hash),
                    is_latest=execution.id == latest_id and order in _SCORE_ORDERS,
                )
            )
        return nodes


def _info(label: str) -> TreeNode:
    return TreeNode(kind=NodeKind.INFO, label=label)


def _summary_node(stats: ExecutionStats) -> TreeNode:
    label = (
        f"AC: {stats.ac_count}/{stats.case_count},"
        f" Total Score: {_format_score(stats.total_score, grouped=True)},"
        f" Max Time: {stats.max_execution_time * 1000:.0f}ms"
    )
    return TreeNode(kind=NodeKind.SUMMARY, label=label, execution_id=stats.execution.id)


def _seed_node(stats: SeedStats) -> TreeNode:
    return TreeNode(
        kind=NodeKind.SEED,
        label=f"{stats.seed:04d}",
        description=f"{stats.count} runs - Avg: {stats.average_score:.2f}",
        collapsible=True,
        seed=stats.seed,
    )


def _execution_status(stats: ExecutionStats) -> NodeStatus:
    if stats.all_accepted:
        return NodeStatus.PASSED
    if stats.ac_count > 0:
        return NodeStatus.PARTIAL
    return NodeStatus.FAILED


def _case_status(tc: TestCase) -> tuple[NodeStatus, str | None]:
    if not tc.found_output:
        return NodeStatus.NO_OUTPUT, "Output file was not saved"
    if tc.is_wa or tc.error_message:
        return NodeStatus.FAILED, tc.error_message or "WA"
    return NodeStatus.PASSED, None


def _format_score(score: float, grouped: bool = False) -> str:
    """Render integral scores without a fractional part."""
    value: float | int = int(score) if float(score).is_integer() else score
    return f"{value:,}" if grouped else f"{value}"


def _format_millis(seconds: float) -> str:
    return f"{seconds * 1000:.2f}ms"

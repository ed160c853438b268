"""ViewConfig — caller-selected grouping and ordering of the statistics view."""

from pydantic import BaseModel

from pahcer_stats.stats.domain.order import (
    ExecutionSortOrder,
    GroupingMode,
    SeedSortOrder,
)


class ViewConfig(BaseModel, frozen=True):
    grouping_mode: GroupingMode = GroupingMode.BY_EXECUTION
    execution_sort_order: ExecutionSortOrder = ExecutionSortOrder.SEED_ASC
    seed_sort_order: SeedSortOrder = SeedSortOrder.EXECUTION_DESC

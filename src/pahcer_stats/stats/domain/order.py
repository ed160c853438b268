"""Closed sum types selecting how the statistics view is grouped and ordered."""

from enum import StrEnum


class GroupingMode(StrEnum):
    BY_EXECUTION = "byExecution"
    BY_SEED = "bySeed"


class ExecutionSortOrder(StrEnum):
    """Order of test cases within one execution."""

    SEED_ASC = "seedAsc"
    SEED_DESC = "seedDesc"
    RELATIVE_SCORE_ASC = "relativeScoreAsc"
    RELATIVE_SCORE_DESC = "relativeScoreDesc"
    ABSOLUTE_SCORE_ASC = "absoluteScoreAsc"
    ABSOLUTE_SCORE_DESC = "absoluteScoreDesc"


class SeedSortOrder(StrEnum):
    """Order of executions within one seed."""

    EXECUTION_ASC = "executionAsc"
    EXECUTION_DESC = "executionDesc"
    ABSOLUTE_SCORE_ASC = "absoluteScoreAsc"
    ABSOLUTE_SCORE_DESC = "absoluteScoreDesc"

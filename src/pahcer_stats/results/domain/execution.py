"""Execution — metadata of one batch run over many seeds."""

from datetime import datetime
from typing import TypeAlias

from pydantic import BaseModel, Field

ExecutionId: TypeAlias = str


class Execution(BaseModel, frozen=True):
    """Immutable record of one batch run.

    ``id`` is lexicographically time-ordered (e.g. ``"20250111_123456"``) and is
    used as the recency key everywhere. Per-run statistics are derived on demand
    by the stats context and never stored here.
    """

    id: ExecutionId = Field(min_length=1)
    start_time: datetime
    comment: str = ""
    tag_name: str | None = None
    commit_hash: str | None = None

    def with_comment(self, comment: str) -> "Execution":
        return self.model_copy(update={"comment": comment})

    def with_commit_hash(self, commit_hash: str) -> "Execution":
        return self.model_copy(update={"commit_hash": commit_hash})

    def short_title(self) -> str:
        """MM/DD HH:MM"""
        return self.start_time.strftime("%m/%d %H:%M")

    def long_title(self) -> str:
        """YYYY/MM/DD HH:MM:SS"""
        return self.start_time.strftime("%Y/%m/%d %H:%M:%S")

    def title_with_hash(self) -> str:
        """Short title suffixed with the abbreviated commit hash, when one exists."""
        if not self.commit_hash:
            return self.short_title()
        return f"{self.short_title()}@{self.commit_hash[:7]}"

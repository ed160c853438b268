"""PahcerConfig — the problem-level settings a result set was produced under."""

from typing import Literal, Self, TypeAlias

from pydantic import BaseModel, Field, model_validator

from pahcer_stats.config.domain.objective import Objective
from pahcer_stats.core.errors import DomainValidationError

ConfigId: TypeAlias = Literal["normal", "temporary"]


class PahcerConfig(BaseModel, frozen=True):
    """Seed range and objective direction of one problem instance.

    The objective is constant for the lifetime of a dataset and is threaded
    explicitly into every aggregation call.
    """

    id: ConfigId = "normal"
    path: str = ""
    problem_name: str = Field(min_length=1)
    start_seed: int
    end_seed: int
    objective: Objective

    @model_validator(mode="after")
    def _check_seed_range(self) -> Self:
        if self.start_seed < 0:
            raise DomainValidationError("start_seed must be non-negative")
        if self.end_seed < self.start_seed:
            raise DomainValidationError("end_seed must be >= start_seed")
        return self

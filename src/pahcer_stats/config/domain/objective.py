"""Objective — whether higher or lower scores are better for a problem."""

from enum import StrEnum


class Objective(StrEnum):
    MAX = "max"
    MIN = "min"

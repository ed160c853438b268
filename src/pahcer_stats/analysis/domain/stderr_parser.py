"""Extraction of ``$name = value`` variables a solver prints to stderr."""

import re
from typing import TypeAlias

_VARIABLE_PATTERN = re.compile(r"\$([a-zA-Z_][a-zA-Z_0-9]*)\s*=\s*(-?\d+(?:\.\d+)?)")

StderrVars: TypeAlias = dict[str, float]


def parse_stderr_variables(content: str) -> StderrVars:
    """Return the first ``$name = number`` match of every line; later lines win."""
    variables: StderrVars = {}
    for line in content.splitlines():
        match = _VARIABLE_PATTERN.search(line)
        if match:
            variables[match.group(1)] = float(match.group(2))
    return variables


def merge_head_tail_variables(head: str, tail: str) -> StderrVars:
    """Parse the head and tail of a large stderr file; tail values override head."""
    return {**parse_stderr_variables(head), **parse_stderr_variables(tail)}

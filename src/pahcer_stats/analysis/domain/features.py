"""Input features and arithmetic expressions used by the comparison view.

Expressions are parsed with ``ast`` and evaluated by walking a whitelist of
node types; nothing is ever passed to ``eval``. Supported:

- numbers, variables, ``( )``, unary ``+``/``-``
- ``+ - * /`` and ``^`` (power)
- comparisons ``< <= > >= == !=`` yielding 1.0 or 0.0
- ``log``, ``sqrt``, ``ceil``, ``floor``
- stderr variables written ``$name``
"""

import ast
import math
import operator
import re
from collections.abc import Callable, Mapping
from typing import TypeAlias

Features: TypeAlias = dict[str, float]

_STDERR_VAR = re.compile(r"\$([A-Za-z_][A-Za-z0-9_]*)")
_STDERR_PREFIX = "_stderr__"

_BINARY_OPERATORS: dict[type[ast.operator], Callable[[float, float], float]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.BitXor: operator.pow,
    ast.Pow: operator.pow,
}
_UNARY_OPERATORS: dict[type[ast.unaryop], Callable[[float], float]] = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}
_COMPARISONS: dict[type[ast.cmpop], Callable[[float, float], bool]] = {
    ast.Lt: operator.lt,
    ast.LtE: operator.le,
    ast.Gt: operator.gt,
    ast.GtE: operator.ge,
    ast.Eq: operator.eq,
    ast.NotEq: operator.ne,
}
_FUNCTIONS: dict[str, Callable[[float], float]] = {
    "log": math.log,
    "sqrt": math.sqrt,
    "ceil": math.ceil,
    "floor": math.floor,
}


class _UnsupportedExpression(Exception):
    pass


def parse_feature_names(feature_string: str) -> list[str]:
    """Split a feature string such as ``"N M K"`` into names."""
    return feature_string.split()


def extract_features(first_line: str, feature_names: list[str]) -> Features:
    """Map whitespace-separated numeric tokens of first_line onto feature_names.

    Tokens are paired positionally; a token that is not a finite number maps
    to 0, and extra tokens or extra names are ignored.
    """
    features: Features = {}
    for name, token in zip(feature_names, first_line.split()):
        try:
            value = float(token)
        except ValueError:
            value = 0.0
        features[name] = value if math.isfinite(value) else 0.0
    return features


def evaluate_expression(expression: str, variables: Mapping[str, float]) -> float | None:
    """Evaluate expression over variables.

    Variable keys for stderr values keep their ``$`` (``{"$iter": 3}``).
    Returns None when the expression is malformed or too deeply nested,
    references an unknown name, or does not produce a finite number.
    """
    source = _STDERR_VAR.sub(rf"{_STDERR_PREFIX}\1", expression.strip())
    names = {_STDERR_VAR.sub(rf"{_STDERR_PREFIX}\1", k): v for k, v in variables.items()}
    try:
        tree = ast.parse(source, mode="eval")
        result = _evaluate(tree.body, names)
    except (
        SyntaxError,
        _UnsupportedExpression,
        ArithmeticError,
        ValueError,
        TypeError,
        RecursionError,
        MemoryError,
    ):
        return None
    if math.isnan(result) or math.isinf(result):
        return None
    return result


def is_valid_expression(expression: str) -> bool:
    """True when expression is empty or syntactically valid; variables are not checked."""
    if not expression.strip():
        return True
    source = _STDERR_VAR.sub(rf"{_STDERR_PREFIX}\1", expression.strip())
    try:
        ast.parse(source, mode="eval")
    except (SyntaxError, ValueError, RecursionError, MemoryError):
        return False
    return True


def _evaluate(node: ast.expr, variables: Mapping[str, float]) -> float:
    if isinstance(node, ast.Constant):
        # bool is an int subclass; True and False are not numbers here.
        if isinstance(node.value, bool) or not isinstance(node.value, int | float):
            raise _UnsupportedExpression(f"unsupported literal {node.value!r}")
        return float(node.value)
    if isinstance(node, ast.Name):
        if node.id not in variables:
            raise _UnsupportedExpression(f"unknown variable {node.id}")
        return float(variables[node.id])
    if isinstance(node, ast.BinOp) and type(node.op) in _BINARY_OPERATORS:
        left = _evaluate(node.left, variables)
        right = _evaluate(node.right, variables)
        return float(_BINARY_OPERATORS[type(node.op)](left, right))
    if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY_OPERATORS:
        return _UNARY_OPERATORS[type(node.op)](_evaluate(node.operand, variables))
    if isinstance(node, ast.Compare):
        return _compare(node.left, node.ops, node.comparators, variables)
    if (
        isinstance(node, ast.Call)
        and isinstance(node.func, ast.Name)
        and node.func.id in _FUNCTIONS
        and len(node.args) == 1
        and not node.keywords
    ):
        return float(_FUNCTIONS[node.func.id](_evaluate(node.args[0], variables)))
    raise _UnsupportedExpression(ast.dump(node))


def _compare(
    left: ast.expr,
    ops: list[ast.cmpop],
    comparators: list[ast.expr],
    variables: Mapping[str, float],
) -> float:
    current = _evaluate(left, variables)
    for op, comparator in zip(ops, comparators):
        compare = _COMPARISONS.get(type(op))
        if compare is None:
            raise _UnsupportedExpression(ast.dump(op))
        right = _evaluate(comparator, variables)
        if not compare(current, right):
            return 0.0
        current = right
    return 1.0

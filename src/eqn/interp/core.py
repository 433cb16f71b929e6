from __future__ import annotations

import math
import re
from typing import TYPE_CHECKING, Mapping

from eqn.errors import CallerArgumentError, DivisionByZeroError

if TYPE_CHECKING:
    from eqn.dsl.nodes import Node

_NUMBER_RE = re.compile(r"[0-9]+(?:\.[0-9]+)?")


def try_parse_number(symbol: str) -> float | None:
    """Return the literal's value, or None when the symbol names a variable."""
    if _NUMBER_RE.fullmatch(symbol):
        return float(symbol)
    return None


def _is_odd_integer(value: float) -> bool:
    return math.isfinite(value) and value == math.floor(value) and math.fmod(value, 2.0) != 0.0


def ieee_pow(base: float, exponent: float) -> float:
    # math.pow raises where C pow() returns nan/inf; map those back.
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        if base == 0.0 and exponent < 0:
            if math.copysign(1.0, base) < 0 and _is_odd_integer(exponent):
                return -math.inf
            return math.inf
        return math.nan


def apply_operator(op: str, left: float, right: float) -> float:
    if op == "+":
        return left + right
    if op == "-":
        return left - right
    if op == "*":
        return left * right
    if op == "/":
        if right == 0.0:
            raise DivisionByZeroError()
        return left / right
    if op == "^":
        return ieee_pow(left, right)
    raise RuntimeError(f"Unsupported operator: {op}")


def evaluate(root: Node | None, variables: Mapping[str, float] | None) -> float:
    """Evaluate an expression tree against variable bindings.

    Numeric literals never consult ``variables``. Both children of every
    operator are evaluated, left first.
    """
    if root is None:
        raise CallerArgumentError("Expression tree root cannot be null")
    if variables is None:
        raise CallerArgumentError("Variables map cannot be null")
    return root.evaluate(variables)

"""Binary arithmetic and text conversion shared by the evaluator and built-ins.

Numeric policy:

- ``+`` concatenates when either side is a string, otherwise adds.
- ``-``, ``*`` and ``/`` accept numbers only.
- An absent operand (``None``) yields ``nan``.
- Division by zero never raises: ``x / 0`` is ``±inf``, ``0 / 0`` is ``nan``.
- Results too large for a float overflow to ``±inf`` instead of raising.
"""

from __future__ import annotations

import math
import numbers
from decimal import Decimal
from typing import Any

from calcgraph.formulas.errors import OperandTypeError, UnsupportedOperator


def format_number(value: int | float) -> str:
    """Shortest text form of a number, without exponent notation.

    Integral floats drop their ``.0`` so ``2.0`` renders as ``2``.  Negative
    zero keeps its sign.
    """
    if isinstance(value, float):
        if not math.isfinite(value):
            return repr(value)
        if value == 0 and math.copysign(1.0, value) < 0:
            return "-0"
        if value.is_integer():
            return str(int(value))
        text = repr(value)
        if "e" in text:
            return format(Decimal(text), "f")
        return text
    return str(value)


def to_text(value: Any) -> str:
    """Text form of a value taking part in string concatenation."""
    if value is None:
        return "undefined"
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, tuple):
        from calcgraph.formulas.evaluator import render
        from calcgraph.formulas.nodes import ValueNode

        return render(ValueNode(value))
    return str(value)


def is_number(value: Any) -> bool:
    return isinstance(value, numbers.Number) and not isinstance(value, complex)


def _as_float(value: Any) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def _divide(left: Any, right: Any) -> Any:
    if right == 0:
        if left == 0 or (isinstance(left, float) and math.isnan(left)):
            return math.nan
        return math.copysign(math.inf, _as_float(left)) * math.copysign(1.0, right)
    return left / right


def apply_operator(op: str, left: Any, right: Any) -> Any:
    """Apply a binary arithmetic operator to two computed operands.

    Raises:
        UnsupportedOperator: If *op* is not one of ``+ - * /``.
        OperandTypeError: If ``-``, ``*`` or ``/`` receives a non-number.
    """
    if op not in ("+", "-", "*", "/"):
        raise UnsupportedOperator(op)

    if op == "+" and (isinstance(left, str) or isinstance(right, str)):
        return to_text(left) + to_text(right)
    if left is None or right is None:
        return math.nan
    if not (is_number(left) and is_number(right)):
        raise OperandTypeError(op, left, right)

    try:
        return _compute(op, left, right)
    except OverflowError:
        return _compute(op, _as_float(left), _as_float(right))


def _compute(op: str, left: Any, right: Any) -> Any:
    if op == "+":
        return left + right
    if op == "-":
        return left - right
    if op == "*":
        return left * right
    return _divide(left, right)

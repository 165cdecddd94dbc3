"""Built-in formula functions."""

from __future__ import annotations

import math
from typing import Any

from calcgraph.formulas.arith import apply_operator, is_number, to_text
from calcgraph.formulas.errors import FormulaFunctionError
from calcgraph.functions.registry import register_function


@register_function("Add", arity=2)
def fn_add(args: list) -> Any:
    """Add(x, y) -- same semantics as ``x + y``."""
    x, y = args
    return apply_operator("+", x, y)


@register_function("Sub", arity=2)
def fn_sub(args: list) -> Any:
    """Sub(x, y) -- same semantics as ``x - y``."""
    x, y = args
    return apply_operator("-", x, y)


@register_function("Substr", arity=2)
def fn_substr(args: list) -> str:
    """Substr(text, start) -- *text* from index *start* to the end.

    A negative *start* counts from the end of the text.  An absent or
    ``nan`` start reads as 0 and an infinite one clamps to the text bounds.
    """
    text, start = args
    text = to_text(text)
    if start is None:
        return text
    if not is_number(start):
        raise FormulaFunctionError("Substr", f"Substr start must be a number, got {start!r}")
    if isinstance(start, float):
        if math.isnan(start):
            return text
        if math.isinf(start):
            return "" if start > 0 else text
    return text[int(start):]

"""Tree-walking evaluator and renderer for parsed formulas.

Supports:
- Literal values and argument lists (lists are returned unevaluated)
- Context lookups; unknown names evaluate to ``None``
- ``+ - * /`` with the policy in :mod:`calcgraph.formulas.arith`
- Calls into the fixed function table with exact arity checks
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from calcgraph.formulas.arith import apply_operator, format_number
from calcgraph.formulas.errors import ArityMismatch, FormulaError
from calcgraph.formulas.nodes import (
    BinaryNode,
    FuncNode,
    Node,
    PropertyNode,
    ValueNode,
    is_node,
)
from calcgraph.functions.registry import get_function


def compute(node: Node, context: Mapping[str, Any] | None = None) -> Any:
    """Evaluate a parsed formula tree against a context.

    Args:
        node: Root node from ``parse()``.
        context: Mapping of property names to their values.

    Returns:
        The computed value.  A list :class:`ValueNode` returns its tuple of
        nodes as-is; only function calls evaluate list members.
    """
    return _eval(node, context if context is not None else {})


def _eval(node: Node, ctx: Mapping[str, Any]) -> Any:
    if isinstance(node, ValueNode):
        return node.value
    if isinstance(node, PropertyNode):
        return ctx.get(node.name)
    if isinstance(node, BinaryNode):
        left = _eval(node.left, ctx)
        right = _eval(node.right, ctx)
        return apply_operator(node.op, left, right)
    if isinstance(node, FuncNode):
        return _eval_func(node, ctx)
    raise FormulaError(f"Unknown node type: {type(node).__name__}")


def _argument_nodes(args: Node) -> tuple[Any, ...]:
    """Argument nodes of a call, before evaluation."""
    if isinstance(args, ValueNode) and args.is_list:
        return args.value  # type: ignore[return-value]
    return (args,)


def _eval_func(node: FuncNode, ctx: Mapping[str, Any]) -> Any:
    """Evaluate a function call node."""
    values = [_eval(arg, ctx) for arg in _argument_nodes(node.args) if is_node(arg)]

    spec = get_function(node.name)
    if len(values) != spec.arity:
        raise ArityMismatch(node.name, spec.arity, len(values))

    return spec.implementation(values)


# ---------- Rendering ----------


def render(node: Node) -> str:
    """Render a tree in fully parenthesized canonical form.

    ``1 + 2 * x`` renders as ``( 1 + ( 2 * x ) )``; ``Add(1, 2)`` as
    ``( Add ( 1 , 2 ) )``.  The output parses back to an equivalent tree.
    """
    if isinstance(node, ValueNode):
        return _render_value(node)
    if isinstance(node, PropertyNode):
        return node.name
    if isinstance(node, BinaryNode):
        return f"( {render(node.left)} {node.op} {render(node.right)} )"
    if isinstance(node, FuncNode):
        return f"( {node.name} {_render_args(node.args)} )"
    raise FormulaError(f"Unknown node type: {type(node).__name__}")


def _render_value(node: ValueNode) -> str:
    value = node.value
    if isinstance(value, tuple):
        return "( " + " , ".join(render(item) for item in value) + " )"
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    return format_number(value)


def _render_args(args: Node) -> str:
    # Leaf arguments need their own brackets to be read back as a call.
    if isinstance(args, PropertyNode) or (isinstance(args, ValueNode) and not args.is_list):
        return f"( {render(args)} )"
    return render(args)

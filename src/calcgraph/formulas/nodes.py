"""Tree node variants produced by the parser.

The variant set is closed: :class:`ValueNode`, :class:`PropertyNode`,
:class:`BinaryNode` and :class:`FuncNode`.  Nodes are immutable once
built.  Evaluation and rendering live in :mod:`calcgraph.formulas.evaluator`;
the ``compute`` and ``to_string`` methods here delegate to it.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from calcgraph.formulas.errors import ConstructionError


class _NodeMixin:
    """Convenience entry points shared by all node variants."""

    def compute(self, context: Mapping[str, Any] | None = None) -> Any:
        """Evaluate this tree against *context*."""
        from calcgraph.formulas.evaluator import compute

        return compute(self, context)  # type: ignore[arg-type]

    def to_string(self) -> str:
        """Fully parenthesized canonical rendering."""
        from calcgraph.formulas.evaluator import render

        return render(self)  # type: ignore[arg-type]

    def __str__(self) -> str:
        return self.to_string()


@dataclass(frozen=True, eq=True)
class ValueNode(_NodeMixin):
    """Constant leaf: a number, a string, or an argument list of nodes."""

    value: int | float | str | tuple[Node, ...]

    def __post_init__(self) -> None:
        if isinstance(self.value, list):
            object.__setattr__(self, "value", tuple(self.value))

    @property
    def is_list(self) -> bool:
        return isinstance(self.value, tuple)

    @property
    def is_numeric(self) -> bool:
        return isinstance(self.value, (int, float)) and not isinstance(self.value, bool)


@dataclass(frozen=True, eq=True)
class PropertyNode(_NodeMixin):
    """Leaf resolved by name in the evaluation context."""

    name: str


@dataclass(frozen=True, eq=True)
class BinaryNode(_NodeMixin):
    """Arithmetic operator applied to two sub-trees."""

    op: str
    left: Node
    right: Node

    def __post_init__(self) -> None:
        for operand in (self.left, self.right):
            if not isinstance(operand, NODE_TYPES):
                raise ConstructionError("BinaryNode", operand)


@dataclass(frozen=True, eq=True)
class FuncNode(_NodeMixin):
    """Call of a function-table entry.

    ``args`` is either a list :class:`ValueNode` (several arguments) or the
    single argument node itself.
    """

    name: str
    args: Node

    def __post_init__(self) -> None:
        if not isinstance(self.args, NODE_TYPES):
            raise ConstructionError("FuncNode", self.args)


Node = Union[ValueNode, PropertyNode, BinaryNode, FuncNode]

NODE_TYPES = (ValueNode, PropertyNode, BinaryNode, FuncNode)


def is_node(obj: Any) -> bool:
    """True if *obj* is one of the four node variants."""
    return isinstance(obj, NODE_TYPES)

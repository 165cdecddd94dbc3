"""Formula parser: tokens -> signs -> brackets -> precedence reduction.

Pipeline for ``parse(text)``:

1. Lex with :func:`calcgraph.formulas.lexer.tokenize`.  Numbers and strings
   become :class:`ValueNode`, identifiers :class:`PropertyNode`; operators,
   brackets and commas stay tokens.  Any other character is rejected.
2. Fold unary minus into the numeric literal that follows it.
3. Resolve brackets innermost-first.  ``name(...)`` becomes a
   :class:`FuncNode`, a bare ``(...)`` is replaced by its contents.
4. Reduce the remaining flat run to a single node.

Reduction folds every ``*``, then every ``/``, then every ``+``, then
every ``-``, each left to right.  This is not conventional precedence:
``8 / 2 * 2`` is ``8 / (2 * 2)`` and ``5 - 2 + 1`` is ``5 - (2 + 1)``.
"""

from __future__ import annotations

import logging
from typing import Any, Union

from lark import Token

from calcgraph.formulas.errors import (
    MismatchedBrackets,
    ReductionFailure,
    UnexpectedToken,
)
from calcgraph.formulas.lexer import (
    BINARY_OPERATORS,
    decode_string,
    parse_number,
    tokenize,
)
from calcgraph.formulas.nodes import (
    BinaryNode,
    FuncNode,
    Node,
    PropertyNode,
    ValueNode,
    is_node,
)

logger = logging.getLogger(__name__)

# An element of a token run: a finished node or an operator/bracket/comma token.
Item = Union[Node, Token]


def parse(text: str) -> Node:
    """Parse formula text into a tree.

    Args:
        text: The formula, e.g. ``"Add(x, 2) * -3"``.

    Returns:
        The root node.

    Raises:
        UnexpectedToken: If the text contains a character outside the
            language.
        MismatchedBrackets: If a bracket is left unmatched.
        ReductionFailure: If a token run does not reduce to one node.
    """
    items = _classify(tokenize(text))
    items = normalize_signs(items)
    return resolve_brackets(items)


def _classify(tokens: list[Token]) -> list[Item]:
    """Turn literal and identifier tokens into leaf nodes."""
    items: list[Item] = []
    for tok in tokens:
        if tok.type == "NUMBER":
            items.append(ValueNode(parse_number(str(tok))))
        elif tok.type == "STRING":
            items.append(ValueNode(decode_string(str(tok))))
        elif tok.type == "NAME":
            items.append(PropertyNode(str(tok)))
        elif tok.type == "UNKNOWN":
            raise UnexpectedToken(str(tok), position=tok.start_pos)
        else:
            items.append(tok)
    return items


def _is_token(item: Any, *types: str) -> bool:
    return isinstance(item, Token) and item.type in types


def _is_symbol(item: Any, symbol: str) -> bool:
    return isinstance(item, Token) and str(item) == symbol


def _is_binary_operator(item: Any) -> bool:
    return _is_token(item, "OPERATOR") and str(item) in BINARY_OPERATORS


def _opens_operand(item: Any) -> bool:
    """True if a ``-`` right after *item* can only be a sign."""
    return _is_token(item, "LPAR", "COMMA") or _is_binary_operator(item)


# ---------------------------------------------------------------------------
# Signs
# ---------------------------------------------------------------------------


def _negate(value: int | float) -> int | float:
    # Int zero has no sign, so -0 becomes -0.0.
    return -value if value else -float(value)


def normalize_signs(items: list[Item]) -> list[Item]:
    """Fold unary minus into the numeric literal after it.

    A ``-`` is unary when it starts the run or follows ``(``, ``,`` or a
    binary operator, and a numeric :class:`ValueNode` comes right after it.
    Anything else is left for reduction.
    """
    out: list[Item] = []
    i = 0
    while i < len(items):
        item = items[i]
        nxt = items[i + 1] if i + 1 < len(items) else None
        if (
            _is_symbol(item, "-")
            and isinstance(nxt, ValueNode)
            and nxt.is_numeric
            and (not out or _opens_operand(out[-1]))
        ):
            out.append(ValueNode(_negate(nxt.value)))
            i += 2
            continue
        out.append(item)
        i += 1
    return out


# ---------------------------------------------------------------------------
# Brackets
# ---------------------------------------------------------------------------


class _Frame:
    """An open bracket and the items collected inside it so far."""

    __slots__ = ("callee", "items", "position")

    def __init__(self, callee: PropertyNode | None, position: int | None) -> None:
        self.callee = callee
        self.items: list[Item] = []
        self.position = position


def resolve_brackets(items: list[Item]) -> Node:
    """Reduce every bracket pair, innermost first, then the outer run.

    ``(`` directly after an identifier opens a call; the identifier is
    consumed as the function name.  Otherwise the pair only groups.

    Raises:
        MismatchedBrackets: If any ``(`` or ``)`` remains unpaired.
    """
    root: list[Item] = []
    stack: list[_Frame] = []
    stray_close: int | None = None

    for i, item in enumerate(items):
        current = stack[-1].items if stack else root
        if _is_token(item, "LPAR"):
            prev = items[i - 1] if i > 0 else None
            callee = None
            if isinstance(prev, PropertyNode) and current and current[-1] is prev:
                callee = current.pop()
            stack.append(_Frame(callee, item.start_pos))
        elif _is_token(item, "RPAR"):
            if not stack:
                # Unpaired; reported once everything else has reduced.
                if stray_close is None:
                    stray_close = item.start_pos
                root.append(item)
                continue
            frame = stack.pop()
            inner = reduce_run(frame.items)
            node: Node = FuncNode(frame.callee.name, inner) if frame.callee else inner
            (stack[-1].items if stack else root).append(node)
        else:
            current.append(item)

    if stack:
        raise MismatchedBrackets(position=stack[-1].position)
    if stray_close is not None:
        raise MismatchedBrackets(position=stray_close)

    return reduce_run(root)


# ---------------------------------------------------------------------------
# Reduction
# ---------------------------------------------------------------------------


def _describe(items: list[Item]) -> list[str]:
    return [str(item) for item in items]


def _fold(items: list[Item], op: str) -> list[Item]:
    """Fold every ``left op right`` triple, left to right."""
    out: list[Item] = []
    i = 0
    while i < len(items):
        item = items[i]
        if not _is_symbol(item, op):
            out.append(item)
            i += 1
            continue
        left = out[-1] if out else None
        right = items[i + 1] if i + 1 < len(items) else None
        if not (is_node(left) and is_node(right)):
            logger.debug("unreducible run for %r: %s", op, _describe(items))
            raise ReductionFailure(
                _describe(items), reason=f"operator {op!r} is missing an operand"
            )
        out[-1] = BinaryNode(op, left, right)  # type: ignore[arg-type]
        i += 2
    return out


def reduce_run(items: list[Item]) -> Node:
    """Reduce a bracket-free run to exactly one node.

    Operators fold in ``*``, ``/``, ``+``, ``-`` order.  If commas remain
    afterwards the run is an argument list and becomes a list
    :class:`ValueNode` of the nodes between them.

    Raises:
        ReductionFailure: If an operator lacks an operand or more than one
            node is left over.
    """
    run = list(items)
    for op in BINARY_OPERATORS:
        run = _fold(run, op)

    if any(_is_token(item, "COMMA") for item in run):
        run = [ValueNode(tuple(item for item in run if not _is_token(item, "COMMA")))]

    if len(run) != 1 or not is_node(run[0]):
        logger.debug("unreducible run: %s", _describe(run))
        raise ReductionFailure(_describe(run))
    return run[0]  # type: ignore[return-value]

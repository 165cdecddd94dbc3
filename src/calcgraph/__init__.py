"""calcgraph -- a small formula language: lexer, tree builder and evaluator."""

__version__ = "0.1.0"

from calcgraph.formulas import (  # noqa: E402
    FormulaError,
    Node,
    compute,
    parse,
    render,
)

__all__ = [
    "FormulaError",
    "Node",
    "__version__",
    "compute",
    "parse",
    "render",
]

"""Formula tokenizing, parsing, evaluation and rendering.

Public API::

    from calcgraph.formulas import parse, compute, render

    tree = parse("Add(x, 2) * 3")
    tree.compute({"x": 4})   # 18
    tree.to_string()         # "( ( Add ( x , 2 ) ) * 3 )"
"""

from calcgraph.formulas.errors import (
    ENGINE_ERRORS,
    ArityMismatch,
    ConstructionError,
    FormulaError,
    FormulaEvalError,
    FormulaFunctionError,
    FormulaParseError,
    MismatchedBrackets,
    OperandTypeError,
    ReductionFailure,
    UndefinedFunction,
    UnexpectedToken,
    UnsupportedOperator,
)
from calcgraph.formulas.evaluator import compute, render
from calcgraph.formulas.lexer import BINARY_OPERATORS, tokenize
from calcgraph.formulas.nodes import (
    BinaryNode,
    FuncNode,
    Node,
    PropertyNode,
    ValueNode,
)
from calcgraph.formulas.parser import parse

__all__ = [
    "BINARY_OPERATORS",
    "ENGINE_ERRORS",
    "ArityMismatch",
    "BinaryNode",
    "ConstructionError",
    "FormulaError",
    "FormulaEvalError",
    "FormulaFunctionError",
    "FormulaParseError",
    "FuncNode",
    "MismatchedBrackets",
    "Node",
    "OperandTypeError",
    "PropertyNode",
    "ReductionFailure",
    "UndefinedFunction",
    "UnexpectedToken",
    "UnsupportedOperator",
    "ValueNode",
    "compute",
    "parse",
    "render",
    "tokenize",
]

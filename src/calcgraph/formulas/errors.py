"""Error types for formula parsing and evaluation."""

from __future__ import annotations

from typing import Any


class FormulaError(Exception):
    """Base class for all formula-related errors."""


class ConstructionError(FormulaError, TypeError):
    """A tree node was built with an operand that is not a node.

    Attributes:
        node_type: Name of the node class being constructed.
        received: The offending operand.
    """

    def __init__(self, node_type: str, received: Any) -> None:
        self.node_type = node_type
        self.received = received
        super().__init__(
            f"invalid node passed to {node_type}: {type(received).__name__} {received!r}"
        )


class FormulaParseError(FormulaError):
    """Syntax error in a formula expression.

    Attributes:
        position: Character position where the error was detected.
        message: Human-readable description.
    """

    def __init__(self, message: str, position: int | None = None) -> None:
        self.position = position
        self.message = message
        full = f"Formula parse error: {message}"
        if position is not None:
            full += f" (at position {position})"
        super().__init__(full)


class UnexpectedToken(FormulaParseError):
    """A character the lexer could not classify."""

    def __init__(self, token: str, position: int | None = None) -> None:
        self.token = token
        super().__init__(f"unexpected token {token!r}", position=position)


class MismatchedBrackets(FormulaParseError):
    """Unbalanced ``(`` or ``)`` left after bracket resolution."""

    def __init__(self, position: int | None = None) -> None:
        super().__init__("mismatching brackets", position=position)


class ReductionFailure(FormulaParseError):
    """A token run did not reduce to exactly one node.

    Attributes:
        tokens: Text form of the run that failed to reduce.
    """

    def __init__(self, tokens: list[str], reason: str | None = None) -> None:
        self.tokens = tokens
        msg = "something went wrong"
        if reason:
            msg += f": {reason}"
        msg += f" [{' '.join(tokens)}]"
        super().__init__(msg)


class FormulaFunctionError(FormulaError):
    """Unknown function or wrong number of arguments.

    Attributes:
        func_name: The function that caused the error.
    """

    def __init__(self, func_name: str, message: str | None = None) -> None:
        self.func_name = func_name
        msg = message or f"Unknown function: {func_name!r}"
        super().__init__(msg)


class UndefinedFunction(FormulaFunctionError):
    """Function name has no entry in the function table."""

    def __init__(self, func_name: str) -> None:
        super().__init__(func_name, f"{func_name} is not defined.")


class ArityMismatch(FormulaFunctionError):
    """Evaluated argument count differs from the declared arity.

    Attributes:
        expected: Declared arity.
        received: Number of evaluated arguments.
    """

    def __init__(self, func_name: str, expected: int, received: int) -> None:
        self.expected = expected
        self.received = received
        super().__init__(func_name, f"{func_name} requires {expected} argument(s)")


class FormulaEvalError(FormulaError):
    """Failure while computing a parsed tree."""


class UnsupportedOperator(FormulaEvalError):
    """Binary node carrying an operator outside the arithmetic set."""

    def __init__(self, op: str) -> None:
        self.op = op
        super().__init__(f"operator not implemented {op!r}")


class OperandTypeError(FormulaEvalError):
    """Non-numeric operand for ``-``, ``*`` or ``/``."""

    def __init__(self, op: str, left: Any, right: Any) -> None:
        self.op = op
        super().__init__(
            f"unsupported operand types for {op}: "
            f"{type(left).__name__} and {type(right).__name__}"
        )


# Every error the engine raises on its own account.
ENGINE_ERRORS: tuple[type[Exception], ...] = (FormulaError,)

"""Evaluate formula text end to end: references -> parse -> compute -> render."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict

from calcgraph.formulas import (
    ENGINE_ERRORS,
    FormulaFunctionError,
    FormulaParseError,
    parse,
)
from calcgraph.formulas.arith import to_text
from calcgraph.logging.events import (
    EVALUATION_ERROR,
    FUNCTION_ERROR,
    PARSE_ERROR,
    EventLevel,
    EventType,
    emit,
    make_formula_event,
)
from calcgraph.placeholders import substitute_references


class CalcResult(BaseModel):
    """Outcome of one formula evaluation.

    Attributes:
        formula: Text as entered, with ``[name]`` references.
        expression: Text actually parsed (references replaced).
        value: Computed value.
        rendered: Canonical fully parenthesized form of the tree.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    formula: str
    expression: str
    value: Any = None
    rendered: str

    @property
    def display(self) -> str:
        """Text form of ``value``; argument lists render like the tree."""
        return to_text(self.value)


def _error_code(exc: Exception) -> str:
    if isinstance(exc, FormulaParseError):
        return PARSE_ERROR
    if isinstance(exc, FormulaFunctionError):
        return FUNCTION_ERROR
    return EVALUATION_ERROR


class Calculator:
    """Formula front end with a default variable context.

    Values passed to :meth:`evaluate` override the defaults.  Both are keyed
    by the names used in the formula, bare (``x``) or bracketed (``[x]``).
    """

    def __init__(self, defaults: Mapping[str, Any] | None = None) -> None:
        self.defaults: dict[str, Any] = dict(defaults or {})

    @classmethod
    def from_project(cls, project_dir: Path) -> Calculator:
        """Build a calculator from ``calcgraph.yaml`` and enable event logging.

        Args:
            project_dir: Directory holding ``calcgraph.yaml`` and ``logs/``.
        """
        from calcgraph.config import load_config
        from calcgraph.logging.events import set_project_dir

        config = load_config(project_dir)
        set_project_dir(project_dir)
        return cls(defaults=config["variables"])

    def evaluate(self, formula: str, values: Mapping[str, Any] | None = None) -> CalcResult:
        """Evaluate *formula* against the defaults merged with *values*.

        Raises:
            FormulaError: Any parse or evaluation error, after a
                ``formula_failed`` event has been emitted.
        """
        sub = substitute_references(formula)
        context: dict[str, Any] = dict(self.defaults)
        context.update(values or {})
        context.update(sub.bind(context))

        try:
            tree = parse(sub.text)
            value = tree.compute(context)
        except ENGINE_ERRORS as exc:
            emit(make_formula_event(
                EventType.formula_failed,
                EventLevel.error,
                str(exc),
                formula=formula,
                expression=sub.text,
                error_code=_error_code(exc),
                extra={"error_type": type(exc).__name__},
            ))
            raise

        result = CalcResult(
            formula=formula,
            expression=sub.text,
            value=value,
            rendered=tree.to_string(),
        )
        emit(make_formula_event(
            EventType.formula_evaluated,
            EventLevel.info,
            f"{result.expression} = {result.display}",
            formula=formula,
            expression=sub.text,
            extra={"rendered": result.rendered},
        ))
        return result

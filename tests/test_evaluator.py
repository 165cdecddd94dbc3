"""Tests for computing and rendering parsed formulas."""

from __future__ import annotations

import math
from typing import Any

import pytest

from calcgraph.formulas import (
    ArityMismatch,
    BinaryNode,
    OperandTypeError,
    UndefinedFunction,
    UnsupportedOperator,
    ValueNode,
    compute,
    parse,
    render,
)
from calcgraph.formulas.arith import apply_operator, format_number, to_text


def _eval(formula: str, ctx: dict | None = None) -> Any:
    """Parse and evaluate a formula string."""
    return parse(formula).compute(ctx or {})


# ────────────────────────────────────────────────────────────────
# Arithmetic
# ────────────────────────────────────────────────────────────────


class TestArithmetic:
    def test_multiplication_before_addition(self) -> None:
        assert _eval("1 + 2 * 3") == 7

    def test_mixed_products_and_sums(self) -> None:
        assert _eval("2 * 3 + 4 * 5") == 26

    def test_division_after_multiplication(self) -> None:
        """8 / 2 * 2 = 8 / (2 * 2) = 2."""
        assert _eval("8 / 2 * 2") == 2

    def test_subtraction_after_addition(self) -> None:
        """5 - 2 + 1 = 5 - (2 + 1) = 2."""
        assert _eval("5 - 2 + 1") == 2

    def test_chained_subtraction(self) -> None:
        assert _eval("10 - 2 - 3") == 5

    def test_parentheses(self) -> None:
        assert _eval("(1 + 2) * 3") == 9

    def test_unary_minus(self) -> None:
        assert _eval("-5 + 3") == -2
        assert _eval("(2 - -5)") == 7
        assert _eval("3 * -2") == -6

    def test_true_division(self) -> None:
        result = _eval("6 / 3")
        assert result == 2.0
        assert isinstance(result, float)

    def test_floats(self) -> None:
        assert _eval("1.5 * 2") == pytest.approx(3.0)
        assert _eval(".5 + .25") == pytest.approx(0.75)

    def test_division_by_zero_is_infinite(self) -> None:
        assert _eval("1 / 0") == math.inf
        assert _eval("-1 / 0") == -math.inf

    def test_zero_over_zero_is_nan(self) -> None:
        assert math.isnan(_eval("0 / 0"))

    def test_division_by_negative_zero(self) -> None:
        assert _eval("1 / -0") == -math.inf
        assert _eval("1 / -0.0") == -math.inf

    def test_large_integer_overflows_to_infinity(self) -> None:
        big = "1" + "0" * 400
        assert _eval(f"{big} * 1.5") == math.inf
        assert _eval(f"-{big} * 1.5") == -math.inf
        assert _eval(f"{big} / 3") == math.inf
        assert _eval(f"{big} / 0") == math.inf
        assert _eval(f"{big} / {big}") == 1

    def test_string_concatenation(self) -> None:
        assert _eval("'a' + 'b'") == "ab"
        assert _eval("'a' + 1") == "a1"
        assert _eval("1 + 'a'") == "1a"
        assert _eval("'x' + 2.5") == "x2.5"

    def test_concatenating_argument_list(self) -> None:
        assert _eval("'a' + (1, 2)") == "a( 1 , 2 )"

    def test_string_arithmetic_rejected(self) -> None:
        with pytest.raises(OperandTypeError, match="unsupported operand"):
            _eval("'a' - 1")
        with pytest.raises(OperandTypeError):
            _eval("'a' * 2")


# ────────────────────────────────────────────────────────────────
# Properties
# ────────────────────────────────────────────────────────────────


class TestProperties:
    def test_lookup(self) -> None:
        assert _eval("x * 2", {"x": 4}) == 8

    def test_missing_property_is_none(self) -> None:
        assert _eval("x") is None
        assert compute(parse("x")) is None

    def test_missing_property_in_arithmetic_is_nan(self) -> None:
        assert math.isnan(_eval("x + 1"))

    def test_missing_property_in_concatenation(self) -> None:
        assert _eval("'v=' + x") == "v=undefined"

    def test_context_values_of_any_type(self) -> None:
        assert _eval("s + '!'", {"s": "hey"}) == "hey!"


# ────────────────────────────────────────────────────────────────
# Function calls
# ────────────────────────────────────────────────────────────────


class TestFunctionCalls:
    def test_add(self) -> None:
        assert _eval("Add(2, 3)") == 5

    def test_sub(self) -> None:
        assert _eval("Sub(10, 4)") == 6

    def test_nested(self) -> None:
        assert _eval("Add(Sub(10, 4), 2)") == 8

    def test_expression_arguments(self) -> None:
        assert _eval("Add(1 + 2, 3 * 4)") == 15

    def test_grouped_argument(self) -> None:
        assert _eval("Add((1 + 2), 3)") == 6

    def test_negative_arguments(self) -> None:
        assert _eval("Add(-1, -2)") == -3

    def test_property_arguments(self) -> None:
        assert _eval("Add(x, y) * 2", {"x": 1, "y": 2}) == 6

    def test_too_few_arguments(self) -> None:
        with pytest.raises(ArityMismatch, match=r"Add requires 2 argument\(s\)") as exc_info:
            _eval("Add(2)")
        assert exc_info.value.expected == 2
        assert exc_info.value.received == 1

    def test_too_many_arguments(self) -> None:
        with pytest.raises(ArityMismatch):
            _eval("Add(1, 2, 3)")

    def test_undefined_function(self) -> None:
        with pytest.raises(UndefinedFunction, match="Foo is not defined"):
            _eval("Foo(1)")

    def test_function_names_are_case_sensitive(self) -> None:
        with pytest.raises(UndefinedFunction):
            _eval("add(1, 2)")

    def test_arguments_evaluated_only_by_call(self) -> None:
        """An argument list on its own stays unevaluated."""
        value = _eval("(1 + 2, 3)")
        assert value == (BinaryNode("+", ValueNode(1), ValueNode(2)), ValueNode(3))


# ────────────────────────────────────────────────────────────────
# Rendering
# ────────────────────────────────────────────────────────────────


class TestRender:
    @pytest.mark.parametrize(
        "formula, expected",
        [
            ("42", "42"),
            ("x", "x"),
            ("'hi'", '"hi"'),
            ("1 + 2 * 3", "( 1 + ( 2 * 3 ) )"),
            ("-5 + 3", "( -5 + 3 )"),
            ("1.5 * 2", "( 1.5 * 2 )"),
            ("1. * 2", "( 1 * 2 )"),
            ("Add(1, 2)", "( Add ( 1 , 2 ) )"),
            ("Sub(x, 1) / 2", "( ( Sub ( x , 1 ) ) / 2 )"),
            ("F(x)", "( F ( x ) )"),
            ("F(1 + 2)", "( F ( 1 + 2 ) )"),
            ("Substr('abc', 1)", '( Substr ( "abc" , 1 ) )'),
            ("(1, 2)", "( 1 , 2 )"),
            ("-0", "-0"),
        ],
    )
    def test_render(self, formula: str, expected: str) -> None:
        tree = parse(formula)
        assert tree.to_string() == expected
        assert render(tree) == expected
        assert str(tree) == expected

    def test_render_escapes_strings(self) -> None:
        assert parse(r"'say \"hi\"'").to_string() == r'"say \"hi\""'

    def test_large_float_without_exponent(self) -> None:
        assert parse("100000000000000000000.0").to_string() == "100000000000000000000"

    def test_small_float_without_exponent(self) -> None:
        assert parse("0.0000001").to_string() == "0.0000001"

    @pytest.mark.parametrize(
        "formula",
        [
            "1 + 2 * 3",
            "8 / 2 * 2",
            "5 - 2 + 1",
            "-5 + 3",
            "(2 - -5)",
            "Add(x, -2) * y",
            "Sub(Add(1, 2), x)",
            "Substr('hello', x - 2)",
            "Add(s, 1)",
            "x / 0",
            "Add((1 + 2), 3)",
            "1.5 * -2",
            "'a\\nb' + s",
            "1 / -0.0",
        ],
    )
    def test_rendering_parses_back(self, formula: str) -> None:
        ctx = {"x": 4, "y": 2.5, "s": "ab"}
        tree = parse(formula)
        again = parse(tree.to_string())
        assert again.compute(ctx) == tree.compute(ctx)
        assert again == tree


# ────────────────────────────────────────────────────────────────
# Operator helpers
# ────────────────────────────────────────────────────────────────


class TestApplyOperator:
    def test_unknown_operator(self) -> None:
        with pytest.raises(UnsupportedOperator, match="operator not implemented"):
            apply_operator("%", 1, 2)

    def test_unknown_operator_in_tree(self) -> None:
        with pytest.raises(UnsupportedOperator):
            BinaryNode("^", ValueNode(2), ValueNode(3)).compute({})

    def test_negative_zero_divisor(self) -> None:
        assert apply_operator("/", 1, -0.0) == -math.inf

    @pytest.mark.parametrize(
        "value, expected",
        [(2.0, "2"), (2.5, "2.5"), (-3, "-3"), (1e20, "100000000000000000000"), (math.inf, "inf"), (-0.0, "-0")],
    )
    def test_format_number(self, value: float, expected: str) -> None:
        assert format_number(value) == expected

    def test_to_text(self) -> None:
        assert to_text(None) == "undefined"
        assert to_text(True) == "true"
        assert to_text(4.0) == "4"
        assert to_text("s") == "s"

"""Lark-based lexer for calcgraph formulas.

Only lark's basic lexer is used; the token stream is reduced by
:mod:`calcgraph.formulas.parser`, not by a lark grammar.  Terminals, in
priority order:

- Numbers: ``12``, ``1.5``, ``1.``, ``.5`` (no sign, no exponent)
- String literals: ``"..."`` or ``'...'`` with backslash escapes
- Punctuation: ``(`` ``)`` ``,``
- Operators from the operator tables, longest symbol first
- Identifiers: ``[A-Za-z_$][A-Za-z0-9_$]*``
- Any other single non-whitespace character (``UNKNOWN``)
"""

from __future__ import annotations

import re

from lark import Lark, Token

# Binary operators in reduction order.
BINARY_OPERATORS: tuple[str, ...] = ("*", "/", "+", "-")

# Symbolic function operators.  None are defined yet, but they share the
# OPERATOR terminal with the binary operators.
FUNCTION_OPERATORS: tuple[str, ...] = ()


def operator_symbols() -> list[str]:
    """Return every operator symbol, longest first.

    ``>=`` must be tried before ``>`` and ``=``, so ties in the sorted
    list keep their table order.
    """
    symbols = list(dict.fromkeys(FUNCTION_OPERATORS + BINARY_OPERATORS))
    return sorted(symbols, key=len, reverse=True)


def _regex_literal(symbols: list[str]) -> str:
    # "/" terminates a lark regex literal, so it has to be escaped as well.
    return "|".join(re.escape(s).replace("/", "\\/") for s in symbols)


def _build_grammar() -> str:
    return rf"""
start: _item*

_item: NUMBER | STRING | LPAR | RPAR | COMMA | OPERATOR | NAME | UNKNOWN

NUMBER.2: /[0-9]+(?:\.[0-9]*)?|\.[0-9]+/
STRING.2: /"(?:\\[\s\S]|[^"\\])*"|'(?:\\[\s\S]|[^'\\])*'/
LPAR.2: "("
RPAR.2: ")"
COMMA.2: ","
OPERATOR.2: /{_regex_literal(operator_symbols())}/
NAME.2: /[A-Za-z_$][A-Za-z0-9_$]*/
UNKNOWN: /\S/

WS: /\s+/
%ignore WS
"""


_lexer = Lark(_build_grammar(), parser="lalr", lexer="basic")


def tokenize(text: str) -> list[Token]:
    """Split formula text into lark tokens.

    Args:
        text: The formula, e.g. ``"Add(x, 2) * 3"``.

    Returns:
        Tokens in source order.  Each token's ``type`` is one of the
        terminal names above and ``start_pos`` is its character offset.
        ``UNKNOWN`` tokens are returned, not rejected; the parser decides
        what to do with them.
    """
    return list(_lexer.lex(text))


_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "0": "\0"}

_ESCAPE_RE = re.compile(r"\\(u[0-9A-Fa-f]{4}|[\s\S])")


def decode_string(raw: str) -> str:
    """Decode a STRING token: strip the quotes and resolve escapes.

    ``\\n``, ``\\t``, ``\\r``, ``\\b``, ``\\f``, ``\\0`` and ``\\uXXXX`` are
    translated; any other escaped character stands for itself.
    """

    def _sub(match: re.Match[str]) -> str:
        seq = match.group(1)
        if len(seq) == 5:
            return chr(int(seq[1:], 16))
        return _ESCAPES.get(seq, seq)

    return _ESCAPE_RE.sub(_sub, raw[1:-1])


def parse_number(text: str) -> int | float:
    """Parse a NUMBER token to int or float."""
    if "." in text:
        return float(text)
    return int(text)

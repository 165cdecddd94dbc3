"""Bracketed variable references: ``[net income] * 2`` style input.

Names in square brackets may contain characters the formula language does
not allow in identifiers, so they are swapped for generated placeholders
(``prop1``, ``prop2``, ...) before parsing.  The values supplied for the
original names are then bound to the placeholders.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

_REFERENCE_RE = re.compile(r"\[([A-Za-z0-9$_ ]*)\]")

PLACEHOLDER_PREFIX = "prop"


class Substitution(BaseModel):
    """Result of :func:`substitute_references`.

    Attributes:
        text: Formula text with every reference replaced.
        names: Placeholder -> original name, in order of first appearance.
    """

    text: str
    names: dict[str, str] = Field(default_factory=dict)

    def bind(self, values: Mapping[str, Any]) -> dict[str, Any]:
        """Map placeholders to the values given for their original names.

        Names missing from *values* are left out, so they evaluate as absent.
        """
        return {
            placeholder: values[name]
            for placeholder, name in self.names.items()
            if name in values
        }


def substitute_references(text: str) -> Substitution:
    """Replace ``[name]`` references with placeholder identifiers.

    A name used more than once shares one placeholder.

    Examples:
        ``"[a] + [b] * [a]"`` -> ``"prop1 + prop2 * prop1"``
    """
    by_name: dict[str, str] = {}

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1).strip()
        if name not in by_name:
            by_name[name] = f"{PLACEHOLDER_PREFIX}{len(by_name) + 1}"
        return by_name[name]

    replaced = _REFERENCE_RE.sub(_replace, text)
    return Substitution(
        text=replaced,
        names={placeholder: name for name, placeholder in by_name.items()},
    )

"""Central registry for formula functions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Sequence

from calcgraph.formulas.errors import UndefinedFunction


@dataclass(frozen=True)
class FunctionSpec:
    """A function-table entry.

    Attributes:
        name: Name used in formulas (case-sensitive).
        arity: Exact number of arguments.
        implementation: Callable taking the evaluated arguments as a list.
    """

    name: str
    arity: int
    implementation: Callable[[Sequence[Any]], Any]


_FUNCTIONS: dict[str, FunctionSpec] = {}


def register_function(name: str, arity: int) -> Callable:
    """Decorator that registers a built-in function by name.

    Args:
        name: The lookup name for this function.
        arity: Number of arguments the function requires.

    Returns:
        The original function, unmodified.
    """

    def decorator(fn: Callable) -> Callable:
        _FUNCTIONS[name] = FunctionSpec(name=name, arity=arity, implementation=fn)
        return fn

    return decorator


def get_function(name: str) -> FunctionSpec:
    """Look up a registered function.

    Args:
        name: The function name.

    Returns:
        The function-table entry.

    Raises:
        UndefinedFunction: If no function is registered under *name*.
    """
    if name not in _FUNCTIONS:
        raise UndefinedFunction(name)
    return _FUNCTIONS[name]


def function_names() -> list[str]:
    """Sorted names of all registered functions."""
    return sorted(_FUNCTIONS)

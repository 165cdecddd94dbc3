"""Function table for formula calls.

Importing this package registers the built-in functions.
"""

from calcgraph.functions import builtin  # noqa: F401
from calcgraph.functions.registry import (
    FunctionSpec,
    function_names,
    get_function,
    register_function,
)

__all__ = [
    "FunctionSpec",
    "function_names",
    "get_function",
    "register_function",
]

"""
Type signature building for generated Elm clients.
"""

from typing import List

from elmkit.core.constants import ElmRuntime


def build_signature(arg_types: List[str]) -> str:
    """
    Fold argument types into a curried Elm function type.

    ``arg_types`` runs in declaration order and ends with the result type,
    which is wrapped in the fallible task type:

        ["Int", "Book"] -> "Int -> Task.Task Http.Error (Book)"

    Returns an empty string for empty input.
    """
    reversed_types = list(reversed(arg_types))
    if not reversed_types:
        return ""

    signature = f"{ElmRuntime.get_error_task()} ({reversed_types[0]})"
    for arg_type in reversed_types[1:]:
        signature = f"{arg_type} -> {signature}"
    return signature

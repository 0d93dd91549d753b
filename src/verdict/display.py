"""Display strings for values shown in failure reports.

The display string is what a reader sees, not what the value is: ``1`` and
``"1"`` both display as ``1``. Collisions like that are resolved in
:mod:`verdict.ambiguity`.
"""

from collections.abc import Iterable, Mapping
from typing import Any


def display(value: Any) -> str:
    """Render ``value`` for a failure message.

    Strings are shown raw, mappings as ``{k=v, ...}`` and other collections
    as ``[a, b]``.
    """
    if value is None:
        return "None"
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        return display_entries(value.items())
    if isinstance(value, (list, tuple, set, frozenset)):
        return "[" + ", ".join(display(item) for item in value) + "]"
    return str(value)


def display_entry(key: Any, value: Any) -> str:
    return f"{display(key)}={display(value)}"


def display_entries(entries: Iterable[tuple[Any, Any]]) -> str:
    return "{" + ", ".join(display_entry(key, value) for key, value in entries) + "}"


def type_label(value: Any, qualified: bool = False) -> str:
    """Return the type name used to disambiguate values with equal display strings."""
    cls = type(value)
    if not qualified or cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def entry_type_label(key: Any, value: Any, qualified: bool = False) -> str:
    """Type label of a key/value pair, e.g. ``tuple[int, str]``."""
    return f"tuple[{type_label(key, qualified)}, {type_label(value, qualified)}]"

"""Disambiguation of values whose display strings collide.

When a report would show two different values the same way (``1`` the int
and ``"1"`` the string, or ``None`` and ``"None"``), each of them is
annotated with its type so the reader can tell them apart.
"""

from collections.abc import Iterable
from typing import Any

from verdict.display import display, type_label


def same_identity(left: Any, right: Any) -> bool:
    """Whether two values are interchangeable for display purposes."""
    if left is right:
        return True
    if type(left) is not type(right):
        return False
    try:
        return bool(left == right)
    except Exception:
        return False


def has_matching_display_pair(left: Iterable[Any], right: Iterable[Any]) -> bool:
    """Whether some item of ``left`` displays like a different item of ``right``."""
    right = list(right)
    return any(
        display(item) == display(other) and not same_identity(item, other)
        for item in left
        for other in right
    )


def retain_matching_display(items: Iterable[Any], others: Iterable[Any]) -> list[Any]:
    """Items that display like, but are not, one of ``others``."""
    others = list(others)
    return [
        item
        for item in items
        if any(display(item) == display(other) and not same_identity(item, other) for other in others)
    ]


def describe_with_types(items: Iterable[Any], qualified: bool = False) -> str:
    """Render items with their types, collapsing repeats.

    ``[1, 2] (int)`` when every item has the same type, otherwise
    ``[1 (int), 1 (str)]``. Repeated items are shown once as ``x [3 copies]``.
    """
    counts: list[tuple[Any, int]] = []
    for item in items:
        for index, (seen, count) in enumerate(counts):
            if same_identity(seen, item):
                counts[index] = (seen, count + 1)
                break
        else:
            counts.append((item, 1))

    def _render(item: Any, count: int, with_type: bool) -> str:
        text = display(item)
        if with_type:
            text += f" ({type_label(item, qualified)})"
        if count > 1:
            text += f" [{count} copies]"
        return text

    labels = {type_label(item, qualified) for item, _ in counts}
    if len(labels) == 1:
        (label,) = labels
        return "[" + ", ".join(_render(item, count, False) for item, count in counts) + f"] ({label})"
    return "[" + ", ".join(_render(item, count, True) for item, count in counts) + "]"


class AmbiguityResolver:
    """Annotate values of a report whose display strings collide.

    Only the values passed in are scanned, so build one resolver from exactly
    the keys (or values) that will appear in the report.

    Parameters
    ----------
    items
        Every key, or every value, that the report will display.
    qualified
        Use module-qualified type names in annotations.
    """

    def __init__(self, items: Iterable[Any], qualified: bool = False):
        self.qualified = qualified
        groups: dict[str, list[Any]] = {}
        for item in items:
            groups.setdefault(display(item), []).append(item)
        self._ambiguous = {
            text
            for text, group in groups.items()
            if any(not same_identity(group[0], other) for other in group[1:])
        }

    @property
    def ambiguous(self) -> bool:
        return bool(self._ambiguous)

    def is_ambiguous(self, item: Any) -> bool:
        return display(item) in self._ambiguous

    def label(self, item: Any) -> str:
        text = display(item)
        if text in self._ambiguous:
            return f"{text} ({type_label(item, self.qualified)})"
        return text

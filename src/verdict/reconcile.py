"""Reconciliation of an actual mapping against expected entries."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from verdict.correspondence import Correspondence, ExceptionStore
from verdict.display import display
from verdict.exceptions import InvalidArgumentsError

logger = logging.getLogger(__name__)

Entry = tuple[Any, Any]


def entries_from_args(args: Sequence[Any], method_name: str) -> dict[Any, Any]:
    """Build the expected mapping from a flat ``k1, v1, k2, v2, ...`` sequence.

    Parameters
    ----------
    args
        Alternating keys and values.
    method_name
        Public method the arguments were passed to, quoted in error messages.

    Raises
    ------
    InvalidArgumentsError
        If the sequence has odd length, or repeats a key (by equality).
    """
    if len(args) % 2:
        raise InvalidArgumentsError(
            "There must be an equal number of key/value pairs "
            f"(i.e., the number of key/value parameters ({len(args)}) must be even)."
        )

    keys = list(args[0::2])
    counts: list[list[Any]] = []
    for key in keys:
        for seen in counts:
            if seen[0] == key:
                seen[1] += 1
                break
        else:
            counts.append([key, 1])
    duplicates = [f"{display(key)} x {count}" for key, count in counts if count > 1]
    if duplicates:
        raise InvalidArgumentsError(
            f"Duplicate keys ([{', '.join(duplicates)}]) cannot be passed to {method_name}()."
        )
    return dict(zip(keys, args[1::2]))


@dataclass(frozen=True, slots=True)
class ValueDifference:
    """A key present on both sides whose values do not correspond."""

    key: Any
    expected: Any
    actual: Any
    diff: str | None = None


@dataclass
class MapDifference:
    """Four-way partition of the keys of an actual and an expected mapping.

    Attributes
    ----------
    matching
        Entries (with the actual value) present on both sides with corresponding values.
    wrong_value
        Keys present on both sides whose values do not correspond, in expected order.
    missing
        Expected entries whose key is absent from actual, in expected order.
    unexpected
        Actual entries whose key is not expected, in actual order. Always
        empty when ``allow_unexpected`` is set.
    exceptions
        Every compare/format-diff failure hit along the way.
    """

    allow_unexpected: bool
    matching: list[Entry] = field(default_factory=list)
    wrong_value: list[ValueDifference] = field(default_factory=list)
    missing: list[Entry] = field(default_factory=list)
    unexpected: list[Entry] = field(default_factory=list)
    exceptions: ExceptionStore = field(default_factory=ExceptionStore)

    def is_empty(self) -> bool:
        return not (self.missing or self.unexpected or self.wrong_value)


def _reconcile(
    actual: Mapping[Any, Any],
    expected: Mapping[Any, Any],
    correspondence: Correspondence[Any, Any],
    allow_unexpected: bool,
) -> MapDifference:
    result = MapDifference(allow_unexpected=allow_unexpected)
    for key, expected_value in expected.items():
        if key not in actual:
            result.missing.append((key, expected_value))
            continue
        actual_value = actual[key]
        if correspondence.safe_compare(actual_value, expected_value, result.exceptions):
            result.matching.append((key, actual_value))
        else:
            diff = correspondence.safe_format_diff(actual_value, expected_value, result.exceptions)
            result.wrong_value.append(ValueDifference(key, expected_value, actual_value, diff))

    if not allow_unexpected:
        result.unexpected.extend((key, value) for key, value in actual.items() if key not in expected)

    logger.debug(
        "Reconciled %d expected entries: %d matching, %d wrong value, %d missing, %d unexpected, %d exceptions",
        len(expected),
        len(result.matching),
        len(result.wrong_value),
        len(result.missing),
        len(result.unexpected),
        len(result.exceptions),
    )
    return result


def reconcile_exact(
    actual: Mapping[Any, Any],
    expected: Mapping[Any, Any],
    correspondence: Correspondence[Any, Any] | None = None,
) -> MapDifference:
    """Partition keys for an exact-containment check."""
    return _reconcile(actual, expected, correspondence or Correspondence.equality(), allow_unexpected=False)


def reconcile_at_least(
    actual: Mapping[Any, Any],
    expected: Mapping[Any, Any],
    correspondence: Correspondence[Any, Any] | None = None,
) -> MapDifference:
    """Partition keys for an at-least check; extra actual keys are ignored."""
    return _reconcile(actual, expected, correspondence or Correspondence.equality(), allow_unexpected=True)


def check_order(actual: Mapping[Any, Any], expected: Mapping[Any, Any]) -> bool:
    """Whether the expected keys appear in ``actual`` in the expected order.

    Keys of ``actual`` that are not expected are skipped, so the same check
    serves exact and at-least containment.
    """
    relevant = [key for key in actual if key in expected]
    return relevant == list(expected)

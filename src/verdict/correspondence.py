"""Pluggable value correspondence and capture of its failures."""

from __future__ import annotations

import logging
import traceback
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any, Generic, Literal, TypeVar

from verdict.display import display
from verdict.facts import Fact, RecordedException

logger = logging.getLogger(__name__)

A = TypeVar("A")
E = TypeVar("E")

Phase = Literal["compare", "format_diff"]

_PHASE_ACTIVITY: dict[str, str] = {
    "compare": "comparing values",
    "format_diff": "formatting diffs",
}


def values_equal(actual: Any, expected: Any) -> bool:
    """Equality as containers see it: an object always equals itself, even ``nan``."""
    return actual is expected or actual == expected


@dataclass(frozen=True, slots=True)
class CallOutcome:
    """Tagged result of one guarded call: either ``value`` or ``error``."""

    value: Any = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def guarded_call(fn: Callable[..., Any], *args: Any) -> CallOutcome:
    """Invoke ``fn`` and turn any exception it raises into a failed outcome."""
    try:
        return CallOutcome(value=fn(*args))
    except Exception as exc:
        return CallOutcome(error=exc)


class ExceptionStore:
    """Ordered record of exceptions raised by a correspondence.

    A comparison that raises is never treated as a match; the store keeps the
    evidence so the report can explain why an entry was classified the way it
    was.
    """

    def __init__(self) -> None:
        self._records: list[RecordedException] = []

    def add(self, phase: Phase, actual: Any, expected: Any, error: Exception) -> None:
        record = RecordedException(
            phase=phase,
            actual=display(actual),
            expected=display(expected),
            error_type=type(error).__qualname__,
            error_message=str(error),
            traceback="".join(traceback.format_exception(type(error), error, error.__traceback__)),
        )
        logger.debug("Recorded %s", record.summary())
        self._records.append(record)

    def all(self) -> list[RecordedException]:
        return list(self._records)

    @property
    def compare_exceptions(self) -> list[RecordedException]:
        return [record for record in self._records if record.phase == "compare"]

    @property
    def format_diff_exceptions(self) -> list[RecordedException]:
        return [record for record in self._records if record.phase == "format_diff"]

    def is_empty(self) -> bool:
        return not self._records

    def __len__(self) -> int:
        return len(self._records)

    def _describe(self, prefix: str, include_tracebacks: bool) -> list[Fact]:
        facts: list[Fact] = []
        for phase, records in (
            ("compare", self.compare_exceptions),
            ("format_diff", self.format_diff_exceptions),
        ):
            if not records:
                continue
            facts.append(Fact.simple(f"{prefix}one or more exceptions were thrown while {_PHASE_ACTIVITY[phase]}"))
            facts.append(Fact.of("first exception", records[0].describe(include_tracebacks)))
        return facts

    def describe_as_additional_info(self, include_tracebacks: bool = True) -> list[Fact]:
        """Facts appended after a mismatch that was reported on its own merits."""
        return self._describe("additionally, ", include_tracebacks)

    def describe_as_main_cause(self, include_tracebacks: bool = True) -> list[Fact]:
        """Facts for a failure caused by the exceptions themselves."""
        return self._describe("", include_tracebacks)


@dataclass(frozen=True)
class Correspondence(Generic[A, E]):
    """Decide whether an actual value corresponds to an expected value.

    Parameters
    ----------
    compare_fn
        ``(actual, expected) -> bool``. May raise; a raising comparison is
        recorded and treated as "does not correspond".
    description
        Verb phrase used in messages, e.g. ``"parses to"``. It reads as
        "a value that <description> <expected>".
    diff_fn
        Optional ``(actual, expected) -> str | None`` describing how a
        non-corresponding pair differs. Advisory only.

    Examples
    --------
    >>> parses_to = Correspondence.from_predicate(lambda a, e: int(a) == e, "parses to")
    >>> assert_that({"abc": "123"}).comparing_values_using(parses_to).contains_entry("abc", 123)
    """

    compare_fn: Callable[[A, E], bool]
    description: str
    diff_fn: Callable[[A, E], str | None] | None = None

    @classmethod
    def from_predicate(cls, compare_fn: Callable[[A, E], bool], description: str) -> Correspondence[A, E]:
        return cls(compare_fn=compare_fn, description=description)

    @classmethod
    def equality(cls) -> Correspondence[Any, Any]:
        return cls(compare_fn=values_equal, description="is equal to")

    @classmethod
    def tolerance(cls, tolerance: float) -> Correspondence[float, float]:
        """Numbers within ``tolerance`` of each other, diffed as ``actual - expected``."""
        if tolerance < 0:
            raise ValueError(f"tolerance ({tolerance}) cannot be negative")
        return cls(
            compare_fn=lambda actual, expected: abs(actual - expected) <= tolerance,
            description=f"is within {tolerance} of",
            diff_fn=lambda actual, expected: str(actual - expected),
        )

    def formatting_diffs_using(self, diff_fn: Callable[[A, E], str | None]) -> Correspondence[A, E]:
        return replace(self, diff_fn=diff_fn)

    def compare(self, actual: A, expected: E) -> bool:
        return bool(self.compare_fn(actual, expected))

    def format_diff(self, actual: A, expected: E) -> str | None:
        if self.diff_fn is None:
            return None
        return self.diff_fn(actual, expected)

    def safe_compare(self, actual: A, expected: E, store: ExceptionStore) -> bool:
        outcome = guarded_call(self.compare, actual, expected)
        if not outcome.ok:
            store.add("compare", actual, expected, outcome.error)  # type: ignore[arg-type]
            return False
        return outcome.value

    def safe_format_diff(self, actual: A, expected: E, store: ExceptionStore) -> str | None:
        outcome = guarded_call(self.format_diff, actual, expected)
        if not outcome.ok:
            store.add("format_diff", actual, expected, outcome.error)  # type: ignore[arg-type]
            return None
        return outcome.value

    def __str__(self) -> str:
        return self.description

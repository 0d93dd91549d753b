"""Assertions for mappings."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from verdict.ambiguity import describe_with_types, has_matching_display_pair, retain_matching_display
from verdict.correspondence import Correspondence, ExceptionStore, values_equal
from verdict.display import display, display_entry, entry_type_label, type_label
from verdict.exceptions import InvalidArgumentsError
from verdict.facts import Fact
from verdict.reconcile import MapDifference, check_order, entries_from_args, reconcile_at_least, reconcile_exact
from verdict.report import containment_verb
from verdict.subjects.base import Subject, SubjectContext

logger = logging.getLogger(__name__)


class Ordered:
    """Result of a passed containment check; ``in_order()`` adds an order check."""

    def in_order(self) -> None:
        """Assert that the entries also appear in the expected order."""


class _AlreadyFailed(Ordered):
    pass


ALREADY_FAILED: Ordered = _AlreadyFailed()


class _InOrderCheck(Ordered):
    def __init__(self, subject: MapSubject, expected: Mapping[Any, Any], verb: str):
        self._subject = subject
        self._expected = expected
        self._verb = verb

    def in_order(self) -> None:
        if not check_order(self._subject.actual, self._expected):
            self._subject._fail(self._subject._report_builder().order(self._verb, self._expected))


def _has_key(mapping: Mapping[Any, Any], key: Any) -> bool:
    """Key membership; an unhashable key is never present in a hashed mapping."""
    try:
        return key in mapping
    except TypeError:
        logger.debug("Unhashable key %s treated as absent", display(key))
        return False


def _entries_list(entries: Mapping[Any, Any]) -> str:
    return "[" + ", ".join(display_entry(key, value) for key, value in entries.items()) + "]"


class MapSubject(Subject):
    """Assertions for mappings.

    Keys are matched by equality, never by how they display. When a report
    shows different values that display alike (``1`` and ``"1"``), they are
    annotated with their types.

    Examples
    --------
    >>> assert_that({"jan": 1, "feb": 2}).contains_exactly("feb", 2, "jan", 1)
    >>> assert_that({"jan": 1, "feb": 2}).contains_at_least("jan", 1).in_order()
    """

    def __init__(self, context: SubjectContext, actual: Mapping[Any, Any]):
        super().__init__(context, actual)

    def named(self, name: str) -> MapSubject:
        super().named(name)
        return self

    def _value_of(self, expression: str) -> Fact:
        return Fact.of("value of", f"{self._name or 'map'}{expression}")

    def is_equal_to(self, expected: Any) -> None:
        """Pass or fail exactly as ``actual == expected`` says.

        The mapping's own ``__eq__`` decides the outcome, even when it breaks
        the usual contract; the entry-by-entry comparison only explains it.
        """
        if self.actual == expected:
            return
        if not isinstance(expected, Mapping):
            super().is_equal_to(expected)
            return

        diff = reconcile_exact(self.actual, expected)
        reports = self._report_builder()
        if diff.is_empty():
            self._fail(
                reports.sentence(
                    f"is equal to <{display(expected)}>. It is equal according to the contract "
                    "of Mapping.__eq__, but this implementation returned False"
                )
            )
        else:
            self._fail(reports.containment("is equal to", self.actual, expected, diff))

    def is_empty(self) -> None:
        if self.actual:
            self._fail(self._report_builder().expected_empty(self.actual))

    def is_not_empty(self) -> None:
        if not self.actual:
            self.fail_with_facts(Fact.simple("expected not to be empty"))

    def has_size(self, expected_size: int) -> None:
        if expected_size < 0:
            raise InvalidArgumentsError(f"expected_size ({expected_size}) must be >= 0")
        if len(self.actual) != expected_size:
            self.fail_with_facts(
                self._value_of(".__len__()"),
                Fact.of("expected", str(expected_size)),
                Fact.of("but was", str(len(self.actual))),
                Fact.of("map was", display(self.actual)),
            )

    def contains_key(self, key: Any) -> None:
        if _has_key(self.actual, key):
            return
        keys = list(self.actual.keys())
        same_display = retain_matching_display(keys, [key])
        if same_display:
            qualified = self.context.settings.qualified_type_names
            self.fail_with_facts(
                self._value_of(".keys()"),
                Fact.of("expected to contain", display(key)),
                Fact.of("an instance of", type_label(key, qualified)),
                Fact.simple("but did not"),
                Fact.of("though it did contain", describe_with_types(same_display, qualified)),
                Fact.of("full contents", display(keys)),
                Fact.of("map was", display(self.actual)),
            )
            return
        self.fail_with_facts(
            self._value_of(".keys()"),
            Fact.of("expected to contain", display(key)),
            Fact.of("but was", display(keys)),
            Fact.of("map was", display(self.actual)),
        )

    def does_not_contain_key(self, key: Any) -> None:
        if not _has_key(self.actual, key):
            return
        self.fail_with_facts(
            self._value_of(".keys()"),
            Fact.of("expected not to contain", display(key)),
            Fact.of("but was", display(list(self.actual.keys()))),
            Fact.of("map was", display(self.actual)),
        )

    def _has_entry(self, key: Any, value: Any) -> bool:
        return _has_key(self.actual, key) and values_equal(self.actual[key], value)

    def contains_entry(self, key: Any, value: Any) -> None:
        if self._has_entry(key, value):
            return

        reports = self._report_builder()
        entry = display_entry(key, value)
        qualified = self.context.settings.qualified_type_names
        keys = list(self.actual.keys())
        values = list(self.actual.values())

        if has_matching_display_pair(keys, [key]):
            self._fail(
                reports.sentence(
                    f"contains entry <{entry} ({entry_type_label(key, value, qualified)})>. "
                    f"However, it does contain keys <{describe_with_types(retain_matching_display(keys, [key]), qualified)}>."
                )
            )
        elif has_matching_display_pair(values, [value]):
            self._fail(
                reports.sentence(
                    f"contains entry <{entry} ({entry_type_label(key, value, qualified)})>. "
                    f"However, it does contain values <{describe_with_types(retain_matching_display(values, [value]), qualified)}>."
                )
            )
        elif _has_key(self.actual, key):
            self.fail_with_facts(
                Fact.simple("key is present but with a different value"),
                self._value_of(f"[{display(key)}]"),
                Fact.of("expected", display(value)),
                Fact.of("but was", display(self.actual[key])),
                Fact.of("map was", display(self.actual)),
            )
        else:
            mapped = [other for other, other_value in self.actual.items() if values_equal(other_value, value)]
            if mapped:
                self._fail(
                    reports.sentence(
                        f"contains entry <{entry}>. "
                        f"However, the following keys are mapped to <{display(value)}>: {display(mapped)}"
                    )
                )
            else:
                self._fail(reports.sentence(f"contains entry <{entry}>"))

    def does_not_contain_entry(self, key: Any, value: Any) -> None:
        if not self._has_entry(key, value):
            return
        self.fail_with_facts(
            self._value_of(".items()"),
            Fact.of("expected not to contain", display_entry(key, value)),
            Fact.of("but was", _entries_list(self.actual)),
        )

    def contains_exactly(self, *args: Any) -> Ordered:
        """Assert the mapping holds exactly the alternating ``key, value`` arguments.

        Raises
        ------
        InvalidArgumentsError
            If an odd number of arguments is given or a key repeats.
        """
        return self.contains_exactly_entries_in(entries_from_args(args, "contains_exactly"))

    def contains_exactly_entries_in(self, expected: Mapping[Any, Any]) -> Ordered:
        if not expected:
            if self.actual:
                self._fail(self._report_builder().expected_empty(self.actual))
                return ALREADY_FAILED
            return _InOrderCheck(self, expected, containment_verb(exact=True, in_order=True))
        return self._check_containment(expected, exact=True)

    def contains_at_least(self, *args: Any) -> Ordered:
        """Assert the mapping holds at least the alternating ``key, value`` arguments.

        Raises
        ------
        InvalidArgumentsError
            If an odd number of arguments is given or a key repeats.
        """
        return self.contains_at_least_entries_in(entries_from_args(args, "contains_at_least"))

    def contains_at_least_entries_in(self, expected: Mapping[Any, Any]) -> Ordered:
        return self._check_containment(expected, exact=False)

    def _check_containment(
        self,
        expected: Mapping[Any, Any],
        exact: bool,
        correspondence: Correspondence[Any, Any] | None = None,
    ) -> Ordered:
        if exact:
            diff = reconcile_exact(self.actual, expected, correspondence)
        else:
            diff = reconcile_at_least(self.actual, expected, correspondence)
        if not diff.is_empty():
            self._fail_containment(expected, diff, containment_verb(exact=exact, correspondence=correspondence))
            return ALREADY_FAILED
        return _InOrderCheck(self, expected, containment_verb(exact=exact, in_order=True, correspondence=correspondence))

    def _fail_containment(self, expected: Mapping[Any, Any], diff: MapDifference, verb: str) -> None:
        self._fail(self._report_builder().containment(verb, self.actual, expected, diff))

    def comparing_values_using(self, correspondence: Correspondence[Any, Any]) -> MapValuesComparison:
        """Compare values with ``correspondence`` instead of equality; keys still use equality."""
        return MapValuesComparison(self, correspondence)


class MapValuesComparison:
    """Map assertions whose values are matched by a ``Correspondence``.

    Exceptions raised by the correspondence never abort an assertion. They
    count as "does not correspond" and are listed after the mismatch.
    """

    def __init__(self, subject: MapSubject, correspondence: Correspondence[Any, Any]):
        self.subject = subject
        self.correspondence = correspondence

    @property
    def actual(self) -> Mapping[Any, Any]:
        return self.subject.actual

    def _entry_description(self, key: Any, value: Any) -> str:
        return f"an entry with key <{display(key)}> and a value that {self.correspondence.description} <{display(value)}>"

    def contains_entry(self, key: Any, value: Any) -> None:
        store = ExceptionStore()
        text = f"contains {self._entry_description(key, value)}"
        if _has_key(self.actual, key):
            actual_value = self.actual[key]
            if self.correspondence.safe_compare(actual_value, value, store):
                return
            diff = self.correspondence.safe_format_diff(actual_value, value, store)
            text += f". However, it has a mapping from that key to <{display(actual_value)}>"
            if diff is not None:
                text += f" (diff: {diff})"
        else:
            mapped = [
                other
                for other, other_value in self.actual.items()
                if self.correspondence.safe_compare(other_value, value, store)
            ]
            if mapped:
                text += f". However, the following keys are mapped to such values: <{display(mapped)}>"
        self.subject._fail(self.subject._report_builder().sentence(text, store))

    def does_not_contain_entry(self, key: Any, value: Any) -> None:
        if not _has_key(self.actual, key):
            return
        store = ExceptionStore()
        actual_value = self.actual[key]
        reports = self.subject._report_builder()
        if self.correspondence.safe_compare(actual_value, value, store):
            self.subject._fail(
                reports.sentence(
                    f"does not contain {self._entry_description(key, value)}. "
                    f"It maps that key to <{display(actual_value)}>"
                )
            )
        elif not store.is_empty():
            logger.debug("Cannot prove absence of %s; compare raised", display_entry(key, value))
            facts = [
                Fact.simple(
                    "comparing contents by testing that no entry had the forbidden key and a value "
                    f"that {self.correspondence.description} the forbidden value"
                ),
                Fact.of("forbidden key", display(key)),
                Fact.of("forbidden value", display(value)),
                Fact.of("but was", display(self.actual)),
            ]
            self.subject._fail(reports.build(facts, store, exceptions_as_main_cause=True))

    def contains_exactly(self, *args: Any) -> Ordered:
        return self.contains_exactly_entries_in(entries_from_args(args, "contains_exactly"))

    def contains_exactly_entries_in(self, expected: Mapping[Any, Any]) -> Ordered:
        if not expected:
            if self.actual:
                self.subject._fail(self.subject._report_builder().expected_empty(self.actual))
                return ALREADY_FAILED
            return _InOrderCheck(self.subject, expected, containment_verb(exact=True, in_order=True))
        return self.subject._check_containment(expected, exact=True, correspondence=self.correspondence)

    def contains_at_least(self, *args: Any) -> Ordered:
        return self.contains_at_least_entries_in(entries_from_args(args, "contains_at_least"))

    def contains_at_least_entries_in(self, expected: Mapping[Any, Any]) -> Ordered:
        return self.subject._check_containment(expected, exact=False, correspondence=self.correspondence)

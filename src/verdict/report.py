"""Assembly of failure reports from reconciliation results."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from verdict.ambiguity import AmbiguityResolver
from verdict.config import VerdictSettings
from verdict.correspondence import Correspondence, ExceptionStore
from verdict.display import display
from verdict.facts import Fact, FailureReport
from verdict.reconcile import Entry, MapDifference

MISSING = "is missing keys for the following entries"
UNEXPECTED = "has the following entries with unexpected keys"
WRONG_VALUE = "has the following entries with matching keys but different values"


def containment_verb(*, exact: bool, in_order: bool = False, correspondence: Correspondence[Any, Any] | None = None) -> str:
    """Verb phrase naming the asserted relation, e.g. ``contains at least``."""
    quantifier = "exactly" if exact else "at least"
    if correspondence is None:
        verb = f"contains {quantifier}"
        return f"{verb} these entries in order" if in_order else verb
    verb = f"contains, in order, {quantifier}" if in_order else f"contains {quantifier}"
    return (
        f"{verb} one entry that has a key that is equal to and a value that "
        f"{correspondence.description} the key and value of each entry of"
    )


def _render_entries(entries: Iterable[Entry], keys: AmbiguityResolver, values: AmbiguityResolver) -> str:
    return "{" + ", ".join(f"{keys.label(key)}={values.label(value)}" for key, value in entries) + "}"


def describe_difference(diff: MapDifference, qualified: bool = False, key_context: Iterable[Any] = ()) -> str:
    """Join the missing, unexpected and wrong-value clauses with ``and``, in that order.

    ``key_context`` holds keys that are shown elsewhere in the report (the
    rendered actual and expected mappings). They are not listed again, but a
    reported key that displays like one of them is annotated with its type.
    """
    keys = AmbiguityResolver(
        [key for key, _ in diff.missing]
        + [key for key, _ in diff.unexpected]
        + [difference.key for difference in diff.wrong_value]
        + list(key_context),
        qualified,
    )
    values = AmbiguityResolver(
        [value for _, value in diff.missing]
        + [value for _, value in diff.unexpected]
        + [difference.expected for difference in diff.wrong_value]
        + [difference.actual for difference in diff.wrong_value],
        qualified,
    )

    clauses: list[str] = []
    if diff.missing:
        clauses.append(f"{MISSING}: {_render_entries(diff.missing, keys, values)}")
    if diff.unexpected:
        clauses.append(f"{UNEXPECTED}: {_render_entries(diff.unexpected, keys, values)}")
    if diff.wrong_value:
        rendered = []
        for difference in diff.wrong_value:
            text = f"expected {values.label(difference.expected)} but got {values.label(difference.actual)}"
            if difference.diff is not None:
                text += f", diff: {difference.diff}"
            rendered.append(f"{keys.label(difference.key)}=({text})")
        clauses.append(f"{WRONG_VALUE}: {{{', '.join(rendered)}}}")
    return " and ".join(clauses)


class ReportBuilder:
    """Build the failure reports of one subject.

    Parameters
    ----------
    actual_text
        How the subject is referred to in sentences, e.g. ``<{a=1}>`` or
        ``foo (<{a=1}>)`` for a named subject.
    messages
        Lines placed before the facts.
    settings
        Rendering options.
    """

    def __init__(self, actual_text: str, messages: Sequence[str], settings: VerdictSettings):
        self.actual_text = actual_text
        self.messages = list(messages)
        self.settings = settings

    def build(
        self,
        facts: Iterable[Fact],
        exceptions: ExceptionStore | None = None,
        exceptions_as_main_cause: bool = False,
    ) -> FailureReport:
        ordered = list(facts)
        recorded = []
        if exceptions is not None and not exceptions.is_empty():
            recorded = exceptions.all()
            if exceptions_as_main_cause:
                ordered = exceptions.describe_as_main_cause(self.settings.include_tracebacks) + ordered
            else:
                ordered = ordered + exceptions.describe_as_additional_info(self.settings.include_tracebacks)
        return FailureReport(messages=list(self.messages), facts=ordered, exceptions=recorded)

    def sentence(self, text: str, exceptions: ExceptionStore | None = None) -> FailureReport:
        """Report led by ``Not true that <actual> <text>``."""
        return self.build([Fact.simple(f"Not true that {self.actual_text} {text}")], exceptions)

    def containment(
        self,
        verb: str,
        actual: Mapping[Any, Any],
        expected: Mapping[Any, Any],
        diff: MapDifference,
    ) -> FailureReport:
        described = describe_difference(
            diff,
            self.settings.qualified_type_names,
            key_context=[*actual.keys(), *expected.keys()],
        )
        text = f"{verb} <{display(expected)}>. It {described}"
        return self.sentence(text, diff.exceptions)

    def order(self, verb: str, expected: Mapping[Any, Any]) -> FailureReport:
        return self.sentence(f"{verb} <{display(expected)}>")

    def expected_empty(self, actual: Any) -> FailureReport:
        return self.build([Fact.simple("expected to be empty"), Fact.of("but was", display(actual))])

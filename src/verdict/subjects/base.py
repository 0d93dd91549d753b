"""Base subject: the value under test plus the collaborators it reports to."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from verdict.ambiguity import AmbiguityResolver
from verdict.config import VerdictSettings
from verdict.display import display, type_label
from verdict.facts import Fact, FailureReport
from verdict.report import ReportBuilder
from verdict.strategy import FailureStrategy


@dataclass(frozen=True, slots=True)
class SubjectContext:
    """Collaborators shared by every subject created from one verb.

    Attributes
    ----------
    strategy
        Receives failure reports.
    settings
        Rendering options.
    messages
        Custom messages placed at the top of every report.
    """

    strategy: FailureStrategy
    settings: VerdictSettings
    messages: tuple[str, ...] = field(default_factory=tuple)


class Subject:
    """Assertions available on any value.

    Parameters
    ----------
    context
        Failure strategy, settings and custom messages.
    actual
        The value under test.
    """

    def __init__(self, context: SubjectContext, actual: Any):
        self.context = context
        self._actual = actual
        self._name: str | None = None

    @property
    def actual(self) -> Any:
        return self._actual

    def named(self, name: str) -> "Subject":
        """Refer to the value by ``name`` in failure messages."""
        self._name = name
        return self

    def actual_as_string(self) -> str:
        text = f"<{display(self._actual)}>"
        return f"{self._name} ({text})" if self._name else text

    def _report_builder(self) -> ReportBuilder:
        messages = list(self.context.messages)
        if self._name:
            messages.append(f"name: {self._name}")
        return ReportBuilder(self.actual_as_string(), messages, self.context.settings)

    def _fail(self, report: FailureReport) -> None:
        self.context.strategy.fail(report)

    def fail_with_facts(self, *facts: Fact) -> None:
        self._fail(self._report_builder().build(facts))

    def _expected_but_was(self, key: str, expected: Any) -> None:
        resolver = AmbiguityResolver([expected, self._actual], self.context.settings.qualified_type_names)
        self.fail_with_facts(Fact.of(key, resolver.label(expected)), Fact.of("but was", resolver.label(self._actual)))

    def is_equal_to(self, expected: Any) -> None:
        if not self._actual == expected:
            self._expected_but_was("expected", expected)

    def is_not_equal_to(self, unexpected: Any) -> None:
        if self._actual == unexpected:
            self.fail_with_facts(Fact.of("expected not to be", display(unexpected)))

    def is_none(self) -> None:
        if self._actual is not None:
            self._expected_but_was("expected", None)

    def is_not_none(self) -> None:
        if self._actual is None:
            self.fail_with_facts(Fact.of("expected not to be", "None"))

    def is_instance_of(self, cls: type) -> None:
        if not isinstance(self._actual, cls):
            qualified = self.context.settings.qualified_type_names
            self.fail_with_facts(
                Fact.of("expected instance of", cls.__qualname__),
                Fact.of("but was instance of", type_label(self._actual, qualified)),
                Fact.of("with value", display(self._actual)),
            )

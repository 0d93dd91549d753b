"""Entry points: ``assert_that`` and ``AssertionVerb``."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, overload

from verdict.config import VerdictSettings, get_settings
from verdict.strategy import FailureStrategy, RaisingFailureStrategy
from verdict.subjects import MapSubject, Subject, SubjectContext


class AssertionVerb:
    """Create subjects that report failures to one failure strategy.

    Parameters
    ----------
    failure_strategy
        Receives every failure report. Defaults to raising
        ``AssertionFailedError``.
    settings
        Rendering options. Defaults to settings loaded from the environment.
    messages
        Custom messages placed at the top of every report.

    Examples
    --------
    >>> expect = CollectingFailureStrategy()
    >>> AssertionVerb(expect).that({"a": 1}).contains_key("b")
    >>> len(expect.reports)
    1
    """

    def __init__(
        self,
        failure_strategy: FailureStrategy | None = None,
        settings: VerdictSettings | None = None,
        messages: tuple[str, ...] = (),
    ):
        self.failure_strategy = failure_strategy or RaisingFailureStrategy()
        self.settings = settings
        self.messages = messages

    def with_message(self, message: str, *args: Any) -> AssertionVerb:
        """Return a verb whose reports start with ``message % args``."""
        text = message % args if args else message
        return AssertionVerb(self.failure_strategy, self.settings, (*self.messages, text))

    def _context(self) -> SubjectContext:
        return SubjectContext(
            strategy=self.failure_strategy,
            settings=self.settings or get_settings(),
            messages=self.messages,
        )

    @overload
    def that(self, actual: Mapping[Any, Any]) -> MapSubject: ...

    @overload
    def that(self, actual: Any) -> Subject: ...

    def that(self, actual: Any) -> Subject:
        if isinstance(actual, Mapping):
            return MapSubject(self._context(), actual)
        return Subject(self._context(), actual)


@overload
def assert_that(actual: Mapping[Any, Any]) -> MapSubject: ...


@overload
def assert_that(actual: Any) -> Subject: ...


def assert_that(actual: Any) -> Subject:
    """Begin an assertion that raises ``AssertionFailedError`` on failure."""
    return AssertionVerb().that(actual)


def assert_with_message(message: str, *args: Any) -> AssertionVerb:
    """Begin an assertion whose failure report starts with ``message % args``."""
    return AssertionVerb().with_message(message, *args)

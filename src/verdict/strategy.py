"""Failure strategies: what happens to a failure report."""

from __future__ import annotations

import logging
from typing import Protocol

from verdict.exceptions import AssertionFailedError
from verdict.facts import Fact, FailureReport

logger = logging.getLogger(__name__)


class FailureStrategy(Protocol):
    """Receives the report of every failed assertion made through a verb."""

    def fail(self, report: FailureReport) -> None: ...


class RaisingFailureStrategy:
    """Fail fast: raise ``AssertionFailedError`` for the first failure."""

    def fail(self, report: FailureReport) -> None:
        logger.debug("Assertion failed with facts %s", report.keys())
        raise AssertionFailedError(report)


class CollectingFailureStrategy:
    """Record failures and keep going, for soft assertions.

    Examples
    --------
    >>> expect = CollectingFailureStrategy()
    >>> verb = AssertionVerb(expect)
    >>> verb.that({"a": 1}).contains_entry("a", 2)
    >>> verb.that({"a": 1}).is_empty()
    >>> expect.raise_if_failed()  # raises with both reports
    """

    def __init__(self) -> None:
        self.reports: list[FailureReport] = []

    def fail(self, report: FailureReport) -> None:
        logger.debug("Recorded failure %d with facts %s", len(self.reports) + 1, report.keys())
        self.reports.append(report)

    @property
    def failed(self) -> bool:
        return bool(self.reports)

    def clear(self) -> None:
        self.reports.clear()

    def raise_if_failed(self) -> None:
        """Raise one ``AssertionFailedError`` combining every recorded report."""
        if not self.reports:
            return
        if len(self.reports) == 1:
            raise AssertionFailedError(self.reports[0])
        combined = FailureReport(
            messages=[f"{len(self.reports)} assertions failed"],
            facts=[
                Fact.of(f"failure {index}", report.render())
                for index, report in enumerate(self.reports, start=1)
            ],
            exceptions=[record for report in self.reports for record in report.exceptions],
        )
        raise AssertionFailedError(combined)

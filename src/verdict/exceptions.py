"""Errors raised by verdict."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from verdict.facts import FailureReport


class InvalidArgumentsError(ValueError):
    """Malformed assertion call (a mistake in the test code, not a mismatch)."""


class AssertionFailedError(AssertionError):
    """AssertionError with attached FailureReport."""

    def __init__(self, report: FailureReport):
        self.report = report
        super().__init__(report.render())

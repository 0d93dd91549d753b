"""Reporters for failure reports."""

from verdict.reports.console import ConsoleReporter

__all__ = ["ConsoleReporter"]

import io

import pytest
from rich.console import Console

from verdict import AssertionFailedError, AssertionVerb, CollectingFailureStrategy, Fact, FailureReport
from verdict.reports import ConsoleReporter


def _report(key: str) -> FailureReport:
    return FailureReport(facts=[Fact.simple(key)])


class TestCollectingFailureStrategy:
    def test_collects_and_keeps_going(self):
        strategy = CollectingFailureStrategy()
        verb = AssertionVerb(strategy)

        verb.that({"a": 1}).contains_key("b")
        verb.that({"a": 1}).is_empty()
        verb.that({"a": 1}).contains_key("a")

        assert strategy.failed
        assert len(strategy.reports) == 2
        assert strategy.reports[1].keys() == ["expected to be empty", "but was"]

    def test_raise_if_failed_single(self):
        strategy = CollectingFailureStrategy()
        report = _report("only failure")
        strategy.fail(report)

        with pytest.raises(AssertionFailedError) as exc_info:
            strategy.raise_if_failed()

        assert exc_info.value.report is report

    def test_raise_if_failed_combines(self):
        strategy = CollectingFailureStrategy()
        strategy.fail(_report("first"))
        strategy.fail(_report("second"))

        with pytest.raises(AssertionFailedError) as exc_info:
            strategy.raise_if_failed()

        combined = exc_info.value.report
        assert combined.messages == ["2 assertions failed"]
        assert combined.keys() == ["failure 1", "failure 2"]
        assert combined.value_of("failure 2") == "second"

    def test_nothing_to_raise(self):
        strategy = CollectingFailureStrategy()
        strategy.raise_if_failed()

        strategy.fail(_report("failure"))
        strategy.clear()
        assert not strategy.failed
        strategy.raise_if_failed()


def test_custom_messages_accumulate():
    strategy = CollectingFailureStrategy()
    verb = AssertionVerb(strategy).with_message("outer").with_message("inner %d", 2)

    verb.that({"a": 1}).named("months").has_size(2)

    assert strategy.reports[0].messages == ["outer", "inner 2", "name: months"]


class TestConsoleReporter:
    def _reporter(self) -> tuple[ConsoleReporter, io.StringIO]:
        buffer = io.StringIO()
        return ConsoleReporter(Console(file=buffer, width=80, color_system=None)), buffer

    def test_print_report(self):
        reporter, buffer = self._reporter()
        report = FailureReport(
            messages=["name: months"],
            facts=[Fact.simple("expected to be empty"), Fact.of("but was", "{a=[1]}")],
        )

        reporter.print_report(report)

        output = buffer.getvalue()
        assert "FAILED" in output
        assert "name: months" in output
        assert "expected to be empty" in output
        assert "but was: {a=[1]}" in output

    def test_print_reports_summary(self):
        reporter, buffer = self._reporter()

        reporter.print_reports([_report("first"), _report("second")])

        output = buffer.getvalue()
        assert "FAILURES" in output
        assert "failure 2" in output
        assert "2 failed" in output

    def test_print_no_reports(self):
        reporter, buffer = self._reporter()

        reporter.print_reports([])

        assert "all assertions passed" in buffer.getvalue()

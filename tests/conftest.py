import pytest

from verdict import AssertionVerb, CollectingFailureStrategy, FailureReport, VerdictSettings


class ExpectFailure:
    """Run assertions against a collecting strategy and expose the single failure."""

    def __init__(self) -> None:
        self.strategy = CollectingFailureStrategy()
        self.verb = AssertionVerb(self.strategy, settings=VerdictSettings(include_tracebacks=False))

    def that(self, actual):
        return self.verb.that(actual)

    @property
    def report(self) -> FailureReport:
        assert len(self.strategy.reports) == 1, f"expected one failure, got {len(self.strategy.reports)}"
        return self.strategy.reports[0]

    @property
    def message(self) -> str:
        return self.report.render()


@pytest.fixture
def expect_failure() -> ExpectFailure:
    return ExpectFailure()

"""Demonstrates map assertions and their failure reports.

* `assert_that(mapping)` returns a map subject; failures raise `AssertionFailedError`.
* Keys are always matched by equality.
* Values are matched by equality, or by a `Correspondence` via `comparing_values_using`.
    - A correspondence that raises never aborts the assertion
    - The exception is listed at the end of the report
* Use `CollectingFailureStrategy` to collect several failures before raising.
* Run this file directly to print every report below as a Rich panel.
"""

from verdict import (
    AssertionVerb,
    CollectingFailureStrategy,
    Correspondence,
    assert_that,
    assert_with_message,
)
from verdict.reports import ConsoleReporter

# =============================================================================
# Passing assertions
# =============================================================================

MONTHS = {"jan": 1, "feb": 2, "march": 3}

assert_that(MONTHS).contains_exactly("march", 3, "jan", 1, "feb", 2)
assert_that(MONTHS).contains_at_least("jan", 1, "march", 3).in_order()
assert_that(MONTHS).contains_entry("feb", 2)

# =============================================================================
# Custom value comparison
# =============================================================================

PARSES_TO = Correspondence.from_predicate(lambda actual, expected: int(actual) == expected, "parses to")
WITHIN_10_OF = Correspondence.tolerance(10)

assert_that({"abc": "123", "def": "456"}).comparing_values_using(PARSES_TO).contains_entry("def", 456)
assert_that({"width": 104, "height": 61}).comparing_values_using(WITHIN_10_OF).contains_exactly("width", 100, "height", 60)

# =============================================================================
# Failure reports
# =============================================================================


def collect_failures() -> CollectingFailureStrategy:
    expect = CollectingFailureStrategy()
    verb = AssertionVerb(expect)

    # Missing, unexpected and wrong values in a single message
    verb.that({"jan": 1, "march": 3}).contains_exactly("march", 33, "feb", 2)

    # 1 and "1" display alike, so they are annotated with their types
    verb.that({"1": "jan", 1: "feb"}).contains_exactly(1, "jan", "1", "feb")

    # The correspondence raises on None; the exception is reported, not propagated
    verb.that({"abc": "123", "def": None}).comparing_values_using(PARSES_TO).contains_exactly("abc", 123, "def", 456)

    # Diffs come from the correspondence
    verb.that({"width": 130}).comparing_values_using(WITHIN_10_OF).contains_entry("width", 100)

    verb.with_message("checking %s", "calendar").that(MONTHS).named("months").has_size(12)
    return expect


def main() -> None:
    expect = collect_failures()
    ConsoleReporter().print_reports(expect.reports)

    try:
        assert_with_message("fail-fast mode").that(MONTHS).contains_key("april")
    except AssertionError as exc:
        print(exc)


if __name__ == "__main__":
    main()

"""verdict - fluent assertions with diagnostic failure reports for mappings."""

from .config import VerdictSettings, get_settings
from .correspondence import Correspondence, ExceptionStore
from .exceptions import AssertionFailedError, InvalidArgumentsError
from .facts import Fact, FailureReport, RecordedException
from .reconcile import MapDifference, ValueDifference, check_order, reconcile_at_least, reconcile_exact
from .strategy import CollectingFailureStrategy, FailureStrategy, RaisingFailureStrategy
from .subjects import MapSubject, MapValuesComparison, Ordered, Subject
from .verb import AssertionVerb, assert_that, assert_with_message
from .version import __version__


__all__ = [
    # Entry points
    "assert_that",
    "assert_with_message",
    "AssertionVerb",
    # Subjects
    "Subject",
    "MapSubject",
    "MapValuesComparison",
    "Ordered",
    # Comparison
    "Correspondence",
    "ExceptionStore",
    "MapDifference",
    "ValueDifference",
    "reconcile_exact",
    "reconcile_at_least",
    "check_order",
    # Reports
    "Fact",
    "FailureReport",
    "RecordedException",
    # Failure handling
    "FailureStrategy",
    "RaisingFailureStrategy",
    "CollectingFailureStrategy",
    "AssertionFailedError",
    "InvalidArgumentsError",
    # Configuration
    "VerdictSettings",
    "get_settings",
]

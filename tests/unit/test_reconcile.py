import pytest

from verdict import Correspondence, InvalidArgumentsError, check_order, reconcile_at_least, reconcile_exact
from verdict.reconcile import ValueDifference, entries_from_args


def test_entries_from_args_keeps_argument_order():
    assert list(entries_from_args(("b", 2, "a", 1), "contains_exactly").items()) == [("b", 2), ("a", 1)]


def test_entries_from_args_empty():
    assert entries_from_args((), "contains_exactly") == {}


def test_entries_from_args_duplicates_are_counted_by_equality():
    with pytest.raises(InvalidArgumentsError) as exc_info:
        entries_from_args((1, "a", 1.0, "b", 2, "c"), "contains_at_least")

    assert str(exc_info.value) == "Duplicate keys ([1 x 2]) cannot be passed to contains_at_least()."


def test_reconcile_exact_partitions_keys():
    actual = {"jan": 1, "feb": 2, "march": 3}
    expected = {"jan": 1, "april": 4, "march": 5}

    diff = reconcile_exact(actual, expected)

    assert diff.matching == [("jan", 1)]
    assert diff.missing == [("april", 4)]
    assert diff.unexpected == [("feb", 2)]
    assert diff.wrong_value == [ValueDifference("march", 5, 3)]
    assert not diff.is_empty()
    assert diff.exceptions.is_empty()


def test_reconcile_at_least_ignores_extra_keys():
    diff = reconcile_at_least({"jan": 1, "feb": 2}, {"jan": 1})

    assert diff.is_empty()
    assert diff.unexpected == []
    assert diff.allow_unexpected


def test_reconcile_with_none_keys_and_values():
    diff = reconcile_exact({None: None, "a": 1}, {None: None, "a": None})

    assert diff.matching == [(None, None)]
    assert diff.wrong_value == [ValueDifference("a", None, 1)]


def test_reconcile_records_format_diff():
    diff = reconcile_exact({"a": 25}, {"a": 10}, Correspondence.tolerance(5))

    assert diff.wrong_value == [ValueDifference("a", 10, 25, "15")]


def test_raising_compare_counts_as_wrong_value():
    def compare(actual, expected):
        raise RuntimeError("boom")

    diff = reconcile_exact({"a": 1}, {"a": 1}, Correspondence.from_predicate(compare, "matches"))

    assert diff.matching == []
    assert [difference.key for difference in diff.wrong_value] == ["a"]
    (record,) = diff.exceptions.all()
    assert record.phase == "compare"
    assert record.summary() == "compare(1, 1) threw RuntimeError: boom"


def test_check_order_skips_unexpected_keys():
    actual = {"a": 1, "x": 0, "b": 2, "c": 3}

    assert check_order(actual, {"a": 1, "b": 2})
    assert check_order(actual, {"b": 2, "c": 3})
    assert not check_order(actual, {"b": 2, "a": 1})
    assert check_order(actual, {})


@pytest.mark.parametrize(
    "mapping", [{}, {"jan": 1}, {None: None, "a": [1, 2], 3: "c"}, {"nan": float("nan")}]
)
def test_reconcile_with_itself_matches_everything(mapping):
    diff = reconcile_exact(mapping, mapping)

    assert diff.is_empty()
    assert diff.matching == list(mapping.items())


def test_one_raising_compare_does_not_disturb_other_entries():
    lower = Correspondence.from_predicate(lambda actual, expected: actual.lower() == expected, "lowercases to")

    diff = reconcile_exact({"a": "X", "b": None, "c": "Y"}, {"a": "x", "b": "z", "c": "q"}, lower)

    assert diff.matching == [("a", "X")]
    assert [difference.key for difference in diff.wrong_value] == ["b", "c"]
    assert len(diff.exceptions) == 1
    assert diff.exceptions.compare_exceptions[0].actual == "None"

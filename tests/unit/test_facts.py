import pytest

from verdict import Fact, FailureReport, RecordedException


def _record(**overrides) -> RecordedException:
    fields = {
        "phase": "compare",
        "actual": "None",
        "expected": "TWO",
        "error_type": "AttributeError",
        "error_message": "'NoneType' object has no attribute 'lower'",
        "traceback": "Traceback (most recent call last):\n  ...\nAttributeError\n",
    }
    fields.update(overrides)
    return RecordedException(**fields)


def test_render_aligns_values_and_keeps_order():
    report = FailureReport(
        messages=["custom message"],
        facts=[
            Fact.simple("key is present but with a different value"),
            Fact.of("value of", "map[a]"),
            Fact.of("expected", "1"),
            Fact.of("but was", "2"),
        ],
    )

    assert report.render() == (
        "custom message\n"
        "key is present but with a different value\n"
        "value of: map[a]\n"
        "expected: 1\n"
        "but was : 2"
    )
    assert str(report) == report.render()


def test_render_multiline_values_are_indented():
    report = FailureReport(facts=[Fact.of("expected", "1"), Fact.of("first exception", "line one\nline two")])

    assert report.render() == "expected:\n    1\nfirst exception:\n    line one\n    line two"


def test_value_of():
    report = FailureReport(facts=[Fact.of("but was", "1"), Fact.simple("note"), Fact.of("but was", "2")])

    assert report.keys() == ["but was", "note", "but was"]
    assert report.value_of("but was") == "1"
    assert report.value_of("but was", 1) == "2"
    assert report.value_of("note") is None
    with pytest.raises(KeyError):
        report.value_of("but was", 2)
    with pytest.raises(KeyError):
        report.value_of("missing")


def test_recorded_exception_summary():
    assert _record().summary() == "compare(None, TWO) threw AttributeError: 'NoneType' object has no attribute 'lower'"
    assert _record(phase="format_diff", error_message="").summary() == "format_diff(None, TWO) threw AttributeError"


def test_recorded_exception_describe():
    record = _record()

    assert record.describe(include_traceback=False) == record.summary()
    assert record.describe() == (
        f"{record.summary()}\n---\nTraceback (most recent call last):\n  ...\nAttributeError"
    )


def test_repr_truncates_tracebacks():
    record = _record(traceback="x" * 200)
    report = FailureReport(facts=[Fact.simple("failed")], exceptions=[record])

    assert "x" * 80 + "..." in repr(report)
    assert "x" * 81 not in repr(report)
    assert report.model_dump()["exceptions"][0]["traceback"] == "x" * 200

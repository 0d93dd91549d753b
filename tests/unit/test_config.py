import pytest
from pydantic import ValidationError

from verdict import assert_that
from verdict.config import VerdictSettings, get_settings, reset_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings()
    yield
    reset_settings()


def test_defaults(monkeypatch):
    monkeypatch.delenv("VERDICT_INCLUDE_TRACEBACKS", raising=False)
    monkeypatch.delenv("VERDICT_QUALIFIED_TYPE_NAMES", raising=False)

    settings = VerdictSettings()

    assert settings.include_tracebacks is True
    assert settings.qualified_type_names is False


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("VERDICT_INCLUDE_TRACEBACKS", "false")
    monkeypatch.setenv("VERDICT_QUALIFIED_TYPE_NAMES", "true")

    settings = get_settings()

    assert settings.include_tracebacks is False
    assert settings.qualified_type_names is True
    assert get_settings() is settings


def test_unknown_field_is_rejected():
    with pytest.raises(ValidationError):
        VerdictSettings(colour=True)


def test_assert_that_uses_environment_settings(monkeypatch):
    from decimal import Decimal

    monkeypatch.setenv("VERDICT_QUALIFIED_TYPE_NAMES", "true")

    with pytest.raises(AssertionError) as exc_info:
        assert_that({"a": Decimal("1")}).contains_exactly("a", "1")

    assert "{a=(expected 1 (str) but got 1 (decimal.Decimal))}" in str(exc_info.value)

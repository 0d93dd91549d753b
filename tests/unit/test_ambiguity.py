from decimal import Decimal

from verdict.ambiguity import (
    AmbiguityResolver,
    describe_with_types,
    has_matching_display_pair,
    retain_matching_display,
    same_identity,
)
from verdict.display import display, entry_type_label, type_label


def test_display():
    assert display(None) == "None"
    assert display("abc") == "abc"
    assert display({"a": 1, None: [1, "b"]}) == "{a=1, None=[1, b]}"
    assert display((1, 2)) == "[1, 2]"
    assert display(Decimal("1.5")) == "1.5"


def test_type_label():
    assert type_label(1) == "int"
    assert type_label(None) == "NoneType"
    assert type_label(1, qualified=True) == "int"
    assert type_label(Decimal("1"), qualified=True) == "decimal.Decimal"
    assert entry_type_label("a", 1) == "tuple[str, int]"


def test_same_identity_requires_same_type():
    assert same_identity(1, 1)
    assert not same_identity(1, 1.0)
    assert not same_identity(1, "1")


def test_matching_display_pairs():
    assert has_matching_display_pair(["1", 2], [1])
    assert not has_matching_display_pair([1, 2], [1])
    assert has_matching_display_pair(["None"], [None])
    assert retain_matching_display(["1", 2, "2"], [1, 2]) == ["1", "2"]


def test_describe_with_types():
    assert describe_with_types([1, 2]) == "[1, 2] (int)"
    assert describe_with_types([1, "1"]) == "[1 (int), 1 (str)]"
    assert describe_with_types(["1", "1", "1"]) == "[1 [3 copies]] (str)"


def test_resolver_annotates_only_colliding_groups():
    resolver = AmbiguityResolver([1, "1", 2, 2])

    assert resolver.ambiguous
    assert resolver.label(1) == "1 (int)"
    assert resolver.label("1") == "1 (str)"
    assert resolver.label(2) == "2"
    assert not resolver.is_ambiguous(2)


def test_resolver_without_collisions():
    resolver = AmbiguityResolver(["a", "b", None])

    assert not resolver.ambiguous
    assert resolver.label(None) == "None"


def test_resolver_qualified_names():
    resolver = AmbiguityResolver([Decimal("1"), 1], qualified=True)

    assert resolver.label(Decimal("1")) == "1 (decimal.Decimal)"
    assert resolver.label(1) == "1 (int)"

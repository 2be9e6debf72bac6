"""Tests for the per-unit result type."""

from activity_digest.result import Empty, Failed, Value


def test_results_compare_by_value():
    assert Empty() == Empty()
    assert Value([1]) == Value([1])
    assert Failed("x") != Failed("y")


def test_result_variants_are_distinct():
    assert Value([]) != Empty()
    assert not isinstance(Failed("locked"), Value)

from __future__ import annotations

import dataclasses
from decimal import Decimal

import pytest

from expense_summary.models import CategoryAmount, Period, PeriodSummary, SourceSummary, ValidationError


def test_amounts_are_coerced_to_decimal():
    assert CategoryAmount("Food", 10).amount == Decimal("10")
    assert CategoryAmount("Food", 0.1).amount == Decimal("0.1")
    assert CategoryAmount("Food", "12.50").amount == Decimal("12.50")


@pytest.mark.parametrize(
    "bad",
    ["twelve", None, True, float("nan"), float("inf"), Decimal("NaN"), Decimal("sNaN"), Decimal("-Infinity")],
)
def test_non_finite_or_non_numeric_amounts_are_rejected(bad):
    with pytest.raises(ValidationError):
        CategoryAmount("Food", bad)


def test_non_finite_grand_total_is_rejected(june):
    with pytest.raises(ValidationError):
        PeriodSummary(period=june, grand_total=Decimal("Infinity"))


def test_values_are_immutable(two_source_summary):
    with pytest.raises(dataclasses.FrozenInstanceError):
        two_source_summary.grand_total = Decimal("1")
    assert isinstance(two_source_summary.sources, tuple)
    assert isinstance(two_source_summary.sources[0].category_amounts, tuple)


def test_lists_are_stored_as_tuples(june):
    summary = PeriodSummary(
        period=june,
        sources=[SourceSummary("A", [CategoryAmount("Food", 1)])],
        overall_category_totals=[CategoryAmount("Food", 1)],
        grand_total=1,
    )
    assert summary.sources == (SourceSummary("A", (CategoryAmount("Food", Decimal("1")),)),)
    assert summary.grand_total == Decimal("1")


def test_period_validation():
    assert Period(2024, 12).key == "2024-12"
    for bad in ((2024, 13), (2024, -1), (-5, 3), (2024, True), (2024, "6")):
        with pytest.raises(ValidationError):
            Period(*bad)


def test_summary_requires_period():
    with pytest.raises(ValidationError):
        PeriodSummary(period=None)

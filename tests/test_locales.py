from __future__ import annotations

from decimal import Decimal

import pytest

from expense_summary.locales import (
    PLACEHOLDER,
    format_amount,
    format_currency,
    get_profile,
    month_name,
    period_label,
    sort_labels,
)
from expense_summary.models import Period, ValidationError


def test_turkish_and_english_conventions_differ():
    tr = format_currency(1500.5, "tr")
    en = format_currency(1500.5, "en")
    assert tr == "₺1.500,50"
    assert en == "TRY 1,500.50"
    assert tr != en


@pytest.mark.parametrize(
    "amount, locale, expected",
    [
        (Decimal("0"), "tr", "0,00"),
        (Decimal("1234567.891"), "tr", "1.234.567,89"),
        (Decimal("1234567.891"), "en", "1,234,567.89"),
        (Decimal("0.005"), "en", "0.01"),
        (Decimal("-0.004"), "en", "0.00"),
        (Decimal("-2500"), "tr", "-2.500,00"),
        (999, "en", "999.00"),
    ],
)
def test_format_amount(amount, locale, expected):
    assert format_amount(amount, locale) == expected


def test_currency_symbols_and_codes():
    assert format_currency(Decimal("12"), "en", "USD") == "$12.00"
    assert format_currency(Decimal("12"), "tr", "EUR") == "€12,00"
    assert format_currency(Decimal("12"), "en", "CHF") == "CHF 12.00"
    assert format_currency(Decimal("-3.5"), "tr") == "-₺3,50"


def test_missing_value_renders_placeholder():
    assert format_currency(None, "tr") == PLACEHOLDER
    assert format_amount(None, "en") == PLACEHOLDER
    assert format_currency(0, "en") == "TRY 0.00"


def test_region_tags_resolve_to_language_profile():
    assert get_profile("tr-TR").tag == "tr"
    assert get_profile("en_US").tag == "en"
    with pytest.raises(ValidationError):
        get_profile("fr")
    with pytest.raises(ValidationError):
        format_currency(1, "")


def test_month_names_and_period_labels():
    assert month_name(2, "tr") == "Şubat"
    assert month_name(8, "en") == "August"
    assert period_label(Period(2024, 6), "en") == "June 2024"
    assert period_label(Period(2024, 6), "tr") == "Haziran 2024"
    assert period_label(Period(2024, 6, display_name="Q2 / June"), "en") == "Q2 / June"
    with pytest.raises(ValidationError):
        month_name(13, "en")


def test_turkish_dotted_and_dotless_i():
    assert sort_labels(["İzmir", "Isparta", "Ilgaz", "iade"], "tr") == ["Ilgaz", "Isparta", "iade", "İzmir"]


def test_english_collation_is_case_and_accent_insensitive_first():
    assert sort_labels(["banana", "Apple", "apple", "Éclair", "eclair", "10 Items"], "en") == [
        "10 Items",
        "apple",
        "Apple",
        "banana",
        "eclair",
        "Éclair",
    ]

"""Locale profiles and the currency presentation formatter.

Two profiles ship with the package, Turkish (``"tr"``) and English
(``"en"``). Each carries its separators, currency symbols, month names,
report labels and a collation rule used to order category columns.
Everything here is a pure function of its arguments; the locale is always
passed in explicitly.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .models import Period, ValidationError, to_decimal

PLACEHOLDER = "-"
DEFAULT_CURRENCY = "TRY"
_CENTS = Decimal("0.01")

# Turkish alphabet order, with q/w/x placed where Turkish collation puts them.
_TR_ALPHABET = "abcçdefgğhıijklmnoöpqrsştuüvwxyz"
_TR_INDEX = {ch: i for i, ch in enumerate(_TR_ALPHABET)}

# (primary, secondary) weights per character; tier 0 spaces and punctuation,
# tier 1 digits, tier 2 letters the profile knows, tier 3 everything else.
CharWeight = Tuple[Tuple[int, int], int]


def _strip_accents(ch: str) -> str:
    decomposed = unicodedata.normalize("NFD", ch)
    return "".join(c for c in decomposed if not unicodedata.combining(c)) or ch


def _non_letter_weight(ch: str) -> Optional[CharWeight]:
    if ch.isdigit():
        return (1, ord(ch)), 0
    if not ch.isalpha():
        return (0, ord(ch)), 0
    return None


def _latin_weight(ch: str) -> CharWeight:
    weight = _non_letter_weight(ch)
    if weight is not None:
        return weight
    base = _strip_accents(ch).lower()
    accented = 1 if base != ch.lower() else 0
    if len(base) == 1 and "a" <= base <= "z":
        return (2, ord(base)), accented
    return (3, ord(base[0])), accented


def _turkish_lower(ch: str) -> str:
    if ch == "I":
        return "ı"
    if ch == "İ":
        return "i"
    return ch.lower()


def _turkish_weight(ch: str) -> CharWeight:
    weight = _non_letter_weight(ch)
    if weight is not None:
        return weight
    low = _turkish_lower(ch)
    if low in _TR_INDEX:
        return (2, _TR_INDEX[low]), 0
    base = _strip_accents(low)
    if base in _TR_INDEX:
        return (2, _TR_INDEX[base]), 1
    return (3, ord(base[0])), 1


@dataclass(frozen=True)
class LocaleProfile:
    tag: str
    group_separator: str
    decimal_separator: str
    month_names: Tuple[str, ...]
    char_weight: Callable[[str], CharWeight]
    currency_symbols: Dict[str, str] = field(default_factory=dict)
    labels: Dict[str, str] = field(default_factory=dict)


PROFILES: Dict[str, LocaleProfile] = {
    "tr": LocaleProfile(
        tag="tr",
        group_separator=".",
        decimal_separator=",",
        month_names=(
            "Ocak", "Şubat", "Mart", "Nisan", "Mayıs", "Haziran",
            "Temmuz", "Ağustos", "Eylül", "Ekim", "Kasım", "Aralık",
        ),
        char_weight=_turkish_weight,
        currency_symbols={"TRY": "₺", "USD": "$", "EUR": "€", "GBP": "£"},
        labels={
            "title": "Harcama Özeti",
            "source": "Kaynak",
            "source_total": "Kaynak Toplamı",
            "category_totals": "KATEGORİ TOPLAMLARI",
            "grand_total": "Toplam Harcama",
            "ranking": "Kategori Bazında Genel Harcama Toplamları",
            "warnings": "Mutabakat Uyarıları",
            "supplied": "bildirilen",
            "recomputed": "hesaplanan",
            "no_data": "Bu dönem için harcama verisi bulunmamaktadır.",
        },
    ),
    "en": LocaleProfile(
        tag="en",
        group_separator=",",
        decimal_separator=".",
        month_names=(
            "January", "February", "March", "April", "May", "June",
            "July", "August", "September", "October", "November", "December",
        ),
        char_weight=_latin_weight,
        currency_symbols={"USD": "$", "EUR": "€", "GBP": "£"},
        labels={
            "title": "Expense Summary",
            "source": "Source",
            "source_total": "Source Total",
            "category_totals": "CATEGORY TOTALS",
            "grand_total": "Total Spending",
            "ranking": "Overall Spending by Category",
            "warnings": "Reconciliation Warnings",
            "supplied": "supplied",
            "recomputed": "recomputed",
            "no_data": "No expense data for this period.",
        },
    ),
}

SUPPORTED_LOCALES = tuple(PROFILES)


def get_profile(locale: str) -> LocaleProfile:
    """Resolve ``"tr"``, ``"tr-TR"``, ``"en_US"`` and so on to a profile."""
    if not isinstance(locale, str) or not locale.strip():
        raise ValidationError(f"Unsupported locale: {locale!r}")
    language = locale.strip().replace("_", "-").split("-")[0].lower()
    try:
        return PROFILES[language]
    except KeyError:
        raise ValidationError(
            f"Unsupported locale: {locale!r} (supported: {', '.join(SUPPORTED_LOCALES)})"
        ) from None


def format_amount(amount, locale: str) -> str:
    """Two fraction digits with the locale's separators, no currency."""
    if amount is None:
        return PLACEHOLDER
    profile = get_profile(locale)
    value = to_decimal(amount).quantize(_CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    integer, fraction = f"{abs(value):.2f}".split(".")
    grouped = f"{int(integer):,}".replace(",", profile.group_separator)
    return f"{sign}{grouped}{profile.decimal_separator}{fraction}"


def format_currency(amount, locale: str, currency: str = DEFAULT_CURRENCY) -> str:
    """Render ``amount`` as money, e.g. ``₺1.500,50`` (tr) or ``TRY 1,500.50`` (en).

    ``None`` means the value was never recorded and renders ``"-"``.
    """
    if amount is None:
        return PLACEHOLDER
    profile = get_profile(locale)
    code = (currency or DEFAULT_CURRENCY).upper()
    body = format_amount(amount, profile.tag)
    sign = ""
    if body.startswith("-"):
        sign, body = "-", body[1:]
    symbol = profile.currency_symbols.get(code)
    prefix = symbol if symbol else f"{code} "
    return f"{sign}{prefix}{body}"


def month_name(month: int, locale: str) -> str:
    if not isinstance(month, int) or not 1 <= month <= 12:
        raise ValidationError(f"Invalid month: {month!r} (expected 1-12)")
    return get_profile(locale).month_names[month - 1]


def period_label(period: Period, locale: str) -> str:
    if period.display_name:
        return period.display_name
    return f"{month_name(period.month, locale)} {period.year}"


def label(key: str, locale: str) -> str:
    return get_profile(locale).labels.get(key, key)


def collation_key(text: str, locale: str) -> tuple:
    """Sort key ordering by letters first, then accents, then case.

    Lowercase sorts before uppercase and the raw string breaks any remaining
    tie, so two distinct labels never share a key.
    """
    weigh = get_profile(locale).char_weight
    primary: List[Tuple[int, int]] = []
    secondary: List[int] = []
    tertiary: List[int] = []
    for ch in text:
        weight, accent = weigh(ch)
        primary.append(weight)
        secondary.append(accent)
        tertiary.append(1 if ch.isupper() else 0)
    return tuple(primary), tuple(secondary), tuple(tertiary), text


def sort_labels(labels: Iterable[str], locale: str) -> List[str]:
    get_profile(locale)
    return sorted(labels, key=lambda text: collation_key(text, locale))

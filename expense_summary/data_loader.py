"""Summary loading helpers.

Reads period expense summaries in the shape the reporting backend returns
them and turns them into :class:`~expense_summary.models.PeriodSummary`
values:

    {
      "year": 2024, "month": 6, "periodName": "Haziran 2024",
      "sources": [
        {"sourceName": "Card A",
         "categorySummaries": [{"categoryName": "Food", "totalAmount": 100}]}
      ],
      "overallCategoryTotals": [{"categoryName": "Food", "totalAmount": 100}],
      "grandTotal": 100
    }

Keys are matched in camelCase or snake_case, and a few common aliases are
accepted for the per-source list and the amount field. Amounts given as
strings must use "." as the decimal separator ("1,500.50"); commas are read as
thousands separators and Turkish-style "1.500,50" is rejected.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from decimal import Decimal
from pathlib import Path
from typing import Any, Iterable, List, Optional

from .logging_setup import get_logger
from .models import CategoryAmount, Period, PeriodSummary, SourceSummary, ValidationError, to_decimal

logger = get_logger(__name__)

_PERIOD_NAME_KEYS = ("periodName", "period_name", "displayName", "display_name")
_SOURCES_KEYS = ("sources",)
_SOURCE_NAME_KEYS = ("sourceName", "source_name", "name")
_SOURCE_ITEMS_KEYS = ("categorySummaries", "category_summaries", "categoryAmounts", "category_amounts")
_CATEGORY_NAME_KEYS = ("categoryName", "category_name", "category")
_AMOUNT_KEYS = ("totalAmount", "total_amount", "amount")
_OVERALL_KEYS = ("overallCategoryTotals", "overall_category_totals")
_GRAND_TOTAL_KEYS = ("grandTotal", "grand_total")

_MISSING = object()


def _lookup(raw: Mapping, candidates: Iterable[str], default: Any = _MISSING) -> Any:
    for key in candidates:
        if key in raw:
            return raw[key]
    return default


def _to_decimal(value: Any, where: str) -> Decimal:
    if isinstance(value, str):
        v = value.strip()
        # Only "1,500.50" style strings are accepted; "1.500,50" would lose its scale.
        if "," in v and "." in v and v.rfind(",") > v.rfind("."):
            raise ValidationError(f"Invalid {where}: {value!r} (expected '.' as the decimal separator)")
        v = v.replace(",", "")
        # Some exports wrap negatives in parentheses, e.g., (12.34)
        if v.startswith("(") and v.endswith(")"):
            v = "-" + v[1:-1]
        value = v
    return to_decimal(value, where)


def _to_int(value: Any, where: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {where}: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    raise ValidationError(f"Invalid {where}: {value!r}")


def _parse_category_amounts(items: Any, where: str) -> List[CategoryAmount]:
    if items is None:
        return []
    if isinstance(items, (str, bytes)) or not isinstance(items, Iterable):
        raise ValidationError(f"{where}: expected a list of category amounts")
    parsed: List[CategoryAmount] = []
    for i, item in enumerate(items):
        if not isinstance(item, Mapping):
            raise ValidationError(f"{where}[{i}]: expected an object")
        name = _lookup(item, _CATEGORY_NAME_KEYS)
        if not isinstance(name, str):
            raise ValidationError(f"{where}[{i}]: missing categoryName")
        amount = _lookup(item, _AMOUNT_KEYS)
        if amount is _MISSING:
            raise ValidationError(f"{where}[{i}]: missing totalAmount for {name!r}")
        parsed.append(CategoryAmount(category_name=name, amount=_to_decimal(amount, f"{where}[{i}] amount")))
    return parsed


def parse_summary(raw: Mapping) -> PeriodSummary:
    """Build a :class:`PeriodSummary` from a decoded JSON object.

    Raises :class:`ValidationError` naming the offending field.
    """
    if not isinstance(raw, Mapping):
        raise ValidationError("Summary must be a JSON object")

    year = _lookup(raw, ("year",))
    month = _lookup(raw, ("month",))
    if year is _MISSING or month is _MISSING:
        raise ValidationError("Summary is missing year or month")
    name = _lookup(raw, _PERIOD_NAME_KEYS, "") or ""
    period = Period(year=_to_int(year, "year"), month=_to_int(month, "month"), display_name=str(name))

    raw_sources = _lookup(raw, _SOURCES_KEYS, None)
    if raw_sources is None:
        raw_sources = []
    if not isinstance(raw_sources, list):
        raise ValidationError("sources: expected a list")
    sources: List[SourceSummary] = []
    for i, src in enumerate(raw_sources):
        if not isinstance(src, Mapping):
            raise ValidationError(f"sources[{i}]: expected an object")
        source_name = _lookup(src, _SOURCE_NAME_KEYS)
        if not isinstance(source_name, str):
            raise ValidationError(f"sources[{i}]: missing sourceName")
        items = _parse_category_amounts(_lookup(src, _SOURCE_ITEMS_KEYS, None), f"sources[{i}].categorySummaries")
        sources.append(SourceSummary(source_name=source_name, category_amounts=tuple(items)))

    overall = _parse_category_amounts(_lookup(raw, _OVERALL_KEYS, None), "overallCategoryTotals")
    grand = _lookup(raw, _GRAND_TOTAL_KEYS, None)
    grand_total: Optional[Decimal] = None if grand is None else _to_decimal(grand, "grandTotal")

    return PeriodSummary(
        period=period,
        sources=tuple(sources),
        overall_category_totals=tuple(overall),
        grand_total=grand_total,
    )


def load_summary_file(path: str | Path) -> PeriodSummary:
    p = Path(path)
    with p.open("r", encoding="utf-8-sig") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise ValidationError(f"{p.name}: invalid JSON ({exc.msg} at line {exc.lineno})") from exc
    try:
        summary = parse_summary(raw)
    except ValidationError as exc:
        raise ValidationError(f"{p.name}: {exc}") from exc
    logger.info("Loaded %s summary from %s (%d sources)", summary.period.key, p, len(summary.sources))
    return summary


def find_summary_file(directory: str | Path, year: int, month: int) -> Optional[Path]:
    """Locate ``YYYY-MM.json`` under ``directory``; ``None`` when absent."""
    candidate = Path(directory) / f"{year:04d}-{month:02d}.json"
    return candidate if candidate.is_file() else None

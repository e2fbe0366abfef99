"""Reporting utilities.

Formats a cross-tabulated period report into human-readable text, CSV, and
JSON-serializable dicts. Amount formatting is delegated to
:mod:`expense_summary.locales`; nothing here recomputes totals.
"""

from __future__ import annotations

import csv
import json
from decimal import Decimal
from pathlib import Path
from typing import Dict, IO, List, Optional

from . import analytics as an
from .locales import DEFAULT_CURRENCY, format_amount, format_currency, label, period_label
from .models import CrossTabReport, ReconciledTotal, ReconciliationWarning


def _num(value: Optional[Decimal]) -> Optional[float]:
    if value is None:
        return None
    return round(float(value), 2)


def _total_dict(total: ReconciledTotal, locale: Optional[str], currency: str) -> Dict:
    data = {
        "value": _num(total.value),
        "supplied": _num(total.supplied),
        "recomputed": _num(total.recomputed),
        "reconciled": total.reconciled,
    }
    if locale:
        data["formatted"] = format_currency(total.value, locale, currency)
    return data


def _warning_dict(warning: ReconciliationWarning) -> Dict:
    return {
        "level": "grand_total" if warning.is_grand_total else "category",
        "category": warning.category,
        "supplied": _num(warning.supplied),
        "recomputed": _num(warning.recomputed),
        "difference": _num(warning.difference),
    }


def report_to_dict(report: CrossTabReport, locale: Optional[str] = None, currency: str = DEFAULT_CURRENCY) -> Dict:
    """JSON-serializable view of ``report``.

    With a ``locale``, every amount also carries a ``formatted`` string.
    """
    rows = []
    for row in report.rows:
        entry = {"source": row.source_name, "cells": [_num(c) for c in row.cells], "total": _num(row.total)}
        if locale:
            entry["formatted"] = {
                "cells": [format_currency(c, locale, currency) for c in row.cells],
                "total": format_currency(row.total, locale, currency),
            }
        rows.append(entry)

    column_totals = []
    for name, total in zip(report.categories, report.column_totals):
        item = {"category": name}
        item.update(_total_dict(total, locale, currency))
        column_totals.append(item)

    unmatched_totals = []
    for name, total in report.unmatched_totals:
        item = {"category": name}
        item.update(_total_dict(total, locale, currency))
        unmatched_totals.append(item)

    period = {"year": report.period.year, "month": report.period.month, "key": report.period.key}
    period["name"] = period_label(report.period, locale) if locale else report.period.display_name

    return {
        "period": period,
        "locale": locale,
        "currency": currency,
        "is_empty": report.is_empty,
        "categories": list(report.categories),
        "rows": rows,
        "column_totals": column_totals,
        "unmatched_totals": unmatched_totals,
        "grand_total": _total_dict(report.grand_total, locale, currency),
        "warnings": [_warning_dict(w) for w in report.warnings],
        "ranking": [{"category": c, "value": _num(v)} for c, v in an.rank_category_totals(report)],
        "chart": [{"category": c, "value": _num(v)} for c, v in an.chart_series(report)],
    }


def format_text_report(report: CrossTabReport, locale: str = "tr", currency: str = DEFAULT_CURRENCY) -> str:
    lines: List[str] = []
    lines.append(f"=== {period_label(report.period, locale)} {label('title', locale)} ===")
    if report.is_empty:
        lines.append(label("no_data", locale))
        lines.append(f"{label('grand_total', locale)}: {format_currency(report.grand_total.value, locale, currency)}")
        lines.extend(_warning_lines(report, locale, currency))
        return "\n".join(lines)

    header = [label("source", locale), *report.categories, label("source_total", locale)]
    body = [
        [row.source_name, *(format_amount(c, locale) for c in row.cells), format_amount(row.total, locale)]
        for row in report.rows
    ]
    footer = [
        label("category_totals", locale),
        *(format_amount(t.value, locale) for t in report.column_totals),
        format_amount(report.grand_total.value, locale),
    ]
    table = [header, *body, footer]
    widths = [max(len(r[i]) for r in table) for i in range(len(header))]

    def render(cells: List[str]) -> str:
        first = f"{cells[0]:<{widths[0]}}"
        rest = [f"{c:>{w}}" for c, w in zip(cells[1:], widths[1:])]
        return " | ".join([first, *rest])

    rule = "-+-".join("-" * w for w in widths)
    lines.append(render(header))
    lines.append(rule)
    lines.extend(render(r) for r in body)
    lines.append(rule)
    lines.append(render(footer))
    lines.append("")

    lines.append(f"{label('grand_total', locale)}: {format_currency(report.grand_total.value, locale, currency)}")

    # Sources may exist without any category entries; then there is nothing to rank.
    ranking = an.rank_category_totals(report)
    if ranking:
        lines.append("")
        lines.append(f"-- {label('ranking', locale)} --")
        name_width = max(len(c) for c, _ in ranking)
        for cat, amt in ranking:
            lines.append(f"{cat:{name_width}}  {format_currency(amt, locale, currency)}")

    lines.extend(_warning_lines(report, locale, currency))
    return "\n".join(lines)


def _warning_lines(report: CrossTabReport, locale: str, currency: str) -> List[str]:
    if not report.warnings:
        return []
    lines = ["", f"-- {label('warnings', locale)} --"]
    for w in report.warnings:
        name = label("grand_total", locale) if w.is_grand_total else w.category
        lines.append(
            f"{name}: {label('supplied', locale)} {format_currency(w.supplied, locale, currency)}, "
            f"{label('recomputed', locale)} {format_currency(w.recomputed, locale, currency)}"
        )
    return lines


def save_json(data: Dict, path: str | Path) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def _ensure_text_writer(target: str | Path | IO[str]):
    if hasattr(target, "write"):
        return target, None
    path = Path(target)
    path.parent.mkdir(parents=True, exist_ok=True)
    handle = path.open("w", newline="", encoding="utf-8")
    return handle, handle


def export_report_csv(report: CrossTabReport, path: str | Path | IO[str]) -> None:
    def fmt_amount(value) -> str:
        if value is None:
            return ""
        return f"{value:.2f}"

    rows: List[List[str]] = [["Source", *report.categories, "Total"]]
    for row in report.rows:
        rows.append([row.source_name, *(fmt_amount(c) for c in row.cells), fmt_amount(row.total)])
    rows.append(["Total", *(fmt_amount(t.value) for t in report.column_totals), fmt_amount(report.grand_total.value)])

    writer_target, to_close = _ensure_text_writer(path)
    try:
        writer = csv.writer(writer_target, lineterminator="\n")
        writer.writerows(rows)
    finally:
        if to_close is not None:
            to_close.close()


def export_report_json(
    report: CrossTabReport,
    path: str | Path | IO[str],
    locale: Optional[str] = None,
    currency: str = DEFAULT_CURRENCY,
) -> None:
    data = report_to_dict(report, locale, currency)
    if hasattr(path, "write"):
        json.dump(data, path, indent=2, ensure_ascii=False)
        path.write("\n")
        return
    save_json(data, path)

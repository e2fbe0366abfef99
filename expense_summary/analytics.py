"""Cross-tabulation and aggregation of period expense summaries.

Turns sparse per-source, per-category subtotals into a dense
sources x categories matrix with row totals, column totals and a grand total.
Column and grand totals supplied by the reporting backend are preferred for
display but always checked against independently recomputed sums; a
disagreement beyond ``tolerance`` is attached to the result as a
:class:`~expense_summary.models.ReconciliationWarning`, never raised.

The functions here are pure: no I/O, no shared state, no caching.
"""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .locales import collation_key, get_profile
from .logging_setup import get_logger
from .models import (
    ZERO,
    CrossTabReport,
    CrossTabRow,
    PeriodSummary,
    ReconciledTotal,
    ReconciliationWarning,
    SourceSummary,
    ValidationError,
    to_decimal,
)

logger = get_logger(__name__)

DEFAULT_TOLERANCE = Decimal("0.01")
PREFER_SUPPLIED = "supplied"
PREFER_RECOMPUTED = "recomputed"
POLICIES = (PREFER_SUPPLIED, PREFER_RECOMPUTED)


def resolve_categories(sources: Iterable[SourceSummary], locale: str = "tr") -> Tuple[str, ...]:
    """Unique category names across ``sources`` in locale collation order."""
    names = {item.category_name for source in sources for item in source.category_amounts}
    return tuple(sorted(names, key=lambda name: collation_key(name, locale)))


def build_crosstab(sources: Iterable[SourceSummary], categories: Sequence[str]) -> Tuple[CrossTabRow, ...]:
    """One dense row per source, in input order.

    Absent (source, category) pairs are ``Decimal(0)``; repeated entries for
    the same category within a source are summed. Matching is exact.
    """
    rows: List[CrossTabRow] = []
    for source in sources:
        sums: Dict[str, Decimal] = defaultdict(lambda: ZERO)
        for item in source.category_amounts:
            sums[item.category_name] += item.amount
        cells = tuple(sums.get(name, ZERO) for name in categories)
        rows.append(CrossTabRow(source_name=source.source_name, cells=cells, total=sum(cells, ZERO)))
    return tuple(rows)


def _reconcile(
    category: Optional[str],
    supplied: Optional[Decimal],
    recomputed: Decimal,
    tolerance: Decimal,
    prefer: str,
) -> ReconciledTotal:
    warning = None
    if supplied is not None and abs(supplied - recomputed) > tolerance:
        warning = ReconciliationWarning(category=category, supplied=supplied, recomputed=recomputed)
    if prefer == PREFER_SUPPLIED and supplied is not None:
        value = supplied
    else:
        value = recomputed
    return ReconciledTotal(value=value, recomputed=recomputed, supplied=supplied, warning=warning)


def aggregate(
    rows: Sequence[CrossTabRow],
    categories: Sequence[str],
    summary: PeriodSummary,
    tolerance: Decimal = DEFAULT_TOLERANCE,
    prefer: str = PREFER_SUPPLIED,
) -> Tuple[
    Tuple[ReconciledTotal, ...],
    Tuple[Tuple[str, ReconciledTotal], ...],
    ReconciledTotal,
    Tuple[ReconciliationWarning, ...],
]:
    """Column totals, unmatched supplied totals, grand total and their warnings.

    Row totals are already on the rows and are never taken from input.
    """
    column_totals: List[ReconciledTotal] = []
    for col, name in enumerate(categories):
        recomputed = sum((row.cells[col] for row in rows), ZERO)
        column_totals.append(_reconcile(name, summary.supplied_total(name), recomputed, tolerance, prefer))

    # Supplied totals for categories no source mentions have a recomputed sum of zero.
    known = set(categories)
    unmatched = [
        (item.category_name, _reconcile(item.category_name, item.amount, ZERO, tolerance, prefer))
        for item in summary.overall_category_totals
        if item.category_name not in known
    ]

    grand_recomputed = sum((row.total for row in rows), ZERO)
    grand_total = _reconcile(None, summary.grand_total, grand_recomputed, tolerance, prefer)

    checked = [*column_totals, *(total for _, total in unmatched), grand_total]
    warnings = tuple(total.warning for total in checked if total.warning is not None)
    return tuple(column_totals), tuple(unmatched), grand_total, warnings


def compute_report(
    summary: PeriodSummary,
    locale: str = "tr",
    tolerance=DEFAULT_TOLERANCE,
    prefer: str = PREFER_SUPPLIED,
) -> CrossTabReport:
    """Build the full cross-tabulated report for one period summary.

    An empty source list is a valid input and yields an empty matrix whose
    recomputed totals are all zero.
    """
    if prefer not in POLICIES:
        raise ValidationError(f"Unknown total policy: {prefer!r} (expected one of {', '.join(POLICIES)})")
    tolerance = to_decimal(tolerance, "tolerance")
    if tolerance < 0:
        raise ValidationError(f"Tolerance must not be negative: {tolerance}")
    get_profile(locale)

    categories = resolve_categories(summary.sources, locale)
    rows = build_crosstab(summary.sources, categories)
    column_totals, unmatched, grand_total, warnings = aggregate(rows, categories, summary, tolerance, prefer)
    logger.debug(
        "Built %s report: %d sources x %d categories, %d reconciliation warnings",
        summary.period.key,
        len(rows),
        len(categories),
        len(warnings),
    )
    return CrossTabReport(
        period=summary.period,
        categories=categories,
        rows=rows,
        column_totals=column_totals,
        grand_total=grand_total,
        warnings=warnings,
        unmatched_totals=unmatched,
    )


def rank_category_totals(report: CrossTabReport) -> List[Tuple[str, Decimal]]:
    """Displayed category totals, largest first.

    Supplied totals for categories no source mentions are ranked too. Ties keep
    column order, followed by the unmatched categories in supplied order.
    """
    pairs = [(name, total.value) for name, total in zip(report.categories, report.column_totals)]
    pairs.extend((name, total.value) for name, total in report.unmatched_totals)
    return sorted(pairs, key=lambda kv: kv[1], reverse=True)


def chart_series(report: CrossTabReport, limit: int = 10) -> List[Tuple[str, Decimal]]:
    """Positive category totals for a spending chart, at most ``limit`` bars."""
    positive = [(name, value) for name, value in rank_category_totals(report) if value > 0]
    return positive[:limit] if limit and limit > 0 else positive

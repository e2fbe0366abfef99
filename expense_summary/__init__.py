"""Period expense cross-tabulation and reporting package."""

from .analytics import (
    aggregate,
    build_crosstab,
    chart_series,
    compute_report,
    rank_category_totals,
    resolve_categories,
)
from .locales import format_amount, format_currency, month_name, period_label
from .models import (
    CategoryAmount,
    CrossTabReport,
    CrossTabRow,
    Period,
    PeriodSummary,
    ReconciledTotal,
    ReconciliationWarning,
    SourceSummary,
    ValidationError,
)

__all__ = [
    "aggregate",
    "build_crosstab",
    "chart_series",
    "compute_report",
    "rank_category_totals",
    "resolve_categories",
    "format_amount",
    "format_currency",
    "month_name",
    "period_label",
    "CategoryAmount",
    "CrossTabReport",
    "CrossTabRow",
    "Period",
    "PeriodSummary",
    "ReconciledTotal",
    "ReconciliationWarning",
    "SourceSummary",
    "ValidationError",
]

__version__ = "0.1.0"

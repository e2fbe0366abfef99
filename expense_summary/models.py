"""Value types for period expense summaries and the reports built from them.

Every type here is a frozen dataclass holding tuples, so a summary or report
can be shared freely once constructed. Amounts are always ``Decimal``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional, Tuple

ZERO = Decimal("0")


class ValidationError(ValueError):
    """Raised when a period, summary, or option is malformed."""


def to_decimal(value, field_name: str = "amount") -> Decimal:
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValidationError(f"Invalid {field_name}: {value!r}")
        return value
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"Invalid {field_name}: {value!r}")
    if isinstance(value, (int, float)):
        value = str(value)
    try:
        result = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValidationError(f"Invalid {field_name}: {value!r}") from exc
    if not result.is_finite():
        raise ValidationError(f"Invalid {field_name}: {value!r}")
    return result


@dataclass(frozen=True)
class Period:
    year: int
    month: int
    display_name: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.year, int) or isinstance(self.year, bool) or self.year <= 0:
            raise ValidationError(f"Invalid year: {self.year!r}")
        if not isinstance(self.month, int) or isinstance(self.month, bool) or not 1 <= self.month <= 12:
            raise ValidationError(f"Invalid month: {self.month!r} (expected 1-12)")

    @property
    def key(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class CategoryAmount:
    category_name: str
    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.category_name, str):
            raise ValidationError(f"Invalid category name: {self.category_name!r}")
        object.__setattr__(self, "amount", to_decimal(self.amount, f"amount for {self.category_name!r}"))


@dataclass(frozen=True)
class SourceSummary:
    """Per-category subtotals reported by one source (statement, account).

    ``category_amounts`` may be sparse and may name the same category more
    than once; the cross-tabulation sums repeated entries.
    """

    source_name: str
    category_amounts: Tuple[CategoryAmount, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.source_name, str):
            raise ValidationError(f"Invalid source name: {self.source_name!r}")
        object.__setattr__(self, "category_amounts", tuple(self.category_amounts))


@dataclass(frozen=True)
class PeriodSummary:
    period: Period
    sources: Tuple[SourceSummary, ...] = ()
    overall_category_totals: Tuple[CategoryAmount, ...] = ()
    grand_total: Optional[Decimal] = None

    def __post_init__(self) -> None:
        if not isinstance(self.period, Period):
            raise ValidationError("A summary needs a Period")
        object.__setattr__(self, "sources", tuple(self.sources))
        object.__setattr__(self, "overall_category_totals", tuple(self.overall_category_totals))
        if self.grand_total is not None:
            object.__setattr__(self, "grand_total", to_decimal(self.grand_total, "grand total"))
        _require_unique((s.source_name for s in self.sources), "source name")
        _require_unique((c.category_name for c in self.overall_category_totals), "category total")

    def supplied_total(self, category: str) -> Optional[Decimal]:
        for item in self.overall_category_totals:
            if item.category_name == category:
                return item.amount
        return None


def _require_unique(names: Iterable[str], what: str) -> None:
    seen = set()
    for name in names:
        if name in seen:
            raise ValidationError(f"Duplicate {what}: {name!r}")
        seen.add(name)


# ---------------------------------------------------------------------------
# Engine output
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ReconciliationWarning:
    """A supplied aggregate that disagrees with the recomputed one.

    ``category`` is ``None`` for the grand total.
    """

    category: Optional[str]
    supplied: Decimal
    recomputed: Decimal

    @property
    def is_grand_total(self) -> bool:
        return self.category is None

    @property
    def difference(self) -> Decimal:
        return self.supplied - self.recomputed


@dataclass(frozen=True)
class CrossTabRow:
    source_name: str
    cells: Tuple[Decimal, ...]
    total: Decimal


@dataclass(frozen=True)
class ReconciledTotal:
    value: Decimal
    recomputed: Decimal
    supplied: Optional[Decimal] = None
    warning: Optional[ReconciliationWarning] = None

    @property
    def reconciled(self) -> bool:
        return self.warning is None


@dataclass(frozen=True)
class CrossTabReport:
    period: Period
    categories: Tuple[str, ...]
    rows: Tuple[CrossTabRow, ...]
    column_totals: Tuple[ReconciledTotal, ...]
    grand_total: ReconciledTotal
    warnings: Tuple[ReconciliationWarning, ...] = field(default=())
    # Supplied totals for categories no source mentions; these are not columns.
    unmatched_totals: Tuple[Tuple[str, ReconciledTotal], ...] = field(default=())

    @property
    def is_empty(self) -> bool:
        return not self.rows

    @property
    def matrix(self) -> Tuple[Tuple[Decimal, ...], ...]:
        return tuple(row.cells for row in self.rows)

    @property
    def row_totals(self) -> Tuple[Decimal, ...]:
        return tuple(row.total for row in self.rows)

    def column_total(self, category: str) -> ReconciledTotal:
        try:
            return self.column_totals[self.categories.index(category)]
        except ValueError:
            raise KeyError(category) from None

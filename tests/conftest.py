"""Shared fixtures for the expense summary tests.

Logging is reset around every test: the CLI and the app factory configure the
package logger once per process, and a handler bound to an earlier test's
captured stream would leak into later tests.
"""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path

import pytest

from expense_summary.logging_setup import reset_logging
from expense_summary.models import CategoryAmount, Period, PeriodSummary, SourceSummary


@pytest.fixture(autouse=True)
def _reset_logging():
    reset_logging()
    yield
    reset_logging()


def _source(name: str, *pairs) -> SourceSummary:
    return SourceSummary(
        source_name=name,
        category_amounts=tuple(CategoryAmount(category_name=c, amount=Decimal(str(a))) for c, a in pairs),
    )


@pytest.fixture
def make_source():
    """Build a SourceSummary from (category, amount) pairs."""
    return _source


@pytest.fixture
def june() -> Period:
    return Period(year=2024, month=6, display_name="Haziran 2024")


@pytest.fixture
def two_source_summary(june: Period) -> PeriodSummary:
    """Card A spends on Food only; Card B on Food and Transport."""
    return PeriodSummary(
        period=june,
        sources=(
            _source("A", ("Food", 100)),
            _source("B", ("Food", 50), ("Transport", 30)),
        ),
        overall_category_totals=(
            CategoryAmount("Food", Decimal("150")),
            CategoryAmount("Transport", Decimal("30")),
        ),
        grand_total=Decimal("180"),
    )


SUMMARY_DTO = {
    "year": 2024,
    "month": 6,
    "periodName": "Haziran 2024",
    "sources": [
        {"sourceName": "A", "categorySummaries": [{"categoryName": "Food", "totalAmount": 100}]},
        {
            "sourceName": "B",
            "categorySummaries": [
                {"categoryName": "Food", "totalAmount": 50},
                {"categoryName": "Transport", "totalAmount": 30},
            ],
        },
    ],
    "overallCategoryTotals": [
        {"categoryName": "Food", "totalAmount": 999},
        {"categoryName": "Transport", "totalAmount": 30},
    ],
    "grandTotal": 180,
}


@pytest.fixture
def summary_dto() -> dict:
    return json.loads(json.dumps(SUMMARY_DTO))


@pytest.fixture
def summaries_dir(tmp_path: Path, summary_dto: dict) -> Path:
    directory = tmp_path / "summaries"
    directory.mkdir()
    (directory / "2024-06.json").write_text(json.dumps(summary_dto), encoding="utf-8")
    return directory


@pytest.fixture
def client(summaries_dir: Path):
    from expense_summary.webapp import create_app

    app = create_app(summaries_dir=summaries_dir)
    app.config["TESTING"] = True
    return app.test_client()

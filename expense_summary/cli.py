"""Command-line interface for the expense summary report.

Usage:
  expense-summary --input summaries/2024-06.json --locale en

Prints the sources x categories table for one period, logs reconciliation
warnings, and can export the report as JSON or CSV.
"""

from __future__ import annotations

import argparse
from typing import List, Optional

from .analytics import POLICIES, compute_report
from .config import AppConfig
from .data_loader import load_summary_file
from .locales import SUPPORTED_LOCALES, format_currency
from .logging_setup import configure_logging, get_logger
from .models import ValidationError
from .reports import export_report_csv, export_report_json, format_text_report

logger = get_logger("expense_summary.cli")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="expense-summary", description="Period expense cross-tabulation report")
    p.add_argument("--input", "-i", required=True, help="Period summary JSON file")
    p.add_argument("--config", "-c", help="Path to JSON config (locale, currency, tolerance, policy)")
    p.add_argument("--locale", "-l", help=f"Display locale ({', '.join(SUPPORTED_LOCALES)})")
    p.add_argument("--currency", help="Currency code used when formatting amounts")
    p.add_argument("--policy", choices=POLICIES, help="Which total to display when supplied and recomputed differ")
    p.add_argument("--json", dest="json_out", help="Write report JSON to path")
    p.add_argument("--csv", dest="csv_out", help="Write report CSV to path")
    p.add_argument("--log-level", default=None, help="Logging level (default: INFO)")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)

    try:
        cfg = AppConfig.load(args.config)
        locale = args.locale or cfg.locale
        currency = (args.currency or cfg.currency).upper()
        summary = load_summary_file(args.input)
        report = compute_report(summary, locale=locale, tolerance=cfg.tolerance, prefer=args.policy or cfg.prefer)
    except ValidationError as exc:
        logger.error("%s", exc)
        return 2

    for w in report.warnings:
        logger.warning(
            "Reconciliation mismatch for %s: supplied %s, recomputed %s",
            "grand total" if w.is_grand_total else repr(w.category),
            format_currency(w.supplied, locale, currency),
            format_currency(w.recomputed, locale, currency),
        )

    print(format_text_report(report, locale, currency))

    if args.json_out:
        export_report_json(report, args.json_out, locale, currency)
        print(f"\nSaved JSON report to: {args.json_out}")
    if args.csv_out:
        export_report_csv(report, args.csv_out)
        print(f"\nSaved CSV report to: {args.csv_out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

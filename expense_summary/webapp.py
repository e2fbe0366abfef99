"""Flask JSON API for period expense reports."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from flask import Flask, current_app, jsonify, request
from werkzeug.exceptions import BadRequest, HTTPException, NotFound

from .analytics import compute_report
from .config import AppConfig
from .data_loader import find_summary_file, load_summary_file, parse_summary
from .locales import get_profile
from .logging_setup import configure_logging, get_logger
from .models import Period, PeriodSummary, ValidationError
from .reports import report_to_dict

PACKAGE_ROOT = Path(__file__).resolve().parent
PROJECT_ROOT = PACKAGE_ROOT.parent

logger = get_logger(__name__)


def _report_response(summary: PeriodSummary):
    cfg: AppConfig = current_app.config["REPORT_CONFIG"]
    locale = get_profile(request.args.get("locale") or cfg.locale).tag
    currency = (request.args.get("currency") or cfg.currency).upper()
    prefer = (request.args.get("policy") or cfg.prefer).lower()
    report = compute_report(summary, locale=locale, tolerance=cfg.tolerance, prefer=prefer)
    for w in report.warnings:
        logger.warning(
            "%s: %s supplied %s, recomputed %s",
            summary.period.key,
            "grand total" if w.is_grand_total else repr(w.category),
            w.supplied,
            w.recomputed,
        )
    return jsonify(report_to_dict(report, locale, currency))


def create_app(summaries_dir: Optional[str | Path] = None, config_path: Optional[str] = None) -> Flask:
    app = Flask(__name__)
    configure_logging()

    cfg = AppConfig.load(_resolve_config_path(config_path))
    if summaries_dir is not None:
        cfg.summaries_dir = Path(summaries_dir)
    app.config["REPORT_CONFIG"] = cfg
    app.json.ensure_ascii = False

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return jsonify({"error": exc.description}), exc.code

    @app.route("/api/v1/summaries/expenses/<int:year>/<int:month>")
    def period_report(year: int, month: int):
        Period(year=year, month=month)
        directory = current_app.config["REPORT_CONFIG"].summaries_dir
        if directory is None:
            raise NotFound("No summaries directory is configured.")
        path = find_summary_file(directory, year, month)
        if path is None:
            raise NotFound(f"No summary for {year:04d}-{month:02d}.")
        return _report_response(load_summary_file(path))

    @app.route("/api/v1/reports", methods=["POST"])
    def report_from_body():
        raw = request.get_json(silent=True)
        if raw is None:
            raise BadRequest("Request body must be a JSON period summary.")
        return _report_response(parse_summary(raw))

    return app


def _resolve_config_path(config_path: Optional[str]) -> Optional[Path]:
    if not config_path:
        return None
    path = Path(config_path)
    if path.is_absolute():
        return path
    return PROJECT_ROOT / path


if __name__ == "__main__":
    create_app().run(debug=True)

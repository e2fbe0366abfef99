"""Configuration utilities for the expense summary tools.

Defaults live in code; a JSON file can override the display locale, the
currency, the reconciliation tolerance, the total policy and the directory
the web API reads period summaries from.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Optional

from .analytics import DEFAULT_TOLERANCE, POLICIES, PREFER_SUPPLIED
from .locales import DEFAULT_CURRENCY, get_profile
from .models import ValidationError, to_decimal

DEFAULT_LOCALE = "tr"


@dataclass
class AppConfig:
    locale: str = DEFAULT_LOCALE
    currency: str = DEFAULT_CURRENCY
    tolerance: Decimal = DEFAULT_TOLERANCE
    prefer: str = PREFER_SUPPLIED
    summaries_dir: Optional[Path] = None

    @staticmethod
    def load(config_path: Optional[str | Path] = None) -> "AppConfig":
        """Load config from JSON if provided, else use defaults.

        JSON format:
        {
          "locale": "en",
          "currency": "USD",
          "tolerance": "0.01",
          "prefer": "supplied",
          "summaries_dir": "data/summaries"
        }

        A relative ``summaries_dir`` is resolved against the config file's
        directory.
        """

        cfg = AppConfig()
        if not config_path:
            return cfg
        p = Path(config_path)
        if not p.exists():
            return cfg
        with p.open("r", encoding="utf-8") as f:
            try:
                raw = json.load(f)
            except json.JSONDecodeError as exc:
                raise ValidationError(f"{p.name}: invalid JSON ({exc.msg})") from exc
        if not isinstance(raw, dict):
            raise ValidationError(f"{p.name}: expected a JSON object")

        if raw.get("locale") is not None:
            cfg.locale = get_profile(str(raw["locale"])).tag
        if raw.get("currency"):
            cfg.currency = str(raw["currency"]).strip().upper()
        if raw.get("tolerance") is not None:
            cfg.tolerance = to_decimal(raw["tolerance"], "tolerance")
            if cfg.tolerance < 0:
                raise ValidationError(f"{p.name}: tolerance must not be negative")
        if raw.get("prefer") is not None:
            prefer = str(raw["prefer"]).strip().lower()
            if prefer not in POLICIES:
                raise ValidationError(f"{p.name}: unknown total policy {prefer!r}")
            cfg.prefer = prefer
        if raw.get("summaries_dir"):
            summaries = Path(str(raw["summaries_dir"]))
            cfg.summaries_dir = summaries if summaries.is_absolute() else p.parent / summaries
        return cfg

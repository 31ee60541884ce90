"""Environment-driven settings and logging setup."""

from __future__ import annotations

import logging
import os
from pathlib import Path

DEFAULT_INFLATION_LIST = os.environ.get("INFLATION_LIST", "inflationratelist.json")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "WARNING")

CACHE_DIR = Path(
    os.environ.get(
        "INFLATIONCALC_CACHE_DIR", str(Path.home() / ".inflationcalc" / "cache")
    )
)
CACHE_STALENESS_DAYS = int(os.environ.get("INFLATIONCALC_CACHE_STALENESS_DAYS", "30"))

HTTP_TIMEOUT = float(os.environ.get("INFLATIONCALC_HTTP_TIMEOUT", "30"))

DEFAULT_IMPORT_BASE_YEAR = 2015


def configure_logging(level_name: str | None = None) -> None:
    level_name = level_name or LOG_LEVEL
    level = getattr(logging, level_name.upper(), logging.WARNING)

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        force=True,
    )
    logging.getLogger(__name__).debug("Logging configured, level=%s", level_name)

"""JSON encoding of rate tables and local file persistence.

File layout:
    {"countries": [{"name": ..., "aliases": [...], "code": ...,
                    "base_year": 2015, "inflation": {"2015": {"01": 0.1}}}]}
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any

from inflationcalc.errors import TableFormatError
from inflationcalc.models import Country, RateTable

logger = logging.getLogger(__name__)


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


# --- Decoding ---


def _year_key(raw: str, country: str) -> str:
    try:
        return str(int(raw))
    except ValueError as exc:
        raise TableFormatError(f"Invalid year {raw!r} for country {country!r}") from exc


def _month_key(raw: str, year: str, country: str) -> str:
    try:
        month = int(raw)
    except ValueError as exc:
        raise TableFormatError(
            f"Invalid month {raw!r} in {year} for country {country!r}"
        ) from exc
    if not 1 <= month <= 12:
        raise TableFormatError(
            f"Month {raw!r} in {year} out of range for country {country!r}"
        )
    return f"{month:02d}"


def _rate(raw: Any, key: str, country: str) -> float:
    # bool is an int subclass but never a valid rate
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise TableFormatError(f"Rate for {key} in {country!r} is not a number: {raw!r}")
    if not math.isfinite(raw):
        raise TableFormatError(f"Rate for {key} in {country!r} is not finite: {raw!r}")
    return float(raw)


def _parse_inflation(raw: Any, country: str) -> dict[str, dict[str, float]]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise TableFormatError(f"'inflation' of {country!r} must be an object")

    inflation: dict[str, dict[str, float]] = {}
    for raw_year, raw_months in raw.items():
        year = _year_key(raw_year, country)
        if year in inflation:
            raise TableFormatError(f"Duplicate year {year} for country {country!r}")
        if raw_months is None:
            raw_months = {}
        if not isinstance(raw_months, dict):
            raise TableFormatError(f"Year {year} of {country!r} must be an object")

        months: dict[str, float] = {}
        for raw_month, raw_rate in raw_months.items():
            month = _month_key(raw_month, year, country)
            if month in months:
                raise TableFormatError(
                    f"Duplicate month {month} in {year} for country {country!r}"
                )
            months[month] = _rate(raw_rate, f"{year}-{month}", country)
        inflation[year] = months
    return inflation


def _parse_country(raw: Any) -> Country:
    if not isinstance(raw, dict):
        raise TableFormatError(f"Country entry must be an object, got {raw!r}")

    name = raw.get("name") or ""
    code = raw.get("code") or ""
    if not isinstance(name, str) or not isinstance(code, str):
        raise TableFormatError(f"'name' and 'code' must be strings, got {name!r}, {code!r}")
    aliases = raw.get("aliases") or []
    base_year = raw.get("base_year") or 0
    if not isinstance(aliases, list) or not all(isinstance(a, str) for a in aliases):
        raise TableFormatError(f"'aliases' of {name!r} must be a list of strings")
    if isinstance(base_year, bool) or not isinstance(base_year, int):
        raise TableFormatError(f"'base_year' of {name!r} must be an integer")

    return Country(
        name=name,
        code=code,
        aliases=list(aliases),
        base_year=base_year,
        inflation=_parse_inflation(raw.get("inflation"), name),
    )


def parse_table(data: Any) -> RateTable:
    """Build a RateTable from decoded JSON. Raises TableFormatError."""
    if not isinstance(data, dict):
        raise TableFormatError("Rate table must be a JSON object")
    countries = data.get("countries") or []
    if not isinstance(countries, list):
        raise TableFormatError("'countries' must be a list")
    return RateTable(countries=[_parse_country(c) for c in countries])


# --- Encoding ---


def dump_table(table: RateTable) -> dict[str, Any]:
    """Plain-dict form of the table; empty aliases and inflation stay present."""
    return {
        "countries": [
            {
                "name": c.name,
                "aliases": list(c.aliases),
                "code": c.code,
                "base_year": c.base_year,
                "inflation": {
                    year: dict(sorted(c.inflation[year].items()))
                    for year in sorted(c.inflation, key=int)
                },
            }
            for c in table.countries
        ]
    }


# --- Files ---


def read_table(path: str | Path) -> RateTable:
    path = Path(path)
    logger.debug("Reading rate table from %s", path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as exc:
        raise TableFormatError(f"{path} is not UTF-8 encoded: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise TableFormatError(f"{path} is not valid JSON: {exc}") from exc
    return parse_table(data)


def save_table(table: RateTable, path: str | Path) -> None:
    path = Path(path)
    text = json.dumps(dump_table(table), indent=2, allow_nan=False)
    path.write_text(text, encoding="utf-8")
    logger.info("Saved %d countries to %s", len(table.countries), path)

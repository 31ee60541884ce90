"""CSV import of monthly rates into a country of a rate table.

The CSV needs a header with ``date`` and ``value`` columns (any case).
Dates like ``2023-04-01`` are cut to ``2023-04``; values may be quoted and
may use a comma as decimal separator. Bad rows are skipped and counted.
"""

from __future__ import annotations

import csv
import logging
import math
from datetime import datetime
from pathlib import Path

from inflationcalc import rates
from inflationcalc.config import DEFAULT_IMPORT_BASE_YEAR
from inflationcalc.errors import CountryNotFoundError, ImportFormatError
from inflationcalc.models import Country, ImportSummary, RateTable

logger = logging.getLogger(__name__)


def _resolve_or_create(table: RateTable, query: str, base_year: int) -> tuple[int, bool]:
    try:
        idx = rates.find_country(table, query)
    except CountryNotFoundError:
        logger.info("Country %r not found; creating a new entry", query)
        table.countries.append(
            Country(name=query, code=query, aliases=[], base_year=base_year)
        )
        return len(table.countries) - 1, True

    country = table.countries[idx]
    if country.base_year == 0:
        country.base_year = base_year
    return idx, False


def _header_indexes(header: list[str]) -> tuple[int, int]:
    date_idx = value_idx = -1
    for i, name in enumerate(header):
        lowered = name.strip().lower()
        if lowered == "date":
            date_idx = i
        elif lowered == "value":
            value_idx = i
    if date_idx == -1 or value_idx == -1:
        raise ImportFormatError("CSV file must have 'date' and 'value' columns")
    return date_idx, value_idx


def parse_month(raw: str) -> tuple[int, int] | None:
    """``YYYY-MM[...]`` -> (year, month), or None if it does not parse."""
    if len(raw) < 7:
        return None
    try:
        parsed = datetime.strptime(raw[:7], "%Y-%m")
    except ValueError:
        return None
    return parsed.year, parsed.month


def parse_value(raw: str) -> float | None:
    """Finite float from a quoted or comma-decimal field, else None.

    Stricter than ``float()``: no surrounding whitespace, no ``_`` digit
    separators, no nan or infinity.
    """
    cleaned = raw.strip('"').replace(",", ".")
    if not cleaned or cleaned != cleaned.strip() or "_" in cleaned:
        return None
    try:
        value = float(cleaned)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def import_csv(
    table: RateTable,
    query: str,
    csv_text: str,
    base_year: int = DEFAULT_IMPORT_BASE_YEAR,
) -> ImportSummary:
    """Apply every valid CSV row to the country matching ``query``.

    The country is created when missing; an existing country without a
    base year gets ``base_year``. Later rows overwrite earlier ones for the
    same month.
    """
    rows = list(csv.reader(csv_text.splitlines()))
    if not rows:
        raise ImportFormatError("CSV file is empty")
    date_idx, value_idx = _header_indexes(rows[0])

    idx, created = _resolve_or_create(table, query, base_year)
    country = table.countries[idx]
    summary = ImportSummary(country_index=idx, created=created)

    for line_no, row in enumerate(rows[1:], start=2):
        if not row:
            continue
        if len(row) <= max(date_idx, value_idx):
            logger.warning("Skipping line %d: expected more columns, got %r", line_no, row)
            summary.skipped += 1
            continue

        raw_date, raw_value = row[date_idx], row[value_idx]
        when = parse_month(raw_date)
        if when is None:
            logger.warning("Skipping line %d: invalid date %r", line_no, raw_date)
            summary.skipped += 1
            continue
        value = parse_value(raw_value)
        if value is None:
            logger.warning("Skipping line %d: invalid value %r", line_no, raw_value)
            summary.skipped += 1
            continue

        year, month = when
        country.inflation.setdefault(str(year), {})[f"{month:02d}"] = value
        summary.imported += 1

    logger.info(
        "Imported %d rows into %s, skipped %d",
        summary.imported, country.name, summary.skipped,
    )
    return summary


def import_csv_file(
    table: RateTable,
    query: str,
    path: str | Path,
    base_year: int = DEFAULT_IMPORT_BASE_YEAR,
) -> ImportSummary:
    # utf-8-sig drops a leading BOM; undecodable bytes become U+FFFD and
    # only fail the rows that read them
    text = Path(path).read_text(encoding="utf-8-sig", errors="replace")
    return import_csv(table, query, text, base_year)

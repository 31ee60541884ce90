"""Data models for rate tables, cache entries and import results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True)
class Country:
    name: str
    code: str
    aliases: list[str] = field(default_factory=list)
    base_year: int = 0  # 0 means no base year configured
    inflation: dict[str, dict[str, float]] = field(default_factory=dict)  # "YYYY" -> "MM" -> rate


@dataclass(slots=True)
class RateTable:
    countries: list[Country] = field(default_factory=list)


@dataclass(slots=True)
class TableCacheEntry:
    source: str
    last_updated: datetime
    table: RateTable


@dataclass(slots=True)
class ImportSummary:
    country_index: int
    created: bool
    imported: int = 0
    skipped: int = 0

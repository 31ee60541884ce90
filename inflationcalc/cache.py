"""File-based caching for rate tables downloaded from a URL.

Cache layout:
    ~/.inflationcalc/cache/
        table_<sha1 of url>.json
"""

from __future__ import annotations

import hashlib
import json
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path

from inflationcalc import config
from inflationcalc.models import TableCacheEntry
from inflationcalc.store import dump_table, parse_table

logger = logging.getLogger(__name__)

CACHE_DIR = config.CACHE_DIR
STALENESS_DAYS = config.CACHE_STALENESS_DAYS


def _ensure_cache_dir() -> None:
    CACHE_DIR.mkdir(parents=True, exist_ok=True)


def _table_path(source: str) -> Path:
    digest = hashlib.sha1(source.encode("utf-8")).hexdigest()[:16]
    return CACHE_DIR / f"table_{digest}.json"


def load_table_cache(source: str) -> TableCacheEntry | None:
    path = _table_path(source)
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return TableCacheEntry(
            source=data["source"],
            last_updated=datetime.fromisoformat(data["last_updated"]),
            table=parse_table(data["table"]),
        )
    except (json.JSONDecodeError, KeyError, ValueError) as exc:
        logger.warning("Ignoring unreadable cache file %s: %s", path, exc)
        return None


def save_table_cache(entry: TableCacheEntry) -> None:
    _ensure_cache_dir()
    data = {
        "source": entry.source,
        "last_updated": entry.last_updated.isoformat(),
        "table": dump_table(entry.table),
    }
    path = _table_path(entry.source)
    path.write_text(json.dumps(data, indent=2, allow_nan=False), encoding="utf-8")
    logger.info("Cached %s at %s", entry.source, path)


def _older_than_staleness(updated: datetime) -> bool:
    if updated.tzinfo is None:
        updated = updated.replace(tzinfo=timezone.utc)
    return datetime.now(timezone.utc) - updated > timedelta(days=STALENESS_DAYS)


def is_stale(entry: TableCacheEntry) -> bool:
    return _older_than_staleness(entry.last_updated)


# --- Cache management ---


def _cached_tables() -> list[Path]:
    if not CACHE_DIR.exists():
        return []
    return sorted(p for p in CACHE_DIR.glob("table_*.json") if p.is_file())


def cache_status() -> list[dict]:
    """One row per cached rate table: file, source URL, size, age and staleness.

    Files that no longer decode are listed with ``source`` set to None.
    """
    rows = []
    for path in _cached_tables():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            source = data["source"]
            updated = datetime.fromisoformat(data["last_updated"])
        except (KeyError, TypeError, ValueError):
            source, updated = None, None
        rows.append({
            "file": path.name,
            "source": source,
            "size_bytes": path.stat().st_size,
            "last_updated": updated.isoformat() if updated else None,
            "stale": updated is None or _older_than_staleness(updated),
        })
    return rows


def clear_cache() -> int:
    """Remove every cached rate table and return how many were removed."""
    removed = _cached_tables()
    for path in removed:
        path.unlink()
    logger.info("Removed %d cached tables from %s", len(removed), CACHE_DIR)
    return len(removed)

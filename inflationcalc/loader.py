"""Load a rate table from a local file or a URL.

Data flow for a URL source:
    1. Check cache (skip if fresh and caching is enabled)
    2. Fetch from the URL
    3. Save the response to cache when caching is enabled
    4. On fetch failure, fall back to any cached copy, stale or not
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import httpx

from inflationcalc import cache, config, store
from inflationcalc.errors import TableFormatError
from inflationcalc.models import RateTable, TableCacheEntry

logger = logging.getLogger(__name__)


async def fetch_table(client: httpx.AsyncClient, url: str) -> RateTable:
    """Download and decode a rate table."""
    logger.info("Fetching rate table from %s", url)
    resp = await client.get(url)
    resp.raise_for_status()
    try:
        data = resp.json()
    except ValueError as exc:  # JSONDecodeError and UnicodeDecodeError
        raise TableFormatError(f"{url} did not return valid JSON: {exc}") from exc
    return store.parse_table(data)


async def load_table(
    source: str,
    use_cache: bool = False,
    force_refresh: bool = False,
    client: httpx.AsyncClient | None = None,
) -> tuple[RateTable, list[str]]:
    """Load the rate table from ``source``.

    Returns (table, warnings_list).
    """
    warnings: list[str] = []

    if not store.is_url(source):
        return store.read_table(source), warnings

    # 1. Check cache
    if use_cache and not force_refresh:
        cached = cache.load_table_cache(source)
        if cached is not None and not cache.is_stale(cached):
            logger.info("Using cached rate table for %s", source)
            return cached.table, warnings

    # 2. Fetch
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=config.HTTP_TIMEOUT) as own_client:
                table = await fetch_table(own_client, source)
        else:
            table = await fetch_table(client, source)
    except httpx.HTTPError as exc:
        # 4. Any cached copy beats failing outright
        stale = cache.load_table_cache(source)
        if stale is None:
            raise
        warnings.append(
            f"Could not fetch {source} ({exc}); using cached copy from "
            f"{stale.last_updated:%Y-%m-%d}."
        )
        return stale.table, warnings

    # 3. Save to cache
    if use_cache:
        cache.save_table_cache(
            TableCacheEntry(
                source=source,
                last_updated=datetime.now(timezone.utc),
                table=table,
            )
        )
    return table, warnings

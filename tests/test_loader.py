"""Tests for loading rate tables from files and URLs."""

from datetime import UTC, datetime, timedelta

import httpx
import pytest
import pytest_httpx

from inflationcalc import cache, loader, store
from inflationcalc.errors import TableFormatError
from inflationcalc.models import RateTable, TableCacheEntry

URL = "https://example.com/inflationratelist.json"


def _cache_entry(table: RateTable, age_days: int = 0) -> TableCacheEntry:
    return TableCacheEntry(
        source=URL,
        last_updated=datetime.now(UTC) - timedelta(days=age_days),
        table=table,
    )


@pytest.mark.asyncio
async def test_load_local_file(table, tmp_path):
    path = tmp_path / "rates.json"
    store.save_table(table, path)

    loaded, warnings = await loader.load_table(str(path))

    assert loaded == table
    assert warnings == []


@pytest.mark.asyncio
async def test_fetch_table(table, httpx_mock: pytest_httpx.HTTPXMock):
    httpx_mock.add_response(url=URL, json=store.dump_table(table))

    async with httpx.AsyncClient() as client:
        fetched = await loader.fetch_table(client, URL)

    assert fetched == table


@pytest.mark.asyncio
async def test_fetch_invalid_json(httpx_mock: pytest_httpx.HTTPXMock):
    httpx_mock.add_response(url=URL, text="<html>oops</html>")

    async with httpx.AsyncClient() as client:
        with pytest.raises(TableFormatError):
            await loader.fetch_table(client, URL)


@pytest.mark.asyncio
async def test_fetch_undecodable_body(httpx_mock: pytest_httpx.HTTPXMock):
    httpx_mock.add_response(url=URL, content=b'{"countries": \xff\xfe}')

    async with httpx.AsyncClient() as client:
        with pytest.raises(TableFormatError, match="did not return valid JSON"):
            await loader.fetch_table(client, URL)


@pytest.mark.asyncio
async def test_load_url_without_cache(table, httpx_mock: pytest_httpx.HTTPXMock):
    httpx_mock.add_response(url=URL, json=store.dump_table(table))

    loaded, warnings = await loader.load_table(URL)

    assert loaded == table
    assert warnings == []
    assert cache.load_table_cache(URL) is None


@pytest.mark.asyncio
async def test_load_url_saves_cache(table, httpx_mock: pytest_httpx.HTTPXMock):
    httpx_mock.add_response(url=URL, json=store.dump_table(table))

    await loader.load_table(URL, use_cache=True)

    cached = cache.load_table_cache(URL)
    assert cached is not None
    assert cached.table == table


@pytest.mark.asyncio
async def test_fresh_cache_skips_fetch(table, httpx_mock: pytest_httpx.HTTPXMock):
    cache.save_table_cache(_cache_entry(table))

    loaded, _ = await loader.load_table(URL, use_cache=True)

    assert loaded == table
    assert httpx_mock.get_requests() == []


@pytest.mark.asyncio
async def test_refresh_ignores_fresh_cache(table, httpx_mock: pytest_httpx.HTTPXMock):
    cache.save_table_cache(_cache_entry(RateTable()))
    httpx_mock.add_response(url=URL, json=store.dump_table(table))

    loaded, _ = await loader.load_table(URL, use_cache=True, force_refresh=True)

    assert loaded == table


@pytest.mark.asyncio
async def test_fetch_failure_falls_back_to_stale_cache(
    table, httpx_mock: pytest_httpx.HTTPXMock
):
    cache.save_table_cache(_cache_entry(table, age_days=90))
    httpx_mock.add_response(url=URL, status_code=503)

    loaded, warnings = await loader.load_table(URL, use_cache=True)

    assert loaded == table
    assert any("cached copy" in w for w in warnings)


@pytest.mark.asyncio
async def test_fetch_failure_without_cache_raises(httpx_mock: pytest_httpx.HTTPXMock):
    httpx_mock.add_exception(httpx.ConnectError("connection refused"))

    with pytest.raises(httpx.ConnectError):
        await loader.load_table(URL)

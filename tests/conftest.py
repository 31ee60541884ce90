"""Shared fixtures: a small two-country rate table."""

from __future__ import annotations

import pytest

from inflationcalc.models import Country, RateTable

_MONTHS = [f"{m:02d}" for m in range(1, 13)]


def _year(*values: float) -> dict[str, float]:
    return dict(zip(_MONTHS, values, strict=True))


def make_table() -> RateTable:
    return RateTable(
        countries=[
            Country(
                name="United States",
                code="US",
                aliases=["US", "USA"],
                base_year=2015,
                inflation={
                    "2015": _year(0.1, 0.2, 0.3, 0.2, 0.1, 0.3, 0.2, 0.1, 0.3, 0.2, 0.1, 0.3),
                    "2016": _year(0.15, 0.25, 0.35, 0.25, 0.15, 0.35, 0.25, 0.15, 0.35, 0.25, 0.15, 0.35),
                    "2018": _year(0.2, 0.3, 0.4, 0.3, 0.2, 0.4, 0.3, 0.2, 0.4, 0.3, 0.2, 0.4),
                },
            ),
            Country(
                name="Germany",
                code="DE",
                aliases=["DE", "GER"],
                base_year=2015,
                inflation={
                    "2015": _year(0.05, 0.07, 0.06, 0.08, 0.07, 0.09, 0.06, 0.05, 0.07, 0.06, 0.05, 0.07),
                    "2018": _year(0.1, 0.12, 0.11, 0.13, 0.12, 0.14, 0.11, 0.1, 0.12, 0.11, 0.1, 0.12),
                },
            ),
            Country(
                name="Freedonia",
                code="FD",
                aliases=[],
                base_year=0,
                inflation={
                    "2019": {"03": 0.5, "07": 1.5},
                    "2020": {},
                    "2021": {"01": 0.0, "02": 0.4},
                },
            ),
        ]
    )


@pytest.fixture
def table() -> RateTable:
    return make_table()


@pytest.fixture(autouse=True)
def isolate_cache(tmp_path, monkeypatch):
    """Redirect cache to tmp dir so tests don't pollute the real cache."""
    monkeypatch.setattr("inflationcalc.cache.CACHE_DIR", tmp_path / "cache")

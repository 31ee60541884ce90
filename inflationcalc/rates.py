"""Country resolution and rate queries over an in-memory rate table.

Every rate read goes through :func:`year_inflation`; both comparisons build
on it so averaging and error behaviour stay identical everywhere.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from inflationcalc import calculator
from inflationcalc.errors import (
    BaseYearNotSetError,
    CountryNotFoundError,
    InflationError,
    InvalidMonthError,
    MonthNotFoundError,
    NoMonthlyDataError,
    YearNotFoundError,
    ZeroRateError,
)
from inflationcalc.models import Country, RateTable

logger = logging.getLogger(__name__)


# --- Country lookup ---


def _matches(country: Country, query: str) -> bool:
    if country.name.lower() == query or country.code.lower() == query:
        return True
    return any(alias.lower() == query for alias in country.aliases)


def find_country(table: RateTable, query: str) -> int:
    """Index of the first country whose name, code or alias equals ``query``.

    Matching is case-insensitive. Callers that need to update the country
    mutate ``table.countries[index]`` directly.
    """
    needle = query.lower()
    for idx, country in enumerate(table.countries):
        if _matches(country, needle):
            return idx
    raise CountryNotFoundError(query)


def get_country(table: RateTable, query: str) -> Country:
    return table.countries[find_country(table, query)]


# --- Rate lookup ---


def year_inflation(table: RateTable, query: str, year: int, month: int) -> float:
    """Rate for ``year``/``month``; month 0 averages the populated months."""
    if month < 0 or month > 12:
        raise InvalidMonthError(month)

    country = get_country(table, query)
    months = country.inflation.get(str(year))
    if months is None:
        raise YearNotFoundError(year, query)

    if month == 0:
        if not months:
            raise NoMonthlyDataError(year, query)
        return calculator.average_rate(months.values())

    rate = months.get(f"{month:02d}")
    if rate is None:
        raise MonthNotFoundError(year, month, query)
    return rate


@contextmanager
def _tagged(role: str) -> Iterator[None]:
    try:
        yield
    except InflationError as exc:
        exc.role = role
        raise


def _reference_rate(
    table: RateTable, query: str, year: int, month: int, role: str
) -> float:
    with _tagged(role):
        rate = year_inflation(table, query, year, month)
        if rate == 0:
            raise ZeroRateError(year, month, query)
    return rate


# --- Comparisons ---


def compare_inflation(
    table: RateTable,
    query: str,
    from_year: int,
    from_month: int,
    to_year: int,
    to_month: int,
    price: float,
) -> tuple[float, float]:
    """Adjust ``price`` between two dates.

    Returns (new_price, cumulative_rate_pct). The "from" date is evaluated
    first, so its error wins when both dates are unavailable.
    """
    from_rate = _reference_rate(table, query, from_year, from_month, "from")
    with _tagged("to"):
        to_rate = year_inflation(table, query, to_year, to_month)

    factor = calculator.inflation_factor(from_rate, to_rate)
    logger.debug(
        "compare %s: %s/%s -> %s/%s factor=%s",
        query, from_year, from_month, to_year, to_month, factor,
    )
    return calculator.adjust_price(price, factor), calculator.cumulative_rate(factor)


def compare_with_base_year(
    table: RateTable,
    query: str,
    target_year: int,
    target_month: int,
    price: float,
) -> float:
    """Adjust ``price`` from the country's base year to the target date.

    The base side always uses the whole-year average, whatever the
    granularity of the target date. Only the adjusted price is returned.
    """
    country = get_country(table, query)
    if country.base_year == 0:
        raise BaseYearNotSetError(query)

    base_rate = _reference_rate(table, query, country.base_year, 0, "base")
    with _tagged("target"):
        target_rate = year_inflation(table, query, target_year, target_month)

    factor = calculator.inflation_factor(base_rate, target_rate)
    return calculator.adjust_price(price, factor)


# --- Coverage ---


def available_years(country: Country) -> list[int]:
    return sorted(int(year) for year in country.inflation)


def _populated_dates(country: Country) -> list[tuple[int, int]]:
    return [
        (int(year), int(month))
        for year, months in country.inflation.items()
        for month in months
    ]


def first_date(country: Country) -> tuple[int, int] | None:
    """Earliest populated (year, month), or None when there is no data."""
    dates = _populated_dates(country)
    return min(dates) if dates else None


def last_date(country: Country) -> tuple[int, int] | None:
    """Latest populated (year, month), or None when there is no data."""
    dates = _populated_dates(country)
    return max(dates) if dates else None

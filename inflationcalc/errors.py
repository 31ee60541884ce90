"""Error taxonomy for rate lookups, comparisons and table I/O."""

from __future__ import annotations


class InflationError(Exception):
    """Base class for every error raised by inflationcalc.

    ``role`` is set by the comparison operations to tell which side of the
    comparison failed: ``"from"``/``"to"`` for two-date comparisons and
    ``"base"``/``"target"`` for base-year comparisons.
    """

    role: str | None = None


class RateLookupError(InflationError, LookupError):
    pass


class CountryNotFoundError(RateLookupError):
    def __init__(self, query: str) -> None:
        self.query = query
        super().__init__(f"country '{query}' not found")


class YearNotFoundError(RateLookupError):
    def __init__(self, year: int, country: str) -> None:
        self.year = year
        self.country = country
        super().__init__(
            f"inflation data for year {year} not found for country '{country}'"
        )


class NoMonthlyDataError(RateLookupError):
    def __init__(self, year: int, country: str) -> None:
        self.year = year
        self.country = country
        super().__init__(
            f"no monthly data available for year {year} in country '{country}'"
        )


class MonthNotFoundError(RateLookupError):
    def __init__(self, year: int, month: int, country: str) -> None:
        self.year = year
        self.month = month
        self.country = country
        super().__init__(
            f"inflation data for {year}-{month:02d} not found for country '{country}'"
        )


class InvalidMonthError(InflationError, ValueError):
    def __init__(self, month: int) -> None:
        self.month = month
        super().__init__(f"invalid month: {month}")


class BaseYearNotSetError(InflationError):
    def __init__(self, country: str) -> None:
        self.country = country
        super().__init__(f"base year not set for country '{country}'")


class ZeroRateError(InflationError, ZeroDivisionError):
    """The reference rate of a comparison is exactly zero."""

    def __init__(self, year: int, month: int, country: str) -> None:
        self.year = year
        self.month = month
        self.country = country
        when = str(year) if month == 0 else f"{year}-{month:02d}"
        super().__init__(
            f"inflation rate for {when} is zero for country '{country}'; "
            "cannot use it as a reference"
        )


class TableFormatError(InflationError, ValueError):
    """The rate table JSON does not have the expected shape."""


class ImportFormatError(InflationError, ValueError):
    """The CSV import file is empty or lacks the required columns."""

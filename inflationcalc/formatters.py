"""Output formatters for command results and the country list."""

from __future__ import annotations

import io
import json
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table

from inflationcalc import rates
from inflationcalc.models import Country, RateTable


def fmt_date(year: int, month: int) -> str:
    """``2015`` for a whole year, ``2015-06`` for a month."""
    return str(year) if month == 0 else f"{year}-{month:02d}"


def format_rate(country: str, year: int, month: int, rate: float) -> str:
    if month == 0:
        return f"Average inflation rate for {country} in {year} is {rate:.2f}%"
    return f"Inflation rate for {country} in {fmt_date(year, month)} is {rate:.2f}%"


def format_comparison(
    country: str,
    from_year: int,
    from_month: int,
    to_year: int,
    to_month: int,
    new_price: float,
    cumulative: float,
) -> str:
    return (
        f"Price adjusted for inflation from {fmt_date(from_year, from_month)} "
        f"to {fmt_date(to_year, to_month)} in {country}: {new_price:.2f}\n"
        f"Cumulative rate of inflation: {cumulative:.2f}%"
    )


def format_base_comparison(
    country: str,
    base_year: int,
    target_year: int,
    target_month: int,
    new_price: float,
) -> str:
    return (
        f"Price adjusted for inflation relative to Base Year ({base_year}) "
        f"to {fmt_date(target_year, target_month)} in {country}: {new_price:.2f}"
    )


def _fmt_range(country: Country) -> str:
    first = rates.first_date(country)
    last = rates.last_date(country)
    if first is None or last is None:
        return "—"
    return f"{fmt_date(*first)} → {fmt_date(*last)}"


def format_countries_table(table: RateTable) -> str:
    """Format the country list as a Rich table rendered to string."""
    buf = io.StringIO()
    rich_console = Console(file=buf, width=120, no_color=True)

    out = Table(box=box.SIMPLE_HEAD, pad_edge=False)
    out.add_column("Name", style="bold")
    out.add_column("Code")
    out.add_column("Aliases")
    out.add_column("Base Year", justify="right")
    out.add_column("Data", justify="right")

    for c in table.countries:
        out.add_row(
            c.name,
            c.code,
            ", ".join(c.aliases) or "—",
            str(c.base_year) if c.base_year else "—",
            _fmt_range(c),
        )

    rich_console.print("Available Countries:")
    rich_console.print(out)
    return buf.getvalue()


def format_countries_json(table: RateTable) -> str:
    data: list[dict[str, Any]] = []
    for c in table.countries:
        first = rates.first_date(c)
        last = rates.last_date(c)
        data.append({
            "name": c.name,
            "code": c.code,
            "aliases": list(c.aliases),
            "base_year": c.base_year or None,
            "first_date": fmt_date(*first) if first else None,
            "last_date": fmt_date(*last) if last else None,
        })
    return json.dumps({"countries": data}, indent=2)


def format_country_info(country: Country) -> str:
    years = rates.available_years(country)
    lines = [
        f"{country.name} (Code: {country.code})",
        f"Aliases: {', '.join(country.aliases) or '—'}",
        f"Base Year: {country.base_year or 'not set'}",
        f"Years: {', '.join(str(y) for y in years) or '—'}",
        f"Range: {_fmt_range(country)}",
    ]
    return "\n".join(lines)

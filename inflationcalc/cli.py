"""CLI entry point for inflationcalc."""

from __future__ import annotations

import asyncio
import sys
from typing import NoReturn

import click
import httpx

from inflationcalc import cache, config, formatters, importer, loader, rates, store
from inflationcalc.errors import InflationError
from inflationcalc.models import RateTable

# Lets PRICE take negative numbers such as -10 without being read as an option.
_PRICE_COMMAND_SETTINGS = {"ignore_unknown_options": True}

_ROLE_LABELS = {
    "from": "from date",
    "to": "to date",
    "base": "base year",
    "target": "target date",
}


def parse_date(value: str) -> tuple[int, int]:
    """Parse ``YYYY`` or ``YYYY-MM`` into (year, month); month is 0 for a year."""
    if len(value) == 4 and value.isdigit():
        return int(value), 0
    if len(value) == 7 and value[4] == "-":
        year_part, month_part = value[:4], value[5:]
        if year_part.isdigit() and month_part.isdigit():
            month = int(month_part)
            if 1 <= month <= 12:
                return int(year_part), month
            raise click.BadParameter(f"Invalid month in date: {value!r}")
    raise click.BadParameter(f"Invalid date format: {value!r}. Use YYYY or YYYY-MM.")


class DateParam(click.ParamType):
    name = "date"

    def convert(self, value, param, ctx):  # type: ignore[no-untyped-def]
        if isinstance(value, tuple):
            return value
        try:
            return parse_date(value)
        except click.BadParameter as exc:
            self.fail(exc.message, param, ctx)


DATE = DateParam()


def _fail(message: str) -> NoReturn:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _describe(exc: InflationError) -> str:
    label = _ROLE_LABELS.get(exc.role or "")
    if label:
        return f"fetching {label} inflation rate: {exc}"
    return str(exc)


def _load(ctx: click.Context) -> RateTable:
    opts = ctx.obj
    try:
        table, warnings = asyncio.run(
            loader.load_table(
                opts["inflation_list"],
                use_cache=opts["cache"],
                force_refresh=opts["refresh"],
            )
        )
    except (InflationError, httpx.HTTPError, OSError) as exc:
        _fail(f"loading data: {exc}")
    for w in warnings:
        click.echo(f"Warning: {w}", err=True)
    return table


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--inflation-list",
    default=config.DEFAULT_INFLATION_LIST,
    show_default=True,
    help="Path or URL to the inflation rate list JSON file",
)
@click.option(
    "--cache",
    "use_cache",
    is_flag=True,
    help="Cache the inflation list when downloaded from URL",
)
@click.option("--refresh", is_flag=True, help="Ignore a fresh cached inflation list")
@click.option(
    "--log-level",
    default=config.LOG_LEVEL,
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging verbosity",
)
@click.pass_context
def main(
    ctx: click.Context,
    inflation_list: str,
    use_cache: bool,
    refresh: bool,
    log_level: str,
) -> None:
    """Inflation Calculator.

    Calculates inflation-adjusted prices from monthly inflation rates per country.
    """
    config.configure_logging(log_level)
    ctx.obj = {"inflation_list": inflation_list, "cache": use_cache, "refresh": refresh}


@main.command("year")
@click.argument("country")
@click.argument("date", type=DATE)
@click.pass_context
def year_cmd(ctx: click.Context, country: str, date: tuple[int, int]) -> None:
    """Get inflation rate for a specific year (average) or month."""
    table = _load(ctx)
    year, month = date
    try:
        rate = rates.year_inflation(table, country, year, month)
    except InflationError as exc:
        _fail(f"fetching inflation rate: {exc}")
    click.echo(formatters.format_rate(country, year, month, rate))


@main.command("compare", context_settings=_PRICE_COMMAND_SETTINGS)
@click.argument("country")
@click.argument("from_date", type=DATE)
@click.argument("to_date", type=DATE)
@click.argument("price", type=float)
@click.pass_context
def compare_cmd(
    ctx: click.Context,
    country: str,
    from_date: tuple[int, int],
    to_date: tuple[int, int],
    price: float,
) -> None:
    """Compare inflation between two dates for a country."""
    table = _load(ctx)
    try:
        new_price, cumulative = rates.compare_inflation(
            table, country, *from_date, *to_date, price
        )
    except InflationError as exc:
        _fail(f"comparing inflation: {_describe(exc)}")
    click.echo(
        formatters.format_comparison(country, *from_date, *to_date, new_price, cumulative)
    )


@main.command("compareWithBaseYear", context_settings=_PRICE_COMMAND_SETTINGS)
@click.argument("country")
@click.argument("target_date", type=DATE)
@click.argument("price", type=float)
@click.pass_context
def compare_with_base_year_cmd(
    ctx: click.Context,
    country: str,
    target_date: tuple[int, int],
    price: float,
) -> None:
    """Compare inflation of a price relative to the country's base year."""
    table = _load(ctx)
    try:
        new_price = rates.compare_with_base_year(table, country, *target_date, price)
        base_year = rates.get_country(table, country).base_year
    except InflationError as exc:
        _fail(f"comparing inflation with base year: {_describe(exc)}")
    click.echo(
        formatters.format_base_comparison(country, base_year, *target_date, new_price)
    )


@main.command("import")
@click.argument("country")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("json_file", type=click.Path(dir_okay=False))
@click.option(
    "--base-year",
    default=config.DEFAULT_IMPORT_BASE_YEAR,
    show_default=True,
    type=int,
    help="HICP base year for the country",
)
def import_cmd(country: str, csv_file: str, json_file: str, base_year: int) -> None:
    """Import inflation rates from a CSV file into a JSON file for a country."""
    try:
        table = store.read_table(json_file)
    except (InflationError, OSError) as exc:
        _fail(f"loading JSON data: {exc}")

    try:
        summary = importer.import_csv_file(table, country, csv_file, base_year)
    except (InflationError, OSError) as exc:
        _fail(f"importing CSV: {exc}")
    if summary.created:
        click.echo(f"Country '{country}' not found. Created a new country entry.")

    try:
        store.save_table(table, json_file)
    except OSError as exc:
        _fail(f"saving JSON data: {exc}")

    saved = table.countries[summary.country_index]
    click.echo(
        f"Successfully imported {summary.imported} records. "
        f"Skipped {summary.skipped} records due to errors."
    )
    click.echo(
        f"Imported inflation rates from {csv_file} into {json_file} "
        f"for country {country} with Base Year {saved.base_year}"
    )


@main.command("listCountries")
@click.option(
    "--output",
    "output_format",
    default="table",
    type=click.Choice(["table", "json"]),
    help="Output format",
)
@click.pass_context
def list_countries_cmd(ctx: click.Context, output_format: str) -> None:
    """List all available countries."""
    table = _load(ctx)
    if output_format == "json":
        click.echo(formatters.format_countries_json(table))
    else:
        click.echo(formatters.format_countries_table(table), nl=False)


@main.command("info")
@click.argument("country")
@click.pass_context
def info_cmd(ctx: click.Context, country: str) -> None:
    """Show available years and the covered date range for a country."""
    table = _load(ctx)
    try:
        found = rates.get_country(table, country)
    except InflationError as exc:
        _fail(str(exc))
    click.echo(formatters.format_country_info(found))


@main.group("cache")
def cache_group() -> None:
    """Manage the download cache."""


@cache_group.command("status")
def cache_status_cmd() -> None:
    """Show cached inflation lists, their source URL and freshness."""
    entries = cache.cache_status()
    if not entries:
        click.echo("No cached inflation lists.")
        return
    click.echo("Cached inflation lists:")
    for e in entries:
        source = e["source"] or "(unreadable)"
        state = "stale" if e["stale"] else "fresh"
        updated = e["last_updated"] or "unknown"
        click.echo(f"  {source}")
        click.echo(f"    {e['file']}  {e['size_bytes']:>8d} bytes  {state}, fetched {updated}")
    click.echo(f"\nCache directory: {cache.CACHE_DIR}")


@cache_group.command("clear")
def cache_clear_cmd() -> None:
    """Delete all cached inflation lists."""
    count = cache.clear_cache()
    click.echo(f"Removed {count} cached inflation list(s).")


if __name__ == "__main__":
    main()

"""Tests for output formatters."""

from __future__ import annotations

import json

from inflationcalc.formatters import (
    fmt_date,
    format_base_comparison,
    format_comparison,
    format_countries_json,
    format_countries_table,
    format_country_info,
    format_rate,
)


class TestFmtDate:
    def test_year(self) -> None:
        assert fmt_date(2015, 0) == "2015"

    def test_month(self) -> None:
        assert fmt_date(2015, 6) == "2015-06"


class TestMessages:
    def test_average_rate(self) -> None:
        assert format_rate("US", 2015, 0, 0.2) == "Average inflation rate for US in 2015 is 0.20%"

    def test_month_rate(self) -> None:
        assert format_rate("US", 2015, 6, 0.3) == "Inflation rate for US in 2015-06 is 0.30%"

    def test_comparison_mixed_granularity(self) -> None:
        out = format_comparison("US", 2015, 3, 2018, 0, 52.5, 50.0)
        assert out == (
            "Price adjusted for inflation from 2015-03 to 2018 in US: 52.50\n"
            "Cumulative rate of inflation: 50.00%"
        )

    def test_base_comparison(self) -> None:
        out = format_base_comparison("US", 2015, 2018, 6, 70.0)
        assert out == (
            "Price adjusted for inflation relative to Base Year (2015) "
            "to 2018-06 in US: 70.00"
        )


class TestCountryList:
    def test_table(self, table) -> None:  # type: ignore[no-untyped-def]
        output = format_countries_table(table)
        assert "Available Countries:" in output
        assert "United States" in output
        assert "US, USA" in output
        assert "2015-01 → 2018-12" in output

    def test_json(self, table) -> None:  # type: ignore[no-untyped-def]
        data = json.loads(format_countries_json(table))
        names = [c["name"] for c in data["countries"]]
        assert names == ["United States", "Germany", "Freedonia"]
        fd = data["countries"][2]
        assert fd["aliases"] == []
        assert fd["base_year"] is None
        assert (fd["first_date"], fd["last_date"]) == ("2019-03", "2021-02")

    def test_info(self, table) -> None:  # type: ignore[no-untyped-def]
        output = format_country_info(table.countries[2])
        assert "Freedonia (Code: FD)" in output
        assert "Base Year: not set" in output
        assert "Years: 2019, 2020, 2021" in output
        assert "Range: 2019-03 → 2021-02" in output

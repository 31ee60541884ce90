"""Pure calculation functions for inflation-adjusted prices."""

from __future__ import annotations

from collections.abc import Iterable


def average_rate(rates: Iterable[float]) -> float:
    """Arithmetic mean over however many rates are present."""
    values = list(rates)
    if not values:
        raise ValueError("No rates to average")
    return sum(values) / len(values)


def inflation_factor(reference_rate: float, target_rate: float) -> float:
    """Ratio of the target rate to the reference rate."""
    if reference_rate == 0:
        raise ValueError("Reference rate must be non-zero")
    return target_rate / reference_rate


def adjust_price(price: float, factor: float) -> float:
    return price * factor


def cumulative_rate(factor: float) -> float:
    """Cumulative rate of inflation in percent (50.0 = 50%)."""
    return (factor - 1) * 100

"""Inflation-adjusted price comparisons from per-country monthly rate tables."""

__version__ = "0.1.0"

"""Aggregate statistics over selected cell values."""

import re
from collections.abc import Iterable

import numpy as np

from ..models.selection import SelectionStats

# Longest leading decimal literal, matching JavaScript's parseFloat prefix rule
_NUMERIC_PREFIX_RE = re.compile(r"^[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def parse_number(text: str) -> float | None:
    """Parse the numeric prefix of a cell value.

    Leading whitespace is ignored and trailing text after the number is
    dropped ("12px" parses as 12). Blank, non-numeric and non-finite values
    give None.
    """
    stripped = text.strip()
    if not stripped:
        return None

    match = _NUMERIC_PREFIX_RE.match(stripped)
    if not match:
        return None

    number = float(match.group(0))
    if not np.isfinite(number):
        return None
    return number


def selection_stats(values: Iterable[str]) -> SelectionStats:
    """Count, sum and average of the numeric values in ``values``."""
    numbers = np.array(
        [n for n in (parse_number(value) for value in values) if n is not None],
        dtype=float,
    )
    if numbers.size == 0:
        return SelectionStats()

    total = float(numbers.sum())
    return SelectionStats(count=int(numbers.size), sum=total, average=total / numbers.size)


def format_stats(stats: SelectionStats) -> str:
    """Status-bar text for the stats, empty when nothing numeric is selected."""
    if stats.count == 0:
        return ""
    return f"Count: {stats.count}  Sum: {stats.sum:.2f}  Average: {stats.average:.2f}"

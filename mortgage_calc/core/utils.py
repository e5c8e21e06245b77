from __future__ import annotations

import math
from typing import Final


MONTHS_IN_YEAR: Final[int] = 12


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def round_currency(value: float) -> float:
    """Round a money amount to cents, halves going up.

    Python's ``round`` uses banker's rounding, which would shift cent-level
    results on exact half cents. Amounts too large to scale to cents come
    back unchanged.
    """
    cents = value * 100 + 0.5
    if not math.isfinite(cents):
        return value
    return math.floor(cents) / 100


def period_count(term_years: float) -> int:
    """Number of monthly periods in a term expressed in years."""
    months = term_years * MONTHS_IN_YEAR
    if not math.isfinite(months):
        return 0
    return round_half_up(months)


def monthly_rate(annual_rate_percent: float) -> float:
    """Convert a nominal annual percentage (6.5 for 6.5%) to a monthly rate."""
    if annual_rate_percent == 0:
        return 0.0
    return annual_rate_percent / 100.0 / MONTHS_IN_YEAR

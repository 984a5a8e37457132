# src/marketpulse/shared/numbers.py
"""
Numeric Helpers - Rounding, Parsing and Small Price Formulas

Upstreams report numbers as JSON numbers or as numeric strings, sometimes
missing entirely. These helpers turn them into floats (or None) and apply
the half-up rounding used for every published field.

Files that USE this module:
- marketpulse.adapters.providers.* (to_float when decoding payloads)
- marketpulse.application.sections.* (rounding, mid-price and percent change)
- tests.test_numbers (unit tests)

Files that this module USES:
- None (pure utility functions)
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP  # Precise decimal rounding for published values
from typing import Any, Optional


def round_half_up(value: Optional[float], places: int) -> Optional[float]:
    """
    Round to a fixed number of decimal places, halves away from zero.

    The value goes through its shortest repr first, so 3.125 rounds to 3.13
    the way a reader expects rather than following binary float artifacts.

    Args:
        value: Number to round (None passes through)
        places: Number of decimal places

    Returns:
        Rounded float, or None if value is None
    """
    if value is None:
        return None
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def to_float(value: Any) -> Optional[float]:
    """
    Convert a JSON number or numeric string to float.

    Args:
        value: Raw value (e.g. 65.1, '65.10', '1,234.5', None)

    Returns:
        Float value, or None if the value is missing or not numeric
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(Decimal(str(value).replace(",", "").strip()))
    except (InvalidOperation, ValueError):
        return None


def mid_price(bid: Optional[float], ask: Optional[float]) -> Optional[float]:
    """Average of bid and ask; None unless both are present and positive."""
    if not bid or not ask:
        return None
    return (bid + ask) / 2


def pct_change(current: Optional[float], baseline: Optional[float]) -> Optional[float]:
    """Percent change from baseline to current, unrounded; None without a usable baseline."""
    if current is None or not baseline:
        return None
    return (current - baseline) / baseline * 100

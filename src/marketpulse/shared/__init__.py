"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Numeric parsing and rounding
- Logging configuration
"""

from marketpulse.shared.numbers import mid_price, pct_change, round_half_up, to_float

__all__ = [
    "round_half_up",
    "to_float",
    "mid_price",
    "pct_change",
]

# tests/test_numbers.py
"""
Numeric Helper Tests - Rounding, Parsing, Mid-price and Percent Change

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- marketpulse.shared.numbers (helpers under test)
"""
import pytest

from marketpulse.shared.numbers import mid_price, pct_change, round_half_up, to_float


class TestRoundHalfUp:
    def test_halves_round_up(self):
        assert round_half_up(3.125, 2) == 3.13
        assert round_half_up(2.5, 0) == 3.0
        assert round_half_up(1.00005, 4) == 1.0001

    def test_negative_halves_round_away_from_zero(self):
        assert round_half_up(-3.125, 2) == -3.13

    def test_binary_artifacts_do_not_leak(self):
        assert round_half_up((2330.1 + 2330.5) / 2, 2) == 2330.3

    def test_none_passes_through(self):
        assert round_half_up(None, 2) is None


class TestToFloat:
    def test_numbers_and_strings(self):
        assert to_float(65.1) == 65.1
        assert to_float(7) == 7.0
        assert to_float("64100.01") == 64100.01
        assert to_float("1,234.5") == 1234.5

    def test_missing_or_invalid(self):
        assert to_float(None) is None
        assert to_float("") is None
        assert to_float("n/a") is None
        assert to_float(True) is None


class TestMidPrice:
    def test_silver_mid_keeps_three_decimals(self):
        assert round_half_up(mid_price(65.10, 65.30), 3) == pytest.approx(65.200)

    def test_missing_side(self):
        assert mid_price(None, 65.3) is None
        assert mid_price(65.1, None) is None
        assert mid_price(0, 65.3) is None


class TestPctChange:
    def test_change(self):
        assert round_half_up(pct_change(82.50, 80.00), 2) == 3.13
        assert round_half_up(pct_change(3000, 3100), 2) == -3.23

    def test_no_baseline(self):
        assert pct_change(82.5, None) is None
        assert pct_change(82.5, 0) is None
        assert pct_change(None, 80.0) is None

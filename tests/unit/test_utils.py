"""
Unit tests for utils.py module.

Tests number normalization, calendar helpers, identifiers and formatters.
"""

from datetime import date

import numpy as np
import pytest

from checkbal.utils import (
    clamp,
    current_month,
    format_money,
    format_pct,
    is_ledger_month,
    month_from_date,
    new_id,
    non_negative,
    num,
)


# ============================================================================
# NUMBER NORMALIZATION TESTS
# ============================================================================

class TestNum:
    """Test the tolerant float coercion."""

    @pytest.mark.parametrize("value, expected", [
        (12, 12.0),
        (3.5, 3.5),
        ("42.25", 42.25),
        ("  7 ", 7.0),
        (-4, -4.0),
    ])
    def test_numeric_values(self, value, expected):
        assert num(value) == expected

    @pytest.mark.parametrize("value", [None, "", "abc", [], {}, object()])
    def test_unparsable_is_zero(self, value):
        assert num(value) == 0.0

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), -np.inf, "inf"])
    def test_non_finite_is_zero(self, value):
        assert num(value) == 0.0

    def test_returns_float(self):
        assert isinstance(num(5), float)


class TestClamp:
    """Test clamp and non_negative."""

    def test_clamp_within(self):
        assert clamp(20.0, 0.0, 60.0) == 20.0

    def test_clamp_low(self):
        assert clamp(-5.0, 0.0, 60.0) == 0.0

    def test_clamp_high(self):
        assert clamp(75.0, 0.0, 60.0) == 60.0

    def test_non_negative_floors(self):
        assert non_negative(-10) == 0.0
        assert non_negative("15") == 15.0
        assert non_negative("junk") == 0.0


# ============================================================================
# CALENDAR TESTS
# ============================================================================

class TestCalendar:
    """Test ledger month helpers."""

    def test_month_from_iso_string(self):
        assert month_from_date("2025-03-18") == "2025-03"

    def test_month_from_date_object(self):
        assert month_from_date(date(2024, 12, 31)) == "2024-12"

    def test_month_from_none(self):
        assert month_from_date(None) == ""

    def test_current_month_with_explicit_today(self):
        assert current_month(date(2025, 7, 4)) == "2025-07"

    def test_current_month_format(self):
        assert is_ledger_month(current_month())

    @pytest.mark.parametrize("value", ["2025-01", "1999-12"])
    def test_valid_ledger_months(self, value):
        assert is_ledger_month(value)

    @pytest.mark.parametrize("value", ["2025-13", "2025-00", "2025-3", "25-03", "2025-03-01", None, 202503])
    def test_invalid_ledger_months(self, value):
        assert not is_ledger_month(value)


# ============================================================================
# IDENTIFIER AND FORMATTER TESTS
# ============================================================================

class TestIdentifiers:
    """Test id generation."""

    def test_prefix(self):
        assert new_id("exp").startswith("exp_")

    def test_unique(self):
        ids = {new_id("txn") for _ in range(200)}
        assert len(ids) == 200


class TestFormatters:
    """Test money and percent formatting."""

    def test_money_thousands(self):
        assert format_money(1234.5) == "$1,234.50"

    def test_money_negative(self):
        assert format_money(-40) == "-$40.00"

    def test_money_non_finite(self):
        assert format_money(float("nan")) == "$0.00"

    def test_money_custom_symbol(self):
        assert format_money(10, symbol="€") == "€10.00"

    def test_pct(self):
        assert format_pct(95.4) == "95%"
        assert format_pct(12.345, decimals=1) == "12.3%"

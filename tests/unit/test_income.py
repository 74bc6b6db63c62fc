"""
Unit tests for income.py module.

Tests paycheck frequency factors and monthly gross/net normalization.
"""

import pandas as pd
import pytest

from checkbal.income import IncomeBreakdown, IncomeProfile, normalize_income, paychecks_per_month


# ============================================================================
# PAYCHECKS PER MONTH TESTS
# ============================================================================

class TestPaychecksPerMonth:
    """Test calendar-average paycheck factors."""

    @pytest.mark.parametrize("frequency, expected", [
        ("monthly", 1.0),
        ("semimonthly", 2.0),
        ("biweekly", 26 / 12),
        ("weekly", 52 / 12),
    ])
    def test_known_frequencies(self, frequency, expected):
        assert paychecks_per_month(frequency) == pytest.approx(expected)

    @pytest.mark.parametrize("frequency", ["daily", "", "Biweekly"])
    def test_unknown_frequency_is_one(self, frequency):
        assert paychecks_per_month(frequency) == 1.0


# ============================================================================
# NORMALIZATION TESTS
# ============================================================================

class TestNormalizeIncome:
    """Test normalize_income arithmetic."""

    def test_biweekly_breakdown(self, biweekly_income):
        inc = normalize_income(biweekly_income)

        assert inc.paychecks_per_month == pytest.approx(26 / 12)
        assert inc.monthly_gross == pytest.approx(2_000 * 26 / 12)
        assert inc.taxes == pytest.approx(2_000 * 26 / 12 * 0.20)
        assert inc.deductions == pytest.approx(100 * 26 / 12)
        assert inc.monthly_net == pytest.approx(3_500.0)

    def test_monthly_gross_is_exact_for_monthly_pay(self):
        inc = normalize_income(IncomeProfile(frequency="monthly", gross_per_paycheck=5_000, tax_rate_pct=0))
        assert inc.monthly_gross == 5_000.0
        assert inc.monthly_net == 5_000.0

    def test_net_identity(self, biweekly_income):
        inc = normalize_income(biweekly_income)
        expected = inc.monthly_gross - inc.taxes - inc.deductions + biweekly_income.other_monthly_income
        assert inc.monthly_net == pytest.approx(expected)

    def test_other_income_only(self):
        inc = normalize_income(IncomeProfile(gross_per_paycheck=0, other_monthly_income=800))
        assert inc.monthly_gross == 0.0
        assert inc.monthly_net == 800.0

    def test_unknown_frequency_uses_one_paycheck(self):
        inc = normalize_income(IncomeProfile(frequency="daily", gross_per_paycheck=1_000, tax_rate_pct=10))
        assert inc.paychecks_per_month == 1.0
        assert inc.monthly_net == pytest.approx(900.0)

    def test_net_can_be_negative(self):
        inc = normalize_income(IncomeProfile(
            frequency="monthly", gross_per_paycheck=100, tax_rate_pct=0,
            other_deductions_per_paycheck=300,
        ))
        assert inc.monthly_net == pytest.approx(-200.0)

    def test_non_numeric_fields_degrade_to_zero(self):
        profile = IncomeProfile(frequency="monthly", gross_per_paycheck="abc", tax_rate_pct=None)
        inc = normalize_income(profile)
        assert inc.monthly_gross == 0.0
        assert inc.monthly_net == 0.0

    def test_default_profile(self):
        inc = normalize_income(IncomeProfile())
        assert inc == IncomeBreakdown(26 / 12, 0.0, 0.0, 0.0, 0.0)


class TestIncomeBreakdownExport:
    """Test dict/Series conversion."""

    def test_to_dict_keys(self, biweekly_income):
        d = normalize_income(biweekly_income).to_dict()
        assert set(d) == {"paychecks_per_month", "monthly_gross", "taxes", "deductions", "monthly_net"}

    def test_to_series(self, biweekly_income):
        s = normalize_income(biweekly_income).to_series()
        assert isinstance(s, pd.Series)
        assert s.name == "income"
        assert s["monthly_net"] == pytest.approx(3_500.0)

"""
Income normalization module for checkbal.

Purpose
-------
Entry point for the income side of the planner. Translates a paycheck-based
income description (pay frequency, gross per paycheck, tax rate, per-paycheck
deductions, other monthly income) into normalized monthly figures that the
dashboard summary and exports consume.

Key components
--------------
- IncomeProfile:
    Frozen description of how the household is paid. Owned by the caller;
    values are expected to be pre-sanitized at the input boundary
    (see ``checkbal.serialization.migrate_state``).

- IncomeBreakdown:
    Monthly gross, taxes, deductions and net, plus the paychecks-per-month
    factor that produced them.

- normalize_income:
    Pure function IncomeProfile -> IncomeBreakdown. Never raises.

Design principles
-----------------
- Paychecks per month use calendar averages: biweekly pay is 26/12 checks
  per month, weekly pay 52/12. No partial-month proration.
- Unrecognized frequencies fall back to one paycheck per month.
- Separation of concerns: input sanitizing lives in ``serialization`` and
  ``config``; this module only does arithmetic.

Example
-------
>>> from checkbal.income import IncomeProfile, normalize_income
>>> profile = IncomeProfile(frequency="biweekly", gross_per_paycheck=2_000.0,
...                         tax_rate_pct=20.0)
>>> round(normalize_income(profile).monthly_net, 2)
3466.67
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

import pandas as pd

from .constants import PAYCHECKS_PER_MONTH
from .types import IncomeBreakdownDict
from .utils import num

__all__ = [
    "IncomeProfile",
    "IncomeBreakdown",
    "paychecks_per_month",
    "normalize_income",
]


@dataclass(frozen=True)
class IncomeProfile:
    """
    Paycheck-based income description.

    Parameters
    ----------
    frequency : str, default "biweekly"
        One of "monthly", "semimonthly", "biweekly", "weekly".
    gross_per_paycheck : float, default 0.0
        Gross pay per paycheck, before taxes and deductions.
    tax_rate_pct : float, default 20.0
        Effective tax rate in percent (0..60 at the input boundary).
    other_deductions_per_paycheck : float, default 0.0
        Retirement, insurance and similar per-paycheck deductions.
    other_monthly_income : float, default 0.0
        Net income received outside of paychecks (side work, support).
    """

    frequency: str = "biweekly"
    gross_per_paycheck: float = 0.0
    tax_rate_pct: float = 20.0
    other_deductions_per_paycheck: float = 0.0
    other_monthly_income: float = 0.0


@dataclass(frozen=True)
class IncomeBreakdown:
    paychecks_per_month: float
    monthly_gross: float
    taxes: float
    deductions: float
    monthly_net: float

    def to_dict(self) -> IncomeBreakdownDict:
        return IncomeBreakdownDict(**asdict(self))

    def to_series(self) -> pd.Series:
        """Return the breakdown as a labeled Series (for tables and exports)."""
        return pd.Series(asdict(self), name="income", dtype=float)


def paychecks_per_month(frequency: str) -> float:
    """Average paychecks per month for *frequency* (1.0 when unrecognized)."""
    return PAYCHECKS_PER_MONTH.get(frequency, 1.0)


def normalize_income(profile: IncomeProfile) -> IncomeBreakdown:
    """
    Convert a paycheck description into monthly gross/net figures.

    Computation
    -----------
    1) monthly_gross = gross_per_paycheck * paychecks_per_month
    2) taxes         = monthly_gross * tax_rate_pct / 100
    3) deductions    = other_deductions_per_paycheck * paychecks_per_month
    4) monthly_net   = monthly_gross - taxes - deductions + other_monthly_income

    Parameters
    ----------
    profile : IncomeProfile
        Income settings. Fields are read through ``num`` so stray
        non-numeric values degrade to zero instead of raising.

    Returns
    -------
    IncomeBreakdown
    """
    ppm = paychecks_per_month(profile.frequency)
    monthly_gross = num(profile.gross_per_paycheck) * ppm
    taxes = monthly_gross * (num(profile.tax_rate_pct) / 100.0)
    deductions = num(profile.other_deductions_per_paycheck) * ppm
    monthly_net = monthly_gross - taxes - deductions + num(profile.other_monthly_income)
    return IncomeBreakdown(
        paychecks_per_month=ppm,
        monthly_gross=monthly_gross,
        taxes=taxes,
        deductions=deductions,
        monthly_net=monthly_net,
    )

"""
Type definitions for checkbal.

Purpose
-------
Provides TypedDict definitions for the plain dictionaries that engine
results are converted into (``to_dict()``) before they reach rendering,
export and persistence collaborators. Using TypedDicts documents the
expected structures and keeps the export layer honest about keys.

Type Definitions
----------------
IncomeBreakdownDict
    Monthly income figures: {"paychecks_per_month", "monthly_gross", ...}

BudgetRowDict
    One budget-vs-actual row: {"category", "planned", "actual", ...}

PayoffMonthDict
    One simulated payoff month: {"month", "target", "paid", ...}

PayoffPlanDict
    Simulation outcome: {"months", "payoff_label", "schedule"}

SummaryDict
    Dashboard KPIs: {"monthly_gross", "monthly_net", "cash_left", ...}
"""

from typing import List, Optional

from typing_extensions import Literal, TypedDict

__all__ = [
    "BudgetStatus",
    "IncomeBreakdownDict",
    "BudgetRowDict",
    "PayoffMonthDict",
    "PayoffPlanDict",
    "SummaryDict",
]


BudgetStatus = Literal["OK", "Near", "Over"]


class IncomeBreakdownDict(TypedDict):
    """
    Normalized monthly income.

    Examples
    --------
    >>> from checkbal.income import IncomeProfile, normalize_income
    >>> profile = IncomeProfile(frequency="monthly", gross_per_paycheck=5_000, tax_rate_pct=20)
    >>> breakdown: IncomeBreakdownDict = normalize_income(profile).to_dict()
    >>> breakdown["monthly_net"]
    4000.0
    """

    paychecks_per_month: float
    monthly_gross: float
    taxes: float
    deductions: float
    monthly_net: float


class BudgetRowDict(TypedDict):
    """
    Planned vs actual figures for one category.

    Attributes
    ----------
    remaining : float
        planned - actual; negative when the category is over budget.
    pct_used : float
        Percent of the plan consumed, may exceed 100.
    status : {"OK", "Near", "Over"}
    """

    category: str
    planned: float
    actual: float
    remaining: float
    pct_used: float
    status: BudgetStatus


class PayoffMonthDict(TypedDict):
    """One month of the payoff schedule."""

    month: int
    target: str
    paid: float
    interest: float
    principal: float
    total_balance_remaining: float


class PayoffPlanDict(TypedDict):
    """
    Debt payoff simulation outcome.

    ``months`` is None when the plan is infeasible or hit the ceiling.
    """

    months: Optional[int]
    payoff_label: str
    schedule: List[PayoffMonthDict]


class SummaryDict(TypedDict):
    """Dashboard KPIs for one ledger month."""

    ledger_month: str
    monthly_gross: float
    monthly_net: float
    planned_total: float
    actual_total: float
    variance: float
    cash_left: float
    debt_total: float
    strategy: str
    extra_payment: float
    payoff_months: Optional[int]
    payoff_label: str

"""
Pytest configuration and fixtures for the checkbal test suite.

Fixtures build small, hand-checkable households: amounts are chosen so the
expected monthly figures, budget statuses and payoff months can be worked
out on paper.
"""

from typing import List

import pytest

from checkbal.debts import Debt
from checkbal.income import IncomeProfile
from checkbal.ledger import PlannedExpense, Transaction
from checkbal.model import PlannerState


# ---------------------------------------------------------------------------
# Calendar Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def ledger_month() -> str:
    """Standard ledger month for tests."""
    return "2025-03"


# ---------------------------------------------------------------------------
# Income Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def biweekly_income() -> IncomeProfile:
    """
    Biweekly paycheck.

    Gross: 2,000 per paycheck (26/12 paychecks per month)
    Tax: 20%, deductions 100 per paycheck, 250 other monthly income
    """
    return IncomeProfile(
        frequency="biweekly",
        gross_per_paycheck=2_000.0,
        tax_rate_pct=20.0,
        other_deductions_per_paycheck=100.0,
        other_monthly_income=250.0,
    )


# ---------------------------------------------------------------------------
# Ledger Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def planned_expenses() -> List[PlannedExpense]:
    """Housing 1500, Food 400 (two lines), Transportation 200."""
    return [
        PlannedExpense(id="e1", name="Rent", category="Housing", amount=1_500.0),
        PlannedExpense(id="e2", name="Groceries", category="Food", amount=300.0),
        PlannedExpense(id="e3", name="Dining", category="Food", amount=100.0),
        PlannedExpense(id="e4", name="Gas", category="Transportation", amount=200.0),
    ]


@pytest.fixture
def transactions() -> List[Transaction]:
    """
    March: Housing 1500 (Near), Food 450 (Over by 50), Shopping 75
    (unplanned), Transportation 60 (OK). One February entry.
    """
    return [
        Transaction(id="t1", date="2025-03-01", category="Housing", amount=1_500.0, description="Rent"),
        Transaction(id="t2", date="2025-03-04", category="Food", amount=250.0),
        Transaction(id="t3", date="2025-03-18", category="Food", amount=200.0),
        Transaction(id="t4", date="2025-03-09", category="Shopping", amount=75.0),
        Transaction(id="t5", date="2025-03-12", category="Transportation", amount=60.0),
        Transaction(id="t6", date="2025-02-27", category="Food", amount=999.0),
    ]


# ---------------------------------------------------------------------------
# Debt Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def two_debts() -> List[Debt]:
    """A: small low-APR balance; B: larger high-APR balance."""
    return [
        Debt(id="a", name="A", balance=100.0, apr_pct=5.0, min_payment=10.0),
        Debt(id="b", name="B", balance=500.0, apr_pct=20.0, min_payment=10.0),
    ]


# ---------------------------------------------------------------------------
# State Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def planner_state(ledger_month, biweekly_income, planned_expenses, transactions, two_debts) -> PlannerState:
    """Complete household state for March 2025."""
    return PlannerState(
        ledger_month=ledger_month,
        income=biweekly_income,
        expenses=tuple(planned_expenses),
        spending=tuple(transactions),
        debts=tuple(two_debts),
    )

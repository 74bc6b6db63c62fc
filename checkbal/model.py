"""
Planner state facade for checkbal.

Purpose
-------
``PlannerState`` bundles everything a household enters (income settings,
planned expenses, spending ledger, debts, payoff settings and the selected
ledger month) and exposes the three engine calculations over it, plus the
dashboard KPIs that combine them. It is the object persistence, export and
the CLI pass around.

The state is immutable: ``add_*``, ``remove`` and ``with_month`` return a
new PlannerState. Entries that would violate the input rules (empty name,
non-positive amount) are ignored, the same way the entry forms drop them;
unknown categories are filed under "Other".

Example
-------
>>> from checkbal.model import PlannerState
>>> state = (
...     PlannerState(ledger_month="2025-03")
...     .add_expense("Rent", "Housing", 1_500)
...     .add_transaction(1_500, "Housing", "March rent", date="2025-03-01")
...     .add_debt("Visa", 2_000, apr_pct=22.9, min_payment=60)
... )
>>> summary = state.summary()
>>> summary.planned_total, summary.actual_total
(1500.0, 1500.0)
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field, replace
from datetime import date as _date
from typing import List, Optional, Tuple

from .budget import BudgetReport, analyze_budget
from .constants import CATEGORIES, FALLBACK_CATEGORY
from .debts import Debt, PayoffPlan, PayoffSettings, simulate_payoff
from .exceptions import ConfigurationError
from .income import IncomeBreakdown, IncomeProfile, normalize_income
from .ledger import PlannedExpense, Transaction, spending_for_month, sum_planned, sum_spending
from .types import SummaryDict
from .utils import current_month, is_ledger_month, month_from_date, new_id, non_negative, num, today_iso

__all__ = [
    "PlannerState",
    "DashboardSummary",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardSummary:
    """
    Headline figures for one ledger month.

    Attributes
    ----------
    cash_left : float
        Monthly net income minus planned expenses.
    variance : float
        Planned minus actual spending; negative when overspent.
    payoff_months : Optional[int]
        None when the payoff plan is infeasible.
    """

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

    def to_dict(self) -> SummaryDict:
        return SummaryDict(**asdict(self))


@dataclass(frozen=True)
class PlannerState:
    ledger_month: str = field(default_factory=current_month)
    income: IncomeProfile = field(default_factory=IncomeProfile)
    expenses: Tuple[PlannedExpense, ...] = ()
    spending: Tuple[Transaction, ...] = ()
    debts: Tuple[Debt, ...] = ()
    payoff: PayoffSettings = field(default_factory=PayoffSettings)

    # -------------------- Calculations --------------------

    def month_transactions(self, ledger_month: Optional[str] = None) -> List[Transaction]:
        """Spending entries dated in *ledger_month* (defaults to the state's month)."""
        return spending_for_month(self.spending, ledger_month or self.ledger_month)

    def income_breakdown(self) -> IncomeBreakdown:
        return normalize_income(self.income)

    def budget(self, ledger_month: Optional[str] = None) -> BudgetReport:
        """Budget vs actual for *ledger_month* (defaults to the state's month)."""
        return analyze_budget(self.expenses, self.month_transactions(ledger_month))

    def payoff_plan(
        self,
        strategy: Optional[str] = None,
        extra_payment: Optional[float] = None,
    ) -> PayoffPlan:
        """Payoff simulation using the saved settings unless overridden."""
        return simulate_payoff(
            self.debts,
            strategy if strategy is not None else self.payoff.strategy,
            extra_payment if extra_payment is not None else self.payoff.extra_payment,
        )

    @property
    def debt_total(self) -> float:
        return sum((num(d.balance) for d in self.debts), 0.0)

    def summary(self) -> DashboardSummary:
        """Compute the dashboard KPIs for the current ledger month."""
        inc = self.income_breakdown()
        planned_total = sum_planned(self.expenses)
        actual_total = sum_spending(self.month_transactions())
        plan = self.payoff_plan()
        return DashboardSummary(
            ledger_month=self.ledger_month,
            monthly_gross=inc.monthly_gross,
            monthly_net=inc.monthly_net,
            planned_total=planned_total,
            actual_total=actual_total,
            variance=planned_total - actual_total,
            cash_left=inc.monthly_net - planned_total,
            debt_total=self.debt_total,
            strategy=self.payoff.strategy,
            extra_payment=num(self.payoff.extra_payment),
            payoff_months=plan.months,
            payoff_label=plan.payoff_label,
        )

    # -------------------- Mutations (copy-on-write) --------------------

    def with_month(self, ledger_month: str) -> PlannerState:
        """Select another ledger month."""
        if not is_ledger_month(ledger_month):
            raise ConfigurationError(f"ledger month must look like YYYY-MM, got '{ledger_month}'.")
        return replace(self, ledger_month=ledger_month)

    def with_income(self, income: IncomeProfile) -> PlannerState:
        return replace(self, income=income)

    def with_payoff(self, strategy: Optional[str] = None, extra_payment: Optional[float] = None) -> PlannerState:
        """Update payoff settings; unknown strategies become "avalanche"."""
        strategy = strategy if strategy is not None else self.payoff.strategy
        extra = self.payoff.extra_payment if extra_payment is None else extra_payment
        settings = PayoffSettings(
            strategy="snowball" if strategy == "snowball" else "avalanche",
            extra_payment=non_negative(extra),
        )
        return replace(self, payoff=settings)

    def add_expense(self, name: str, category: str, amount: float) -> PlannerState:
        """Append a planned expense; ignored when the name is empty or amount <= 0."""
        name = str(name or "").strip()
        amount = num(amount)
        if not name or amount <= 0:
            logger.debug("Ignoring planned expense %r with amount %s", name, amount)
            return self
        expense = PlannedExpense(id=new_id("exp"), name=name, category=_category(category), amount=amount)
        return replace(self, expenses=self.expenses + (expense,))

    def add_transaction(
        self,
        amount: float,
        category: str,
        description: str = "",
        date: Optional[str | _date] = None,
    ) -> PlannerState:
        """Append a spending entry dated *date* (today by default); ignored when amount <= 0."""
        amount = num(amount)
        if amount <= 0:
            logger.debug("Ignoring transaction with amount %s", amount)
            return self
        if isinstance(date, _date):
            date = date.isoformat()
        txn = Transaction(
            id=new_id("txn"),
            date=(str(date or "")[:10] or today_iso()),
            category=_category(category),
            amount=amount,
            description=str(description or "").strip(),
        )
        return replace(self, spending=self.spending + (txn,))

    def add_debt(self, name: str, balance: float, apr_pct: float = 0.0, min_payment: float = 0.0) -> PlannerState:
        """Append a debt; ignored when the name is empty or balance <= 0."""
        name = str(name or "").strip()
        balance = num(balance)
        if not name or balance <= 0:
            logger.debug("Ignoring debt %r with balance %s", name, balance)
            return self
        debt = Debt(
            id=new_id("debt"),
            name=name,
            balance=balance,
            apr_pct=non_negative(apr_pct),
            min_payment=non_negative(min_payment),
        )
        return replace(self, debts=self.debts + (debt,))

    def remove(self, item_id: str) -> PlannerState:
        """Drop the expense, transaction or debt with *item_id* (no-op if absent)."""
        return replace(
            self,
            expenses=tuple(e for e in self.expenses if e.id != item_id),
            spending=tuple(t for t in self.spending if t.id != item_id),
            debts=tuple(d for d in self.debts if d.id != item_id),
        )

    def months_with_spending(self) -> List[str]:
        """Distinct ledger months present in the spending ledger, ascending."""
        return sorted({month_from_date(t.date) for t in self.spending if t.date})


def _category(value: Optional[str]) -> str:
    return value if value in CATEGORIES else FALLBACK_CATEGORY

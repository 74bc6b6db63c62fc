"""
Budget-vs-actual analysis for checkbal.

Purpose
-------
Joins the planned budget and one month of actual spending by category,
derives remaining amount, percent used and a status for each category, and
produces the alert list that the dashboard, PDF and spreadsheet exports show.

Status policy
-------------
Evaluated per category, first match wins:

1. planned > 0 and actual > planned          -> "Over"
2. planned > 0 and pct_used >= 90            -> "Near"
3. planned == 0 and actual > 0               -> "Over" (unplanned spending)
4. otherwise                                 -> "OK"

so spending exactly the planned amount (pct_used == 100) is "Near", never
"Over", and unplanned spending is never "Near".

Percent used
------------
- planned <= 0 and actual <= 0 -> 0
- planned <= 0 and actual > 0  -> 100
- otherwise                    -> actual / planned * 100 (may exceed 100)

Alerts
------
Rows with status "Over" or "Near", sorted by overage (actual - planned),
largest first; ties keep category order. The full list is returned;
display layers truncate with ``BudgetReport.top_alerts``.

Example
-------
>>> from checkbal.ledger import PlannedExpense, Transaction
>>> from checkbal.budget import analyze_budget
>>> plan = [PlannedExpense(id="e1", name="Groceries", category="Food", amount=400)]
>>> txns = [Transaction(id="t1", date="2025-03-03", category="Food", amount=380)]
>>> report = analyze_budget(plan, txns)
>>> report.rows[0].status
'Near'
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Iterable, List, Sequence, Tuple

import pandas as pd

from .constants import CATEGORIES, DEFAULT_ALERT_LIMIT, NEAR_THRESHOLD_PCT
from .ledger import PlannedExpense, Transaction, group_by_category
from .types import BudgetRowDict, BudgetStatus
from .utils import format_money, num

__all__ = [
    "BudgetRow",
    "BudgetReport",
    "percent_used",
    "budget_status",
    "analyze_budget",
    "alert_message",
    "summarize_statuses",
]

_COLUMNS = ["category", "planned", "actual", "remaining", "pct_used", "status"]


@dataclass(frozen=True)
class BudgetRow:
    category: str
    planned: float
    actual: float
    remaining: float
    pct_used: float
    status: BudgetStatus

    @property
    def overage(self) -> float:
        """actual - planned; positive when spending exceeds the plan."""
        return self.actual - self.planned

    def to_dict(self) -> BudgetRowDict:
        return BudgetRowDict(**asdict(self))


@dataclass(frozen=True)
class BudgetReport:
    """
    Result of :func:`analyze_budget`.

    Attributes
    ----------
    rows : List[BudgetRow]
        One row per category with any planned or actual amount, in
        category enumeration order.
    alerts : List[BudgetRow]
        "Over"/"Near" rows, largest overage first.
    """

    rows: List[BudgetRow] = field(default_factory=list)
    alerts: List[BudgetRow] = field(default_factory=list)

    def top_alerts(self, n: int = DEFAULT_ALERT_LIMIT) -> List[BudgetRow]:
        """First *n* alerts, as shown on the dashboard."""
        return self.alerts[: max(0, n)]

    def to_frame(self) -> pd.DataFrame:
        """Rows as a DataFrame with columns category..status."""
        return pd.DataFrame([asdict(r) for r in self.rows], columns=_COLUMNS)


def percent_used(planned: float, actual: float) -> float:
    """Percent of the plan consumed by *actual* (see module docstring)."""
    if planned <= 0:
        return 100.0 if actual > 0 else 0.0
    return actual / planned * 100.0


def budget_status(planned: float, actual: float) -> BudgetStatus:
    """Classify a category as "OK", "Near" or "Over"."""
    if planned > 0 and actual > planned:
        return "Over"
    if planned > 0 and percent_used(planned, actual) >= NEAR_THRESHOLD_PCT:
        return "Near"
    if planned == 0 and actual > 0:
        return "Over"
    return "OK"


def analyze_budget(
    planned_expenses: Iterable[PlannedExpense],
    month_transactions: Iterable[Transaction],
    *,
    categories: Sequence[str] = CATEGORIES,
) -> BudgetReport:
    """
    Compare planned expenses with one month of transactions.

    Parameters
    ----------
    planned_expenses : Iterable[PlannedExpense]
        The monthly plan.
    month_transactions : Iterable[Transaction]
        Transactions already filtered to the target ledger month
        (see ``checkbal.ledger.spending_for_month``).
    categories : Sequence[str], default CATEGORIES
        Row order. Categories not listed here are not reported.

    Returns
    -------
    BudgetReport
    """
    planned = group_by_category(planned_expenses, lambda e: num(e.amount))
    actual = group_by_category(month_transactions, lambda t: num(t.amount))

    rows: List[BudgetRow] = []
    for cat in categories:
        p = planned.get(cat, 0.0)
        a = actual.get(cat, 0.0)
        if p <= 0 and a <= 0:
            continue
        rows.append(
            BudgetRow(
                category=cat,
                planned=p,
                actual=a,
                remaining=p - a,
                pct_used=percent_used(p, a),
                status=budget_status(p, a),
            )
        )

    # sorted() is stable, so equal overages keep category order
    alerts = sorted(
        (r for r in rows if r.status in ("Over", "Near")),
        key=lambda r: r.overage,
        reverse=True,
    )
    return BudgetReport(rows=rows, alerts=alerts)


def alert_message(row: BudgetRow) -> str:
    """
    Human-readable alert text for a budget row.

    Examples
    --------
    >>> alert_message(BudgetRow("Food", 100.0, 150.0, -50.0, 150.0, "Over"))
    'Food: Over budget by $50.00 (planned $100.00, actual $150.00).'
    """
    if row.planned <= 0:
        return f"{row.category}: {format_money(row.actual)} spent with no planned budget set."
    amounts = f"planned {format_money(row.planned)}, actual {format_money(row.actual)}"
    if row.status == "Over":
        return f"{row.category}: Over budget by {format_money(row.overage)} ({amounts})."
    return f"{row.category}: {row.pct_used:.0f}% used ({amounts})."


def summarize_statuses(report: BudgetReport) -> Tuple[int, int, int]:
    """Counts of (OK, Near, Over) rows."""
    counts = {"OK": 0, "Near": 0, "Over": 0}
    for r in report.rows:
        counts[r.status] += 1
    return counts["OK"], counts["Near"], counts["Over"]

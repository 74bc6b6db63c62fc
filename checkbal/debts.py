"""
Debt payoff simulation for checkbal.

Purpose
-------
Projects how a set of debts is paid down month by month when every debt
receives its minimum payment and an additional fixed "extra" amount is
cascaded across debts in strategy order:

- avalanche: highest APR first (smaller balance breaks ties)
- snowball:  smallest balance first (higher APR breaks ties)

The simulator reports how many months the plan takes, a human label for the
dashboard, and the full month-by-month schedule.

Monthly step
------------
1. Order debts with a positive balance by the active strategy.
2. Accrue simple monthly interest on every active debt: balance * apr/100/12.
3. Pay every active debt min(min_payment, balance).
4. Re-order the still-active debts and cascade the extra payment down that
   order, each application capped at the debt's balance.
5. Record paid, interest, principal = paid - interest, the total remaining
   balance and the target (first debt of the post-minimum ordering).

Outcomes
--------
- Nothing owed: months = 0, empty schedule.
- Paid off in month m: months = m, label "m month(s)".
- Principal <= 0.01 for 3 consecutive months: months = None,
  label "Not feasible (payments not reducing principal)", partial schedule.
- 600 months without payoff: months = None, label "Over limit / Not feasible".

No exception is raised for degenerate input; callers branch on
``plan.months is None``.

Design principles
-----------------
- Caller-owned Debt records are frozen and never touched: the simulator
  works on private mutable copies discarded when it returns.
- One ordering key function parameterized by strategy is used for both the
  targeting sort and the cascade re-sort.
- Deterministic: identical inputs yield identical schedules.

Example
-------
>>> from checkbal.debts import Debt, simulate_payoff
>>> debts = [
...     Debt(id="d1", name="Visa", balance=2_000, apr_pct=22.9, min_payment=60),
...     Debt(id="d2", name="Car", balance=8_500, apr_pct=6.5, min_payment=250),
... ]
>>> plan = simulate_payoff(debts, "avalanche", extra_payment=200)
>>> plan.feasible, plan.schedule[0].target
(True, 'Visa')
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

import pandas as pd
from typing_extensions import Literal

from .constants import (
    MAX_PAYOFF_MONTHS,
    MONTHS_PER_YEAR,
    NO_PROGRESS_EPSILON,
    NO_PROGRESS_STRIKES,
)
from .types import PayoffMonthDict, PayoffPlanDict
from .utils import non_negative

__all__ = [
    "Strategy",
    "Debt",
    "PayoffSettings",
    "PayoffMonth",
    "PayoffPlan",
    "strategy_key",
    "order_debts",
    "simulate_payoff",
    "NOT_FEASIBLE_LABEL",
    "OVER_LIMIT_LABEL",
    "NO_DEBT_LABEL",
]

logger = logging.getLogger(__name__)

Strategy = Literal["avalanche", "snowball"]

NOT_FEASIBLE_LABEL = "Not feasible (payments not reducing principal)"
OVER_LIMIT_LABEL = "Over limit / Not feasible"
NO_DEBT_LABEL = "—"

_SCHEDULE_COLUMNS = ["month", "target", "paid", "interest", "principal", "total_balance_remaining"]


@dataclass(frozen=True)
class Debt:
    """
    A debt as entered by the user.

    Parameters
    ----------
    id : str
        Opaque identifier.
    name : str
        Display name ("Visa", "Student loan").
    balance : float
        Current amount owed.
    apr_pct : float
        Annual percentage rate, in percent (22.9 means 22.9%).
    min_payment : float
        Required monthly payment.
    """

    id: str
    name: str
    balance: float
    apr_pct: float = 0.0
    min_payment: float = 0.0


@dataclass(frozen=True)
class PayoffSettings:
    """Repayment strategy and the extra amount paid on top of minimums."""

    strategy: str = "avalanche"
    extra_payment: float = 0.0


@dataclass
class _WorkingDebt:
    """Mutable per-simulation copy of a Debt."""

    name: str
    balance: float
    apr_pct: float
    min_payment: float

    @classmethod
    def from_debt(cls, debt: Debt) -> "_WorkingDebt":
        return cls(
            name=str(debt.name or "").strip() or "Debt",
            balance=non_negative(debt.balance),
            apr_pct=non_negative(debt.apr_pct),
            min_payment=non_negative(debt.min_payment),
        )


@dataclass(frozen=True)
class PayoffMonth:
    month: int
    target: str
    paid: float
    interest: float
    principal: float
    total_balance_remaining: float

    def to_dict(self) -> PayoffMonthDict:
        return PayoffMonthDict(**asdict(self))


@dataclass(frozen=True)
class PayoffPlan:
    """
    Result of :func:`simulate_payoff`.

    Attributes
    ----------
    months : Optional[int]
        Months until every debt is paid; None when the plan does not resolve.
    payoff_label : str
        Dashboard text ("27 month(s)", "Not feasible (...)").
    schedule : List[PayoffMonth]
        Every simulated month, in order. On infeasible or over-limit
        outcomes this is the prefix simulated before stopping.
    """

    months: Optional[int]
    payoff_label: str
    schedule: List[PayoffMonth] = field(default_factory=list)

    @property
    def feasible(self) -> bool:
        return self.months is not None

    @property
    def total_interest(self) -> float:
        return sum((r.interest for r in self.schedule), 0.0)

    @property
    def total_paid(self) -> float:
        return sum((r.paid for r in self.schedule), 0.0)

    def to_dict(self) -> PayoffPlanDict:
        return PayoffPlanDict(
            months=self.months,
            payoff_label=self.payoff_label,
            schedule=[r.to_dict() for r in self.schedule],
        )

    def to_frame(self) -> pd.DataFrame:
        """Schedule as a DataFrame (one row per month)."""
        return pd.DataFrame([asdict(r) for r in self.schedule], columns=_SCHEDULE_COLUMNS)


# ---------------------------------------------------------------------------
# Strategy ordering
# ---------------------------------------------------------------------------

def _avalanche_key(d) -> Tuple[float, float]:
    return (-d.apr_pct, d.balance)


def _snowball_key(d) -> Tuple[float, float]:
    return (d.balance, -d.apr_pct)


def strategy_key(strategy: str) -> Callable[[object], Tuple[float, float]]:
    """
    Sort key implementing *strategy*.

    "snowball" orders by balance ascending then APR descending; anything
    else (including "avalanche") orders by APR descending then balance
    ascending. The key works on any object exposing ``balance`` and
    ``apr_pct``.
    """
    return _snowball_key if strategy == "snowball" else _avalanche_key


def order_debts(debts: Iterable, strategy: str) -> list:
    """Debts with a positive balance, in *strategy* order (stable for ties)."""
    return sorted((d for d in debts if d.balance > 0), key=strategy_key(strategy))


# ---------------------------------------------------------------------------
# Simulation
# ---------------------------------------------------------------------------

def simulate_payoff(
    debts: Sequence[Debt],
    strategy: str = "avalanche",
    extra_payment: float = 0.0,
    *,
    max_months: int = MAX_PAYOFF_MONTHS,
) -> PayoffPlan:
    """
    Simulate month-by-month repayment of *debts*.

    Parameters
    ----------
    debts : Sequence[Debt]
        Debts to repay. Not modified.
    strategy : {"avalanche", "snowball"}, default "avalanche"
        Extra-payment targeting order. Unknown values behave as avalanche.
    extra_payment : float, default 0.0
        Amount paid each month on top of the minimums, floored at zero.
    max_months : int, default 600
        Simulation ceiling.

    Returns
    -------
    PayoffPlan
        See module docstring for the possible outcomes.
    """
    working = [w for w in (_WorkingDebt.from_debt(d) for d in debts) if w.balance > 0]
    if not working:
        return PayoffPlan(months=0, payoff_label=NO_DEBT_LABEL, schedule=[])

    extra = non_negative(extra_payment)
    schedule: List[PayoffMonth] = []
    no_progress = 0

    for month in range(1, max_months + 1):
        active = order_debts(working, strategy)

        interest_total = 0.0
        for d in active:
            interest = d.balance * (d.apr_pct / 100.0 / MONTHS_PER_YEAR)
            d.balance += interest
            interest_total += interest

        paid_total = 0.0
        for d in active:
            pay = min(d.min_payment, d.balance)
            d.balance = max(0.0, d.balance - pay)
            paid_total += pay

        cascade = order_debts(working, strategy)
        target = cascade[0].name if cascade else active[0].name

        remaining_extra = extra
        for d in cascade:
            if remaining_extra <= 0:
                break
            pay = min(remaining_extra, d.balance)
            d.balance = max(0.0, d.balance - pay)
            remaining_extra -= pay
            paid_total += pay

        principal_total = paid_total - interest_total
        schedule.append(
            PayoffMonth(
                month=month,
                target=target,
                paid=paid_total,
                interest=interest_total,
                principal=principal_total,
                total_balance_remaining=sum(d.balance for d in working),
            )
        )

        if not any(d.balance > 0 for d in working):
            return PayoffPlan(months=month, payoff_label=f"{month} month(s)", schedule=schedule)

        if principal_total <= NO_PROGRESS_EPSILON:
            no_progress += 1
        else:
            no_progress = 0

        if no_progress >= NO_PROGRESS_STRIKES:
            logger.debug(
                "Payoff plan infeasible at month %d: principal %.2f for %d consecutive months",
                month, principal_total, no_progress,
            )
            return PayoffPlan(months=None, payoff_label=NOT_FEASIBLE_LABEL, schedule=schedule)

    logger.debug("Payoff plan did not resolve within %d months", max_months)
    return PayoffPlan(months=None, payoff_label=OVER_LIMIT_LABEL, schedule=schedule)

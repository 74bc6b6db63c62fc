"""
Ledger records and category aggregation for checkbal.

Purpose
-------
Holds the two item collections the budget analyzer works with:

- PlannedExpense: a line of the monthly plan ("Rent", Housing, 1500)
- Transaction: an actual spending entry dated to the day

and the shared Category Aggregator that sums either collection by category.
Also provides the month filter that callers apply before handing a
transaction list to ``checkbal.budget.analyze_budget``.

Design principles
-----------------
- Frozen dataclasses; collections keep insertion order for display.
- Records are assumed clean (positive amounts, known categories); the
  sanitizing happens in ``checkbal.serialization``.
- Aggregation is a pure sum and therefore order-independent.

Example
-------
>>> from checkbal.ledger import Transaction, group_by_category, spending_for_month
>>> txns = [
...     Transaction(id="t1", date="2025-03-02", category="Food", amount=40.0),
...     Transaction(id="t2", date="2025-03-09", category="Food", amount=25.0),
...     Transaction(id="t3", date="2025-04-01", category="Housing", amount=1500.0),
... ]
>>> march = spending_for_month(txns, "2025-03")
>>> group_by_category(march, lambda t: t.amount)
{'Food': 65.0}
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Sequence, TypeVar

from .constants import FALLBACK_CATEGORY
from .utils import month_from_date, num

__all__ = [
    "PlannedExpense",
    "Transaction",
    "group_by_category",
    "sum_planned",
    "sum_spending",
    "spending_for_month",
    "sort_by_date",
]

T = TypeVar("T")


@dataclass(frozen=True)
class PlannedExpense:
    """A planned monthly budget line."""

    id: str
    name: str
    category: str
    amount: float


@dataclass(frozen=True)
class Transaction:
    """
    An actual spending entry.

    Parameters
    ----------
    id : str
        Opaque identifier.
    date : str
        ISO calendar date, ``YYYY-MM-DD``.
    category : str
        One of ``checkbal.constants.CATEGORIES``.
    amount : float
        Positive amount spent.
    description : str, default ""
        Free-text note (merchant, purpose).
    """

    id: str
    date: str
    category: str
    amount: float
    description: str = ""

    @property
    def month(self) -> str:
        """Ledger month (``YYYY-MM``) the transaction belongs to."""
        return month_from_date(self.date)


# ---------------------------------------------------------------------------
# Category Aggregator
# ---------------------------------------------------------------------------

def group_by_category(items: Iterable[T], get_amount: Callable[[T], float]) -> Dict[str, float]:
    """
    Sum *items* by category label.

    Parameters
    ----------
    items : Iterable
        Objects exposing a ``category`` attribute.
    get_amount : Callable
        Extracts the amount to add for each item.

    Returns
    -------
    Dict[str, float]
        Only categories present in *items*. Items with a missing or empty
        label are counted under "Other". Callers overlay the result onto
        the full category list.
    """
    totals: Dict[str, float] = {}
    for item in items:
        cat = getattr(item, "category", None) or FALLBACK_CATEGORY
        totals[cat] = totals.get(cat, 0.0) + get_amount(item)
    return totals


def sum_planned(expenses: Iterable[PlannedExpense]) -> float:
    """Total of all planned expense amounts."""
    return sum((num(e.amount) for e in expenses), 0.0)


def sum_spending(transactions: Iterable[Transaction]) -> float:
    """Total of all transaction amounts."""
    return sum((num(t.amount) for t in transactions), 0.0)


# ---------------------------------------------------------------------------
# Month filtering
# ---------------------------------------------------------------------------

def spending_for_month(transactions: Iterable[Transaction], ledger_month: str) -> List[Transaction]:
    """Keep transactions whose date falls in *ledger_month* (``YYYY-MM``)."""
    return [t for t in transactions if month_from_date(t.date) == ledger_month]


def sort_by_date(transactions: Sequence[Transaction]) -> List[Transaction]:
    """Return transactions in ascending date order (stable for equal dates)."""
    return sorted(transactions, key=lambda t: t.date or "")

"""General utilities for checkbal

Contents
--------
- Number normalization (num, clamp, non_negative)
- Calendar helpers (month_from_date, current_month, today_iso, is_ledger_month)
- Identifier generation (new_id)
- Display formatters (format_money, format_pct)
"""

from __future__ import annotations

import re
import uuid
from datetime import date
from typing import Any, Optional

import numpy as np

__all__ = [
    # Numbers
    "num",
    "clamp",
    "non_negative",
    # Calendar
    "month_from_date",
    "current_month",
    "today_iso",
    "is_ledger_month",
    # Identifiers
    "new_id",
    # Formatters
    "format_money",
    "format_pct",
]

_LEDGER_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")


# ---------------------------------------------------------------------------
# Number normalization
# ---------------------------------------------------------------------------

def num(x: Any) -> float:
    """Coerce *x* to a finite float; anything unparsable or non-finite is 0.0.

    Accepts numbers, numeric strings (surrounding whitespace allowed),
    booleans and None.
    """
    if x is None:
        return 0.0
    try:
        v = float(x)
    except (TypeError, ValueError):
        return 0.0
    return v if np.isfinite(v) else 0.0


def clamp(n: float, lo: float, hi: float) -> float:
    """Clamp *n* into the closed interval [lo, hi]."""
    return max(lo, min(hi, n))


def non_negative(x: Any) -> float:
    """Normalize *x* with :func:`num` and floor it at zero."""
    return max(0.0, num(x))


# ---------------------------------------------------------------------------
# Calendar helpers
# ---------------------------------------------------------------------------

def month_from_date(value: Optional[date | str]) -> str:
    """Truncate an ISO date (or date object) to its ``YYYY-MM`` ledger month.

    Returns an empty string for missing values.
    """
    if value is None:
        return ""
    if isinstance(value, date):
        return value.isoformat()[:7]
    return str(value)[:7]


def current_month(today: Optional[date] = None) -> str:
    """Return the ``YYYY-MM`` month of *today* (defaults to the current date)."""
    return month_from_date(today or date.today())


def today_iso() -> str:
    """Return today's date as ``YYYY-MM-DD``."""
    return date.today().isoformat()


def is_ledger_month(value: Any) -> bool:
    """True if *value* is a ``YYYY-MM`` string with a month in 01..12."""
    if not isinstance(value, str):
        return False
    m = _LEDGER_MONTH_RE.match(value)
    return bool(m) and 1 <= int(m.group(2)) <= 12


# ---------------------------------------------------------------------------
# Identifiers
# ---------------------------------------------------------------------------

def new_id(prefix: str = "id") -> str:
    """Generate an opaque identifier such as ``exp_3f9c2a1b7d4e``."""
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------

def format_money(value: Any, symbol: str = "$") -> str:
    """
    Format a currency amount for tables, alerts and reports.

    Non-finite or unparsable values render as zero.

    Examples
    --------
    >>> format_money(1234.5)
    '$1,234.50'
    >>> format_money(-40)
    '-$40.00'
    >>> format_money(float("nan"))
    '$0.00'
    """
    v = num(value)
    sign = "-" if v < 0 else ""
    return f"{sign}{symbol}{abs(v):,.2f}"


def format_pct(value: Any, decimals: int = 0) -> str:
    """Format a percentage already expressed in 0..100 units, e.g. ``'95%'``."""
    return f"{num(value):.{decimals}f}%"

"""
Global constants for Checks & Balances.

Purpose
-------
Centralizes the category list, paycheck factors, alert thresholds and
simulation limits used throughout the checkbal codebase. Using constants
instead of hardcoded values keeps the engine and its collaborators
(persistence, export, CLI) in agreement.

Usage
-----
>>> from checkbal.constants import CATEGORIES, MAX_PAYOFF_MONTHS
>>> "Housing" in CATEGORIES
True

Categories
----------
- Budget: category enumeration, near-limit threshold, alert display count
- Income: paychecks-per-month factors, tax clamp
- Debts: simulation ceiling, no-progress detection
- Persistence: schema version, default file names
"""

from typing import Dict, Tuple

__all__ = [
    # Budget
    "CATEGORIES",
    "FALLBACK_CATEGORY",
    "NEAR_THRESHOLD_PCT",
    "DEFAULT_ALERT_LIMIT",
    # Income
    "PAYCHECKS_PER_MONTH",
    "PAY_FREQUENCIES",
    "MAX_TAX_RATE_PCT",
    "MONTHS_PER_YEAR",
    # Debts
    "STRATEGIES",
    "MAX_PAYOFF_MONTHS",
    "NO_PROGRESS_EPSILON",
    "NO_PROGRESS_STRIKES",
    "DEFAULT_SCHEDULE_PREVIEW",
    "DEFAULT_PDF_SCHEDULE_MONTHS",
    # Persistence
    "SCHEMA_VERSION",
    "EXPORT_BASENAME",
]


# =============================================================================
# Budget
# =============================================================================

CATEGORIES: Tuple[str, ...] = (
    "Housing",
    "Utilities",
    "Food",
    "Transportation",
    "Insurance",
    "Health",
    "Shopping",
    "Entertainment",
    "Subscriptions",
    "Childcare",
    "Savings",
    "Debt Minimums",
    "Other",
)
"""Fixed category enumeration, in display order."""

FALLBACK_CATEGORY: str = "Other"
"""Category assigned to entries with a missing or unknown label."""

NEAR_THRESHOLD_PCT: float = 90.0
"""Percent of plan used at which a planned category becomes "Near"."""

DEFAULT_ALERT_LIMIT: int = 6
"""Number of alerts shown by rendering collaborators."""


# =============================================================================
# Income
# =============================================================================

PAYCHECKS_PER_MONTH: Dict[str, float] = {
    "monthly": 1.0,
    "semimonthly": 2.0,
    "biweekly": 26.0 / 12.0,
    "weekly": 52.0 / 12.0,
}
"""Average number of paychecks per calendar month, by pay frequency."""

PAY_FREQUENCIES: Tuple[str, ...] = tuple(PAYCHECKS_PER_MONTH)

MAX_TAX_RATE_PCT: float = 60.0
"""Upper bound applied to the tax rate at the input boundary."""

MONTHS_PER_YEAR: int = 12


# =============================================================================
# Debts
# =============================================================================

STRATEGIES: Tuple[str, ...] = ("avalanche", "snowball")

MAX_PAYOFF_MONTHS: int = 600
"""Hard ceiling on simulated months (50 years)."""

NO_PROGRESS_EPSILON: float = 0.01
"""Monthly principal at or below this amount counts as no progress."""

NO_PROGRESS_STRIKES: int = 3
"""Consecutive no-progress months after which a plan is declared infeasible."""

DEFAULT_SCHEDULE_PREVIEW: int = 240
"""Schedule rows displayed on screen."""

DEFAULT_PDF_SCHEDULE_MONTHS: int = 60
"""Schedule rows included in the PDF report."""


# =============================================================================
# Persistence
# =============================================================================

SCHEMA_VERSION: int = 2
"""Version written into saved state files."""

EXPORT_BASENAME: str = "checks-and-balances"

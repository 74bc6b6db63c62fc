"""
Configuration management module for checkbal.

Purpose
-------
Centralized, type-safe description of the planner's user data and of the
application settings, using Pydantic models. The models encode the input
boundary rules (positive amounts, non-empty names, tax rate in 0..60,
known categories) that the calculation engine relies on but never checks.

Two loading styles use these models:

- strict: ``StateConfig.model_validate(data)`` raises on any violation
  (used by ``checkbal state validate``)
- lenient: ``checkbal.serialization.migrate_state`` repairs and filters
  instead, then produces the same shapes

Design Principles
-----------------
- Type-safe: Pydantic enforces types and validates ranges
- Immutable: Frozen models prevent accidental mutation
- Serializable: model_dump()/model_dump_json() for state files
- Environment-aware: AppSettings reads CHECKBAL_* variables and .env files

Example
-------
>>> from checkbal.config import IncomeConfig, PayoffConfig
>>> income = IncomeConfig(frequency="weekly", gross_per_paycheck=900, tax_rate_pct=18)
>>> payoff = PayoffConfig(strategy="snowball", extra_payment=150)
>>> payoff.model_dump()
{'strategy': 'snowball', 'extra_payment': 150.0}
"""

from __future__ import annotations

import datetime
from pathlib import Path
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    CATEGORIES,
    DEFAULT_ALERT_LIMIT,
    DEFAULT_PDF_SCHEDULE_MONTHS,
    DEFAULT_SCHEDULE_PREVIEW,
    MAX_PAYOFF_MONTHS,
    MAX_TAX_RATE_PCT,
    SCHEMA_VERSION,
)
from .utils import current_month, is_ledger_month

__all__ = [
    "IncomeConfig",
    "ExpenseConfig",
    "TransactionConfig",
    "DebtConfig",
    "PayoffConfig",
    "StateConfig",
    "AppSettings",
]


def _check_category(v: str) -> str:
    if v not in CATEGORIES:
        raise ValueError(f"Unknown category '{v}'. Expected one of: {', '.join(CATEGORIES)}")
    return v


# ---------------------------------------------------------------------------
# Income Configuration
# ---------------------------------------------------------------------------

class IncomeConfig(BaseModel):
    """
    Paycheck-based income settings.

    Attributes
    ----------
    frequency : str
        "monthly", "semimonthly", "biweekly" or "weekly".
    gross_per_paycheck : float
        Gross pay per paycheck (>= 0).
    tax_rate_pct : float
        Effective tax rate in percent (0-60).
    other_deductions_per_paycheck : float
        Per-paycheck deductions (>= 0).
    other_monthly_income : float
        Additional monthly income (>= 0).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    frequency: Literal["monthly", "semimonthly", "biweekly", "weekly"] = Field(
        default="biweekly",
        description="Pay frequency"
    )
    gross_per_paycheck: float = Field(
        default=0.0,
        ge=0,
        description="Gross pay per paycheck"
    )
    tax_rate_pct: float = Field(
        default=20.0,
        ge=0,
        le=MAX_TAX_RATE_PCT,
        description="Effective tax rate (%)"
    )
    other_deductions_per_paycheck: float = Field(
        default=0.0,
        ge=0,
        description="Other deductions per paycheck"
    )
    other_monthly_income: float = Field(
        default=0.0,
        ge=0,
        description="Other monthly income"
    )


# ---------------------------------------------------------------------------
# Ledger Configuration
# ---------------------------------------------------------------------------

class ExpenseConfig(BaseModel):
    """A planned monthly expense."""

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    id: str = Field(min_length=1, description="Opaque identifier")
    name: str = Field(min_length=1, max_length=100, description="Expense name")
    category: str = Field(default="Other", description="Budget category")
    amount: float = Field(gt=0, description="Planned monthly amount")

    @field_validator("category")
    @classmethod
    def validate_category(cls, v):
        """Ensure category belongs to the fixed category list."""
        return _check_category(v)


class TransactionConfig(BaseModel):
    """An actual spending entry."""

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    id: str = Field(min_length=1, description="Opaque identifier")
    date: datetime.date = Field(description="Transaction date")
    category: str = Field(default="Other", description="Budget category")
    description: str = Field(default="", max_length=200, description="Free-text note")
    amount: float = Field(gt=0, description="Amount spent")

    @field_validator("category")
    @classmethod
    def validate_category(cls, v):
        """Ensure category belongs to the fixed category list."""
        return _check_category(v)


class DebtConfig(BaseModel):
    """
    A debt entry.

    Examples
    --------
    >>> debt = DebtConfig(id="d1", name="Visa", balance=2_000, apr_pct=22.9, min_payment=60)
    >>> debt.balance, debt.min_payment
    (2000.0, 60.0)
    """

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    id: str = Field(min_length=1, description="Opaque identifier")
    name: str = Field(min_length=1, max_length=100, description="Debt name")
    balance: float = Field(gt=0, description="Amount owed")
    apr_pct: float = Field(default=0.0, ge=0, description="Annual percentage rate (%)")
    min_payment: float = Field(default=0.0, ge=0, description="Minimum monthly payment")


class PayoffConfig(BaseModel):
    """Debt repayment settings."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    strategy: Literal["avalanche", "snowball"] = Field(
        default="avalanche",
        description="Extra-payment targeting strategy"
    )
    extra_payment: float = Field(
        default=0.0,
        ge=0,
        description="Extra monthly payment on top of minimums"
    )


# ---------------------------------------------------------------------------
# State Configuration
# ---------------------------------------------------------------------------

class StateConfig(BaseModel):
    """
    Complete saved planner state.

    Attributes
    ----------
    schema_version : int
        Version of the state file layout.
    ledger_month : str
        Month (YYYY-MM) used to filter spending for budget comparison.
    income : IncomeConfig
    expenses : List[ExpenseConfig]
    spending : List[TransactionConfig]
    debts : List[DebtConfig]
    payoff : PayoffConfig
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    schema_version: int = Field(default=SCHEMA_VERSION, ge=1)
    ledger_month: str = Field(default_factory=current_month, description="Ledger month YYYY-MM")
    income: IncomeConfig = Field(default_factory=IncomeConfig)
    expenses: List[ExpenseConfig] = Field(default_factory=list)
    spending: List[TransactionConfig] = Field(default_factory=list)
    debts: List[DebtConfig] = Field(default_factory=list)
    payoff: PayoffConfig = Field(default_factory=PayoffConfig)

    @field_validator("ledger_month")
    @classmethod
    def validate_ledger_month(cls, v):
        """Ensure the ledger month looks like YYYY-MM."""
        if not is_ledger_month(v):
            raise ValueError(f"ledger_month must look like YYYY-MM, got '{v}'")
        return v


# ---------------------------------------------------------------------------
# Application Settings (Environment Variables)
# ---------------------------------------------------------------------------

class AppSettings(BaseSettings):
    """
    Global application settings loaded from environment variables.

    Supports .env files for local development. Environment variables
    are prefixed with CHECKBAL_ (e.g., CHECKBAL_STATE_FILE=~/budget.json).

    Attributes
    ----------
    debug : bool
        Enable debug logging.
    log_level : str
        Logging level: "DEBUG", "INFO", "WARNING", "ERROR" (any case).
    state_file : Path
        Location of the saved planner state.
    alert_limit : int
        Number of budget alerts displayed.
    schedule_preview_months : int
        Payoff schedule rows displayed in the terminal.
    pdf_schedule_months : int
        Payoff schedule rows included in PDF reports.

    Examples
    --------
    >>> settings = AppSettings()
    >>> settings.alert_limit
    6
    """

    model_config = SettingsConfigDict(
        env_prefix="CHECKBAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level"
    )
    state_file: Path = Field(
        default=Path.home() / ".config" / "checkbal" / "state.json",
        description="Saved planner state"
    )
    alert_limit: int = Field(
        default=DEFAULT_ALERT_LIMIT,
        ge=1,
        le=len(CATEGORIES),
        description="Budget alerts displayed"
    )
    schedule_preview_months: int = Field(
        default=DEFAULT_SCHEDULE_PREVIEW,
        ge=1,
        le=MAX_PAYOFF_MONTHS,
        description="Payoff schedule rows shown in the terminal"
    )
    pdf_schedule_months: int = Field(
        default=DEFAULT_PDF_SCHEDULE_MONTHS,
        ge=1,
        le=MAX_PAYOFF_MONTHS,
        description="Payoff schedule rows in PDF reports"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept level names in any case, e.g. CHECKBAL_LOG_LEVEL=info."""
        return v.strip().upper() if isinstance(v, str) else v

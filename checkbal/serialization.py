"""
Serialization module for checkbal state persistence.

Purpose
-------
Saves and restores the planner state (income settings, planned expenses,
spending ledger, debts, payoff settings, ledger month) as JSON, and is the
place where raw user data is sanitized before it reaches the engine.

Two loading paths
-----------------
- Lenient (default): ``migrate_state`` accepts any JSON-ish document,
  including files written by the browser version of the planner
  (camelCase keys, ``version`` field). Missing or malformed fields fall
  back to defaults, numbers are coerced, the tax rate is clamped to 0..60,
  unknown categories become "Other", and entries with an empty name or a
  non-positive amount are dropped. It never raises.
- Strict: ``validate_state_file`` / ``load_state(strict=True)`` validate the
  current layout against ``checkbal.config.StateConfig`` and raise
  ``ValidationError`` on the first violation.

Design Principles
-----------------
- Human-readable: indented JSON, snake_case keys
- Versioned: every file carries ``schema_version``
- Forgiving on read, exact on write

Example
-------
>>> from pathlib import Path
>>> from checkbal.serialization import load_state, save_state
>>> state = load_state(Path("state.json"))        # default state if missing
>>> state = state.add_expense("Rent", "Housing", 1_500)
>>> save_state(state, Path("state.json"))
"""

from __future__ import annotations

import json
import logging
import shutil
import warnings
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from .config import StateConfig
from .constants import CATEGORIES, FALLBACK_CATEGORY, MAX_TAX_RATE_PCT, PAY_FREQUENCIES, SCHEMA_VERSION
from .debts import Debt, PayoffSettings
from .exceptions import StateFileError, ValidationError
from .income import IncomeProfile
from .ledger import PlannedExpense, Transaction
from .model import PlannerState
from .utils import clamp, current_month, is_ledger_month, new_id, non_negative, num, today_iso

__all__ = [
    "SCHEMA_VERSION",
    "backup_path",
    "default_state",
    "migrate_state",
    "state_to_dict",
    "state_from_config",
    "save_state",
    "load_state",
    "validate_state_file",
]

logger = logging.getLogger(__name__)


def default_state() -> PlannerState:
    """Fresh state: current month, biweekly pay at 20% tax, nothing entered."""
    return PlannerState(
        ledger_month=current_month(),
        income=IncomeProfile(
            frequency="biweekly",
            gross_per_paycheck=0.0,
            tax_rate_pct=20.0,
            other_deductions_per_paycheck=0.0,
            other_monthly_income=0.0,
        ),
        payoff=PayoffSettings(strategy="avalanche", extra_payment=0.0),
    )


# ---------------------------------------------------------------------------
# Lenient migration
# ---------------------------------------------------------------------------

def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """First present key among *keys* (snake_case and camelCase spellings)."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _records(value: Any) -> List[Mapping[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, Mapping)]


def _category(value: Any) -> str:
    return value if value in CATEGORIES else FALLBACK_CATEGORY


def _migrate_income(raw: Any, default: IncomeProfile) -> IncomeProfile:
    if not isinstance(raw, Mapping):
        return default
    frequency = _pick(raw, "frequency", default=default.frequency)
    return IncomeProfile(
        frequency=frequency if frequency in PAY_FREQUENCIES else default.frequency,
        gross_per_paycheck=num(_pick(raw, "gross_per_paycheck", "grossPerPaycheck")),
        tax_rate_pct=clamp(num(_pick(raw, "tax_rate_pct", "taxRatePct")), 0.0, MAX_TAX_RATE_PCT),
        other_deductions_per_paycheck=num(
            _pick(raw, "other_deductions_per_paycheck", "otherDeductionsPerPaycheck")
        ),
        other_monthly_income=num(_pick(raw, "other_monthly_income", "otherMonthlyIncome")),
    )


def _migrate_expenses(raw: Any) -> List[PlannedExpense]:
    expenses = []
    for e in _records(raw):
        expense = PlannedExpense(
            id=str(e.get("id") or new_id("exp")),
            name=str(e.get("name") or "").strip(),
            category=_category(e.get("category")),
            amount=num(e.get("amount")),
        )
        if expense.name and expense.amount > 0:
            expenses.append(expense)
    return expenses


def _migrate_spending(raw: Any) -> List[Transaction]:
    spending = []
    for t in _records(raw):
        txn = Transaction(
            id=str(t.get("id") or new_id("txn")),
            date=str(t.get("date") or "")[:10] or today_iso(),
            category=_category(t.get("category")),
            description=str(t.get("description") or "").strip(),
            amount=num(t.get("amount")),
        )
        if txn.amount > 0:
            spending.append(txn)
    return spending


def _migrate_debts(raw: Any) -> List[Debt]:
    debts = []
    for d in _records(raw):
        debt = Debt(
            id=str(d.get("id") or new_id("debt")),
            name=str(d.get("name") or "").strip(),
            balance=num(d.get("balance")),
            apr_pct=non_negative(_pick(d, "apr_pct", "aprPct")),
            min_payment=non_negative(_pick(d, "min_payment", "minPayment")),
        )
        if debt.name and debt.balance > 0:
            debts.append(debt)
    return debts


def _migrate_payoff(raw: Any, default: PayoffSettings) -> PayoffSettings:
    if not isinstance(raw, Mapping):
        return default
    return PayoffSettings(
        strategy="snowball" if raw.get("strategy") == "snowball" else "avalanche",
        extra_payment=non_negative(_pick(raw, "extra_payment", "extraPayment")),
    )


def migrate_state(raw: Any) -> PlannerState:
    """
    Build a clean PlannerState from any previously saved document.

    Parameters
    ----------
    raw : Any
        Decoded JSON. Anything that is not a mapping yields the default state.

    Returns
    -------
    PlannerState
        Sanitized state; never raises.
    """
    base = default_state()
    if not isinstance(raw, Mapping):
        return base

    version = num(_pick(raw, "schema_version", "version", default=SCHEMA_VERSION))
    if version > SCHEMA_VERSION:
        warnings.warn(
            f"State schema version {version:g} is newer than supported "
            f"version {SCHEMA_VERSION}. Unknown fields are ignored.",
            UserWarning,
        )

    ledger_month = _pick(raw, "ledger_month", "ledgerMonth")
    return PlannerState(
        ledger_month=ledger_month if is_ledger_month(ledger_month) else base.ledger_month,
        income=_migrate_income(raw.get("income"), base.income),
        expenses=tuple(_migrate_expenses(raw.get("expenses"))),
        spending=tuple(_migrate_spending(raw.get("spending"))),
        debts=tuple(_migrate_debts(raw.get("debts"))),
        payoff=_migrate_payoff(raw.get("payoff"), base.payoff),
    )


# ---------------------------------------------------------------------------
# Strict conversion
# ---------------------------------------------------------------------------

def state_from_config(config: StateConfig) -> PlannerState:
    """Convert a validated StateConfig into a PlannerState."""
    return PlannerState(
        ledger_month=config.ledger_month,
        income=IncomeProfile(**config.income.model_dump()),
        expenses=tuple(PlannedExpense(**e.model_dump()) for e in config.expenses),
        spending=tuple(
            Transaction(
                id=t.id,
                date=t.date.isoformat(),
                category=t.category,
                description=t.description,
                amount=t.amount,
            )
            for t in config.spending
        ),
        debts=tuple(Debt(**d.model_dump()) for d in config.debts),
        payoff=PayoffSettings(**config.payoff.model_dump()),
    )


def state_to_dict(state: PlannerState) -> Dict[str, Any]:
    """
    Convert PlannerState to its saved dictionary representation.

    Returns
    -------
    dict
        ``schema_version``, ``ledger_month``, ``income``, ``expenses``,
        ``spending``, ``debts`` and ``payoff`` with snake_case keys.
    """
    return {
        "schema_version": SCHEMA_VERSION,
        "ledger_month": state.ledger_month,
        "income": asdict(state.income),
        "expenses": [asdict(e) for e in state.expenses],
        "spending": [asdict(t) for t in state.spending],
        "debts": [asdict(d) for d in state.debts],
        "payoff": asdict(state.payoff),
    }


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------

def backup_path(path: Path) -> Path:
    """``state.json`` -> ``state.json.bak``."""
    path = Path(path)
    return path.with_name(path.name + ".bak")


def _backup_unreadable(path: Path) -> Optional[Path]:
    """Copy an existing file that does not hold a JSON object aside."""
    if not path.is_file():
        return None
    try:
        if isinstance(_read_json(path), dict):
            return None
    except StateFileError:
        pass
    bak = backup_path(path)
    shutil.copyfile(path, bak)
    logger.warning("State file %s could not be read; kept a copy at %s", path, bak)
    return bak


def save_state(state: PlannerState, path: Path) -> None:
    """
    Write *state* to *path* as indented JSON, creating parent directories.

    An existing file that cannot be read back as a JSON object is copied to
    ``<name>.bak`` first, so a corrupt file is never silently replaced.

    Raises
    ------
    StateFileError
        If the file (or its backup) cannot be written.
    """
    path = Path(path)
    try:
        _backup_unreadable(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(state_to_dict(state), f, indent=2)
    except OSError as e:
        raise StateFileError(f"Cannot write state file {path}: {e}") from e
    logger.info("Saved state to %s", path)


def _read_json(path: Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise StateFileError(f"Cannot read state file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise StateFileError(f"State file {path} is not valid JSON: {e}") from e


def validate_state_file(path: Path) -> StateConfig:
    """
    Strictly validate a saved state file.

    Raises
    ------
    StateFileError
        If the file is missing, unreadable or not a JSON object.
    ValidationError
        If the content violates the state schema.
    """
    path = Path(path)
    data = _read_json(path)
    if not isinstance(data, dict):
        raise StateFileError(f"State file {path} must contain a JSON object.")
    try:
        return StateConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(f"State file {path} is invalid:\n{e}") from e


def load_state(path: Optional[Path], *, strict: bool = False) -> PlannerState:
    """
    Load the planner state from *path*.

    A missing file yields the default state. In lenient mode an unreadable
    or corrupt file is logged and also yields the default state; in strict
    mode it raises (see :func:`validate_state_file`).
    """
    if path is None or not Path(path).exists():
        return default_state()
    if strict:
        return state_from_config(validate_state_file(Path(path)))
    try:
        raw = _read_json(Path(path))
    except StateFileError as e:
        logger.warning("%s; starting from a default state", e)
        return default_state()
    return migrate_state(raw)

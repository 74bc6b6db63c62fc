"""
Custom exceptions for checkbal.

Purpose
-------
Provides a unified exception hierarchy for the collaborators that sit at the
edges of the planning engine (settings, state files, exports, CLI). The
calculation engine itself never raises for business data: infeasible payoff
plans and empty inputs are reported as data. All exceptions inherit from
CheckbalError, enabling catch-all handling when needed.

Exception Hierarchy
-------------------
CheckbalError (base)
├── ConfigurationError - Invalid settings or option values
├── ValidationError - Strict validation of user data failed
├── StateFileError - State file cannot be read or written
└── ExportError - Report export failed or format unsupported

Usage
-----
>>> from checkbal.exceptions import CheckbalError, StateFileError
>>> try:
...     raise StateFileError("Cannot read state file state.json")
... except CheckbalError as e:
...     print(f"checkbal error: {e}")
checkbal error: Cannot read state file state.json
"""


class CheckbalError(Exception):
    """
    Base exception for all checkbal errors.

    Examples
    --------
    >>> from checkbal.export import export_report
    >>> from checkbal.model import PlannerState
    >>> try:
    ...     export_report(PlannerState(ledger_month="2025-03"), "report.docx", fmt="docx")
    ... except CheckbalError as e:
    ...     print(f"Export failed: {e}")
    Export failed: Unsupported export format 'docx'. Valid: xlsx, pdf
    """
    pass


class ConfigurationError(CheckbalError):
    """
    Invalid configuration or option values.

    Raised when settings or command options are invalid, such as a
    malformed ledger month (must be YYYY-MM).

    Examples
    --------
    >>> from checkbal.model import PlannerState
    >>> PlannerState(ledger_month="2025-03").with_month("2025/01")
    Traceback (most recent call last):
        ...
    checkbal.exceptions.ConfigurationError: ledger month must look like YYYY-MM, got '2025/01'.
    """
    pass


class ValidationError(CheckbalError):
    """
    Strict data validation failures.

    Raised by strict loaders when a state document does not conform to the
    boundary schema (negative amounts, empty names, tax rate above 60%).
    Lenient loading sanitizes instead of raising.
    """
    pass


class StateFileError(CheckbalError):
    """
    State file cannot be read or written.

    Raised on I/O failures or when a strict load finds content that is not
    a JSON object.
    """
    pass


class ExportError(CheckbalError):
    """
    Report export failures.

    Examples
    --------
    >>> raise ExportError("Unsupported export format 'docx'. Valid: xlsx, pdf")
    Traceback (most recent call last):
        ...
    checkbal.exceptions.ExportError: Unsupported export format 'docx'. Valid: xlsx, pdf
    """
    pass

"""
Report export for checkbal.

Purpose
-------
Writes the planner state and everything derived from it to files a
household can keep or share:

- export_excel: one workbook, one sheet per view (Summary, Income,
  PlannedExpenses, SpendingAll, Spending_<month>, BudgetVsActual, Debts,
  PayoffPlan), numbers kept numeric
- export_pdf: a printable report with the same summary, the month's
  spending, budget vs actual, debts, the first months of the payoff
  schedule, and the two charts from ``checkbal.plotting``

Both derive every figure from one ``PlannerState`` in a single pass so the
sheets and pages agree with each other and with the CLI.

Example
-------
>>> from checkbal.export import default_filename, export_report
>>> from checkbal.model import PlannerState
>>> state = PlannerState(ledger_month="2025-03")
>>> path = default_filename(state, "xlsx")
>>> path.name
'checks-and-balances_2025-03.xlsx'
>>> export_report(state, path, "xlsx").exists()
True
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Sequence

import pandas as pd

from .constants import DEFAULT_PDF_SCHEDULE_MONTHS, EXPORT_BASENAME
from .exceptions import ExportError
from .ledger import sort_by_date
from .model import PlannerState
from .utils import format_money, format_pct, month_from_date, num

__all__ = [
    "EXPORT_FORMATS",
    "default_filename",
    "summary_rows",
    "build_sheets",
    "export_excel",
    "export_pdf",
    "export_report",
]

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("xlsx", "pdf")

_PDF_PAGE = (8.5, 11)
_ROWS_PER_PAGE = 34
_HEADER_COLOR = "#14161d"


def default_filename(state: PlannerState, ext: str) -> Path:
    """``checks-and-balances_<ledger month>.<ext>``."""
    return Path(f"{EXPORT_BASENAME}_{state.ledger_month}.{ext.lstrip('.')}")


def summary_rows(state: PlannerState, *, formatted: bool = True) -> List[tuple]:
    """
    (metric, value) pairs of the report summary.

    With ``formatted=False`` money stays numeric and the payoff time is the
    month count (blank when infeasible), as in the spreadsheet.
    """
    s = state.summary()
    money = format_money if formatted else (lambda v: v)
    rows = [
        ("Monthly Gross (est.)", money(s.monthly_gross)),
        ("Monthly Take-Home (est.)", money(s.monthly_net)),
        ("Planned Expenses", money(s.planned_total)),
        ("Actual Spending (ledger)", money(s.actual_total)),
        ("Variance (Planned - Actual)", money(s.variance)),
        ("Cash Left (Net - Planned)", money(s.cash_left)),
        ("Total Debt", money(s.debt_total)),
        ("Debt Strategy", s.strategy),
        ("Extra Monthly Debt Payment", money(s.extra_payment)),
    ]
    if formatted:
        rows.append(("Estimated Payoff Time", s.payoff_label))
    else:
        rows.insert(0, ("Ledger Month", s.ledger_month))
        rows.append(("Estimated Payoff Time (months)", "" if s.payoff_months is None else s.payoff_months))
    return rows


# ---------------------------------------------------------------------------
# Excel
# ---------------------------------------------------------------------------

def build_sheets(state: PlannerState) -> Dict[str, pd.DataFrame]:
    """Workbook content as an ordered mapping of sheet name to DataFrame."""
    inc = state.income_breakdown()
    profile = state.income
    month_txns = state.month_transactions()
    report = state.budget()
    plan = state.payoff_plan()

    income = pd.DataFrame(
        [
            ("Pay frequency", profile.frequency),
            ("Gross per paycheck", num(profile.gross_per_paycheck)),
            ("Tax rate (%)", num(profile.tax_rate_pct)),
            ("Other deductions per paycheck", num(profile.other_deductions_per_paycheck)),
            ("Other monthly income", num(profile.other_monthly_income)),
            ("Paychecks per month factor", inc.paychecks_per_month),
            ("Monthly gross", inc.monthly_gross),
            ("Monthly taxes", inc.taxes),
            ("Monthly deductions", inc.deductions),
            ("Monthly take-home (net)", inc.monthly_net),
        ],
        columns=["Field", "Value"],
    )

    budget = report.to_frame().rename(columns={
        "category": "Category", "planned": "Planned", "actual": "Actual",
        "remaining": "Remaining", "pct_used": "% Used", "status": "Status",
    })
    payoff = plan.to_frame().rename(columns={
        "month": "Month", "target": "Target", "paid": "Paid", "interest": "Interest",
        "principal": "Principal", "total_balance_remaining": "Total Balance Remaining",
    })

    return {
        "Summary": pd.DataFrame(summary_rows(state, formatted=False), columns=["Metric", "Value"]),
        "Income": income,
        "PlannedExpenses": pd.DataFrame(
            [(e.name, e.category, num(e.amount)) for e in state.expenses],
            columns=["Name", "Category", "Amount"],
        ),
        "SpendingAll": pd.DataFrame(
            [(t.date, month_from_date(t.date), t.category, t.description, num(t.amount))
             for t in state.spending],
            columns=["Date", "Month", "Category", "Description", "Amount"],
        ),
        f"Spending_{state.ledger_month}": pd.DataFrame(
            [(t.date, t.category, t.description, num(t.amount)) for t in month_txns],
            columns=["Date", "Category", "Description", "Amount"],
        ),
        "BudgetVsActual": budget,
        "Debts": pd.DataFrame(
            [(d.name, num(d.balance), num(d.apr_pct), num(d.min_payment)) for d in state.debts],
            columns=["Name", "Balance", "APR (%)", "Min Payment"],
        ),
        "PayoffPlan": payoff,
    }


def export_excel(state: PlannerState, path: Path) -> Path:
    """
    Write the workbook to *path*.

    Raises
    ------
    ExportError
        If the file cannot be written.
    """
    path = Path(path)
    sheets = build_sheets(state)
    try:
        with pd.ExcelWriter(path, engine="xlsxwriter") as writer:
            header_fmt = writer.book.add_format({"bold": True, "bg_color": "#DCE6F1", "border": 1})
            for name, df in sheets.items():
                df.to_excel(writer, sheet_name=name, index=False)
                worksheet = writer.sheets[name]
                for col, title in enumerate(df.columns):
                    worksheet.write(0, col, title, header_fmt)
                    worksheet.set_column(col, col, max(12, len(str(title)) + 2))
    except OSError as e:
        raise ExportError(f"Cannot write workbook {path}: {e}") from e
    logger.info("Wrote workbook %s (%d sheets)", path, len(sheets))
    return path


# ---------------------------------------------------------------------------
# PDF
# ---------------------------------------------------------------------------

def _table_pages(pdf, title: str, columns: Sequence[str], rows: Sequence[Sequence]) -> None:
    """Render *rows* as one or more table pages headed by *title*."""
    import matplotlib.pyplot as plt

    chunks = [rows[i:i + _ROWS_PER_PAGE] for i in range(0, len(rows), _ROWS_PER_PAGE)] or [[]]
    for n, chunk in enumerate(chunks):
        fig, ax = plt.subplots(figsize=_PDF_PAGE)
        ax.set_axis_off()
        heading = title if n == 0 else f"{title} (continued)"
        ax.set_title(heading, loc="left", fontsize=12, fontweight="bold")
        if chunk:
            table = ax.table(
                cellText=[[str(c) for c in row] for row in chunk],
                colLabels=list(columns),
                loc="upper center",
                cellLoc="left",
            )
            table.auto_set_font_size(False)
            table.set_fontsize(8)
            table.scale(1, 1.3)
            for col in range(len(columns)):
                cell = table[0, col]
                cell.set_facecolor(_HEADER_COLOR)
                cell.get_text().set_color("white")
        else:
            ax.text(0.0, 0.95, "None", transform=ax.transAxes, fontsize=9, alpha=0.7)
        pdf.savefig(fig)
        plt.close(fig)


def export_pdf(
    state: PlannerState,
    path: Path,
    *,
    schedule_months: int = DEFAULT_PDF_SCHEDULE_MONTHS,
) -> Path:
    """
    Write the printable report to *path*.

    Parameters
    ----------
    state : PlannerState
    path : Path
    schedule_months : int, default 60
        Payoff schedule rows included.

    Raises
    ------
    ExportError
        If the file cannot be written.
    """
    import matplotlib.pyplot as plt
    from matplotlib.backends.backend_pdf import PdfPages

    from .plotting import plot_budget_vs_actual, plot_payoff

    path = Path(path)
    month_txns = sort_by_date(state.month_transactions())
    report = state.budget()
    plan = state.payoff_plan()

    try:
        with PdfPages(path) as pdf:
            fig, ax = plt.subplots(figsize=_PDF_PAGE)
            ax.set_axis_off()
            fig.text(0.07, 0.95, "Checks & Balances - Report", fontsize=16, fontweight="bold")
            fig.text(0.07, 0.925, f"Generated: {datetime.now():%Y-%m-%d %H:%M}", fontsize=10)
            fig.text(0.07, 0.905, f"Ledger Month: {state.ledger_month}", fontsize=10)
            table = ax.table(
                cellText=[[m, str(v)] for m, v in summary_rows(state)],
                colLabels=["Metric", "Value"],
                bbox=[0.0, 0.45, 1.0, 0.45],
                cellLoc="left",
            )
            table.auto_set_font_size(False)
            table.set_fontsize(9)
            for col in range(2):
                table[0, col].set_facecolor(_HEADER_COLOR)
                table[0, col].get_text().set_color("white")
            pdf.savefig(fig)
            plt.close(fig)

            _table_pages(pdf, "Planned Expenses", ["Name", "Category", "Amount"],
                         [(e.name, e.category, format_money(e.amount)) for e in state.expenses])
            _table_pages(pdf, f"Actual Spending (Ledger: {state.ledger_month})",
                         ["Date", "Category", "Description", "Amount"],
                         [(t.date, t.category, t.description, format_money(t.amount)) for t in month_txns])
            _table_pages(pdf, "Budget vs Actual (by category)",
                         ["Category", "Planned", "Actual", "Remaining", "% Used", "Status"],
                         [(r.category, format_money(r.planned), format_money(r.actual),
                           format_money(r.remaining), format_pct(r.pct_used), r.status)
                          for r in report.rows])
            _table_pages(pdf, "Debts", ["Name", "Balance", "APR", "Min Payment"],
                         [(d.name, format_money(d.balance), format_pct(d.apr_pct, decimals=2),
                           format_money(d.min_payment)) for d in state.debts])
            _table_pages(pdf, f"Debt Payoff Schedule (first {schedule_months} months)",
                         ["Month", "Target", "Paid", "Interest", "Principal", "Total Balance Remaining"],
                         [(r.month, r.target, format_money(r.paid), format_money(r.interest),
                           format_money(r.principal), format_money(r.total_balance_remaining))
                          for r in plan.schedule[:schedule_months]])

            fig, (ax_budget, ax_payoff) = plt.subplots(2, 1, figsize=_PDF_PAGE)
            plot_budget_vs_actual(report, ax=ax_budget)
            plot_payoff(plan, ax=ax_payoff)
            pdf.savefig(fig)
            plt.close(fig)
    except OSError as e:
        raise ExportError(f"Cannot write report {path}: {e}") from e
    logger.info("Wrote PDF report %s", path)
    return path


def export_report(state: PlannerState, path: Path, fmt: str, **kwargs) -> Path:
    """
    Dispatch to :func:`export_excel` or :func:`export_pdf`.

    Raises
    ------
    ExportError
        If *fmt* is not one of ``EXPORT_FORMATS``.
    """
    fmt = fmt.lower().lstrip(".")
    if fmt == "xlsx":
        return export_excel(state, path)
    if fmt == "pdf":
        return export_pdf(state, path, **kwargs)
    raise ExportError(f"Unsupported export format '{fmt}'. Valid: {', '.join(EXPORT_FORMATS)}")

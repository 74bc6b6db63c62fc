"""
Plotting utilities for checkbal reports.

Purpose
-------
Charts for the two analyses that have a natural visual form:

- plot_budget_vs_actual: grouped planned/actual bars per category, with the
  bar edge colored by status ("OK", "Near", "Over")
- plot_payoff: total remaining balance per month of a payoff schedule, with
  the interest paid each month on a secondary axis

Both functions draw into a caller-supplied Axes when given one (the PDF
export lays several charts on one page) and otherwise create their own
figure. matplotlib is imported lazily so the engine modules never pay for it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import numpy as np

if TYPE_CHECKING:
    from .budget import BudgetReport
    from .debts import PayoffPlan

__all__ = ["plot_budget_vs_actual", "plot_payoff", "STATUS_COLORS"]

STATUS_COLORS = {"OK": "#2e7d32", "Near": "#f9a825", "Over": "#c62828"}


def plot_budget_vs_actual(
    report: BudgetReport,
    ax=None,
    *,
    figsize: tuple = (10, 5),
    title: Optional[str] = "Budget vs Actual",
    save_path: Optional[str] = None,
    return_fig_ax: bool = False,
):
    """
    Grouped bar chart of planned vs actual spending per category.

    Parameters
    ----------
    report : BudgetReport
        Output of ``analyze_budget``.
    ax : matplotlib.axes.Axes, optional
        Axes to draw into; a new figure is created when omitted.
    figsize : tuple, default (10, 5)
        Size of the figure created when *ax* is None.
    title : str, optional
    save_path : str, optional
        Write the figure to this path (png, pdf, svg...).
    return_fig_ax : bool, default False
        If True, returns (fig, ax).

    Returns
    -------
    None or (fig, ax)
    """
    import matplotlib.pyplot as plt

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    rows = report.rows
    if not rows:
        ax.text(0.5, 0.5, "No planned or actual spending", ha="center", va="center",
                transform=ax.transAxes, alpha=0.7)
        ax.set_axis_off()
    else:
        x = np.arange(len(rows))
        width = 0.4
        ax.bar(x - width / 2, [r.planned for r in rows], width, label="Planned",
               color="#90a4ae")
        ax.bar(x + width / 2, [r.actual for r in rows], width, label="Actual",
               color=[STATUS_COLORS[r.status] for r in rows], alpha=0.85)
        ax.set_xticks(x)
        ax.set_xticklabels([r.category for r in rows], rotation=45, ha="right")
        ax.set_ylabel("Amount ($)", fontsize=11)
        ax.legend(loc="best", fontsize=9)
        ax.grid(True, alpha=0.3, axis="y")

    if title:
        ax.set_title(title, fontsize=12, fontweight="bold")
    fig.tight_layout()

    if save_path:
        fig.savefig(save_path, bbox_inches="tight", dpi=150)
    if return_fig_ax:
        return fig, ax


def plot_payoff(
    plan: PayoffPlan,
    ax=None,
    *,
    figsize: tuple = (10, 5),
    title: Optional[str] = None,
    save_path: Optional[str] = None,
    return_fig_ax: bool = False,
):
    """
    Remaining balance over the payoff schedule.

    Infeasible plans are drawn up to the month the simulation stopped and
    the title carries the plan's label.

    Returns
    -------
    None or (fig, ax)
    """
    import matplotlib.pyplot as plt

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    if title is None:
        title = f"Debt Payoff: {plan.payoff_label}"

    if not plan.schedule:
        ax.text(0.5, 0.5, "No debts", ha="center", va="center",
                transform=ax.transAxes, alpha=0.7)
        ax.set_axis_off()
    else:
        months = [r.month for r in plan.schedule]
        ax.plot(months, [r.total_balance_remaining for r in plan.schedule],
                linewidth=2.5, color="#1565c0", label="Balance remaining")
        ax.set_xlabel("Month", fontsize=11)
        ax.set_ylabel("Balance ($)", fontsize=11)
        ax.grid(True, alpha=0.3)

        ax_int = ax.twinx()
        ax_int.bar(months, [r.interest for r in plan.schedule], color="#ef6c00",
                   alpha=0.35, label="Interest")
        ax_int.set_ylabel("Interest ($)", fontsize=11)

        lines, labels = ax.get_legend_handles_labels()
        bars, bar_labels = ax_int.get_legend_handles_labels()
        ax.legend(lines + bars, labels + bar_labels, loc="upper right", fontsize=9)

    ax.set_title(title, fontsize=12, fontweight="bold")
    fig.tight_layout()

    if save_path:
        fig.savefig(save_path, bbox_inches="tight", dpi=150)
    if return_fig_ax:
        return fig, ax

"""
Command-Line Interface for checkbal.

Purpose
-------
Terminal front end for the planner: keeps the state in a JSON file and
prints the dashboard views (summary, budget vs actual, payoff schedule,
income breakdown) as rich tables, or exports them to a workbook or PDF.

Commands
--------
- summary: Dashboard KPIs and top budget alerts
- budget: Budget vs actual table for a ledger month
- payoff: Debt payoff plan (what-if strategy/extra, optionally saved)
- income: Monthly income breakdown (options update the saved settings)
- export: Write an .xlsx workbook or a .pdf report
- state: init / validate / show the state file
- add: expense / spending / debt entries
- remove: delete an entry by id

Example Usage
-------------
    # Start a state file for March
    $ checkbal state init --month 2025-03

    # Enter data
    $ checkbal income --frequency biweekly --gross 2400 --tax-rate 22
    $ checkbal add expense Rent 1500 --category Housing
    $ checkbal add spending 1520 --category Housing --date 2025-03-01
    $ checkbal add debt Visa 2000 --apr 22.9 --min-payment 60

    # Views
    $ checkbal summary
    $ checkbal payoff --strategy snowball --extra 200

    # Use another state file
    $ checkbal --state ~/household.json summary
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from .constants import CATEGORIES, PAY_FREQUENCIES, STRATEGIES

__version__ = "0.1.0"

logger = logging.getLogger(__name__)

_STATUS_STYLE = {"OK": "green", "Near": "yellow", "Over": "bold red"}


def _get_console():
    """Lazy import Rich for better startup time."""
    from rich.console import Console
    return Console()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load(ctx: click.Context):
    from .serialization import load_state
    return load_state(ctx.obj["state_path"])


def _save(ctx: click.Context, state) -> None:
    from .exceptions import CheckbalError
    from .serialization import save_state

    try:
        save_state(state, ctx.obj["state_path"])
    except CheckbalError as e:
        _fail(f"Error: {e}")


def _fail(message: str) -> None:
    click.echo(message, err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="checkbal")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option(
    "--state", "state_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="State file (default: CHECKBAL_STATE_FILE or ~/.config/checkbal/state.json)"
)
@click.pass_context
def main(ctx: click.Context, quiet: bool, verbose: bool, state_path: Optional[Path]) -> None:
    """
    checkbal - Checks & Balances household budget planner.

    Normalizes paycheck income to monthly figures, compares planned
    expenses with actual spending, and simulates debt payoff with the
    avalanche or snowball strategy.

    Use 'checkbal COMMAND --help' for command-specific help.
    """
    from .config import AppSettings

    settings = AppSettings()
    _configure_logging("DEBUG" if verbose or settings.debug else settings.log_level)

    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["settings"] = settings
    ctx.obj["state_path"] = (state_path or settings.state_file).expanduser()
    ctx.obj["console"] = _get_console()
    logger.debug("Using state file %s", ctx.obj["state_path"])


# ---------------------------------------------------------------------------
# Views
# ---------------------------------------------------------------------------

@main.command()
@click.option("--month", "-m", type=str, default=None, help="Ledger month YYYY-MM (default: saved month)")
@click.pass_context
def summary(ctx: click.Context, month: Optional[str]) -> None:
    """
    Show the dashboard summary and top budget alerts.

    Example:
        checkbal summary --month 2025-03
    """
    from rich.table import Table

    from .budget import alert_message
    from .exceptions import CheckbalError
    from .export import summary_rows

    console = ctx.obj["console"]
    settings = ctx.obj["settings"]

    state = _load(ctx)
    if month:
        try:
            state = state.with_month(month)
        except CheckbalError as e:
            _fail(f"Error: {e}")

    table = Table(title=f"Summary ({state.ledger_month})")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    for metric, value in summary_rows(state):
        table.add_row(metric, str(value))
    console.print(table)

    alerts = state.budget().top_alerts(settings.alert_limit)
    if not alerts:
        if not ctx.obj["quiet"]:
            console.print("No budget alerts.", style="green")
        return
    console.print("[bold]Alerts[/bold]")
    for row in alerts:
        console.print(f"- {alert_message(row)}", style=_STATUS_STYLE[row.status], markup=False)


@main.command()
@click.option("--month", "-m", type=str, default=None, help="Ledger month YYYY-MM (default: saved month)")
@click.pass_context
def budget(ctx: click.Context, month: Optional[str]) -> None:
    """
    Compare planned expenses with actual spending by category.

    Example:
        checkbal budget --month 2025-02
    """
    from rich.table import Table

    from .budget import alert_message, summarize_statuses
    from .utils import format_money, format_pct, is_ledger_month

    console = ctx.obj["console"]
    state = _load(ctx)
    if month and not is_ledger_month(month):
        _fail(f"Error: ledger month must look like YYYY-MM, got '{month}'.")
    ledger_month = month or state.ledger_month
    report = state.budget(ledger_month)

    table = Table(title=f"Budget vs Actual ({ledger_month})")
    for name in ("Category", "Planned", "Actual", "Remaining", "% Used", "Status"):
        table.add_column(name, justify="left" if name in ("Category", "Status") else "right")
    for r in report.rows:
        table.add_row(
            r.category,
            format_money(r.planned),
            format_money(r.actual),
            format_money(r.remaining),
            format_pct(r.pct_used),
            f"[{_STATUS_STYLE[r.status]}]{r.status}[/]",
        )
    console.print(table)

    if not ctx.obj["quiet"]:
        ok, near, over = summarize_statuses(report)
        console.print(f"OK: {ok}  Near: {near}  Over: {over}")
        for row in report.top_alerts(ctx.obj["settings"].alert_limit):
            console.print(f"- {alert_message(row)}", markup=False)
        months = state.months_with_spending()
        if months and ledger_month not in months:
            console.print(f"No spending in {ledger_month}. Months with spending: {', '.join(months)}")


@main.command()
@click.option("--strategy", "-s", type=click.Choice(STRATEGIES), default=None,
              help="Payoff strategy (default: saved strategy)")
@click.option("--extra", "-e", type=float, default=None,
              help="Extra monthly payment (default: saved amount)")
@click.option("--limit", "-n", type=int, default=None,
              help="Schedule rows to display (default: CHECKBAL_SCHEDULE_PREVIEW_MONTHS)")
@click.option("--save", is_flag=True, help="Store --strategy/--extra as the new settings")
@click.pass_context
def payoff(
    ctx: click.Context,
    strategy: Optional[str],
    extra: Optional[float],
    limit: Optional[int],
    save: bool,
) -> None:
    """
    Simulate the debt payoff plan.

    Every debt gets its minimum payment; the extra amount goes to the
    strategy's target debt first and cascades to the next.

    Example:
        checkbal payoff --strategy snowball --extra 250 --limit 24
    """
    from rich.markup import escape
    from rich.table import Table

    from .utils import format_money

    console = ctx.obj["console"]
    state = _load(ctx)
    if strategy is not None or extra is not None:
        state = state.with_payoff(strategy, extra)
        if save:
            _save(ctx, state)

    plan = state.payoff_plan()
    console.print(
        f"Strategy: {state.payoff.strategy}  Extra: {format_money(state.payoff.extra_payment)}",
        markup=False,
    )
    console.print(f"Payoff: {plan.payoff_label}", markup=False)
    if not plan.schedule:
        return

    limit = limit if limit is not None else ctx.obj["settings"].schedule_preview_months
    table = Table(title="Payoff Schedule")
    for name in ("Month", "Target", "Paid", "Interest", "Principal", "Balance"):
        table.add_column(name, justify="left" if name == "Target" else "right")
    for r in plan.schedule[: max(0, limit)]:
        table.add_row(
            str(r.month),
            escape(r.target),
            format_money(r.paid),
            format_money(r.interest),
            format_money(r.principal),
            format_money(r.total_balance_remaining),
        )
    console.print(table)
    if not ctx.obj["quiet"] and len(plan.schedule) > limit:
        console.print(f"... {len(plan.schedule) - limit} more month(s)")
    if not ctx.obj["quiet"]:
        console.print(f"Total interest: {format_money(plan.total_interest)}", markup=False)


@main.command()
@click.option("--frequency", "-f", type=click.Choice(PAY_FREQUENCIES), default=None, help="Pay frequency")
@click.option("--gross", type=float, default=None, help="Gross pay per paycheck")
@click.option("--tax-rate", type=click.FloatRange(0, 60), default=None, help="Effective tax rate (%)")
@click.option("--deductions", type=float, default=None, help="Other deductions per paycheck")
@click.option("--other-income", type=float, default=None, help="Other monthly income")
@click.pass_context
def income(
    ctx: click.Context,
    frequency: Optional[str],
    gross: Optional[float],
    tax_rate: Optional[float],
    deductions: Optional[float],
    other_income: Optional[float],
) -> None:
    """
    Show the monthly income breakdown; options update the saved settings.

    Example:
        checkbal income --frequency weekly --gross 900 --tax-rate 18
    """
    from dataclasses import replace

    from rich.table import Table

    from .utils import format_money, non_negative

    console = ctx.obj["console"]
    state = _load(ctx)

    updates = {
        "frequency": frequency,
        "gross_per_paycheck": gross,
        "tax_rate_pct": tax_rate,
        "other_deductions_per_paycheck": deductions,
        "other_monthly_income": other_income,
    }
    updates = {k: v for k, v in updates.items() if v is not None}
    if updates:
        for key in ("gross_per_paycheck", "other_deductions_per_paycheck", "other_monthly_income"):
            if key in updates:
                updates[key] = non_negative(updates[key])
        state = state.with_income(replace(state.income, **updates))
        _save(ctx, state)
        if not ctx.obj["quiet"]:
            console.print("Income settings saved.", style="green")

    inc = state.income_breakdown()
    table = Table(title=f"Income ({state.income.frequency})")
    table.add_column("Field", style="cyan")
    table.add_column("Monthly", justify="right")
    table.add_row("Paychecks per month", f"{inc.paychecks_per_month:.2f}")
    table.add_row("Gross", format_money(inc.monthly_gross))
    table.add_row("Taxes", format_money(inc.taxes))
    table.add_row("Deductions", format_money(inc.deductions))
    table.add_row("Take-home (net)", format_money(inc.monthly_net))
    console.print(table)


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------

@main.command()
@click.argument("fmt", metavar="FORMAT", type=click.Choice(["xlsx", "pdf"]))
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output file (default: checks-and-balances_<month>.<format>)"
)
@click.pass_context
def export(ctx: click.Context, fmt: str, output: Optional[Path]) -> None:
    """
    Export the planner to a workbook or PDF report.

    Example:
        checkbal export pdf -o march.pdf
    """
    from .exceptions import CheckbalError
    from .export import default_filename, export_report

    state = _load(ctx)
    path = output or default_filename(state, fmt)
    kwargs = {"schedule_months": ctx.obj["settings"].pdf_schedule_months} if fmt == "pdf" else {}
    try:
        export_report(state, path, fmt, **kwargs)
    except CheckbalError as e:
        _fail(f"Export failed: {e}")
    if not ctx.obj["quiet"]:
        click.echo(f"Wrote {path}")


# ---------------------------------------------------------------------------
# State file
# ---------------------------------------------------------------------------

@main.group()
def state() -> None:
    """
    State file management commands.

    Create, validate and display the saved planner state.
    """
    pass


@state.command("init")
@click.option("--month", "-m", type=str, default=None, help="Ledger month YYYY-MM (default: current month)")
@click.option("--force", is_flag=True, help="Overwrite an existing state file")
@click.pass_context
def state_init(ctx: click.Context, month: Optional[str], force: bool) -> None:
    """
    Create a fresh state file.

    Example:
        checkbal state init --month 2025-03
    """
    from .exceptions import CheckbalError
    from .serialization import default_state

    path = ctx.obj["state_path"]
    if path.exists() and not force:
        _fail(f"Error: {path} already exists (use --force to overwrite).")

    fresh = default_state()
    if month:
        try:
            fresh = fresh.with_month(month)
        except CheckbalError as e:
            _fail(f"Error: {e}")
    _save(ctx, fresh)
    if not ctx.obj["quiet"]:
        click.echo(f"Created {path}")


@state.command("validate")
@click.argument("state_file", type=click.Path(exists=True, dir_okay=False, path_type=Path), required=False)
@click.pass_context
def state_validate(ctx: click.Context, state_file: Optional[Path]) -> None:
    """
    Strictly validate a state file (default: the active one).

    Example:
        checkbal state validate household.json
    """
    from .exceptions import CheckbalError
    from .serialization import validate_state_file

    path = state_file or ctx.obj["state_path"]
    try:
        cfg = validate_state_file(path)
    except CheckbalError as e:
        _fail(f"State validation failed: {e}")

    if ctx.obj["quiet"]:
        return
    from rich.panel import Panel

    info = (
        f"[bold]State file valid[/bold]\n\n"
        f"Ledger month: {cfg.ledger_month}\n"
        f"Planned expenses: {len(cfg.expenses)}\n"
        f"Spending entries: {len(cfg.spending)}\n"
        f"Debts: {len(cfg.debts)}"
    )
    ctx.obj["console"].print(Panel(info, title=str(path), border_style="green"))


@state.command("show")
@click.option("--format", "-f", "fmt", type=click.Choice(["json", "table"]), default="table")
@click.pass_context
def state_show(ctx: click.Context, fmt: str) -> None:
    """
    Display the saved entries.

    Example:
        checkbal state show --format json
    """
    from .serialization import state_to_dict

    current = _load(ctx)
    if fmt == "json":
        click.echo(json.dumps(state_to_dict(current), indent=2))
        return

    from rich.markup import escape
    from rich.table import Table

    from .utils import format_money, format_pct

    console = ctx.obj["console"]

    expenses = Table(title="Planned Expenses")
    for name in ("Id", "Name", "Category", "Amount"):
        expenses.add_column(name, justify="right" if name == "Amount" else "left")
    for e in current.expenses:
        expenses.add_row(escape(e.id), escape(e.name), e.category, format_money(e.amount))
    console.print(expenses)

    spending = Table(title="Spending")
    for name in ("Id", "Date", "Category", "Description", "Amount"):
        spending.add_column(name, justify="right" if name == "Amount" else "left")
    for t in current.spending:
        spending.add_row(escape(t.id), escape(t.date), t.category, escape(t.description), format_money(t.amount))
    console.print(spending)

    debts = Table(title="Debts")
    for name in ("Id", "Name", "Balance", "APR", "Min Payment"):
        debts.add_column(name, justify="left" if name in ("Id", "Name") else "right")
    for d in current.debts:
        debts.add_row(
            escape(d.id), escape(d.name), format_money(d.balance),
            format_pct(d.apr_pct, decimals=2), format_money(d.min_payment),
        )
    console.print(debts)


# ---------------------------------------------------------------------------
# Entries
# ---------------------------------------------------------------------------

@main.group()
def add() -> None:
    """Add planned expenses, spending entries and debts."""
    pass


def _report_added(ctx: click.Context, before, after, kind: str, items: str) -> None:
    added = getattr(after, items)
    if len(added) == len(getattr(before, items)):
        _fail(f"Error: {kind} not added (a name and a positive amount are required).")
    _save(ctx, after)
    if not ctx.obj["quiet"]:
        click.echo(f"Added {kind} {added[-1].id}")


@add.command("expense")
@click.argument("name")
@click.argument("amount", type=float)
@click.option("--category", "-c", type=click.Choice(CATEGORIES), default="Other")
@click.pass_context
def add_expense(ctx: click.Context, name: str, amount: float, category: str) -> None:
    """
    Add a planned monthly expense.

    Example:
        checkbal add expense Rent 1500 --category Housing
    """
    before = _load(ctx)
    _report_added(ctx, before, before.add_expense(name, category, amount), "expense", "expenses")


@add.command("spending")
@click.argument("amount", type=float)
@click.option("--category", "-c", type=click.Choice(CATEGORIES), default="Other")
@click.option("--description", "-d", default="", help="Free-text note")
@click.option("--date", "when", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="Date YYYY-MM-DD (default: today)")
@click.pass_context
def add_spending(ctx: click.Context, amount: float, category: str, description: str, when) -> None:
    """
    Record actual spending.

    Example:
        checkbal add spending 82.40 --category Food --description Groceries
    """
    before = _load(ctx)
    after = before.add_transaction(amount, category, description, date=when.date() if when else None)
    _report_added(ctx, before, after, "spending entry", "spending")


@add.command("debt")
@click.argument("name")
@click.argument("balance", type=float)
@click.option("--apr", type=float, default=0.0, help="Annual percentage rate (%)")
@click.option("--min-payment", type=float, default=0.0, help="Minimum monthly payment")
@click.pass_context
def add_debt(ctx: click.Context, name: str, balance: float, apr: float, min_payment: float) -> None:
    """
    Add a debt.

    Example:
        checkbal add debt Visa 2000 --apr 22.9 --min-payment 60
    """
    before = _load(ctx)
    _report_added(ctx, before, before.add_debt(name, balance, apr, min_payment), "debt", "debts")


@main.command()
@click.argument("item_id")
@click.pass_context
def remove(ctx: click.Context, item_id: str) -> None:
    """
    Remove an expense, spending entry or debt by id.

    Ids are listed by 'checkbal state show'.
    """
    before = _load(ctx)
    after = before.remove(item_id)
    if after == before:
        _fail(f"Error: no entry with id '{item_id}'.")
    _save(ctx, after)
    if not ctx.obj["quiet"]:
        click.echo(f"Removed {item_id}")


if __name__ == "__main__":
    main()

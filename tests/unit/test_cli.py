"""
Unit tests for CLI module.

Tests command-line interface functionality using Click's testing utilities.
"""

import json

import matplotlib
matplotlib.use('Agg')

import pytest
from click.testing import CliRunner

from checkbal.cli import main, __version__
from checkbal.serialization import load_state, save_state


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def state_file(tmp_path, planner_state):
    """Saved state file with the standard March household."""
    path = tmp_path / "state.json"
    save_state(planner_state, path)
    return path


def invoke(runner, state_file, *args):
    return runner.invoke(main, ["--state", str(state_file), *args])


# ============================================================================
# MAIN COMMAND TESTS
# ============================================================================

class TestMainCommand:
    """Test main CLI entry point."""

    def test_main_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "summary" in result.output
        assert "payoff" in result.output
        assert "export" in result.output

    def test_main_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_state_from_environment(self, runner, state_file, monkeypatch):
        monkeypatch.setenv("CHECKBAL_STATE_FILE", str(state_file))
        result = runner.invoke(main, ["state", "show", "--format", "json"])
        assert result.exit_code == 0
        assert json.loads(result.output)["ledger_month"] == "2025-03"


# ============================================================================
# VIEW COMMAND TESTS
# ============================================================================

class TestViews:
    """Test summary, budget, payoff and income views."""

    def test_summary(self, runner, state_file):
        result = invoke(runner, state_file, "summary")
        assert result.exit_code == 0
        assert "Planned Expenses" in result.output
        assert "$2,100.00" in result.output
        assert "Alerts" in result.output
        assert "Over budget by $50.00" in result.output

    def test_summary_bad_month(self, runner, state_file):
        result = invoke(runner, state_file, "summary", "--month", "March")
        assert result.exit_code == 1

    def test_budget(self, runner, state_file):
        result = invoke(runner, state_file, "budget")
        assert result.exit_code == 0
        assert "Shopping" in result.output
        assert "OK: 1  Near: 1  Over: 2" in result.output

    def test_budget_other_month(self, runner, state_file):
        result = invoke(runner, state_file, "budget", "--month", "2025-02")
        assert result.exit_code == 0
        assert "$999.00" in result.output

    def test_budget_invalid_month(self, runner, state_file):
        result = invoke(runner, state_file, "budget", "--month", "2025-2")
        assert result.exit_code == 1
        assert "YYYY-MM" in result.output

    def test_payoff_what_if(self, runner, state_file):
        result = invoke(runner, state_file, "payoff", "--strategy", "snowball", "--extra", "100", "--limit", "3")
        assert result.exit_code == 0
        assert "Strategy: snowball" in result.output
        assert "Payoff Schedule" in result.output
        assert "more month(s)" in result.output
        assert load_state(state_file).payoff.strategy == "avalanche"

    def test_payoff_save(self, runner, state_file):
        result = invoke(runner, state_file, "payoff", "--strategy", "snowball", "--extra", "100", "--save")
        assert result.exit_code == 0
        saved = load_state(state_file).payoff
        assert saved.strategy == "snowball"
        assert saved.extra_payment == 100.0

    def test_payoff_infeasible(self, runner, tmp_path):
        path = tmp_path / "stuck.json"
        runner.invoke(main, ["--state", str(path), "state", "init", "--month", "2025-03"])
        runner.invoke(main, ["--state", str(path), "add", "debt", "Card", "1000", "--apr", "24", "--min-payment", "10"])
        result = runner.invoke(main, ["--state", str(path), "payoff"])
        assert result.exit_code == 0
        assert "Not feasible" in result.output

    def test_payoff_invalid_strategy(self, runner, state_file):
        result = invoke(runner, state_file, "payoff", "--strategy", "fastest")
        assert result.exit_code != 0

    def test_income_view(self, runner, state_file):
        result = invoke(runner, state_file, "income")
        assert result.exit_code == 0
        assert "$3,500.00" in result.output

    def test_income_update(self, runner, state_file):
        result = invoke(runner, state_file, "income", "--frequency", "monthly", "--gross", "4000", "--tax-rate", "0")
        assert result.exit_code == 0
        income = load_state(state_file).income
        assert income.frequency == "monthly"
        assert income.gross_per_paycheck == 4_000.0
        assert income.other_deductions_per_paycheck == 100.0

    def test_income_tax_rate_range(self, runner, state_file):
        result = invoke(runner, state_file, "income", "--tax-rate", "80")
        assert result.exit_code != 0


# ============================================================================
# EXPORT COMMAND TESTS
# ============================================================================

class TestExportCommand:
    """Test export command."""

    def test_export_xlsx(self, runner, state_file, tmp_path):
        out = tmp_path / "out.xlsx"
        result = invoke(runner, state_file, "export", "xlsx", "-o", str(out))
        assert result.exit_code == 0
        assert out.exists()

    def test_export_pdf(self, runner, state_file, tmp_path):
        out = tmp_path / "out.pdf"
        result = invoke(runner, state_file, "export", "pdf", "--output", str(out))
        assert result.exit_code == 0
        assert out.read_bytes().startswith(b"%PDF")

    def test_export_default_name(self, runner, state_file):
        with runner.isolated_filesystem():
            result = invoke(runner, state_file, "export", "xlsx")
            assert result.exit_code == 0
            assert "checks-and-balances_2025-03.xlsx" in result.output

    def test_export_unknown_format(self, runner, state_file):
        result = invoke(runner, state_file, "export", "csv")
        assert result.exit_code != 0


# ============================================================================
# STATE COMMAND TESTS
# ============================================================================

class TestStateCommands:
    """Test state init/validate/show."""

    def test_init(self, runner, tmp_path):
        path = tmp_path / "new" / "state.json"
        result = runner.invoke(main, ["--state", str(path), "state", "init", "--month", "2025-06"])
        assert result.exit_code == 0
        assert load_state(path).ledger_month == "2025-06"

    def test_init_refuses_overwrite(self, runner, state_file):
        result = invoke(runner, state_file, "state", "init")
        assert result.exit_code == 1
        assert "--force" in result.output
        assert len(load_state(state_file).expenses) == 4

    def test_init_force(self, runner, state_file):
        result = invoke(runner, state_file, "state", "init", "--force")
        assert result.exit_code == 0
        assert load_state(state_file).expenses == ()

    def test_validate_valid(self, runner, state_file):
        result = invoke(runner, state_file, "state", "validate")
        assert result.exit_code == 0
        assert "valid" in result.output

    def test_validate_invalid(self, runner, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"ledger_month": "2025-03", "debts": [{"id": "d", "name": "X", "balance": -1}]}))
        result = runner.invoke(main, ["state", "validate", str(bad)])
        assert result.exit_code == 1
        assert "State validation failed" in result.output

    def test_show_json(self, runner, state_file):
        result = invoke(runner, state_file, "state", "show", "--format", "json")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert len(data["debts"]) == 2

    def test_show_table(self, runner, state_file):
        result = invoke(runner, state_file, "state", "show")
        assert result.exit_code == 0
        assert "Planned Expenses" in result.output
        assert "Debts" in result.output


# ============================================================================
# ENTRY COMMAND TESTS
# ============================================================================

class TestEntryCommands:
    """Test add and remove."""

    def test_add_expense(self, runner, state_file):
        result = invoke(runner, state_file, "add", "expense", "Phone", "55", "--category", "Utilities")
        assert result.exit_code == 0
        assert "Added expense exp_" in result.output
        assert load_state(state_file).expenses[-1].category == "Utilities"

    def test_add_expense_non_positive(self, runner, state_file):
        result = invoke(runner, state_file, "add", "expense", "Phone", "0")
        assert result.exit_code == 1
        assert len(load_state(state_file).expenses) == 4

    def test_add_expense_unknown_category(self, runner, state_file):
        result = invoke(runner, state_file, "add", "expense", "Vet", "40", "--category", "Pets")
        assert result.exit_code != 0

    def test_add_spending(self, runner, state_file):
        result = invoke(runner, state_file, "add", "spending", "12.50", "-c", "Food",
                        "-d", "Coffee", "--date", "2025-03-21")
        assert result.exit_code == 0
        txn = load_state(state_file).spending[-1]
        assert txn.date == "2025-03-21"
        assert txn.amount == 12.5

    def test_add_debt(self, runner, state_file):
        result = invoke(runner, state_file, "add", "debt", "Store card", "300", "--apr", "26.99", "--min-payment", "25")
        assert result.exit_code == 0
        assert load_state(state_file).debts[-1].name == "Store card"

    def test_remove(self, runner, state_file):
        result = invoke(runner, state_file, "remove", "t6")
        assert result.exit_code == 0
        assert len(load_state(state_file).spending) == 5

    def test_remove_unknown(self, runner, state_file):
        result = invoke(runner, state_file, "remove", "nope")
        assert result.exit_code == 1

    def test_quiet(self, runner, state_file):
        result = runner.invoke(main, ["--quiet", "--state", str(state_file), "remove", "e1"])
        assert result.exit_code == 0
        assert result.output == ""


# ============================================================================
# ERROR PATH TESTS
# ============================================================================

class TestErrorPaths:
    """Test failures reported as messages instead of tracebacks."""

    @pytest.mark.parametrize("args", [
        ["add", "debt", "Visa", "100"],
        ["add", "expense", "Rent", "1500"],
        ["income", "--gross", "2000"],
        ["payoff", "--strategy", "snowball", "--save"],
    ])
    def test_unwritable_state_path(self, runner, tmp_path, args):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        result = runner.invoke(main, ["--state", str(blocker / "state.json"), *args])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Cannot write state file" in result.output

    def test_corrupt_state_kept_as_backup(self, runner, tmp_path):
        path = tmp_path / "state.json"
        path.write_text("{not json", encoding="utf-8")
        result = runner.invoke(main, ["--state", str(path), "add", "debt", "Visa", "100"])
        assert result.exit_code == 0
        assert (tmp_path / "state.json.bak").read_text(encoding="utf-8") == "{not json"
        assert load_state(path, strict=True).debts[0].name == "Visa"

    def test_lowercase_log_level_env(self, runner, state_file, monkeypatch):
        monkeypatch.setenv("CHECKBAL_LOG_LEVEL", "info")
        result = invoke(runner, state_file, "budget")
        assert result.exit_code == 0


class TestUserText:
    """Test user-entered names that look like console markup."""

    def test_payoff_table_with_markup_name(self, runner, tmp_path):
        path = tmp_path / "state.json"
        runner.invoke(main, ["--state", str(path), "state", "init", "--month", "2025-03"])
        runner.invoke(main, ["--state", str(path), "add", "debt", "Card [/] [bold]x", "500",
                             "--apr", "20", "--min-payment", "100"])
        result = runner.invoke(main, ["--state", str(path), "payoff"])
        assert result.exit_code == 0
        assert result.exception is None

    def test_state_show_with_markup_names(self, runner, tmp_path):
        path = tmp_path / "state.json"
        runner.invoke(main, ["--state", str(path), "state", "init", "--month", "2025-03"])
        runner.invoke(main, ["--state", str(path), "add", "expense", "Rent [/]", "1500"])
        runner.invoke(main, ["--state", str(path), "add", "spending", "12", "-d", "[red]coffee",
                             "--date", "2025-03-02"])
        result = runner.invoke(main, ["--state", str(path), "state", "show"])
        assert result.exit_code == 0
        assert "[red]coffee" in result.output


class TestMonthHints:
    """Test percentage cells and the months-with-spending hint."""

    def test_pct_used_column(self, runner, state_file):
        result = invoke(runner, state_file, "budget")
        assert "100%" in result.output

    def test_month_without_spending_lists_months(self, runner, state_file):
        result = invoke(runner, state_file, "budget", "--month", "2025-07")
        assert result.exit_code == 0
        assert "Months with spending: 2025-02, 2025-03" in result.output

    def test_month_with_spending_no_hint(self, runner, state_file):
        result = invoke(runner, state_file, "budget")
        assert "Months with spending" not in result.output

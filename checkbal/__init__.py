"""
checkbal — Checks & Balances household planner

A small planning engine for monthly household finances: paycheck income
normalized to monthly figures, planned budget compared with actual
spending, and debt payoff simulated under the avalanche or snowball
strategy.

Modules
-------
- income        : Paycheck income to monthly gross/net
- ledger        : Planned expenses, transactions, category totals
- budget        : Budget vs actual rows, statuses and alerts
- debts         : Month-by-month debt payoff simulation
- model         : PlannerState facade and dashboard summary
- serialization : JSON state files (lenient migration, strict validation)
- export        : Excel workbook and PDF report
- plotting      : Budget and payoff charts
- cli           : The ``checkbal`` command

"""

from .income import IncomeProfile, IncomeBreakdown, normalize_income
from .ledger import PlannedExpense, Transaction, group_by_category, spending_for_month
from .budget import BudgetReport, BudgetRow, analyze_budget
from .debts import Debt, PayoffPlan, PayoffSettings, simulate_payoff
from .model import PlannerState, DashboardSummary
from . import utils

__version__ = "0.1.0"

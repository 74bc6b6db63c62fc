"""
Unit tests for ledger.py module.

Tests category aggregation, totals and month filtering.
"""

import pytest

from checkbal.ledger import (
    PlannedExpense,
    Transaction,
    group_by_category,
    sort_by_date,
    spending_for_month,
    sum_planned,
    sum_spending,
)


class TestGroupByCategory:
    """Test the category aggregator."""

    def test_sums_per_category(self, planned_expenses):
        totals = group_by_category(planned_expenses, lambda e: e.amount)
        assert totals == {"Housing": 1_500.0, "Food": 400.0, "Transportation": 200.0}

    def test_only_present_categories(self, planned_expenses):
        totals = group_by_category(planned_expenses, lambda e: e.amount)
        assert "Utilities" not in totals

    def test_order_independent(self, transactions):
        forward = group_by_category(transactions, lambda t: t.amount)
        backward = group_by_category(list(reversed(transactions)), lambda t: t.amount)
        assert forward == backward

    def test_missing_label_counts_as_other(self):
        items = [
            Transaction(id="t1", date="2025-03-01", category="", amount=10.0),
            Transaction(id="t2", date="2025-03-02", category=None, amount=5.0),
        ]
        assert group_by_category(items, lambda t: t.amount) == {"Other": 15.0}

    def test_custom_amount_extractor(self, planned_expenses):
        counts = group_by_category(planned_expenses, lambda e: 1.0)
        assert counts["Food"] == 2.0

    def test_empty(self):
        assert group_by_category([], lambda x: 0.0) == {}


class TestTotals:
    """Test planned and spending totals."""

    def test_sum_planned(self, planned_expenses):
        assert sum_planned(planned_expenses) == 2_100.0

    def test_sum_spending(self, transactions):
        assert sum_spending(transactions) == pytest.approx(3_084.0)

    def test_empty_totals_are_zero(self):
        assert sum_planned([]) == 0.0
        assert sum_spending([]) == 0.0


class TestMonthFiltering:
    """Test ledger month selection and date ordering."""

    def test_spending_for_month(self, transactions):
        march = spending_for_month(transactions, "2025-03")
        assert [t.id for t in march] == ["t1", "t2", "t3", "t4", "t5"]

    def test_other_month(self, transactions):
        feb = spending_for_month(transactions, "2025-02")
        assert [t.id for t in feb] == ["t6"]

    def test_empty_month(self, transactions):
        assert spending_for_month(transactions, "2024-01") == []

    def test_transaction_month_property(self):
        assert Transaction(id="t", date="2025-11-30", category="Food", amount=1.0).month == "2025-11"

    def test_sort_by_date(self, transactions):
        ordered = sort_by_date(spending_for_month(transactions, "2025-03"))
        assert [t.date for t in ordered] == [
            "2025-03-01", "2025-03-04", "2025-03-09", "2025-03-12", "2025-03-18",
        ]

    def test_sort_by_date_does_not_mutate(self, transactions):
        original = list(transactions)
        sort_by_date(transactions)
        assert transactions == original


class TestRecords:
    """Test entry records."""

    def test_expense_is_frozen(self):
        e = PlannedExpense(id="e", name="Rent", category="Housing", amount=1.0)
        with pytest.raises(Exception):
            e.amount = 2.0

    def test_transaction_default_description(self):
        t = Transaction(id="t", date="2025-03-01", category="Food", amount=3.0)
        assert t.description == ""

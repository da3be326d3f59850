from __future__ import annotations

from datetime import date, datetime

import pytest

from expense_dashboard import reports
from expense_dashboard.db import StoreError, TransactionStore
from expense_dashboard.models import TransactionKind

TODAY = date(2025, 3, 18)


@pytest.fixture
def store(tmp_path):
    store = TransactionStore(tmp_path / "expenses.db")
    add = store.add_transaction
    add("alice", TransactionKind.EXPENSE, "Groceries", 100, "Food", datetime(2025, 3, 2))
    add("alice", TransactionKind.EXPENSE, "Restaurant", 300, "Food", datetime(2025, 3, 9))
    add("alice", TransactionKind.EXPENSE, "Metro card", 200, "Transport", datetime(2025, 3, 12))
    add("alice", TransactionKind.EXPENSE, "Old rent", 900, "Bills", datetime(2025, 2, 1))
    add("alice", TransactionKind.INCOME, "March pay", 2000, "Salary", datetime(2025, 3, 1))
    add("alice", TransactionKind.INCOME, "Feb pay", 1800, "Salary", datetime(2025, 2, 1))
    add("bob", TransactionKind.EXPENSE, "Bob's lunch", 50, "Food", datetime(2025, 3, 3))
    return store


def test_home_overview_without_budget(store):
    overview = reports.home_overview(store, "alice", TODAY)

    assert overview['month'] == date(2025, 3, 1)
    assert overview['total_spent'] == 600
    assert overview['total_income'] == 2000
    assert overview['net_balance'] == 1400
    assert overview['budget'] == 0
    assert overview['budget_status'].percentage_used == 0
    assert overview['budget_status'].remaining == -600
    assert len(overview['expenses']) == 3
    assert len(overview['incomes']) == 1


def test_home_overview_with_budget_warning(store):
    store.upsert_budget("alice", TODAY, 650)
    status = reports.home_overview(store, "alice", TODAY)['budget_status']

    assert status.percentage_used == pytest.approx(600 / 650 * 100)
    assert status.remaining == 50
    assert status.is_warning
    assert not status.is_exceeded


def test_monthly_analytics(store):
    data = reports.monthly_analytics(store, "alice", TODAY)

    assert data['expense_summary'].total == 600
    assert data['average_expense'] == 200
    assert data['transaction_count'] == 4
    assert data['net_balance'] == 1400
    assert {s.category: s.amount for s in data['expense_categories']} == {"Food": 400, "Transport": 200}
    assert [(s.category, s.percentage) for s in data['income_categories']] == [("Salary", 100.0)]


def test_monthly_analytics_empty_profile(store):
    data = reports.monthly_analytics(store, "carol", TODAY)

    assert data['transaction_count'] == 0
    assert data['average_expense'] == 0
    assert data['expense_categories'] == []
    assert data['net_balance'] == 0


def test_spending_trends(store):
    periods = reports.spending_trends(store, "alice", TODAY)

    assert len(periods) == 6
    assert periods[-1].period == date(2025, 3, 1)
    feb, mar = periods[-2], periods[-1]
    assert (feb.expenses, feb.income, feb.net) == (900, 1800, 900)
    assert (mar.expenses, mar.income, mar.net) == (600, 2000, 1400)
    assert all(p.expenses == 0 for p in periods[:-2])


def test_spending_trends_custom_window(store):
    periods = reports.spending_trends(store, "alice", TODAY, months=2)
    assert [p.label for p in periods] == ["Feb 2025", "Mar 2025"]


def test_reports_propagate_store_errors(store):
    store.db_path = store.db_path.parent

    with pytest.raises(StoreError):
        reports.home_overview(store, "alice", TODAY)
    with pytest.raises(StoreError):
        reports.spending_trends(store, "alice", TODAY)

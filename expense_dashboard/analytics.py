"""Monthly aggregation of expense and income entries.

This module turns a list of :class:`~expense_dashboard.models.Transaction`
records (and optionally a monthly budget) into the figures shown across the
dashboard: totals, averages, category shares, budget consumption and a
trailing month-by-month series.

All functions are pure.  Degenerate inputs never raise: an empty list, a
zero total or a missing budget produce zero-valued results rather than
``NaN`` or ``ZeroDivisionError``, which keeps every page render simple.
"""

from __future__ import annotations

from datetime import date
from typing import Callable, Iterable, List, Optional, Sequence

import pandas as pd

try:
    from .models import (
        BudgetStatus,
        CategoryShare,
        PeriodSummary,
        Summary,
        Transaction,
        TransactionKind,
        month_bounds,
    )
except ImportError:
    from models import (
        BudgetStatus,
        CategoryShare,
        PeriodSummary,
        Summary,
        Transaction,
        TransactionKind,
        month_bounds,
    )

BUDGET_WARNING_PCT = 90.0
BUDGET_EXCEEDED_PCT = 100.0

TRANSACTION_COLUMNS = ["id", "kind", "title", "amount", "category", "date", "owner"]
SHARE_COLUMNS = ["Category", "Amount", "Percentage"]
PERIOD_COLUMNS = ["Period", "Month", "Expenses", "Income", "Net"]

FetchFn = Callable[[TransactionKind, date, date], Iterable[Transaction]]


def summarize(transactions: Iterable[Transaction]) -> Summary:
    """Total, count and average amount of ``transactions``.

    The average of an empty list is defined as 0.
    """
    amounts = [float(t.amount) for t in transactions]
    total = float(sum(amounts))
    count = len(amounts)
    average = total / count if count > 0 else 0.0
    return Summary(total=total, count=count, average=average)


def category_breakdown(transactions: Iterable[Transaction]) -> List[CategoryShare]:
    """Sum amounts per category and express each as a share of the total.

    Categories are matched by exact string and returned in order of first
    appearance.  When the total is 0 every percentage is 0.

    Example:
        >>> shares = category_breakdown(expenses)
        >>> [(s.category, s.amount, round(s.percentage, 1)) for s in shares]
        [('Food', 400.0, 66.7), ('Transport', 200.0, 33.3)]
    """
    frame = transactions_to_frame(transactions)
    if frame.empty:
        return []

    grouped = frame.groupby("category", sort=False)["amount"].sum()
    total = float(grouped.sum())

    shares = []
    for category, amount in grouped.items():
        amount = float(amount)
        percentage = (amount / total * 100) if total > 0 else 0.0
        shares.append(CategoryShare(category=category, amount=amount, percentage=percentage))
    return shares


def budget_status(total_spent: float, budget_amount: Optional[float]) -> BudgetStatus:
    """Compare spending against a monthly budget.

    A missing or non-positive budget reports 0% used.  ``remaining`` may be
    negative once the budget is overspent.
    """
    budget = float(budget_amount or 0.0)
    spent = float(total_spent or 0.0)
    percentage_used = (spent / budget * 100) if budget > 0 else 0.0
    return BudgetStatus(
        percentage_used=percentage_used,
        remaining=budget - spent,
        is_warning=BUDGET_WARNING_PCT <= percentage_used < BUDGET_EXCEEDED_PCT,
        is_exceeded=percentage_used >= BUDGET_EXCEEDED_PCT,
    )


def net_balance(income_total: float, expense_total: float) -> float:
    return float(income_total) - float(expense_total)


def trailing_periods(n: int, reference_date: date, fetch_fn: FetchFn) -> List[PeriodSummary]:
    """Build ``n`` consecutive monthly summaries ending at ``reference_date``'s month.

    Args:
        n: Number of months in the window. 0 yields an empty list.
        reference_date: Any day inside the newest month of the window.
        fetch_fn: Callable ``(kind, first_day, last_day)`` returning the
            entries of that kind whose date falls in the inclusive range.

    Returns:
        Summaries ordered oldest first.  Each month issues one expense and
        one income query; errors raised by ``fetch_fn`` propagate.
    """
    if n < 0:
        raise ValueError(f"Number of periods must be non-negative, got {n}")

    newest = pd.Period(pd.Timestamp(reference_date), freq="M")
    periods: List[PeriodSummary] = []
    for offset in range(n - 1, -1, -1):
        month = newest - offset
        first_day, last_day = month_bounds(month.start_time.date())
        expenses = summarize(fetch_fn(TransactionKind.EXPENSE, first_day, last_day)).total
        income = summarize(fetch_fn(TransactionKind.INCOME, first_day, last_day)).total
        periods.append(PeriodSummary(
            period=first_day,
            label=first_day.strftime("%b %Y"),
            expenses=expenses,
            income=income,
            net=net_balance(income, expenses),
        ))
    return periods


def transactions_to_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """Tabulate entries for grouping and display."""
    rows = [
        {
            "id": t.id,
            "kind": TransactionKind(t.kind).value,
            "title": t.title,
            "amount": float(t.amount),
            "category": t.category,
            "date": pd.Timestamp(t.date),
            "owner": t.owner,
        }
        for t in transactions
    ]
    if not rows:
        return pd.DataFrame(columns=TRANSACTION_COLUMNS)
    return pd.DataFrame(rows, columns=TRANSACTION_COLUMNS)


def shares_to_frame(shares: Sequence[CategoryShare]) -> pd.DataFrame:
    if not shares:
        return pd.DataFrame(columns=SHARE_COLUMNS)
    return pd.DataFrame(
        [(s.category, s.amount, s.percentage) for s in shares],
        columns=SHARE_COLUMNS,
    )


def periods_to_frame(periods: Sequence[PeriodSummary]) -> pd.DataFrame:
    if not periods:
        return pd.DataFrame(columns=PERIOD_COLUMNS)
    return pd.DataFrame(
        [(p.label, p.period, p.expenses, p.income, p.net) for p in periods],
        columns=PERIOD_COLUMNS,
    )

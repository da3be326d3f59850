"""View models for the dashboard pages.

Each function reads what one page needs from the
:class:`~expense_dashboard.db.TransactionStore` for an explicit owner and
reduces it with :mod:`expense_dashboard.analytics`.  Store failures are not
caught here; callers decide how to present a
:class:`~expense_dashboard.db.StoreError`.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

try:
    from . import analytics
    from .config import TREND_MONTHS
    from .db import TransactionStore
    from .models import PeriodSummary, TransactionKind, month_bounds
except ImportError:
    import analytics
    from config import TREND_MONTHS
    from db import TransactionStore
    from models import PeriodSummary, TransactionKind, month_bounds


def _today(today: Optional[date]) -> date:
    return today or date.today()


def home_overview(store: TransactionStore, owner: str, today: Optional[date] = None) -> Dict[str, Any]:
    """Current month entries, totals and budget consumption."""
    first_day, last_day = month_bounds(_today(today))
    expenses = store.list_transactions(owner, TransactionKind.EXPENSE, first_day, last_day)
    incomes = store.list_transactions(owner, TransactionKind.INCOME, first_day, last_day)
    budget = store.get_budget(owner, first_day)

    total_spent = analytics.summarize(expenses).total
    total_income = analytics.summarize(incomes).total
    budget_amount = budget.amount if budget else 0.0

    return {
        'month': first_day,
        'expenses': expenses,
        'incomes': incomes,
        'budget': budget_amount,
        'total_spent': total_spent,
        'total_income': total_income,
        'net_balance': analytics.net_balance(total_income, total_spent),
        'budget_status': analytics.budget_status(total_spent, budget_amount),
    }


def monthly_analytics(store: TransactionStore, owner: str, today: Optional[date] = None) -> Dict[str, Any]:
    """Category breakdowns and summary figures for the current month."""
    first_day, last_day = month_bounds(_today(today))
    expenses = store.list_transactions(owner, TransactionKind.EXPENSE, first_day, last_day)
    incomes = store.list_transactions(owner, TransactionKind.INCOME, first_day, last_day)

    expense_summary = analytics.summarize(expenses)
    income_summary = analytics.summarize(incomes)

    return {
        'month': first_day,
        'expense_summary': expense_summary,
        'income_summary': income_summary,
        'expense_categories': analytics.category_breakdown(expenses),
        'income_categories': analytics.category_breakdown(incomes),
        'transaction_count': expense_summary.count + income_summary.count,
        'average_expense': expense_summary.average,
        'net_balance': analytics.net_balance(income_summary.total, expense_summary.total),
    }


def spending_trends(
    store: TransactionStore,
    owner: str,
    today: Optional[date] = None,
    months: int = TREND_MONTHS,
) -> List[PeriodSummary]:
    """Trailing monthly totals ending at the current month."""
    return analytics.trailing_periods(months, _today(today), store.fetcher(owner))

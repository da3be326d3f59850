"""Domain records for the expense dashboard.

Persisted entities (:class:`Transaction`, :class:`Budget`) mirror the rows
held by :mod:`expense_dashboard.db`.  Derived entities (:class:`Summary`,
:class:`CategoryShare`, :class:`BudgetStatus`, :class:`PeriodSummary`) are
produced by :mod:`expense_dashboard.analytics` for a single render and are
never stored.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Dict, Optional, Tuple


class TransactionKind(str, Enum):
    """Direction of a money movement."""

    EXPENSE = "expense"
    INCOME = "income"

    @property
    def table(self) -> str:
        return "expenses" if self is TransactionKind.EXPENSE else "incomes"

    @property
    def label(self) -> str:
        return "Expense" if self is TransactionKind.EXPENSE else "Income"


EXPENSE_CATEGORIES: Tuple[str, ...] = (
    "Food",
    "Transport",
    "Shopping",
    "Entertainment",
    "Bills",
    "Health",
    "Other",
)
INCOME_CATEGORIES: Tuple[str, ...] = (
    "Salary",
    "Freelance",
    "Investment",
    "Gift",
    "Business",
    "Other",
)

CATEGORIES: Dict[TransactionKind, Tuple[str, ...]] = {
    TransactionKind.EXPENSE: EXPENSE_CATEGORIES,
    TransactionKind.INCOME: INCOME_CATEGORIES,
}


@dataclass(frozen=True)
class Transaction:
    id: str
    kind: TransactionKind
    title: str
    amount: float
    category: str
    date: datetime
    owner: str
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Budget:
    owner: str
    period: date  # always the first day of the month
    amount: float


@dataclass(frozen=True)
class Summary:
    total: float
    count: int
    average: float


@dataclass(frozen=True)
class CategoryShare:
    category: str
    amount: float
    percentage: float


@dataclass(frozen=True)
class BudgetStatus:
    percentage_used: float
    remaining: float
    is_warning: bool
    is_exceeded: bool


@dataclass(frozen=True)
class PeriodSummary:
    period: date
    label: str
    expenses: float
    income: float
    net: float


def month_start(value: date) -> date:
    """Return the first calendar day of ``value``'s month."""
    if isinstance(value, datetime):
        value = value.date()
    return value.replace(day=1)


def month_bounds(value: date) -> Tuple[date, date]:
    """Return the first and last calendar day of ``value``'s month.

    Example:
        >>> month_bounds(date(2024, 2, 10))
        (datetime.date(2024, 2, 1), datetime.date(2024, 2, 29))
    """
    first = month_start(value)
    last_day = calendar.monthrange(first.year, first.month)[1]
    return first, first.replace(day=last_day)

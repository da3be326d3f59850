from __future__ import annotations

import logging
import math
import sqlite3
import uuid
from contextlib import contextmanager
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Callable, Iterator, List, Optional

import pandas as pd

# Import configuration
try:
    from .config import DB_PATH, ensure_data_directories
    from .models import CATEGORIES, Budget, Transaction, TransactionKind, month_start
except ImportError:
    from config import DB_PATH, ensure_data_directories
    from models import CATEGORIES, Budget, Transaction, TransactionKind, month_start

logger = logging.getLogger(__name__)

FetchFn = Callable[[TransactionKind, date, date], List[Transaction]]

_ENTRY_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS {table} (
    id TEXT PRIMARY KEY,
    owner TEXT NOT NULL,
    title TEXT NOT NULL,
    amount REAL NOT NULL CHECK (amount > 0),
    category TEXT NOT NULL,
    txn_date TEXT NOT NULL,
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS ix_{table}_owner ON {table} (owner);
CREATE INDEX IF NOT EXISTS ix_{table}_date ON {table} (txn_date);
"""

SCHEMA_SQL = (
    "PRAGMA journal_mode=WAL;\nPRAGMA synchronous=NORMAL;\n"
    + _ENTRY_TABLE_SQL.format(table="expenses")
    + _ENTRY_TABLE_SQL.format(table="incomes")
    + """
CREATE TABLE IF NOT EXISTS budgets (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    owner TEXT NOT NULL,
    month TEXT NOT NULL,
    amount REAL NOT NULL CHECK (amount > 0),
    created_at TEXT NOT NULL,
    UNIQUE (owner, month)
);

CREATE INDEX IF NOT EXISTS ix_budgets_owner ON budgets (owner);
"""
)

_SELECT_ENTRIES = "SELECT id, owner, title, amount, category, txn_date, created_at FROM {table}"


class StoreError(RuntimeError):
    """Raised when the store cannot be read or written."""


class InvalidEntryError(ValueError):
    """Raised when an entry or budget fails validation before reaching SQLite."""


@contextmanager
def connect(db_path: Path) -> Iterator[sqlite3.Connection]:
    conn = sqlite3.connect(str(db_path))
    try:
        yield conn
    finally:
        conn.close()


@contextmanager
def _storage_errors(action: str) -> Iterator[None]:
    try:
        yield
    except (sqlite3.Error, pd.errors.DatabaseError) as exc:
        logger.error("Failed to %s: %s", action, exc)
        raise StoreError(f"Could not {action}: {exc}") from exc


def _now_iso() -> str:
    return datetime.now(timezone.utc).replace(tzinfo=None).isoformat(timespec="seconds")


def _to_datetime(value: Any) -> datetime:
    """Coerce dates, datetimes, pandas Timestamps and ISO strings to a naive datetime."""
    if value is None or value == "":
        raise InvalidEntryError("A date is required")
    if hasattr(value, "to_pydatetime"):
        value = value.to_pydatetime()
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        ts = pd.to_datetime(value, errors="coerce")
        if pd.isna(ts):
            raise InvalidEntryError(f"Invalid date: {value!r}")
        parsed = ts.to_pydatetime()
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _to_day(value: Any) -> str:
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return _to_datetime(value).date().isoformat()


def _parse_amount(value: Any) -> float:
    """Convert user supplied amounts into positive floats."""
    if isinstance(value, str):
        cleaned = value.strip().replace(",", "")
        for symbol in ("$", "₹", "€", "£"):
            cleaned = cleaned.replace(symbol, "")
        value = cleaned
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidEntryError(f"Invalid amount: {value!r}") from None
    if math.isnan(number) or math.isinf(number) or number <= 0:
        raise InvalidEntryError("Amount must be greater than 0")
    return number


def _check_owner(owner: str) -> str:
    if not owner or not str(owner).strip():
        raise InvalidEntryError("An owner is required")
    return str(owner).strip()


def _check_title(title: Any) -> str:
    if title is None or not str(title).strip():
        raise InvalidEntryError("Title is required")
    return str(title).strip()


def _check_category(kind: TransactionKind, category: Any) -> str:
    allowed = CATEGORIES[kind]
    if category not in allowed:
        raise InvalidEntryError(
            f"Unknown {kind.value} category {category!r}; expected one of {', '.join(allowed)}"
        )
    return category


def _row_to_transaction(kind: TransactionKind, row: Any) -> Transaction:
    return Transaction(
        id=row.id,
        kind=kind,
        title=row.title,
        amount=float(row.amount),
        category=row.category,
        date=datetime.fromisoformat(row.txn_date),
        owner=row.owner,
        created_at=datetime.fromisoformat(row.created_at) if row.created_at else None,
    )


class TransactionStore:
    """SQLite backed store for expenses, incomes and monthly budgets.

    Every method takes the owning profile explicitly and only ever reads or
    writes that owner's rows.
    """

    def __init__(self, db_path: Optional[Path] = None):
        """Initialize the store and create the schema if needed.

        Args:
            db_path: Optional custom database file. Defaults to DB_PATH from config.
        """
        self.db_path = Path(db_path) if db_path is not None else DB_PATH
        self.init_db()

    def init_db(self) -> None:
        if self.db_path == DB_PATH:
            ensure_data_directories()
        with _storage_errors("initialise the database"):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            with connect(self.db_path) as conn:
                conn.executescript(SCHEMA_SQL)
                conn.commit()
        logger.info("Transaction store ready at %s", self.db_path)

    # Entries ---------------------------------------------------------------

    def add_transaction(
        self,
        owner: str,
        kind: TransactionKind,
        title: str,
        amount: Any,
        category: str,
        txn_date: Any,
    ) -> Transaction:
        """Insert a new expense or income entry and return it."""
        kind = TransactionKind(kind)
        entry = Transaction(
            id=uuid.uuid4().hex,
            kind=kind,
            title=_check_title(title),
            amount=_parse_amount(amount),
            category=_check_category(kind, category),
            date=_to_datetime(txn_date),
            owner=_check_owner(owner),
            created_at=datetime.fromisoformat(_now_iso()),
        )
        sql = (
            f"INSERT INTO {kind.table} (id, owner, title, amount, category, txn_date, created_at) "
            "VALUES (?, ?, ?, ?, ?, ?, ?)"
        )
        with _storage_errors(f"save {kind.value}"):
            with connect(self.db_path) as conn:
                conn.execute(sql, (
                    entry.id,
                    entry.owner,
                    entry.title,
                    entry.amount,
                    entry.category,
                    entry.date.isoformat(timespec="seconds"),
                    entry.created_at.isoformat(timespec="seconds"),
                ))
                conn.commit()
        logger.debug("Added %s %s for %s", kind.value, entry.id, entry.owner)
        return entry

    def update_transaction(
        self,
        owner: str,
        kind: TransactionKind,
        transaction_id: str,
        title: Optional[str] = None,
        amount: Any = None,
        category: Optional[str] = None,
        txn_date: Any = None,
    ) -> bool:
        """Update the mutable fields of an entry.

        Returns True if a row owned by ``owner`` was updated, False otherwise.
        """
        kind = TransactionKind(kind)
        owner = _check_owner(owner)
        updates = []
        params: List[Any] = []

        if title is not None:
            updates.append("title = ?")
            params.append(_check_title(title))

        if amount is not None:
            updates.append("amount = ?")
            params.append(_parse_amount(amount))

        if category is not None:
            updates.append("category = ?")
            params.append(_check_category(kind, category))

        if txn_date is not None:
            updates.append("txn_date = ?")
            params.append(_to_datetime(txn_date).isoformat(timespec="seconds"))

        if not updates:
            return False

        params.extend([transaction_id, owner])
        sql = f"UPDATE {kind.table} SET {', '.join(updates)} WHERE id = ? AND owner = ?"

        with _storage_errors(f"update {kind.value}"):
            with connect(self.db_path) as conn:
                cursor = conn.cursor()
                cursor.execute(sql, params)
                conn.commit()
                updated = cursor.rowcount > 0
        logger.debug("Update of %s %s for %s: %s", kind.value, transaction_id, owner, updated)
        return updated

    def delete_transaction(self, owner: str, kind: TransactionKind, transaction_id: str) -> bool:
        """Delete an entry. Returns True if a row owned by ``owner`` was removed."""
        kind = TransactionKind(kind)
        owner = _check_owner(owner)
        with _storage_errors(f"delete {kind.value}"):
            with connect(self.db_path) as conn:
                cursor = conn.cursor()
                cursor.execute(
                    f"DELETE FROM {kind.table} WHERE id = ? AND owner = ?",
                    (transaction_id, owner),
                )
                conn.commit()
                deleted = cursor.rowcount > 0
        logger.debug("Delete of %s %s for %s: %s", kind.value, transaction_id, owner, deleted)
        return deleted

    def get_transaction(self, owner: str, kind: TransactionKind, transaction_id: str) -> Optional[Transaction]:
        kind = TransactionKind(kind)
        owner = _check_owner(owner)
        sql = _SELECT_ENTRIES.format(table=kind.table) + " WHERE id = ? AND owner = ?"
        with _storage_errors(f"read {kind.value}"):
            with connect(self.db_path) as conn:
                df = pd.read_sql_query(sql, conn, params=[transaction_id, owner])
        if df.empty:
            return None
        return _row_to_transaction(kind, next(df.itertuples(index=False)))

    def list_transactions(
        self,
        owner: str,
        kind: TransactionKind,
        date_from: Optional[Any] = None,
        date_to: Optional[Any] = None,
    ) -> List[Transaction]:
        """Fetch an owner's entries of one kind, newest first.

        ``date_from`` and ``date_to`` bound the calendar day of each entry and
        are both inclusive.
        """
        kind = TransactionKind(kind)
        owner = _check_owner(owner)
        where = ["owner = ?"]
        params: List[Any] = [owner]

        if date_from is not None:
            where.append("substr(txn_date, 1, 10) >= ?")
            params.append(_to_day(date_from))
        if date_to is not None:
            where.append("substr(txn_date, 1, 10) <= ?")
            params.append(_to_day(date_to))

        sql = _SELECT_ENTRIES.format(table=kind.table)
        sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY txn_date DESC, created_at DESC"

        with _storage_errors(f"read {kind.value}s"):
            with connect(self.db_path) as conn:
                df = pd.read_sql_query(sql, conn, params=params)
        return [_row_to_transaction(kind, row) for row in df.itertuples(index=False)]

    def fetcher(self, owner: str) -> FetchFn:
        """Return a range-query function bound to ``owner``."""
        owner = _check_owner(owner)

        def fetch(kind: TransactionKind, date_from: date, date_to: date) -> List[Transaction]:
            return self.list_transactions(owner, kind, date_from, date_to)

        return fetch

    # Budgets ---------------------------------------------------------------

    def get_budget(self, owner: str, period: Any) -> Optional[Budget]:
        owner = _check_owner(owner)
        month = month_start(_to_datetime(period).date())
        with _storage_errors("read budget"):
            with connect(self.db_path) as conn:
                row = conn.execute(
                    "SELECT amount FROM budgets WHERE owner = ? AND month = ?",
                    (owner, month.isoformat()),
                ).fetchone()
        if row is None:
            return None
        return Budget(owner=owner, period=month, amount=float(row[0]))

    def upsert_budget(self, owner: str, period: Any, amount: Any) -> Budget:
        """Create or replace the owner's budget for the month containing ``period``."""
        owner = _check_owner(owner)
        month = month_start(_to_datetime(period).date())
        value = _parse_amount(amount)
        sql = (
            "INSERT INTO budgets (owner, month, amount, created_at) VALUES (?, ?, ?, ?) "
            "ON CONFLICT (owner, month) DO UPDATE SET amount = excluded.amount"
        )
        with _storage_errors("save budget"):
            with connect(self.db_path) as conn:
                conn.execute(sql, (owner, month.isoformat(), value, _now_iso()))
                conn.commit()
        logger.info("Budget for %s in %s set to %.2f", owner, month.strftime("%Y-%m"), value)
        return Budget(owner=owner, period=month, amount=value)

#!/usr/bin/env python3
"""Print a profile's monthly summary and spending trend from the terminal."""

from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path
from typing import Optional

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from expense_dashboard import reports
from expense_dashboard.analytics import periods_to_frame, shares_to_frame
from expense_dashboard.config import DEFAULT_PROFILE, TREND_MONTHS, configure_logging
from expense_dashboard.db import StoreError, TransactionStore
from expense_dashboard.formatting import format_currency, format_percentage


def main(owner: str, months: int, db_path: Optional[Path] = None, today: Optional[date] = None) -> int:
    store = TransactionStore(db_path)
    try:
        overview = reports.home_overview(store, owner, today)
        analytics = reports.monthly_analytics(store, owner, today)
        trends = reports.spending_trends(store, owner, today, months=months)
    except StoreError as exc:
        print(f"Could not read data: {exc}", file=sys.stderr)
        return 1

    status = overview['budget_status']
    print(f"Profile: {owner} ({overview['month'].strftime('%B %Y')})")
    print(f"Income:      {format_currency(overview['total_income'])}")
    print(f"Spent:       {format_currency(overview['total_spent'])}")
    print(f"Net balance: {format_currency(overview['net_balance'])}")
    if overview['budget'] > 0:
        flag = " EXCEEDED" if status.is_exceeded else (" WARNING" if status.is_warning else "")
        print(
            f"Budget:      {format_currency(overview['budget'])}, "
            f"{format_percentage(status.percentage_used)} used, "
            f"{format_currency(status.remaining)} remaining{flag}"
        )
    else:
        print("Budget:      not set")

    expense_shares = shares_to_frame(analytics['expense_categories'])
    if not expense_shares.empty:
        print("\nExpenses by category:")
        print(expense_shares.to_string(index=False, float_format=lambda v: f"{v:,.2f}"))

    print(f"\nLast {months} months:")
    print(periods_to_frame(trends).drop(columns=['Month']).to_string(
        index=False, float_format=lambda v: f"{v:,.2f}"
    ))
    return 0


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Show monthly totals and trends for a profile.')
    parser.add_argument('--profile', default=DEFAULT_PROFILE, help='Profile (owner) to report on')
    parser.add_argument('--months', type=int, default=TREND_MONTHS, help='Length of the trend window')
    parser.add_argument('--db', type=Path, default=None, help='Path to the SQLite database')
    args = parser.parse_args()
    configure_logging()
    sys.exit(main(args.profile, args.months, db_path=args.db))

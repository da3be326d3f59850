"""Main entry point for the Streamlit multi-page app.

Shows the current month's income, spending, net balance and budget, and
lets the active profile add, edit and delete expense and income entries.
Pages in the pages/ directory appear in the sidebar automatically.
"""

from __future__ import annotations

import sys
from pathlib import Path
from datetime import date
from typing import List, Optional

import streamlit as st

# Add project root to path for imports
project_root = Path(__file__).parent.parent.resolve()
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from expense_dashboard import reports
from expense_dashboard.db import InvalidEntryError, StoreError, TransactionStore
from expense_dashboard.formatting import format_currency, format_percentage
from expense_dashboard.models import CATEGORIES, Transaction, TransactionKind
from expense_dashboard.shared_sidebar import (
    flash,
    render_shared_sidebar,
    rerun,
    setup_page,
    show_flash,
)


def main() -> None:
    """Render the Home page."""
    setup_page("Expense Tracker", "💰")
    sidebar = render_shared_sidebar()
    store, owner, today = sidebar['store'], sidebar['owner'], sidebar['today']

    st.title("💰 This Month")
    show_flash()

    try:
        overview = reports.home_overview(store, owner, today)
    except StoreError as exc:
        st.error(f"Could not load your data: {exc}")
        return

    _render_totals(overview)
    _render_budget(overview)

    expense_tab, income_tab = st.tabs(["💸 Expenses", "💰 Income"])
    with expense_tab:
        _render_entries(store, owner, TransactionKind.EXPENSE, overview['expenses'])
    with income_tab:
        _render_entries(store, owner, TransactionKind.INCOME, overview['incomes'])


def _render_totals(overview: dict) -> None:
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("💰 Total Income", format_currency(overview['total_income']))
    with col2:
        st.metric("💸 Total Spent", format_currency(overview['total_spent']))
    with col3:
        st.metric("📈 Net Balance", format_currency(overview['net_balance']))


def _render_budget(overview: dict) -> None:
    st.subheader("📋 Monthly Budget")
    budget = overview['budget']
    status = overview['budget_status']

    if budget <= 0:
        st.info("No budget set for this month. Set one on the Settings page.")
        return

    col1, col2 = st.columns(2)
    col1.metric("Budget", format_currency(budget))
    col2.metric("Remaining", format_currency(status.remaining))

    st.progress(min(status.percentage_used, 100.0) / 100)
    st.caption(f"{format_percentage(status.percentage_used)} of budget used")

    if status.is_exceeded:
        st.error("⚠️ You have exceeded your budget for this month.")
    elif status.is_warning:
        st.warning("⚠️ You have used over 90% of your budget.")


def _render_entries(
    store: TransactionStore,
    owner: str,
    kind: TransactionKind,
    entries: List[Transaction],
) -> None:
    editing = _editing_entry(kind, entries)
    _render_entry_form(store, owner, kind, editing)

    if not entries:
        st.info(f"No {kind.value} entries this month yet.")
        return

    for entry in entries:
        col_a, col_b, col_c, col_d = st.columns([4, 2, 1, 1])
        with col_a:
            st.markdown(f"**{entry.title}**  \n{entry.category} · {entry.date.strftime('%d %b %Y')}")
        with col_b:
            st.markdown(f"**{format_currency(entry.amount)}**")
        with col_c:
            if st.button("✏️", key=f"edit_{kind.value}_{entry.id}", help="Edit"):
                st.session_state[f'editing_{kind.value}'] = entry.id
                rerun()
        with col_d:
            if st.button("🗑️", key=f"delete_{kind.value}_{entry.id}", help="Delete"):
                try:
                    store.delete_transaction(owner, kind, entry.id)
                except StoreError as exc:
                    st.error(f"Could not delete entry: {exc}")
                else:
                    flash(f"{kind.label} deleted")
                    rerun()


def _editing_entry(kind: TransactionKind, entries: List[Transaction]) -> Optional[Transaction]:
    entry_id = st.session_state.get(f'editing_{kind.value}')
    if entry_id is None:
        return None
    for entry in entries:
        if entry.id == entry_id:
            return entry
    st.session_state[f'editing_{kind.value}'] = None
    return None


def _render_entry_form(
    store: TransactionStore,
    owner: str,
    kind: TransactionKind,
    editing: Optional[Transaction],
) -> None:
    categories = list(CATEGORIES[kind])
    heading = f"Edit {kind.label}" if editing else f"➕ Add {kind.label}"
    # Widget keys change between add and edit mode so edit defaults apply.
    suffix = editing.id if editing else "new"

    with st.expander(heading, expanded=editing is not None):
        with st.form(f"{kind.value}_form", clear_on_submit=editing is None):
            title = st.text_input(
                "Title",
                value=editing.title if editing else "",
                key=f"{kind.value}_title_{suffix}",
            )
            col1, col2 = st.columns(2)
            with col1:
                amount = st.number_input(
                    "Amount",
                    min_value=0.0,
                    step=1.0,
                    value=float(editing.amount) if editing else 0.0,
                    key=f"{kind.value}_amount_{suffix}",
                )
                category = st.selectbox(
                    "Category",
                    options=categories,
                    index=categories.index(editing.category) if editing else 0,
                    key=f"{kind.value}_category_{suffix}",
                )
            with col2:
                entry_date = st.date_input(
                    "Date",
                    value=editing.date.date() if editing else date.today(),
                    key=f"{kind.value}_date_{suffix}",
                )
            submitted = st.form_submit_button(
                "Update" if editing else "Add",
                key=f"{kind.value}_submit_{suffix}",
            )

        if editing and st.button("Cancel edit", key=f"cancel_{kind.value}"):
            st.session_state[f'editing_{kind.value}'] = None
            rerun()

        if not submitted:
            return

        try:
            if editing:
                store.update_transaction(
                    owner, kind, editing.id,
                    title=title, amount=amount, category=category, txn_date=entry_date,
                )
                st.session_state[f'editing_{kind.value}'] = None
                flash(f"{kind.label} updated")
            else:
                store.add_transaction(owner, kind, title, amount, category, entry_date)
                flash(f"{kind.label} added")
        except InvalidEntryError as exc:
            st.error(str(exc))
            return
        except StoreError as exc:
            st.error(f"Could not save entry: {exc}")
            return
        rerun()


if __name__ == "__main__":
    main()

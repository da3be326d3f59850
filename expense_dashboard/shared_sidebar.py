"""Shared sidebar components for the multi-page dashboard.

Every page calls :func:`render_shared_sidebar` first.  It picks the active
profile and hands back the store, so pages pass the owner explicitly to
each store and report call instead of reading it from global state.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict

import streamlit as st
from streamlit.errors import StreamlitAPIException

try:
    from .config import DEFAULT_PROFILE, configure_logging
    from .db import TransactionStore
except ImportError:
    import sys
    from pathlib import Path
    parent_dir = Path(__file__).parent
    if str(parent_dir) not in sys.path:
        sys.path.insert(0, str(parent_dir))
    from config import DEFAULT_PROFILE, configure_logging
    from db import TransactionStore


def setup_page(title: str, icon: str) -> None:
    """Configure the page, tolerating a config already set upstream."""
    try:
        st.set_page_config(page_title=title, page_icon=icon, layout="wide")
    except StreamlitAPIException:
        pass


@st.cache_resource
def get_store() -> TransactionStore:
    """Single store instance shared across reruns."""
    configure_logging()
    return TransactionStore()


def render_shared_sidebar() -> Dict[str, Any]:
    """Render shared sidebar elements available on all pages.

    Returns:
        Dict with keys: 'store', 'owner', 'today'
    """
    st.sidebar.title("💰 Expense Tracker")

    if 'owner' not in st.session_state:
        st.session_state.owner = DEFAULT_PROFILE

    owner = st.sidebar.text_input(
        "Profile",
        value=st.session_state.owner,
        help="Entries and budgets are kept separately for each profile",
    ).strip()
    if owner:
        st.session_state.owner = owner
    else:
        st.sidebar.warning("Profile name cannot be empty; keeping the previous one.")

    today = date.today()
    st.sidebar.caption(f"Showing {today.strftime('%B %Y')}")

    return {
        'store': get_store(),
        'owner': st.session_state.owner,
        'today': today,
    }


def flash(message: str) -> None:
    """Queue a success message for the next run, surviving a rerun."""
    st.session_state['flash'] = message


def show_flash() -> None:
    message = st.session_state.pop('flash', None)
    if message:
        st.success(message)


def rerun() -> None:
    """Trigger a rerun so the page re-fetches after a write."""
    if hasattr(st, "rerun"):
        st.rerun()
    else:
        st.experimental_rerun()

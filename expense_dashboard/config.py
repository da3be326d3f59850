"""Configuration management for the expense dashboard.

This module centralizes all configuration values including paths,
display defaults, logging, and environment variable overrides.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

# Base project root - assumes this file is in expense_dashboard/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directories
DATA_DIR = Path(os.getenv("EXPENSE_DASHBOARD_DATA_DIR", _PROJECT_ROOT / "data"))

# Database
DB_PATH = Path(
    os.getenv("EXPENSE_DASHBOARD_DB_PATH", DATA_DIR / "expenses.db")
).resolve()

# Display
CURRENCY_SYMBOL = os.getenv("EXPENSE_DASHBOARD_CURRENCY", "₹")
TREND_MONTHS = int(os.getenv("EXPENSE_DASHBOARD_TREND_MONTHS", "6"))
DEFAULT_PROFILE = os.getenv("EXPENSE_DASHBOARD_DEFAULT_PROFILE", "default")

# Logging
LOG_LEVEL = os.getenv("EXPENSE_DASHBOARD_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_LOGGING_CONFIGURED = False


def ensure_data_directories() -> None:
    """Create all required data directories if they don't exist."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)


def configure_logging(level: str | None = None) -> None:
    """Install a basic log handler once per process.

    Streamlit reruns page scripts on every interaction, so repeated calls
    are ignored after the first.
    """
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return
    logging.basicConfig(level=(level or LOG_LEVEL), format=LOG_FORMAT)
    _LOGGING_CONFIGURED = True

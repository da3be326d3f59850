#!/usr/bin/env python3
"""Launch the expense dashboard with ``streamlit run``.

Pages are discovered from ``expense_dashboard/pages/`` next to ``Home.py``.
Storage and display options are handed to the app through the same
environment variables :mod:`expense_dashboard.config` reads.

Examples:
    python run_dashboard.py
    python run_dashboard.py --port 8502 --db /tmp/expenses.db --currency $
"""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
from pathlib import Path
from typing import Dict, List, Optional

PROJECT_ROOT = Path(__file__).parent.resolve()
HOME_SCRIPT = PROJECT_ROOT / "expense_dashboard" / "Home.py"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the expense dashboard")
    parser.add_argument("--port", type=int, help="Port for the Streamlit server")
    parser.add_argument("--db", type=Path, help="SQLite database to use")
    parser.add_argument("--profile", help="Profile selected when the app opens")
    parser.add_argument("--currency", help="Currency symbol for displayed amounts")
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Do not open a browser window",
    )
    return parser.parse_args(argv)


def build_command(args: argparse.Namespace) -> List[str]:
    """Return the ``streamlit run`` command line for the parsed options."""
    command = [sys.executable, "-m", "streamlit", "run", str(HOME_SCRIPT)]
    if args.port is not None:
        command += ["--server.port", str(args.port)]
    if args.headless:
        command += ["--server.headless", "true"]
    return command


def build_env(args: argparse.Namespace, base: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """Copy ``base`` (default ``os.environ``) with the app's overrides applied."""
    env = dict(os.environ if base is None else base)
    if args.db is not None:
        env["EXPENSE_DASHBOARD_DB_PATH"] = str(args.db.expanduser().resolve())
    if args.profile:
        env["EXPENSE_DASHBOARD_DEFAULT_PROFILE"] = args.profile
    if args.currency:
        env["EXPENSE_DASHBOARD_CURRENCY"] = args.currency
    # Home.py imports expense_dashboard from the project root.
    paths = [str(PROJECT_ROOT)] + [p for p in env.get("PYTHONPATH", "").split(os.pathsep) if p]
    env["PYTHONPATH"] = os.pathsep.join(paths)
    return env


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    return subprocess.call(build_command(args), env=build_env(args))


if __name__ == "__main__":
    sys.exit(main())

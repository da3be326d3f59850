"""Top‑level package for the Expense Dashboard.

This file makes the directory a Python package and exposes
convenient names.  The primary modules are:

* ``analytics`` – pure aggregation of expense and income entries
* ``db`` – the owner-scoped SQLite transaction store
* ``reports`` – per-page view models built from the two above
* ``visualization`` – functions that generate Plotly figures

To run the dashboard from the command line you can execute:

```bash
python run_dashboard.py
```
"""

from . import analytics  # noqa: F401  # re-exported for convenience
from . import db  # noqa: F401  # re-exported for convenience
from . import models  # noqa: F401  # re-exported for convenience
from . import reports  # noqa: F401  # re-exported for convenience
from . import visualization  # noqa: F401  # re-exported for convenience


__all__ = ["analytics", "db", "models", "reports", "visualization"]

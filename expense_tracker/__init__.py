"""Top-level package for the Expense Tracker.

The primary modules are:

* ``record_store`` – the owned, persisted collection of expense records
* ``filters`` – category and date-range filtering for the displayed list
* ``aggregation`` – monthly totals, rolling average and forecast
* ``view_model`` – composes the two into what the dashboard renders
* ``dashboard`` – the Streamlit app that ties everything together

To run the dashboard from the command line you can execute:

```bash
streamlit run expense_tracker/dashboard.py
```
"""

from .exceptions import (  # noqa: F401
    DuplicateRecordId,
    ExpenseTrackerError,
    InvalidAmount,
    InvalidDate,
    MalformedImportRow,
    MalformedPersistedData,
    NothingToExport,
)
from .models import ExpenseRecord, ExpenseStats, ExpenseView, FilterCriteria  # noqa: F401
from .record_store import RecordStore  # noqa: F401
from .service import ExpenseTracker  # noqa: F401
from .view_model import build_view  # noqa: F401

__all__ = [
    "DuplicateRecordId",
    "ExpenseRecord",
    "ExpenseStats",
    "ExpenseTracker",
    "ExpenseTrackerError",
    "ExpenseView",
    "FilterCriteria",
    "InvalidAmount",
    "InvalidDate",
    "MalformedImportRow",
    "MalformedPersistedData",
    "NothingToExport",
    "RecordStore",
    "build_view",
]

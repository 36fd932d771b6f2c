"""Filter engine: narrows the record set for display.

Filtering never touches the statistics; those are always computed from the
full record set by :mod:`expense_tracker.aggregation`.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

import pandas as pd

try:
    from .config import ALL_CATEGORIES
    from .data_processing import frame_to_records, records_to_frame
    from .models import ExpenseRecord, FilterCriteria, parse_date
except ImportError:  # pragma: no cover - fallback for direct execution
    from config import ALL_CATEGORIES
    from data_processing import frame_to_records, records_to_frame
    from models import ExpenseRecord, FilterCriteria, parse_date


def _bound(value: Any) -> Optional[str]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_date(value)


def filter_records(records: Sequence[ExpenseRecord], criteria: Optional[FilterCriteria] = None) -> List[ExpenseRecord]:
    """Return the records matching every criterion that is set.

    Category matching is exact and case-sensitive; the ``"all"`` sentinel
    disables it.  Both date bounds are inclusive.  The input is not modified
    and the result keeps the input order.
    """
    records = list(records)
    criteria = criteria or FilterCriteria()
    if not records:
        return []
    if criteria.is_empty:
        return records

    df = records_to_frame(records)
    mask = pd.Series(True, index=df.index)

    category = criteria.category
    if category and category != ALL_CATEGORIES:
        mask &= df['category'] == category

    lower = _bound(criteria.date_from)
    if lower is not None:
        mask &= df['date'] >= lower

    upper = _bound(criteria.date_to)
    if upper is not None:
        mask &= df['date'] <= upper

    return frame_to_records(df[mask], records)


def sort_for_display(records: Sequence[ExpenseRecord]) -> List[ExpenseRecord]:
    """Newest first; records sharing a date keep their insertion order."""
    records = list(records)
    if not records:
        return []
    df = records_to_frame(records)
    ordered = df.sort_values('date', ascending=False, kind='mergesort')
    return frame_to_records(ordered, records)


def categories_in(records: Sequence[ExpenseRecord]) -> List[str]:
    """Distinct categories present in ``records``, alphabetically."""
    return sorted({r.category for r in records})

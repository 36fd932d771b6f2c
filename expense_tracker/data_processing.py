"""pandas helpers shared by the filter and aggregation engines.

Records are turned into a DataFrame whose index is the record's position in
the input sequence, so any subset of rows can be mapped straight back to the
original :class:`ExpenseRecord` objects in insertion order.

Dates stay as ``YYYY-MM-DD`` strings.  That form orders correctly as text
for every calendar year, whereas ``datetime64[ns]`` stops at 2262.
"""

from __future__ import annotations

from typing import Dict, List, Sequence

import pandas as pd

try:
    from .models import ExpenseRecord
except ImportError:  # pragma: no cover - fallback for direct execution
    from models import ExpenseRecord

FRAME_COLUMNS = ['id', 'description', 'amount', 'category', 'date', 'month']


def records_to_frame(records: Sequence[ExpenseRecord]) -> pd.DataFrame:
    """Build a DataFrame with one row per record plus its ``YYYY-MM`` month."""
    rows = [
        {
            'id': r.id,
            'description': r.description,
            'amount': float(r.amount),
            'category': r.category,
            'date': r.date,
            'month': r.month,
        }
        for r in records
    ]
    df = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    df['amount'] = pd.to_numeric(df['amount'], errors='coerce').astype(float)
    df['date'] = df['date'].astype(str)
    return df


def frame_to_records(df: pd.DataFrame, records: Sequence[ExpenseRecord]) -> List[ExpenseRecord]:
    """Map the rows left in ``df`` back to the source records, in frame order."""
    return [records[int(pos)] for pos in df.index]


def aggregate_by_month(df: pd.DataFrame) -> Dict[str, float]:
    """Sum ``amount`` per ``YYYY-MM`` month key."""
    if df.empty:
        return {}
    totals = df.groupby('month', sort=True)['amount'].sum()
    return {str(month): float(total) for month, total in totals.items()}

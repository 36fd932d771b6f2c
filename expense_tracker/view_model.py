"""Composes filter and aggregation output into one render-ready structure."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

try:
    from .aggregation import aggregate
    from .filters import filter_records, sort_for_display
    from .models import ExpenseRecord, ExpenseView, FilterCriteria
except ImportError:  # pragma: no cover - fallback for direct execution
    from aggregation import aggregate
    from filters import filter_records, sort_for_display
    from models import ExpenseRecord, ExpenseView, FilterCriteria


def build_view(
    all_records: Sequence[ExpenseRecord],
    criteria: Optional[FilterCriteria] = None,
    now: Optional[datetime] = None,
) -> ExpenseView:
    """Build the view for ``all_records``.

    ``criteria`` only narrows ``display_list``; ``stats`` and ``series``
    always reflect the full record set.
    """
    all_records = list(all_records)
    display_list = sort_for_display(filter_records(all_records, criteria))
    stats = aggregate(all_records, now=now)
    series = sorted(stats.monthly_totals.items())
    return ExpenseView(display_list=display_list, stats=stats, series=series)

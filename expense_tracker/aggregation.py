"""Aggregation engine: statistics derived from the full record set.

Every figure is recomputed from scratch on each call; nothing is cached or
updated incrementally.  "Now" is read once per pass so the current-month
total and the rolling window agree with each other.

The forecast is a plain moving average of the last few monthly totals.  It
is a placeholder for a real model, not an attempt at one.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Dict, Optional, Sequence

import pandas as pd

try:
    from .config import FORECAST_MONTHS, ROLLING_WINDOW_DAYS
    from .data_processing import aggregate_by_month, records_to_frame
    from .models import ExpenseRecord, ExpenseStats, MonthKey
except ImportError:  # pragma: no cover - fallback for direct execution
    from config import FORECAST_MONTHS, ROLLING_WINDOW_DAYS
    from data_processing import aggregate_by_month, records_to_frame
    from models import ExpenseRecord, ExpenseStats, MonthKey


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (``2.5 -> 3``)."""
    return int(math.floor(value + 0.5))


def month_key(moment: datetime) -> MonthKey:
    return f"{moment.year:04d}-{moment.month:02d}"


def window_start(now: datetime, window_days: int = ROLLING_WINDOW_DAYS) -> str:
    """First ``YYYY-MM-DD`` whose midnight is on or after ``now - window_days``."""
    if now.tzinfo is not None:
        now = now.replace(tzinfo=None)
    cutoff = now - timedelta(days=window_days)
    first_day = cutoff.date()
    if cutoff.time() != datetime.min.time():
        first_day += timedelta(days=1)
    return first_day.isoformat()


def current_month_total(df: pd.DataFrame, now: datetime) -> float:
    """Sum of amounts dated in the calendar month containing ``now``."""
    if df.empty:
        return 0.0
    return float(df.loc[df['month'] == month_key(now), 'amount'].sum())


def rolling_average(df: pd.DataFrame, now: datetime, window_days: int = ROLLING_WINDOW_DAYS) -> int:
    """Average daily spend over the trailing window.

    Records dated on or after ``now - window_days`` count towards the sum,
    with no upper bound.  The sum is always divided by ``window_days``, not
    by the number of days that actually have spending.
    """
    if df.empty:
        return 0
    in_window = df.loc[df['date'] >= window_start(now, window_days), 'amount']
    if in_window.empty:
        return 0
    return round_half_up(float(in_window.sum()) / window_days)


def monthly_bucket_map(df: pd.DataFrame) -> Dict[MonthKey, float]:
    return aggregate_by_month(df)


def forecast_next_month(monthly_totals: Dict[MonthKey, float], months: int = FORECAST_MONTHS) -> int:
    """Mean of the last ``months`` monthly totals, rounded; 0 with no history."""
    keys = sorted(monthly_totals)[-months:]
    if not keys:
        return 0
    return round_half_up(sum(monthly_totals[k] for k in keys) / len(keys))


def aggregate(records: Sequence[ExpenseRecord], now: Optional[datetime] = None) -> ExpenseStats:
    """Compute every dashboard statistic from the full record set."""
    now = now or datetime.now()
    df = records_to_frame(list(records))
    monthly_totals = monthly_bucket_map(df)
    return ExpenseStats(
        current_month_total=current_month_total(df, now),
        transaction_count=len(df),
        rolling_average=rolling_average(df, now),
        monthly_totals=monthly_totals,
        forecast=forecast_next_month(monthly_totals),
    )

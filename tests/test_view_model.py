from __future__ import annotations

from datetime import datetime

from expense_tracker.models import ExpenseRecord, FilterCriteria
from expense_tracker.view_model import build_view

NOW = datetime(2024, 2, 20)


def _sample_records():
    return [
        ExpenseRecord(id=1, description='Groceries', amount=100, category='Food', date='2024-01-05'),
        ExpenseRecord(id=2, description='Lunch', amount=50, category='Food', date='2024-02-10'),
        ExpenseRecord(id=3, description='Train', amount=200, category='Travel', date='2024-02-15'),
    ]


def test_display_list_is_sorted_newest_first() -> None:
    records = _sample_records()
    view = build_view(records, FilterCriteria(), now=NOW)
    assert view.display_list == [records[2], records[1], records[0]]


def test_category_filter_scenario() -> None:
    records = _sample_records()
    view = build_view(records, FilterCriteria(category='Travel'), now=NOW)
    assert view.display_list == [records[2]]


def test_date_range_scenario() -> None:
    records = _sample_records()
    view = build_view(records, FilterCriteria(date_from='2024-02-01', date_to='2024-02-28'), now=NOW)
    assert view.display_list == [records[2], records[1]]


def test_stats_ignore_filters() -> None:
    records = _sample_records()
    unfiltered = build_view(records, None, now=NOW)
    for criteria in (
        FilterCriteria(category='Travel'),
        FilterCriteria(date_from='2030-01-01'),
        FilterCriteria(category='Food', date_to='2024-01-31'),
    ):
        filtered = build_view(records, criteria, now=NOW)
        assert filtered.stats == unfiltered.stats
        assert filtered.series == unfiltered.series


def test_series_is_sorted_by_month() -> None:
    records = [
        ExpenseRecord(id=1, description='b', amount=5, category='Food', date='2024-03-01'),
        ExpenseRecord(id=2, description='a', amount=7, category='Food', date='2023-11-30'),
        ExpenseRecord(id=3, description='c', amount=1, category='Food', date='2024-01-10'),
    ]
    view = build_view(records, None, now=NOW)
    assert view.series == [('2023-11', 7), ('2024-01', 1), ('2024-03', 5)]


def test_empty_records() -> None:
    view = build_view([], FilterCriteria(category='Food'), now=NOW)
    assert view.display_list == []
    assert view.series == []
    assert view.stats.transaction_count == 0

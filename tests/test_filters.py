from __future__ import annotations

from datetime import date

import pytest

from expense_tracker.exceptions import InvalidDate
from expense_tracker.filters import categories_in, filter_records, sort_for_display
from expense_tracker.models import ExpenseRecord, FilterCriteria


def _sample_records():
    return [
        ExpenseRecord(id=1, description='Groceries', amount=100, category='Food', date='2024-01-05'),
        ExpenseRecord(id=2, description='Lunch', amount=50, category='Food', date='2024-02-10'),
        ExpenseRecord(id=3, description='Train', amount=200, category='Travel', date='2024-02-15'),
    ]


def test_empty_criteria_keeps_everything() -> None:
    records = _sample_records()
    assert set(filter_records(records, FilterCriteria())) == set(records)
    assert set(filter_records(records, None)) == set(records)


def test_category_filter_is_exact() -> None:
    records = _sample_records()
    result = filter_records(records, FilterCriteria(category='Travel'))
    assert result == [records[2]]
    assert all(r.category == 'Travel' for r in result)


def test_category_filter_is_case_sensitive() -> None:
    assert filter_records(_sample_records(), FilterCriteria(category='travel')) == []


def test_all_sentinel_disables_category_filter() -> None:
    records = _sample_records()
    assert filter_records(records, FilterCriteria(category='all')) == records


def test_date_range_is_inclusive() -> None:
    records = _sample_records()
    result = filter_records(records, FilterCriteria(date_from='2024-02-10', date_to='2024-02-15'))
    assert result == [records[1], records[2]]


def test_single_bounds() -> None:
    records = _sample_records()
    assert filter_records(records, FilterCriteria(date_from='2024-02-01')) == records[1:]
    assert filter_records(records, FilterCriteria(date_to='2024-01-31')) == records[:1]


def test_bounds_accept_date_objects() -> None:
    records = _sample_records()
    result = filter_records(records, FilterCriteria(date_from=date(2024, 2, 11)))
    assert result == [records[2]]


def test_criteria_compose_with_and() -> None:
    records = _sample_records()
    criteria = FilterCriteria(category='Food', date_from='2024-02-01', date_to='2024-02-28')
    assert filter_records(records, criteria) == [records[1]]


def test_filter_does_not_mutate_input() -> None:
    records = _sample_records()
    snapshot = list(records)
    filter_records(records, FilterCriteria(category='Food'))
    assert records == snapshot


def test_malformed_bound_raises() -> None:
    with pytest.raises(InvalidDate):
        filter_records(_sample_records(), FilterCriteria(date_from='02/01/2024'))


def test_filter_on_empty_input() -> None:
    assert filter_records([], FilterCriteria(category='Food')) == []


def test_sort_for_display_newest_first_and_stable() -> None:
    a = ExpenseRecord(id=1, description='a', amount=1, category='Food', date='2024-01-05')
    b = ExpenseRecord(id=2, description='b', amount=2, category='Food', date='2024-01-05')
    c = ExpenseRecord(id=3, description='c', amount=3, category='Food', date='2024-01-06')
    d = ExpenseRecord(id=4, description='d', amount=4, category='Food', date='2023-12-31')
    assert sort_for_display([a, b, c, d]) == [c, a, b, d]


def test_categories_in() -> None:
    assert categories_in(_sample_records()) == ['Food', 'Travel']


def test_far_future_dates_sort_and_filter_as_text() -> None:
    records = [
        ExpenseRecord(id=1, description='Now', amount=1, category='Food', date='2024-01-01'),
        ExpenseRecord(id=2, description='Later', amount=1, category='Food', date='9999-12-31'),
        ExpenseRecord(id=3, description='Early', amount=1, category='Food', date='0001-01-01'),
    ]
    assert [r.id for r in sort_for_display(records)] == [2, 1, 3]
    assert [r.id for r in filter_records(records, FilterCriteria(date_from='2024-01-01'))] == [1, 2]
    assert [r.id for r in filter_records(records, FilterCriteria(date_to='2300-01-01'))] == [1, 3]


def test_empty_criteria_returns_a_new_list() -> None:
    records = _sample_records()
    result = filter_records(records, FilterCriteria(category='all', date_from=''))
    assert result == records
    assert result is not records

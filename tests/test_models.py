from __future__ import annotations

from datetime import date

import pytest

from expense_tracker.exceptions import InvalidAmount, InvalidDate
from expense_tracker.models import ExpenseRecord, FilterCriteria, parse_amount, parse_date


def test_create_applies_defaults() -> None:
    record = ExpenseRecord.create(id=7, description='  ', amount='12', category='', today=date(2024, 5, 1))
    assert record.description == 'Untitled'
    assert record.category == 'Other'
    assert record.date == '2024-05-01'
    assert record.amount == 12.0
    assert record.month == '2024-05'


@pytest.mark.parametrize('value', [None, '', '   ', 0, -5, '-1', 'abc', 'nan', float('inf'), True])
def test_parse_amount_rejects(value) -> None:
    with pytest.raises(InvalidAmount):
        parse_amount(value)


def test_parse_amount_accepts_numeric_text() -> None:
    assert parse_amount(' 42.5 ') == 42.5


@pytest.mark.parametrize('value', ['2024-13-01', '2024-02-30', '24-01-01', '2024/01/01', 'soon'])
def test_parse_date_rejects(value) -> None:
    with pytest.raises(InvalidDate):
        parse_date(value)


def test_parse_date_accepts_date_objects() -> None:
    assert parse_date(date(2024, 1, 2)) == '2024-01-02'


def test_to_dict_uses_stored_layout() -> None:
    record = ExpenseRecord(id=1, description='Tea', amount=20.0, category='Food', date='2024-01-01')
    assert record.to_dict() == {'id': 1, 'desc': 'Tea', 'amount': 20, 'category': 'Food', 'date': '2024-01-01'}


def test_from_dict_issues_id_for_fractional_ids() -> None:
    data = {'id': 1706000000000.123, 'desc': 'Tea', 'amount': 20, 'category': 'Food', 'date': '2024-01-01'}
    with pytest.raises(ValueError):
        ExpenseRecord.from_dict(data)
    record = ExpenseRecord.from_dict(data, next_id=lambda: 99)
    assert record.id == 99
    assert record.description == 'Tea'


def test_filter_criteria_is_empty() -> None:
    assert FilterCriteria().is_empty
    assert FilterCriteria(category='all').is_empty
    assert not FilterCriteria(category='Food').is_empty
    assert not FilterCriteria(date_to='2024-01-01').is_empty


def test_create_converts_non_text_fields() -> None:
    record = ExpenseRecord.create(id=1, description=5, amount=1, category=42, date='2024-01-01')
    assert record.description == '5'
    assert record.category == '42'


def test_from_dict_accepts_numeric_description() -> None:
    record = ExpenseRecord.from_dict({'id': 1, 'desc': 5, 'amount': 1, 'category': 'Food', 'date': '2024-01-01'})
    assert record.description == '5'

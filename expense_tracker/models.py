"""Core data types for the expense tracker.

``ExpenseRecord`` is the single persisted entity.  ``FilterCriteria``,
``ExpenseStats`` and ``ExpenseView`` are derived, in-memory structures that
are rebuilt on every render and never stored.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

try:
    from .config import ALL_CATEGORIES, DEFAULT_CATEGORY, DEFAULT_DESCRIPTION
    from .exceptions import InvalidAmount, InvalidDate
except ImportError:  # pragma: no cover - fallback for direct execution
    from config import ALL_CATEGORIES, DEFAULT_CATEGORY, DEFAULT_DESCRIPTION
    from exceptions import InvalidAmount, InvalidDate

MonthKey = str  # "YYYY-MM"

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_amount(value: Any) -> float:
    """Coerce ``value`` to a positive amount or raise :class:`InvalidAmount`."""
    if value is None or isinstance(value, bool):
        raise InvalidAmount("Enter an amount")
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise InvalidAmount("Enter an amount")
    try:
        amount = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidAmount(f"Amount {value!r} is not a number") from exc
    if math.isnan(amount) or math.isinf(amount):
        raise InvalidAmount(f"Amount {value!r} is not a number")
    if amount <= 0:
        raise InvalidAmount(f"Amount must be greater than zero, got {value!r}")
    return amount


def parse_date(value: Any) -> str:
    """Return ``value`` as a validated ``YYYY-MM-DD`` string."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    text = str(value).strip() if value is not None else ""
    if not _ISO_DATE.match(text):
        raise InvalidDate(f"Date {value!r} is not in YYYY-MM-DD form")
    try:
        datetime.strptime(text, "%Y-%m-%d")
    except ValueError as exc:
        raise InvalidDate(f"Date {value!r} is not a calendar date") from exc
    return text


def _integral_id(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number) or not number.is_integer():
        return None
    return int(number)


def plain_number(amount: float) -> int | float:
    return int(amount) if float(amount).is_integer() else amount


def _text(value: Any) -> str:
    # stored blobs may hold numbers where text is expected
    if value is None:
        return ""
    return value.strip() if isinstance(value, str) else str(value).strip()


@dataclass(frozen=True)
class ExpenseRecord:
    id: int
    description: str
    amount: float
    category: str
    date: str  # YYYY-MM-DD

    @classmethod
    def create(
        cls,
        id: int,
        description: Optional[str] = None,
        amount: Any = None,
        category: Optional[str] = None,
        date: Any = None,
        today: Optional[date] = None,
    ) -> "ExpenseRecord":
        """Build a validated record, filling blank fields with their defaults.

        A blank ``description`` becomes ``"Untitled"``, a blank ``category``
        becomes ``"Other"`` and a missing ``date`` becomes ``today``.
        Raises :class:`InvalidAmount` or :class:`InvalidDate`.
        """
        if date is None or (isinstance(date, str) and not date.strip()):
            date = today or datetime.now().date()
        return cls(
            id=int(id),
            description=_text(description) or DEFAULT_DESCRIPTION,
            amount=parse_amount(amount),
            category=_text(category) or DEFAULT_CATEGORY,
            date=parse_date(date),
        )

    @property
    def month(self) -> MonthKey:
        return self.date[:7]

    def to_dict(self) -> Dict[str, Any]:
        # "desc" keeps the blob layout readable by earlier versions
        return {
            'id': self.id,
            'desc': self.description,
            'amount': plain_number(self.amount),
            'category': self.category,
            'date': self.date,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], next_id: Optional[Callable[[], int]] = None) -> "ExpenseRecord":
        """Rebuild a record from its stored form.

        Entries whose id is missing or not an integer get one from ``next_id``
        when given; otherwise a ``ValueError`` is raised.
        """
        if not isinstance(data, dict):
            raise TypeError(f"Expected a mapping, got {type(data).__name__}")
        record_id = _integral_id(data.get('id'))
        if record_id is None:
            if next_id is None:
                raise ValueError(f"Record id {data.get('id')!r} is not an integer")
            record_id = next_id()
        if data.get('date') is None or not str(data['date']).strip():
            raise InvalidDate("Stored record has no date")
        return cls.create(
            id=record_id,
            description=data.get('desc', data.get('description')),
            amount=data.get('amount'),
            category=data.get('category'),
            date=data.get('date'),
        )


@dataclass(frozen=True)
class FilterCriteria:
    """Display filter; ``None`` fields impose no constraint."""

    category: Optional[str] = None
    date_from: Optional[str] = None
    date_to: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return (
            (not self.category or self.category == ALL_CATEGORIES)
            and not self.date_from
            and not self.date_to
        )


@dataclass(frozen=True)
class ExpenseStats:
    current_month_total: float
    transaction_count: int
    rolling_average: int
    monthly_totals: Dict[MonthKey, float]
    forecast: int


@dataclass(frozen=True)
class ExpenseView:
    display_list: List[ExpenseRecord]
    stats: ExpenseStats
    series: List[Tuple[MonthKey, float]] = field(default_factory=list)

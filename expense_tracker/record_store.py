"""Owned, in-memory store of expense records.

The store is the single source of truth for the application.  It is loaded
once from a :class:`~expense_tracker.storage.BlobStore`, appended to by single
adds and batch imports, and written back in full after every mutation.  Callers
only ever see immutable snapshots via :meth:`RecordStore.all`.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Iterable, List, Optional, Set, Tuple

try:
    from .config import STORAGE_KEY
    from .exceptions import DuplicateRecordId, ExpenseTrackerError, InvalidAmount, InvalidDate, MalformedPersistedData
    from .logging_setup import get_logger
    from .models import ExpenseRecord, parse_amount, parse_date
    from .storage import BlobStore
except ImportError:  # pragma: no cover - fallback for direct execution
    from config import STORAGE_KEY
    from exceptions import DuplicateRecordId, ExpenseTrackerError, InvalidAmount, InvalidDate, MalformedPersistedData
    from logging_setup import get_logger
    from models import ExpenseRecord, parse_amount, parse_date
    from storage import BlobStore

logger = get_logger(__name__)


class IdSequence:
    """Issues time-based ids that never repeat within the process."""

    def __init__(self, clock=time.time):
        self._clock = clock
        self._last = 0

    def observe(self, record_id: int) -> None:
        if record_id > self._last:
            self._last = record_id

    def next(self) -> int:
        candidate = max(int(self._clock() * 1000), self._last + 1)
        self._last = candidate
        return candidate


@dataclass
class BatchResult:
    """Outcome of :meth:`RecordStore.add_batch`."""

    added: List[ExpenseRecord] = field(default_factory=list)
    rejected: List[Tuple[ExpenseRecord, ExpenseTrackerError]] = field(default_factory=list)


def decode_records(text: str, next_id: Optional[Callable[[], int]] = None) -> Tuple[List[ExpenseRecord], int]:
    """Parse a persisted blob into records.

    Entries without an integral id are given one from ``next_id``.

    Returns the decoded records and the number of entries that were dropped
    because they did not form a valid record.  Raises
    :class:`MalformedPersistedData` when the blob itself is unreadable.
    """
    try:
        payload = json.loads(text)
    except (json.JSONDecodeError, TypeError) as exc:
        raise MalformedPersistedData(f"Stored records are not valid JSON: {exc}") from exc
    if not isinstance(payload, list):
        raise MalformedPersistedData(
            f"Stored records must be a JSON list, got {type(payload).__name__}"
        )
    records: List[ExpenseRecord] = []
    dropped = 0
    for entry in payload:
        try:
            records.append(ExpenseRecord.from_dict(entry, next_id=next_id))
        except (TypeError, ValueError):
            dropped += 1
    return records, dropped


def encode_records(records: Iterable[ExpenseRecord]) -> str:
    return json.dumps([r.to_dict() for r in records], ensure_ascii=False)


class RecordStore:
    """Append-only collection of :class:`ExpenseRecord` backed by a blob store."""

    def __init__(self, blob_store: BlobStore, key: str = STORAGE_KEY, ids: Optional[IdSequence] = None):
        self._blob_store = blob_store
        self._key = key
        self._records: List[ExpenseRecord] = []
        self._ids_in_use: Set[int] = set()
        self._id_sequence = ids or IdSequence()

    def __len__(self) -> int:
        return len(self._records)

    def all(self) -> Tuple[ExpenseRecord, ...]:
        return tuple(self._records)

    def load(self) -> Tuple[ExpenseRecord, ...]:
        """Replace the in-memory collection with the persisted one.

        A missing or unreadable blob yields an empty store; this never raises.
        """
        self._records = []
        self._ids_in_use = set()
        try:
            text = self._blob_store.read(self._key)
        except (OSError, ValueError) as exc:
            logger.warning("Could not read stored records under %r: %s", self._key, exc)
            return self.all()
        if text is None:
            logger.info("No stored records under %r; starting empty", self._key)
            return self.all()
        try:
            records, dropped = decode_records(text, next_id=self._id_sequence.next)
        except MalformedPersistedData as exc:
            logger.warning("Discarding unreadable stored records: %s", exc)
            return self.all()
        if dropped:
            logger.warning("Dropped %d invalid stored record(s)", dropped)
        for record in records:
            if record.id in self._ids_in_use:
                # Legacy blobs may carry repeated ids; keep both under fresh ids.
                record = self._with_fresh_id(record)
            self._append(record)
        logger.info("Loaded %d record(s) from %r", len(self._records), self._key)
        return self.all()

    def next_id(self) -> int:
        return self._id_sequence.next()

    def new_record(
        self,
        description: Optional[str] = None,
        amount: Any = None,
        category: Optional[str] = None,
        date: Any = None,
        today: Optional[date] = None,
    ) -> ExpenseRecord:
        """Build a validated record with a freshly issued id (not yet added)."""
        return ExpenseRecord.create(
            id=self.next_id(),
            description=description,
            amount=amount,
            category=category,
            date=date,
            today=today,
        )

    def add(self, record: ExpenseRecord) -> ExpenseRecord:
        """Append ``record``; the caller is responsible for :meth:`persist`.

        Raises :class:`InvalidAmount` if the amount is not positive,
        :class:`InvalidDate` if the date is not ``YYYY-MM-DD`` and
        :class:`DuplicateRecordId` if the id is already taken.
        """
        self._validate(record)
        self._append(record)
        return record

    def add_batch(self, records: Iterable[ExpenseRecord]) -> BatchResult:
        """Append records in order, skipping the ones that fail validation."""
        result = BatchResult()
        for record in records:
            try:
                self.add(record)
            except (InvalidAmount, InvalidDate, DuplicateRecordId) as exc:
                logger.warning("Skipping record %s: %s", record.id, exc)
                result.rejected.append((record, exc))
            else:
                result.added.append(record)
        return result

    def replace_all(self, records: Iterable[ExpenseRecord]) -> BatchResult:
        """Bulk replacement of the whole collection."""
        self._records = []
        self._ids_in_use = set()
        return self.add_batch(records)

    def persist(self) -> None:
        """Write the full collection back to the blob store."""
        self._blob_store.write(self._key, encode_records(self._records))
        logger.debug("Persisted %d record(s) to %r", len(self._records), self._key)

    def _validate(self, record: ExpenseRecord) -> None:
        parse_amount(record.amount)
        parse_date(record.date)
        if record.id in self._ids_in_use:
            raise DuplicateRecordId(f"Record id {record.id} is already in use")

    def _append(self, record: ExpenseRecord) -> None:
        self._records.append(record)
        self._ids_in_use.add(record.id)
        self._id_sequence.observe(record.id)

    def _with_fresh_id(self, record: ExpenseRecord) -> ExpenseRecord:
        return ExpenseRecord(
            id=self._id_sequence.next(),
            description=record.description,
            amount=record.amount,
            category=record.category,
            date=record.date,
        )

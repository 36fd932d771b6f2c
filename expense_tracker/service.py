"""Application service tying the record store to the view builder.

Every mutation reloads the persisted collection, applies the change and
writes the whole collection back, all under the tracker's lock.  Reloading
first means a tracker never overwrites records that another tracker over the
same blob has saved in the meantime.  The dashboard shares one tracker per
process between all of its sessions.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, List, Optional, Tuple

try:
    from .config import STORAGE_KEY
    from .csv_io import export_csv, import_csv
    from .exceptions import MalformedImportRow
    from .logging_setup import get_logger
    from .models import ExpenseRecord, ExpenseView, FilterCriteria
    from .record_store import RecordStore
    from .storage import BlobStore, JsonFileBlobStore
    from .view_model import build_view
except ImportError:  # pragma: no cover - fallback for direct execution
    from config import STORAGE_KEY
    from csv_io import export_csv, import_csv
    from exceptions import MalformedImportRow
    from logging_setup import get_logger
    from models import ExpenseRecord, ExpenseView, FilterCriteria
    from record_store import RecordStore
    from storage import BlobStore, JsonFileBlobStore
    from view_model import build_view

logger = get_logger(__name__)


@dataclass
class ImportSummary:
    added: List[ExpenseRecord] = field(default_factory=list)
    skipped_rows: List[MalformedImportRow] = field(default_factory=list)
    rejected: List[Tuple[ExpenseRecord, Exception]] = field(default_factory=list)

    @property
    def problems(self) -> List[str]:
        messages = [str(row) for row in self.skipped_rows]
        messages.extend(f"record {record.id}: {exc}" for record, exc in self.rejected)
        return messages


class ExpenseTracker:
    """Single entry point used by the dashboard."""

    def __init__(self, store: RecordStore, clock: Callable[[], datetime] = datetime.now):
        self.store = store
        self._clock = clock
        self._lock = threading.RLock()

    @classmethod
    def open(
        cls,
        blob_store: Optional[BlobStore] = None,
        key: str = STORAGE_KEY,
        clock: Callable[[], datetime] = datetime.now,
    ) -> "ExpenseTracker":
        """Create a tracker and load whatever is persisted under ``key``."""
        store = RecordStore(blob_store or JsonFileBlobStore(), key=key)
        store.load()
        return cls(store, clock=clock)

    @property
    def records(self) -> Tuple[ExpenseRecord, ...]:
        with self._lock:
            return self.store.all()

    def add_expense(
        self,
        description: Optional[str] = None,
        amount: Any = None,
        category: Optional[str] = None,
        date: Any = None,
    ) -> ExpenseRecord:
        """Validate, append and persist one user-submitted expense.

        Raises :class:`~expense_tracker.exceptions.InvalidAmount` (or
        ``InvalidDate``) without writing anything.
        """
        today = self._clock().date()
        with self._lock:
            self.store.load()
            record = self.store.new_record(
                description=description,
                amount=amount,
                category=category,
                date=date,
                today=today,
            )
            self.store.add(record)
            self.store.persist()
        logger.info("Added expense %s (%s, %s)", record.id, record.category, record.date)
        return record

    def import_csv_text(self, text: str) -> ImportSummary:
        """Import a whole CSV file held in memory; bad rows are skipped."""
        with self._lock:
            self.store.load()
            parsed = import_csv(text, next_id=self.store.next_id)
            batch = self.store.add_batch(parsed.records)
            self.store.persist()
        summary = ImportSummary(
            added=batch.added,
            skipped_rows=parsed.skipped,
            rejected=list(batch.rejected),
        )
        logger.info(
            "Imported %d record(s), skipped %d row(s)",
            len(summary.added),
            len(summary.skipped_rows) + len(summary.rejected),
        )
        return summary

    def export_csv_text(self) -> str:
        return export_csv(self.records)

    def clear(self) -> None:
        with self._lock:
            self.store.replace_all([])
            self.store.persist()
        logger.info("Cleared all records")

    def view(self, criteria: Optional[FilterCriteria] = None) -> ExpenseView:
        return build_view(self.records, criteria, now=self._clock())

"""CSV export and import.

The layout is ``id,desc,amount,category,date`` with the description wrapped
in double quotes.  Import splits each line on every comma and strips all
quote characters from the description; quoted fields containing commas are
not supported, so files exported by earlier versions keep parsing the same
way.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional

try:
    from .config import CSV_HEADER
    from .exceptions import InvalidAmount, InvalidDate, MalformedImportRow, NothingToExport
    from .logging_setup import get_logger
    from .models import ExpenseRecord, plain_number
except ImportError:  # pragma: no cover - fallback for direct execution
    from config import CSV_HEADER
    from exceptions import InvalidAmount, InvalidDate, MalformedImportRow, NothingToExport
    from logging_setup import get_logger
    from models import ExpenseRecord, plain_number

logger = get_logger(__name__)

EXPECTED_FIELDS = 5


@dataclass
class ImportResult:
    records: List[ExpenseRecord] = field(default_factory=list)
    skipped: List[MalformedImportRow] = field(default_factory=list)


def export_csv(records: Iterable[ExpenseRecord]) -> str:
    """Serialize ``records`` to CSV text.

    Raises :class:`NothingToExport` when there is nothing to write.
    """
    records = list(records)
    if not records:
        raise NothingToExport("No data to export")
    rows = [CSV_HEADER]
    for r in records:
        rows.append(f'{r.id},"{r.description}",{plain_number(r.amount)},{r.category},{r.date}')
    return "\n".join(rows)


def parse_row(line: str, record_id: int, line_number: Optional[int] = None) -> ExpenseRecord:
    """Turn one CSV line into a record carrying ``record_id``.

    The id column in the file is ignored.  Raises
    :class:`MalformedImportRow` when the line cannot be used.
    """
    cols = line.rstrip("\r").split(",")
    if len(cols) < EXPECTED_FIELDS:
        raise MalformedImportRow(
            f"expected {EXPECTED_FIELDS} fields, got {len(cols)}", line_number, line
        )
    if not cols[4].strip():
        raise MalformedImportRow("missing date", line_number, line)
    try:
        return ExpenseRecord.create(
            id=record_id,
            description=cols[1].replace('"', ''),
            amount=cols[2],
            category=cols[3],
            date=cols[4],
        )
    except (InvalidAmount, InvalidDate) as exc:
        raise MalformedImportRow(str(exc), line_number, line) from exc


def import_csv(text: str, next_id: Callable[[], int]) -> ImportResult:
    """Parse exported CSV text into new records.

    The first line is treated as a header and blank lines are ignored.  Every
    accepted row receives a fresh id from ``next_id``.  Rows that fail to
    parse are collected in :attr:`ImportResult.skipped` and the rest of the
    file is still imported.
    """
    result = ImportResult()
    lines = text.split("\n")
    for offset, line in enumerate(lines[1:], start=2):
        if not line.strip():
            continue
        try:
            result.records.append(parse_row(line, next_id(), line_number=offset))
        except MalformedImportRow as exc:
            logger.warning("Skipping import row: %s", exc)
            result.skipped.append(exc)
    return result

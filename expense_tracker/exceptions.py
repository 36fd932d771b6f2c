"""Domain-specific exceptions for the expense tracker."""

from __future__ import annotations

from typing import Optional


class ExpenseTrackerError(Exception):
    """Base class for all expense tracker errors."""


class InvalidAmount(ExpenseTrackerError, ValueError):
    """Raised when a submitted amount is missing, zero, negative or not a number."""


class InvalidDate(ExpenseTrackerError, ValueError):
    """Raised when a record date is not a valid ``YYYY-MM-DD`` calendar date."""


class DuplicateRecordId(ExpenseTrackerError, ValueError):
    """Raised when a record id is already present in the store."""


class MalformedPersistedData(ExpenseTrackerError, ValueError):
    """Raised when the persisted record blob cannot be parsed."""


class MalformedImportRow(ExpenseTrackerError, ValueError):
    """Raised when an imported CSV line cannot be turned into a record."""

    def __init__(self, message: str, line_number: Optional[int] = None, line: str = ""):
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class NothingToExport(ExpenseTrackerError):
    """Raised when an export is requested but the store holds no records."""

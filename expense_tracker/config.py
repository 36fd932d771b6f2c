"""Configuration management for the expense tracker.

This module centralizes all configuration values including paths,
defaults, and environment variable overrides.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List

# Base project root - assumes this file is in expense_tracker/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directory holding the persisted record blob
DATA_DIR = Path(os.getenv("EXPENSE_TRACKER_DATA_DIR", _PROJECT_ROOT / "data"))

# Key under which the full record list is stored
STORAGE_KEY = os.getenv("EXPENSE_TRACKER_STORAGE_KEY", "sx_expenses_v1")

# Display currency symbol
CURRENCY_SYMBOL = os.getenv("EXPENSE_TRACKER_CURRENCY", "₹")

LOG_LEVEL_ENV = "EXPENSE_TRACKER_LOG_LEVEL"
LOG_FILE_ENV = "EXPENSE_TRACKER_LOG_FILE"

# Record defaults applied when a submission leaves a field blank
DEFAULT_DESCRIPTION = "Untitled"
DEFAULT_CATEGORY = "Other"

# Category filter sentinel meaning "no category filter"
ALL_CATEGORIES = "all"

DEFAULT_CATEGORIES: List[str] = [
    "Food",
    "Travel",
    "Shopping",
    "Bills",
    "Entertainment",
    "Health",
    "Other",
]

# Aggregation windows
ROLLING_WINDOW_DAYS = 30
FORECAST_MONTHS = 3

# CSV layout used for export and import
CSV_HEADER = "id,desc,amount,category,date"
EXPORT_FILENAME = "expenses.csv"


def get_data_dir() -> Path:
    """Resolve the data directory, honouring the environment at call time."""
    override = os.getenv("EXPENSE_TRACKER_DATA_DIR")
    return Path(override).resolve() if override else DATA_DIR.resolve()


def ensure_data_directories() -> Path:
    """Create the data directory if it doesn't exist and return it."""
    data_dir = get_data_dir()
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir

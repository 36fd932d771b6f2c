"""Logging for the ``expense_tracker`` package.

Library modules call ``get_logger(__name__)`` and never configure anything.
The dashboard calls :func:`configure_logging` at the top of every Streamlit
run; only the first call installs handlers, later reruns are no-ops.  Until
then the package logger carries a ``NullHandler`` so importing the package
from tests or scripts stays silent.

Settings come from the environment:

``EXPENSE_TRACKER_LOG_LEVEL``
    Level name or number, ``INFO`` when unset or unrecognised.
``EXPENSE_TRACKER_LOG_FILE``
    Optional file name; relative names land in the data directory next to
    the stored records.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import IO, List, Optional, Union

try:
    from .config import LOG_FILE_ENV, LOG_LEVEL_ENV, ensure_data_directories
except ImportError:  # pragma: no cover - fallback for direct execution
    from config import LOG_FILE_ENV, LOG_LEVEL_ENV, ensure_data_directories

PACKAGE_LOGGER = "expense_tracker"
DEFAULT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

# Marks handlers installed here so later reruns can find them.
_OWNED = "_expense_tracker_handler"


def _parse_level(level: Union[int, str, None]) -> int:
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV)
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        name = level.strip().upper()
        if name.isdigit():
            return int(name)
        numeric = logging.getLevelName(name)
        if isinstance(numeric, int):
            return numeric
    return logging.INFO


def _log_file_path(log_file: Union[str, Path, None]) -> Optional[Path]:
    if log_file is None:
        log_file = os.getenv(LOG_FILE_ENV)
    if not log_file:
        return None
    path = Path(log_file)
    if not path.is_absolute():
        path = ensure_data_directories() / path
    return path


def _owned_handlers(logger: logging.Logger) -> List[logging.Handler]:
    return [h for h in logger.handlers if getattr(h, _OWNED, False)]


def configure_logging(
    level: Union[int, str, None] = None,
    *,
    stream: Optional[IO[str]] = None,
    log_file: Union[str, Path, None] = None,
) -> logging.Logger:
    """Install console (and optional file) handlers on the package logger.

    Safe to call on every Streamlit rerun.  Returns the package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    if _owned_handlers(logger):
        return logger

    for handler in list(logger.handlers):
        if isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    handlers: List[logging.Handler] = [logging.StreamHandler(stream or sys.stderr)]
    path = _log_file_path(log_file)
    if path is not None:
        handlers.append(logging.FileHandler(path, encoding="utf-8"))

    resolved = _parse_level(level)
    formatter = logging.Formatter(DEFAULT_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, _OWNED, True)
        logger.addHandler(handler)

    # Streamlit configures the root logger itself; keep our records out of it.
    logger.setLevel(resolved)
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return ``logging.getLogger(name)``, silencing the package until configured."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if not package_logger.handlers:
        package_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)

"""Pytest configuration for test isolation.

The file-backed blob store defaults to ``<project>/data``.  Point it at a
per-test temporary directory so tests never read or write real user data.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _isolate_data_dir(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> Path:
    data_dir = tmp_path_factory.mktemp("data")
    monkeypatch.setenv("EXPENSE_TRACKER_DATA_DIR", os.fspath(data_dir))
    return data_dir

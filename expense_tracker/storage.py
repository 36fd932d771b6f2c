"""Key-value blob storage for the persisted record list.

The record store only needs ``read(key)`` and ``write(key, text)``.  The
file-backed implementation keeps one JSON file per key under the data
directory and replaces it atomically so a reader never sees a half-written
blob.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol

try:
    from .config import ensure_data_directories
    from .file_operations import safe_filename
except ImportError:  # pragma: no cover - fallback for direct execution
    from config import ensure_data_directories
    from file_operations import safe_filename


class BlobStore(Protocol):
    def read(self, key: str) -> Optional[str]:
        ...

    def write(self, key: str, text: str) -> None:
        ...


class JsonFileBlobStore:
    """Stores each key as ``<data_dir>/<key>.json``."""

    def __init__(self, data_dir: Optional[Path] = None):
        self.data_dir = Path(data_dir) if data_dir is not None else ensure_data_directories()

    def get_path(self, key: str) -> Path:
        return self.data_dir / f"{safe_filename(key, default='blob')}.json"

    def read(self, key: str) -> Optional[str]:
        target = self.get_path(key)
        if not target.exists():
            return None
        with target.open('r', encoding='utf-8') as handle:
            return handle.read()

    def write(self, key: str, text: str) -> None:
        target = self.get_path(key)
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.stem}.", suffix='.tmp', dir=target.parent)
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as handle:
                handle.write(text)
            os.replace(tmp_name, target)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise


class MemoryBlobStore:
    """In-process blob store, used by tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.blobs: Dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self.blobs.get(key)

    def write(self, key: str, text: str) -> None:
        self.blobs[key] = text

"""File operation utilities for safe filename handling."""

from __future__ import annotations


def safe_filename(name: str, default: str = 'file') -> str:
    """Create a safe filename from a storage key or user-provided name.

    Keeps alphanumeric characters, underscores and hyphens; spaces become
    underscores and everything else is dropped.

    Example:
        >>> safe_filename("sx_expenses_v1")
        'sx_expenses_v1'
        >>> safe_filename("../my expenses!")
        'my_expenses'
        >>> safe_filename("", default="blob")
        'blob'
    """
    if not name:
        return default

    cleaned = ''.join(c for c in name if c.isalnum() or c in {' ', '_', '-'})
    cleaned = cleaned.strip().replace(' ', '_')

    while '__' in cleaned:
        cleaned = cleaned.replace('__', '_')

    cleaned = cleaned.strip('_')
    return cleaned if cleaned else default

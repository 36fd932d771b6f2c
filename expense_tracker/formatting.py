"""Formatting utilities for currency display."""

from __future__ import annotations

from typing import Optional, Union

try:
    from .config import CURRENCY_SYMBOL
except ImportError:  # pragma: no cover - fallback for direct execution
    from config import CURRENCY_SYMBOL


def format_currency(amount: Union[float, int], symbol: Optional[str] = None) -> str:
    """Format an amount with thousands separators and the currency symbol.

    Whole amounts are shown without decimals and fractional amounts with
    two; the value itself is never rounded to an integer.

    Example:
        >>> format_currency(1234567, symbol="₹")
        '₹1,234,567'
        >>> format_currency(1234.5, symbol="₹")
        '₹1,234.50'
    """
    symbol = CURRENCY_SYMBOL if symbol is None else symbol
    if float(amount).is_integer():
        return f"{symbol}{int(amount):,}"
    return f"{symbol}{amount:,.2f}"

"""Formatting utilities for currency and percentage display."""

from __future__ import annotations

from typing import Optional, Union

try:
    from .config import CURRENCY_SYMBOL
except ImportError:
    from config import CURRENCY_SYMBOL


def format_currency(
    amount: Union[float, int],
    include_sign: bool = True,
    symbol: Optional[str] = None,
) -> str:
    """Format a currency amount with two decimals and thousands separators.

    Negative amounts keep the minus ahead of the symbol.

    Example:
        >>> format_currency(1234.5, symbol="₹")
        '₹1,234.50'
        >>> format_currency(-200, symbol="₹")
        '-₹200.00'
        >>> format_currency(1234.56, include_sign=False)
        '1,234.56'
    """
    formatted = f"{abs(amount):,.2f}"
    if include_sign:
        formatted = f"{symbol if symbol is not None else CURRENCY_SYMBOL}{formatted}"
    return f"-{formatted}" if amount < 0 else formatted


def format_percentage(value: float, decimals: int = 1) -> str:
    """Format a percentage value, e.g. ``66.666`` -> ``'66.7%'``."""
    return f"{value:.{decimals}f}%"


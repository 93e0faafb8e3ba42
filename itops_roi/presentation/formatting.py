"""Display formatting for currency figures and the payback ratio."""

from __future__ import annotations

CURRENCY_SYMBOL = "$"
# Default grouping and precision of a browser's Number.toLocaleString()
_MAX_FRACTION_DIGITS = 3


def format_number(value: float) -> str:
    """Group thousands and keep at most three fraction digits, trailing zeros trimmed."""
    text = f"{value:,.{_MAX_FRACTION_DIGITS}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_currency(value: float) -> str:
    # Symbol goes before the sign: -1166.67 renders as "$-1,166.67"
    return f"{CURRENCY_SYMBOL}{format_number(value)}"


def format_payback(value: float) -> str:
    return f"{value:.1f} months"


def format_percent(value: float) -> str:
    return f"{format_number(value)}%"

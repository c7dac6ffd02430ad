"""
Money Utilities - Safe Decimal operations for monetary values.

Prices are stored as JSON numbers; totals are computed with Decimal and
converted back to float only at the storage boundary.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

# Default precision for money operations (2 decimal places)
MONEY_PRECISION = Decimal("0.01")

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}

Number = Union[str, int, float, Decimal, None]


def to_decimal(value: Number) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value

    try:
        # Floats go through str to keep 9.99 as 9.99
        if isinstance(value, float):
            return Decimal(str(value))
        if isinstance(value, str):
            return Decimal(value.strip())
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def round_money(value: Number) -> Decimal:
    """Round a monetary value to cents."""
    return to_decimal(value).quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def to_float(value: Number) -> float:
    """
    Convert to float for JSON storage.

    Use only at storage boundaries, not for internal calculations.
    """
    return float(to_decimal(value))


def multiply(value: Number, factor: Number) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)


def format_money(value: Number, currency: str = "USD") -> str:
    """
    Format monetary value with currency symbol, e.g. ``$9.99``.

    Args:
        value: Value to format
        currency: Currency code (USD, EUR, GBP)

    Returns:
        Formatted string with currency symbol
    """
    symbol = CURRENCY_SYMBOLS.get(currency)
    formatted = f"{round_money(value):.2f}"
    if symbol is None:
        return f"{formatted} {currency}"
    return f"{symbol}{formatted}"

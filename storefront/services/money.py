"""
Money Utilities - Safe Decimal operations for monetary values.

Storefront prices are whole rupiah. Intermediate figures (fee, tax) are
rounded half-up to whole units before being summed.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

Number = Union[str, int, float, Decimal, None]

# Precision for integer currencies (IDR)
INTEGER_PRECISION = Decimal("1")


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
        # Convert via string to avoid float precision issues
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def round_money(value: Number) -> int:
    """Round a monetary value half-up to whole currency units."""
    return int(to_decimal(value).quantize(INTEGER_PRECISION, rounding=ROUND_HALF_UP))


def multiply(value: Number, factor: Number) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)


def to_amount(value: Number) -> int:
    """
    Coerce a backend price field to whole currency units.

    Missing or unparseable values become 0.
    """
    return round_money(value)


def format_money(value: Number, currency: str = "IDR") -> str:
    """
    Format monetary value for display.

    Args:
        value: Value to format
        currency: Currency code (only IDR gets the "Rp" prefix)

    Returns:
        Formatted string, e.g. "Rp 2.442.000"
    """
    formatted = f"{round_money(value):,}"
    if currency == "IDR":
        return "Rp " + formatted.replace(",", ".")
    return f"{formatted} {currency}"

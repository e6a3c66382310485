"""Display formatting for amounts and tax rates."""

from decimal import Decimal

from ..config import get_currency_symbol
from .tax_utils import as_decimal, quantize_money


def format_currency(amount: float) -> str:
    """
    Format an amount for display, e.g. 12.5 -> "$12.50".

    Negative amounts keep the sign in front of the symbol ("-$1.00").
    """
    value = quantize_money(as_decimal(amount))
    if value == 0:
        # -0.001 rounds to -0.00
        value = abs(value)
    symbol = get_currency_symbol()
    if value < 0:
        return f"-{symbol}{-value:.2f}"
    return f"{symbol}{value:.2f}"


def format_tax_rate(rate: float) -> str:
    """Format a tax percentage, dropping a trailing ".0" (7.0 -> "7%")."""
    return f"{rate_key(rate)}%"


def rate_key(rate: float) -> str:
    """
    Canonical string for a rate, used as the session breakdown key.

    7.0 -> "7", 2.5 -> "2.5", 0 -> "0".
    """
    value = as_decimal(rate).normalize()
    if value == value.to_integral_value():
        value = value.quantize(Decimal("1"))
    return format(value, "f")

"""
Tax calculation utilities.

This module provides the tax arithmetic shared by the shopping session,
the item edit dialog and the line-item resolver: converting between
tax-inclusive and tax-exclusive prices and computing the tax for a line.

Amounts go in and come out as floats. Arithmetic is done on Decimal values
built from the float's shortest repr, and rounding to cents happens only
where a function documents it.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from .tax_rates import TaxRateCode, get_default_tax_rate, get_tax_rate_by_code

CENT = Decimal("0.01")
HUNDRED = Decimal("100")


def as_decimal(value: float | int | Decimal) -> Decimal:
    """Convert a number to Decimal without picking up binary float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize_money(amount: Decimal) -> Decimal:
    """Round a Decimal to cents, half away from zero."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def round_money(amount: float | Decimal) -> float:
    """Round to 2 decimal places for currency."""
    return float(quantize_money(as_decimal(amount)))


def calculate_base_price(
    effective_price: float,
    tax_rate: float,
    price_includes_tax: bool,
) -> float:
    """
    Strip tax from a unit price.

    Formula: base_price = effective_price / (1 + tax_rate/100) when the
    entered price includes tax, otherwise the price is already the base.

    The result is not rounded; callers round once when they produce a
    money total.

    Args:
        effective_price: Unit price after any promotion
        tax_rate: Tax percentage (e.g. 7 for 7%)
        price_includes_tax: Whether effective_price already contains the tax

    Returns:
        Tax-exclusive unit price
    """
    if not price_includes_tax or tax_rate <= 0:
        return effective_price
    divisor = 1 + as_decimal(tax_rate) / HUNDRED
    return float(as_decimal(effective_price) / divisor)


def calculate_price_with_tax(base_price: float, tax_rate: float) -> float:
    """Add tax to a base price, rounded to cents."""
    if tax_rate <= 0:
        return round_money(base_price)
    multiplier = 1 + as_decimal(tax_rate) / HUNDRED
    return round_money(as_decimal(base_price) * multiplier)


def calculate_tax_amount(base_price: float, tax_rate: float, quantity: float) -> float:
    """
    Tax owed on a line.

    Formula: tax_amount = base_price * (tax_rate/100) * quantity, rounded to
    cents on return.
    """
    if tax_rate <= 0:
        return 0.0
    amount = as_decimal(base_price) * as_decimal(tax_rate) / HUNDRED * as_decimal(quantity)
    return round_money(amount)


def calculate_line_total(price: float, quantity: float) -> float:
    """What the user pays for a line: price * quantity, rounded to cents."""
    return round_money(as_decimal(price) * as_decimal(quantity))


@dataclass
class ItemTaxInfo:
    """
    Base price / tax split for one line, as shown in the item edit dialog.

    base_price keeps full precision so the tax is rounded once;
    display_base_price is the same value rounded to cents.
    """

    tax_rate_code: str
    tax_rate: float
    price_includes_tax: bool
    base_price: float
    display_base_price: float
    tax_amount: float
    subtotal: float


def calculate_item_tax_info(
    price: float,
    quantity: float,
    tax_rate_code: str | TaxRateCode,
    price_includes_tax: bool,
) -> ItemTaxInfo:
    """
    Preview the tax split for a price/quantity pair.

    The rate is taken from the catalog entry for tax_rate_code; an unknown
    code uses the default rate.

    Args:
        price: Unit price as entered
        quantity: Number of units
        tax_rate_code: Catalog code of the item's tax rate
        price_includes_tax: Whether the entered price already contains the tax

    Returns:
        ItemTaxInfo with base price, tax amount and line subtotal
    """
    entry = get_tax_rate_by_code(tax_rate_code) or get_default_tax_rate()

    base_price = calculate_base_price(price, entry.rate, price_includes_tax)

    return ItemTaxInfo(
        tax_rate_code=entry.code.value,
        tax_rate=entry.rate,
        price_includes_tax=price_includes_tax,
        base_price=base_price,
        display_base_price=round_money(base_price),
        tax_amount=calculate_tax_amount(base_price, entry.rate, quantity),
        subtotal=calculate_line_total(price, quantity),
    )

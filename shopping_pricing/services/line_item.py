"""
Line-Item Pricing Resolver.

Combines the promotion calculator and the tax arithmetic for one line of a
shopping session. The promotion is applied first; tax is then computed on the
discounted price, since sales tax is charged on what the shopper pays rather
than on the shelf price.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .promotions import (
    Promotion,
    PromotionCalculationResult,
    PromotionContext,
    calculate_promotion_discount,
)
from .tax_rates import TaxRateCode
from .tax_utils import (
    as_decimal,
    calculate_base_price,
    calculate_line_total,
    calculate_tax_amount,
    round_money,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineItemInput:
    """
    One line of a shopping session, as entered by the shopper.

    tax_rate is captured when the item is created and travels with it, so a
    later catalog change does not alter historical lines.
    """

    unit_price: float
    quantity: float
    tax_rate_code: TaxRateCode | str
    tax_rate: float
    price_includes_tax: bool
    promotion: Optional[Promotion] = None
    promotion_context: Optional[PromotionContext] = None


@dataclass
class ResolvedLineItem:
    """
    Priced line.

    Attributes:
        tax_rate_code: Catalog code carried over from the input
        tax_rate: Tax percentage carried over from the input
        quantity: Number of units
        effective_unit_price: Unit price after the promotion
        base_price: Tax-exclusive effective unit price (unrounded)
        display_base_price: base_price rounded to cents, for display only
        tax_amount: Tax for the whole line, rounded to cents
        subtotal: What the shopper pays for the line after the promotion
        base_price_total: base_price * quantity (unrounded)
        original_price: unit_price * quantity before the promotion
        discount_amount: Promotion savings for the line
        promotion_result: Full promotion outcome, when a promotion was given
    """

    tax_rate_code: str
    tax_rate: float
    quantity: float
    effective_unit_price: float
    base_price: float
    display_base_price: float
    tax_amount: float
    subtotal: float
    base_price_total: float
    original_price: float
    discount_amount: float
    promotion_result: Optional[PromotionCalculationResult] = None


def resolve_line_item(item: LineItemInput) -> ResolvedLineItem:
    """
    Price one line: promotion first, then the tax split.

    Args:
        item: Validated line item (unit_price >= 0, quantity > 0, tax_rate >= 0)

    Returns:
        ResolvedLineItem with the base/tax breakdown of the discounted line
    """
    promotion_result = None
    if item.promotion is not None:
        promotion_result = calculate_promotion_discount(
            item.promotion,
            item.unit_price,
            item.quantity,
            item.promotion_context,
        )
        original_price = promotion_result.original_price
        discount_amount = promotion_result.discount_amount
        line_total = promotion_result.final_price
    else:
        original_price = calculate_line_total(item.unit_price, item.quantity)
        discount_amount = 0.0
        line_total = original_price

    quantity = as_decimal(item.quantity)
    if quantity > 0:
        effective_unit_price = float(as_decimal(line_total) / quantity)
    else:
        effective_unit_price = 0.0

    base_price = calculate_base_price(effective_unit_price, item.tax_rate, item.price_includes_tax)
    tax_amount = calculate_tax_amount(base_price, item.tax_rate, item.quantity)

    code = item.tax_rate_code
    if isinstance(code, TaxRateCode):
        code = code.value

    return ResolvedLineItem(
        tax_rate_code=code,
        tax_rate=item.tax_rate,
        quantity=item.quantity,
        effective_unit_price=effective_unit_price,
        base_price=base_price,
        display_base_price=round_money(base_price),
        tax_amount=tax_amount,
        subtotal=line_total,
        base_price_total=float(as_decimal(base_price) * quantity),
        original_price=original_price,
        discount_amount=discount_amount,
        promotion_result=promotion_result,
    )


def resolve_line_items(items: Iterable[LineItemInput]) -> List[ResolvedLineItem]:
    """Resolve every line of a session, keeping input order."""
    resolved = [resolve_line_item(item) for item in items]
    logger.debug("Resolved %d line items", len(resolved))
    return resolved

"""
Promotion Discount Calculator.

Decides whether a promotion applies to one line (unit price x quantity) and
how much it saves. Used by the add-to-list dialog to show savings per
candidate promotion and by the line-item resolver before tax is computed.

Eligibility gates run in a fixed order and stop at the first failure, so
the reason shown to the user is always the first unmet condition:

1. coupon code (case-sensitive match)
2. loyalty card
3. companion product in the cart (always checked for bundle)
4. minimum quantity

Promotion types:
----------------
- percent_off: value is a percentage of the line price (0-100)
- fixed_off:   value is an amount off the line, capped at the line price
- multi_buy:   value is the price of min_quantity units ("3 for $5.00");
               units beyond complete bundles are charged at unit price
- bundle:      multi_buy pricing that also needs the companion product

The calculator never raises. Anything it cannot price comes back as
not applicable with a reason.
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Callable, Iterable, List, Optional, Union

from .formatting import format_currency
from .tax_utils import HUNDRED, as_decimal, quantize_money

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class PromotionType(str, Enum):
    PERCENT_OFF = "percent_off"
    FIXED_OFF = "fixed_off"
    MULTI_BUY = "multi_buy"
    BUNDLE = "bundle"


class PromotionStatus(str, Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    UNVERIFIED = "unverified"
    REJECTED = "rejected"
    EXPIRED = "expired"


# Only community-reported promotions in these states are offered to shoppers
ACTIVE_STATUSES = {PromotionStatus.VERIFIED.value, PromotionStatus.UNVERIFIED.value}

REASON_COUPON = "Requires coupon code {code}"
REASON_LOYALTY = "Requires a loyalty card"
REASON_COMPANION = "Requires the companion product in your cart"
REASON_MIN_QUANTITY = "Requires buying at least {min_quantity} units"
REASON_BUNDLE_SIZE = "Promotion has no valid bundle size"
REASON_UNSUPPORTED = "This promotion type is not supported"


@dataclass(frozen=True)
class Promotion:
    """
    A promotion as fetched for a product/store pair.

    Attributes:
        id: Promotion identifier
        type: One of PromotionType (raw strings from the data layer are accepted)
        value: Meaning depends on type, see module docstring
        min_quantity: Minimum units for the promotion; bundle size for multi_buy/bundle
        requires_coupon: Coupon code the shopper must enter
        requires_loyalty_card: Whether a loyalty card is needed
        requires_companion_product: Whether another product must be in the cart
        status: Review status of the promotion
        name: Display name
        description: Free-text description
        start_date: First day the promotion runs
        end_date: Last day the promotion runs (inclusive)
        is_indefinite: Runs with no end date
    """

    id: str
    type: PromotionType | str
    value: float
    min_quantity: Optional[int] = None
    requires_coupon: Optional[str] = None
    requires_loyalty_card: bool = False
    requires_companion_product: bool = False
    status: PromotionStatus | str = PromotionStatus.UNVERIFIED
    name: str = ""
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_indefinite: bool = False


@dataclass(frozen=True)
class PromotionContext:
    """What the shopper has supplied for the eligibility gates."""

    coupon_code: Optional[str] = None
    has_loyalty_card: bool = False
    has_companion_product: bool = False


@dataclass
class PromotionCalculationResult:
    """Outcome of applying one promotion to one line."""

    is_applicable: bool
    original_price: float
    discount_amount: float
    discount_percent: int
    final_price: float
    not_applicable_reason: Optional[str] = None


@dataclass
class PromotionEvaluation:
    """A candidate promotion paired with its result, for ranking."""

    promotion: Promotion
    result: PromotionCalculationResult


def _enum_value(value) -> str:
    return value.value if isinstance(value, Enum) else str(value)


def _not_applicable(original: Decimal, reason: str) -> PromotionCalculationResult:
    return PromotionCalculationResult(
        is_applicable=False,
        original_price=float(original),
        discount_amount=0.0,
        discount_percent=0,
        final_price=float(original),
        not_applicable_reason=reason,
    )


def _requires_companion(promotion: Promotion) -> bool:
    if promotion.requires_companion_product:
        return True
    return _enum_value(promotion.type) == PromotionType.BUNDLE.value


def _check_eligibility(
    promotion: Promotion,
    quantity: Decimal,
    context: PromotionContext,
) -> Optional[str]:
    """Return the reason for the first failing gate, or None if all pass."""
    if promotion.requires_coupon:
        if context.coupon_code != promotion.requires_coupon:
            return REASON_COUPON.format(code=promotion.requires_coupon)

    if promotion.requires_loyalty_card and not context.has_loyalty_card:
        return REASON_LOYALTY

    if _requires_companion(promotion) and not context.has_companion_product:
        return REASON_COMPANION

    if promotion.min_quantity is not None:
        if quantity < as_decimal(promotion.min_quantity):
            return REASON_MIN_QUANTITY.format(min_quantity=promotion.min_quantity)

    return None


# Each calculator gets the promotion, the unit price, the quantity and the
# rounded line price, and returns the discount for the line, or a reason
# string when the promotion cannot be priced.
DiscountCalculator = Callable[[Promotion, Decimal, Decimal, Decimal], Union[Decimal, str]]


def _percent_off_discount(
    promotion: Promotion, unit_price: Decimal, quantity: Decimal, original: Decimal
) -> Decimal:
    percent = min(max(as_decimal(promotion.value), ZERO), HUNDRED)
    return original * percent / HUNDRED


def _fixed_off_discount(
    promotion: Promotion, unit_price: Decimal, quantity: Decimal, original: Decimal
) -> Decimal:
    return min(max(as_decimal(promotion.value), ZERO), original)


def _multi_buy_discount(
    promotion: Promotion, unit_price: Decimal, quantity: Decimal, original: Decimal
) -> Union[Decimal, str]:
    if not promotion.min_quantity or promotion.min_quantity < 1:
        return REASON_BUNDLE_SIZE

    bundle_size = as_decimal(promotion.min_quantity)
    bundles = quantity // bundle_size
    remainder = quantity - bundles * bundle_size

    bundled_price = bundles * as_decimal(promotion.value) + remainder * unit_price
    # A bundle priced above the regular units saves nothing
    return max(original - bundled_price, ZERO)


# bundle is multi_buy pricing; its companion requirement is an eligibility gate
DISCOUNT_CALCULATORS: dict[PromotionType, DiscountCalculator] = {
    PromotionType.PERCENT_OFF: _percent_off_discount,
    PromotionType.FIXED_OFF: _fixed_off_discount,
    PromotionType.MULTI_BUY: _multi_buy_discount,
    PromotionType.BUNDLE: _multi_buy_discount,
}


def _calculate_discount(
    promotion: Promotion, unit_price: Decimal, quantity: Decimal, original: Decimal
) -> Union[Decimal, str]:
    try:
        promotion_type = PromotionType(_enum_value(promotion.type))
    except ValueError:
        return REASON_UNSUPPORTED
    return DISCOUNT_CALCULATORS[promotion_type](promotion, unit_price, quantity, original)


def calculate_promotion_discount(
    promotion: Promotion,
    unit_price: float,
    quantity: float,
    context: Optional[PromotionContext] = None,
) -> PromotionCalculationResult:
    """
    Apply a promotion to a line.

    Args:
        promotion: Candidate promotion
        unit_price: Regular price of one unit
        quantity: Number of units on the line
        context: Coupon code / loyalty card / companion product supplied by
                 the shopper (defaults to none of them)

    Returns:
        PromotionCalculationResult. When not applicable, discount_amount is 0
        and final_price equals original_price.
    """
    if context is None:
        context = PromotionContext()

    unit = as_decimal(unit_price)
    qty = as_decimal(quantity)
    original = quantize_money(unit * qty)

    reason = _check_eligibility(promotion, qty, context)
    if reason is None:
        discount = _calculate_discount(promotion, unit, qty, original)
        if isinstance(discount, str):
            reason = discount

    if reason is not None:
        logger.debug("Promotion %s not applicable: %s", promotion.id, reason)
        return _not_applicable(original, reason)

    discount = min(quantize_money(discount), original)
    final = max(original - discount, ZERO)

    if original == 0:
        percent = 0
    else:
        percent = int((discount / original * HUNDRED).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    return PromotionCalculationResult(
        is_applicable=True,
        original_price=float(original),
        discount_amount=float(discount),
        discount_percent=percent,
        final_price=float(final),
    )


def is_promotion_active(promotion: Promotion, today: Optional[date] = None) -> bool:
    """
    Check whether a promotion can be offered today.

    Pending, rejected and expired promotions are never active. Indefinite
    promotions, and promotions with no dates, always are. Otherwise today
    must fall between start_date and end_date, both inclusive.
    """
    if _enum_value(promotion.status) not in ACTIVE_STATUSES:
        return False

    if promotion.is_indefinite:
        return True

    if today is None:
        today = date.today()

    if promotion.start_date and promotion.start_date > today:
        return False
    if promotion.end_date and promotion.end_date < today:
        return False

    return True


def describe_promotion(promotion: Promotion) -> str:
    """Short label for a promotion badge, e.g. "20% off" or "3 for $5.00"."""
    promotion_type = _enum_value(promotion.type)
    value = as_decimal(promotion.value)

    if promotion_type == PromotionType.PERCENT_OFF.value:
        return f"{value.normalize():f}% off"
    if promotion_type == PromotionType.FIXED_OFF.value:
        return f"{format_currency(promotion.value)} off"
    if promotion_type == PromotionType.MULTI_BUY.value and promotion.min_quantity:
        return f"{promotion.min_quantity} for {format_currency(promotion.value)}"
    if promotion_type == PromotionType.BUNDLE.value and promotion.min_quantity:
        return f"Bundle: {promotion.min_quantity} for {format_currency(promotion.value)}"
    return promotion.name or "Special promotion"


def evaluate_promotions(
    promotions: Iterable[Promotion],
    unit_price: float,
    quantity: float,
    context: Optional[PromotionContext] = None,
    today: Optional[date] = None,
) -> List[PromotionEvaluation]:
    """
    Price every active candidate promotion for a line and rank them.

    Ranking: applicable before not applicable, verified before unverified,
    then by largest discount. Ties keep the input order.
    """
    evaluations = [
        PromotionEvaluation(
            promotion=promotion,
            result=calculate_promotion_discount(promotion, unit_price, quantity, context),
        )
        for promotion in promotions
        if is_promotion_active(promotion, today)
    ]

    evaluations.sort(
        key=lambda e: (
            not e.result.is_applicable,
            _enum_value(e.promotion.status) != PromotionStatus.VERIFIED.value,
            -e.result.discount_amount,
        )
    )
    return evaluations

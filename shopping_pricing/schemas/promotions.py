"""
Promotion Schemas for Shopping Pricing
======================================

Pydantic models for promotion requests and results. Promotions themselves
are fetched by the data layer; the client sends the promotion definition
along with the line it wants priced.

Endpoint Coverage:
------------------
- POST /promotions/calculate: Apply one promotion to one line
- POST /promotions/evaluate: Price and rank candidate promotions for a line

Validation:
-----------
- percent_off values must be within 0-100
- multi_buy and bundle promotions need min_quantity (the bundle size)
- amounts and quantities must be finite and non-negative

An inapplicable promotion is not an error; it comes back with
is_applicable=false and a reason for the shopper.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..services.promotions import (
    Promotion,
    PromotionContext,
    PromotionStatus,
    PromotionType,
)


class PromotionIn(BaseModel):
    """
    Request model for a promotion definition.

    Attributes:
        id: Promotion identifier
        type: percent_off, fixed_off, multi_buy or bundle
        value: Percentage, amount off, or bundle price depending on type
        min_quantity: Minimum units; bundle size for multi_buy/bundle
        requires_coupon: Coupon code the shopper must enter (case-sensitive)
        requires_loyalty_card: Whether a loyalty card is needed
        requires_companion_product: Whether another product must be in the cart
        status: Review status
        name: Display name
        description: Free-text description
        start_date: First valid day
        end_date: Last valid day (inclusive)
        is_indefinite: No end date
    """
    model_config = ConfigDict(allow_inf_nan=False)

    id: str
    type: PromotionType
    value: float = Field(..., ge=0)
    min_quantity: Optional[int] = Field(None, ge=1)
    requires_coupon: Optional[str] = None
    requires_loyalty_card: bool = False
    requires_companion_product: bool = False
    status: PromotionStatus = PromotionStatus.UNVERIFIED
    name: str = ""
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_indefinite: bool = False

    @model_validator(mode="after")
    def check_value_for_type(self):
        """Validate type-dependent fields."""
        if self.type == PromotionType.PERCENT_OFF and self.value > 100:
            raise ValueError("percent_off value must be between 0 and 100")
        if self.type in (PromotionType.MULTI_BUY, PromotionType.BUNDLE) and not self.min_quantity:
            raise ValueError(f"{self.type.value} promotions require min_quantity")
        return self

    def to_domain(self) -> Promotion:
        return Promotion(**self.model_dump())


class PromotionContextIn(BaseModel):
    """What the shopper has supplied for the eligibility gates."""
    coupon_code: Optional[str] = None
    has_loyalty_card: bool = False
    has_companion_product: bool = False

    def to_domain(self) -> PromotionContext:
        return PromotionContext(**self.model_dump())


class PromotionCalculateRequest(BaseModel):
    """Request body for POST /promotions/calculate."""
    model_config = ConfigDict(allow_inf_nan=False)

    promotion: PromotionIn
    unit_price: float = Field(..., ge=0)
    quantity: float = Field(..., gt=0)
    context: PromotionContextIn = Field(default_factory=PromotionContextIn)


class PromotionEvaluateRequest(BaseModel):
    """
    Request body for POST /promotions/evaluate.

    today overrides the date used for the active-window check.
    """
    model_config = ConfigDict(allow_inf_nan=False)

    promotions: List[PromotionIn]
    unit_price: float = Field(..., ge=0)
    quantity: float = Field(..., gt=0)
    context: PromotionContextIn = Field(default_factory=PromotionContextIn)
    today: Optional[date] = None


class PromotionCalculationOut(BaseModel):
    """Response model for one promotion result."""
    model_config = ConfigDict(from_attributes=True)

    is_applicable: bool
    not_applicable_reason: Optional[str] = None
    original_price: float
    discount_amount: float
    discount_percent: int
    final_price: float


class PromotionEvaluationOut(BaseModel):
    """One ranked candidate in the /promotions/evaluate response."""
    promotion_id: str
    description: str
    status: PromotionStatus
    result: PromotionCalculationOut

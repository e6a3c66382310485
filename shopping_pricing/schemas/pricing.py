"""
Pricing Schemas for Shopping Pricing
====================================

Pydantic models for resolving line items and summarizing a shopping session.
These models are the validation boundary in front of the engine: the engine
itself assumes non-negative prices, positive quantities and known tax codes.

Endpoint Coverage:
------------------
- POST /pricing/line-item: Resolve one line
- POST /pricing/session-summary: Resolve every line and summarize the session

Tax Rate Capture:
-----------------
A line carries both tax_rate_code and tax_rate. When tax_rate is omitted it
is filled in from the catalog entry for the code; when given, it is kept as
sent so lines priced under an older catalog stay unchanged.

Usage:
------
    POST /pricing/line-item
    {
        "unit_price": 10.00,
        "quantity": 2,
        "tax_rate_code": "general",
        "price_includes_tax": true
    }
"""

from dataclasses import asdict
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..config import MAX_LINE_ITEMS
from ..services.line_item import LineItemInput, ResolvedLineItem
from ..services.session_summary import SessionTaxSummary
from ..services.tax_rates import get_tax_rate_by_code
from .promotions import PromotionCalculationOut, PromotionContextIn, PromotionIn


class LineItemRequest(BaseModel):
    """
    Request model for one shopping session line.

    Attributes:
        unit_price: Price of one unit as entered (>= 0)
        quantity: Number of units (> 0)
        tax_rate_code: Catalog code of the item's tax rate
        tax_rate: Percentage captured when the item was added (defaults to catalog)
        price_includes_tax: Whether unit_price already contains the tax
        promotion: Selected promotion, if any
        promotion_context: Coupon / loyalty card / companion product flags
    """
    model_config = ConfigDict(allow_inf_nan=False)

    unit_price: float = Field(..., ge=0)
    quantity: float = Field(..., gt=0)
    tax_rate_code: str
    tax_rate: Optional[float] = Field(None, ge=0)
    price_includes_tax: bool = True
    promotion: Optional[PromotionIn] = None
    promotion_context: PromotionContextIn = Field(default_factory=PromotionContextIn)

    @field_validator("tax_rate_code")
    @classmethod
    def validate_tax_rate_code(cls, v: str) -> str:
        """Reject codes that are not in the catalog."""
        entry = get_tax_rate_by_code(v)
        if entry is None:
            raise ValueError(f"Unknown tax rate code: {v}")
        return entry.code.value

    @model_validator(mode="after")
    def fill_tax_rate(self):
        """Take the rate from the catalog when the client did not send one."""
        if self.tax_rate is None:
            self.tax_rate = get_tax_rate_by_code(self.tax_rate_code).rate
        return self

    def to_domain(self) -> LineItemInput:
        return LineItemInput(
            unit_price=self.unit_price,
            quantity=self.quantity,
            tax_rate_code=self.tax_rate_code,
            tax_rate=self.tax_rate,
            price_includes_tax=self.price_includes_tax,
            promotion=self.promotion.to_domain() if self.promotion else None,
            promotion_context=self.promotion_context.to_domain(),
        )


class ResolvedLineItemOut(BaseModel):
    """
    Response model for a resolved line.

    base_price and base_price_total are unrounded; display_base_price is
    base_price rounded to cents. Every other amount is rounded to cents.
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
    promotion_result: Optional[PromotionCalculationOut] = None

    @classmethod
    def from_domain(cls, line: ResolvedLineItem) -> "ResolvedLineItemOut":
        return cls.model_validate(asdict(line))


class SessionSummaryRequest(BaseModel):
    """Request body for POST /pricing/session-summary."""
    items: List[LineItemRequest] = Field(default_factory=list)

    @field_validator("items")
    @classmethod
    def limit_items(cls, v: List[LineItemRequest]) -> List[LineItemRequest]:
        if len(v) > MAX_LINE_ITEMS:
            raise ValueError(f"A session can carry at most {MAX_LINE_ITEMS} items")
        return v


class TaxBreakdownEntryOut(BaseModel):
    """Totals for one tax rate bucket."""
    rate: float
    name: str
    item_count: int
    taxable_amount: float
    tax_amount: float


class SessionTaxSummaryOut(BaseModel):
    """
    Response model for a session summary.

    breakdown is keyed by the rate as a string ("0", "7", "10").
    """
    subtotal_before_tax: float
    total_tax: float
    grand_total: float
    breakdown: Dict[str, TaxBreakdownEntryOut]

    @classmethod
    def from_domain(cls, summary: SessionTaxSummary) -> "SessionTaxSummaryOut":
        return cls.model_validate(asdict(summary))


class SessionSummaryResponse(BaseModel):
    """Resolved lines plus the session summary."""
    items: List[ResolvedLineItemOut]
    summary: SessionTaxSummaryOut

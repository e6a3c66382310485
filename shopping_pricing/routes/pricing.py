"""
Pricing Routes for Shopping Pricing
===================================

Endpoints used by the shopping session screen and the item edit dialog.
Each request is priced from scratch; the service keeps no session state.

Endpoints:
----------
- POST /pricing/tax-preview: Base price / tax split for a price and quantity
- POST /pricing/line-item: Resolve one line (promotion, then tax)
- POST /pricing/session-summary: Resolve all lines and summarize the session

Rate Limiting:
--------------
All endpoints share the RATE_LIMIT_PRICING limit per client address.

Usage:
------
    POST /pricing/session-summary
    {
        "items": [
            {"unit_price": 10.0, "quantity": 2, "tax_rate_code": "general"},
            {"unit_price": 3.5, "quantity": 1, "tax_rate_code": "exempt"}
        ]
    }
"""

import logging

from fastapi import APIRouter, Request

from ..config import get_rate_limit_pricing
from ..rate_limit import limiter
from ..schemas.pricing import (
    LineItemRequest,
    ResolvedLineItemOut,
    SessionSummaryRequest,
    SessionSummaryResponse,
    SessionTaxSummaryOut,
)
from ..schemas.tax import ItemTaxInfoOut, TaxPreviewRequest
from ..services.line_item import resolve_line_item, resolve_line_items
from ..services.session_summary import calculate_session_tax_summary
from ..services.tax_utils import calculate_item_tax_info


logger = logging.getLogger(__name__)

pricing_router = APIRouter(prefix="/pricing", tags=["Pricing"])


@pricing_router.post("/tax-preview", response_model=ItemTaxInfoOut)
@limiter.limit(get_rate_limit_pricing)
def preview_tax(request: Request, body: TaxPreviewRequest) -> ItemTaxInfoOut:
    """Preview the base price / tax split while an item is being edited."""
    info = calculate_item_tax_info(
        body.price,
        body.quantity,
        body.tax_rate_code,
        body.price_includes_tax,
    )
    return ItemTaxInfoOut.model_validate(info)


@pricing_router.post("/line-item", response_model=ResolvedLineItemOut)
@limiter.limit(get_rate_limit_pricing)
def price_line_item(request: Request, body: LineItemRequest) -> ResolvedLineItemOut:
    """Resolve one line item."""
    return ResolvedLineItemOut.from_domain(resolve_line_item(body.to_domain()))


@pricing_router.post("/session-summary", response_model=SessionSummaryResponse)
@limiter.limit(get_rate_limit_pricing)
def summarize_session(request: Request, body: SessionSummaryRequest) -> SessionSummaryResponse:
    """Resolve every line of a session and return the tax summary."""
    lines = resolve_line_items(item.to_domain() for item in body.items)
    summary = calculate_session_tax_summary(lines)

    logger.info(
        "Session summary: %d items, %d rate buckets",
        len(lines),
        len(summary.breakdown),
    )

    return SessionSummaryResponse(
        items=[ResolvedLineItemOut.from_domain(line) for line in lines],
        summary=SessionTaxSummaryOut.from_domain(summary),
    )

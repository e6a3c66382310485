"""
Schemas Package for Shopping Pricing
====================================

This package contains the Pydantic models used for API request validation and
response serialization. Request models are where caller input is checked
(non-negative prices, positive quantities, known tax codes); the engine in
services/ assumes that has already happened.

Schema Organization:
--------------------
- **tax.py**: Tax rate catalog and tax preview schemas
- **promotions.py**: Promotion definitions, context and results
- **pricing.py**: Line items and session summaries

Naming Conventions:
-------------------
- *In: Request sub-models (e.g., PromotionIn)
- *Out: Response models (e.g., TaxRateOut)
- *Request: Request bodies (e.g., SessionSummaryRequest)
- *Response: Composite response bodies (e.g., SessionSummaryResponse)

Request models convert to engine value types with to_domain(); response
models are built from engine results with model_validate() or from_domain().
"""

from .tax import (
    TaxRateOut,
    TaxPreviewRequest,
    ItemTaxInfoOut,
)

from .promotions import (
    PromotionIn,
    PromotionContextIn,
    PromotionCalculateRequest,
    PromotionEvaluateRequest,
    PromotionCalculationOut,
    PromotionEvaluationOut,
)

from .pricing import (
    LineItemRequest,
    ResolvedLineItemOut,
    SessionSummaryRequest,
    TaxBreakdownEntryOut,
    SessionTaxSummaryOut,
    SessionSummaryResponse,
)

__all__ = [
    # Tax
    "TaxRateOut",
    "TaxPreviewRequest",
    "ItemTaxInfoOut",
    # Promotions
    "PromotionIn",
    "PromotionContextIn",
    "PromotionCalculateRequest",
    "PromotionEvaluateRequest",
    "PromotionCalculationOut",
    "PromotionEvaluationOut",
    # Pricing
    "LineItemRequest",
    "ResolvedLineItemOut",
    "SessionSummaryRequest",
    "TaxBreakdownEntryOut",
    "SessionTaxSummaryOut",
    "SessionSummaryResponse",
]

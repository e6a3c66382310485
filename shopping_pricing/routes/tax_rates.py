"""
Tax Rate Routes for Shopping Pricing
====================================

Read-only endpoints over the tax rate catalog, used to fill the tax selector
when a shopper adds or edits an item.

Endpoints:
----------
- GET /tax-rates: List all catalog rates
- GET /tax-rates/{code}: Get one rate by code
- GET /tax-rates/category/{category}: Default rate for a product category
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException

from ..schemas.tax import TaxRateOut
from ..services.tax_rates import (
    TAX_RATES,
    get_default_tax_rate_for_category,
    get_tax_rate_by_code,
)


logger = logging.getLogger(__name__)

tax_rates_router = APIRouter(prefix="/tax-rates", tags=["Tax Rates"])


@tax_rates_router.get("", response_model=List[TaxRateOut])
def list_tax_rates() -> List[TaxRateOut]:
    """List the tax rate catalog."""
    return [TaxRateOut.model_validate(r) for r in TAX_RATES]


@tax_rates_router.get("/category/{category}", response_model=TaxRateOut)
def get_category_tax_rate(category: str) -> TaxRateOut:
    """Default tax rate for a product category."""
    return TaxRateOut.model_validate(get_default_tax_rate_for_category(category))


@tax_rates_router.get("/{code}", response_model=TaxRateOut)
def get_tax_rate(code: str) -> TaxRateOut:
    """Get one catalog rate by code."""
    entry = get_tax_rate_by_code(code)
    if entry is None:
        logger.info("Tax rate lookup for unknown code '%s'", code)
        raise HTTPException(status_code=404, detail=f"Tax rate '{code}' not found")
    return TaxRateOut.model_validate(entry)

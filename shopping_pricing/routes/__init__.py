"""
Routes Package for Shopping Pricing
===================================

This package contains the API route definitions organized by domain. Each
module defines a FastAPI APIRouter with related endpoints grouped together.

Routers:
--------
- tax_rates.py: Tax rate catalog lookups
- pricing.py: Tax preview, line-item resolution and session summaries
- promotions.py: Promotion calculation and ranking

Router Registration:
--------------------
All routers are registered in app_factory.py under two prefixes:
1. /api/v1/* - Versioned API (recommended)
2. /* - Root paths

Error Handling:
---------------
- 404: Unknown tax rate code
- 422: Request validation errors (negative price, zero quantity, unknown code)
- 429: Too many requests (rate limited)

Promotions that do not apply are regular 200 responses with
is_applicable=false.
"""

from .tax_rates import tax_rates_router
from .pricing import pricing_router
from .promotions import promotions_router

__all__ = [
    "tax_rates_router",
    "pricing_router",
    "promotions_router",
]

"""
Services Package for Shopping Pricing
=====================================

This package contains the pricing and tax engine. Every module here is a set
of pure functions over small value types: no I/O, no shared mutable state,
safe to call from any thread.

Available Services:
-------------------
- **tax_rates**: Tax rate catalog, lookups and the category default rule
- **tax_utils**: Tax arithmetic (base price, tax amount, line totals)
- **promotions**: Promotion eligibility and discount calculation
- **line_item**: Line-item resolver (promotion first, then tax)
- **session_summary**: Session totals and per-rate tax breakdown
- **formatting**: Currency and tax rate display strings

Data Flow:
----------
    tax_rates -> tax_utils -> line_item <- promotions
    [ResolvedLineItem, ...] -> session_summary -> SessionTaxSummary

Usage:
------
    from shopping_pricing.services.line_item import LineItemInput, resolve_line_items
    from shopping_pricing.services.session_summary import calculate_session_tax_summary

    lines = resolve_line_items(items)
    summary = calculate_session_tax_summary(lines)

Or import the entire module:

    from shopping_pricing.services import tax_utils, promotions
"""

from . import tax_rates
from . import tax_utils
from . import promotions
from . import line_item
from . import session_summary
from . import formatting

__all__ = [
    "tax_rates",
    "tax_utils",
    "promotions",
    "line_item",
    "session_summary",
    "formatting",
]

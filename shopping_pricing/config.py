"""
Configuration Module for Shopping Pricing
=========================================

This module centralizes the configuration settings, environment variables, and
constants used by the pricing service. Values are read once at import time;
getter functions exist where tests need to override a value without touching
the module-level constant.

Configuration Categories:
-------------------------
- **Tax Defaults**: Which catalog rate applies to items that match no category
  rule.

- **Display**: Currency symbol used when formatting amounts for the UI.

- **Rate Limiting**: Throttling of the HTTP endpoints (slowapi).

- **Input Limits**: Upper bound on how many line items a single session
  summary request may carry.

- **CORS Settings**: Cross-Origin Resource Sharing configuration for the
  shopping UI. Defaults allow all origins for development.

Environment Variables:
----------------------
- DEFAULT_TAX_RATE_CODE: Catalog code used as the default rate (default: "general")
- CURRENCY_SYMBOL: Prefix used by format_currency (default: "$")
- RATE_LIMIT_PRICING: Pricing endpoint rate limit (default: "120 per minute")
- RATE_LIMIT_ENABLED: Enable/disable rate limiting (default: "true")
- MAX_LINE_ITEMS: Max items per session summary request (default: 500)
- CORS_ORIGINS: Comma-separated allowed origins (default: "*")

Usage:
------
    from shopping_pricing.config import (
        DEFAULT_TAX_RATE_CODE,
        RATE_LIMIT_PRICING,
        MAX_LINE_ITEMS,
    )
"""

import os
from typing import List


# =============================================================================
# Tax Defaults
# =============================================================================
# Items whose category matches no exempt/selective rule get this rate.
# Must be one of the codes in services/tax_rates.py; an unknown code falls
# back to "general" at lookup time.

DEFAULT_TAX_RATE_CODE: str = os.getenv("DEFAULT_TAX_RATE_CODE", "general").strip().lower()


def get_default_tax_rate_code() -> str:
    """
    Return the configured default tax rate code.

    Returns:
        Tax rate code string (e.g. "general")
    """
    return DEFAULT_TAX_RATE_CODE


# =============================================================================
# Display Configuration
# =============================================================================

CURRENCY_SYMBOL: str = os.getenv("CURRENCY_SYMBOL", "$")


def get_currency_symbol() -> str:
    """Return the currency symbol used for display formatting."""
    return CURRENCY_SYMBOL


# =============================================================================
# Rate Limiting Configuration
# =============================================================================
# Rate limit format: "X per Y" where Y is second, minute, hour, or day

RATE_LIMIT_PRICING: str = os.getenv("RATE_LIMIT_PRICING", "120 per minute")
RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"


def get_rate_limit_pricing() -> str:
    """
    Return the current pricing rate limit.

    This function allows dynamic override in tests without modifying
    the module-level constant.

    Returns:
        Rate limit string in "X per Y" format
    """
    return RATE_LIMIT_PRICING


# =============================================================================
# Input Validation Configuration
# =============================================================================
# A shopping list rarely exceeds a few hundred lines; anything larger is
# rejected before it reaches the aggregator.

MAX_LINE_ITEMS: int = int(os.getenv("MAX_LINE_ITEMS", "500"))


# =============================================================================
# CORS Configuration
# =============================================================================
# Format: comma-separated list of origins, e.g., "https://app.example.com"
# Default "*" allows all origins (suitable for development only)

_cors_origins_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in _cors_origins_env.split(",")
    if origin.strip()
] or ["*"]

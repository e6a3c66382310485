"""
Tax Rate Catalog.

Static catalog of the ITBMS (Panama sales tax) rates a line item can carry,
with lookups by code and by value and the category rule that picks a default
rate when an item is first added to a list.

The catalog is built once at import time and never mutated. Line items carry
their own copy of the numeric rate, so changing this table does not rewrite
historical items.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..config import get_default_tax_rate_code

logger = logging.getLogger(__name__)


class TaxRateCode(str, Enum):
    """Machine code of a catalog tax rate."""
    EXEMPT = "exempt"
    GENERAL = "general"
    SELECTIVE = "selective"
    SERVICES = "services"


@dataclass(frozen=True)
class TaxRate:
    """One entry of the tax rate catalog."""
    code: TaxRateCode
    name: str
    rate: float  # percent, e.g. 7.0
    label: str  # e.g. "7% - General"


TAX_RATES: tuple[TaxRate, ...] = (
    TaxRate(TaxRateCode.EXEMPT, "Exento", 0.0, "0% - Exento"),
    TaxRate(TaxRateCode.GENERAL, "General", 7.0, "7% - General"),
    TaxRate(TaxRateCode.SELECTIVE, "Selectivo", 10.0, "10% - Selectivo"),
    TaxRate(TaxRateCode.SERVICES, "Servicios", 15.0, "15% - Servicios"),
)

_BY_CODE: dict[str, TaxRate] = {r.code.value: r for r in TAX_RATES}

FALLBACK_TAX_RATE_CODE = TaxRateCode.GENERAL

# Categories typically exempt from ITBMS (0%)
EXEMPT_CATEGORIES = (
    "Frutas y Verduras",
    "Carnes",
    "Lacteos",
    "Granos y Cereales",
    "Medicamentos",
    "Huevos",
    "Canasta Basica",
)

# Categories with selective tax (10%)
SELECTIVE_TAX_CATEGORIES = (
    "Bebidas Alcoholicas",
    "Licores",
    "Vinos",
    "Cervezas",
    "Tabaco",
    "Cigarrillos",
)


def get_tax_rate_by_code(code: str | TaxRateCode) -> Optional[TaxRate]:
    """
    Look up a catalog entry by its code.

    Args:
        code: Tax rate code, as a TaxRateCode or its string value

    Returns:
        The matching TaxRate, or None if the code is not in the catalog
    """
    if isinstance(code, TaxRateCode):
        code = code.value
    return _BY_CODE.get(str(code).strip().lower())


def get_tax_rate_by_value(rate: float) -> Optional[TaxRate]:
    """Look up the first catalog entry with the given percentage."""
    for entry in TAX_RATES:
        if entry.rate == rate:
            return entry
    return None


def get_default_tax_rate() -> TaxRate:
    """
    Return the process-wide default rate.

    Uses the DEFAULT_TAX_RATE_CODE setting; an unknown code falls back to
    the general rate.
    """
    code = get_default_tax_rate_code()
    entry = get_tax_rate_by_code(code)
    if entry is None:
        logger.warning(
            "Unknown default tax rate code '%s', using '%s'",
            code,
            FALLBACK_TAX_RATE_CODE.value,
        )
        entry = _BY_CODE[FALLBACK_TAX_RATE_CODE.value]
    return entry


def get_default_tax_rate_for_category(category: str | None) -> TaxRate:
    """
    Pick the default tax rate for a product category.

    Matching is a case-insensitive substring test, so "Carnes Frescas"
    matches the exempt "Carnes" rule.

    Args:
        category: Product category name (may be None or empty)

    Returns:
        Exempt rate for basic-basket categories, selective rate for alcohol
        and tobacco, otherwise the configured default
    """
    normalized = (category or "").lower()

    if normalized:
        if any(c.lower() in normalized for c in EXEMPT_CATEGORIES):
            return _BY_CODE[TaxRateCode.EXEMPT.value]
        if any(c.lower() in normalized for c in SELECTIVE_TAX_CATEGORIES):
            return _BY_CODE[TaxRateCode.SELECTIVE.value]

    return get_default_tax_rate()

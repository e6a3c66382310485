"""
Session tax summary.

Reduces the resolved lines of a shopping session into the totals shown under
the list: subtotal before tax, total tax, grand total and a breakdown per tax
rate.

The summary is rebuilt from the full item list on every change; nothing is
updated incrementally. Sums are kept in Decimal and rounded to cents once,
after the reduction.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, Protocol

from .formatting import format_tax_rate, rate_key
from .tax_rates import get_tax_rate_by_code, get_tax_rate_by_value
from .tax_utils import as_decimal, quantize_money

logger = logging.getLogger(__name__)


class PricedLine(Protocol):
    """Anything the aggregator can sum; ResolvedLineItem satisfies it."""

    tax_rate_code: str
    tax_rate: float
    tax_amount: float
    base_price_total: float


@dataclass
class TaxBreakdownEntry:
    """Totals for one tax rate."""

    rate: float
    name: str
    item_count: int = 0
    taxable_amount: float = 0.0
    tax_amount: float = 0.0


@dataclass
class SessionTaxSummary:
    subtotal_before_tax: float = 0.0
    total_tax: float = 0.0
    grand_total: float = 0.0
    breakdown: Dict[str, TaxBreakdownEntry] = field(default_factory=dict)


def _bucket_name(line: PricedLine) -> str:
    entry = get_tax_rate_by_code(line.tax_rate_code)
    if entry is None or entry.rate != line.tax_rate:
        entry = get_tax_rate_by_value(line.tax_rate)
    if entry is not None:
        return entry.name
    return format_tax_rate(line.tax_rate)


def calculate_session_tax_summary(items: Iterable[PricedLine]) -> SessionTaxSummary:
    """
    Summarize a session's resolved lines.

    Lines are bucketed by numeric rate, not by code: two categories that
    share a percentage land in the same bucket.

    Args:
        items: Resolved line items, in session order

    Returns:
        SessionTaxSummary. An empty session gives all zeros and an empty
        breakdown.
    """
    subtotal = Decimal("0")
    total_tax = Decimal("0")
    buckets: Dict[str, dict] = {}
    count = 0

    for line in items:
        count += 1
        base_total = as_decimal(line.base_price_total)
        tax = as_decimal(line.tax_amount)

        subtotal += base_total
        total_tax += tax

        key = rate_key(line.tax_rate)
        bucket = buckets.get(key)
        if bucket is None:
            bucket = {
                "rate": line.tax_rate,
                "name": _bucket_name(line),
                "item_count": 0,
                "taxable_amount": Decimal("0"),
                "tax_amount": Decimal("0"),
            }
            buckets[key] = bucket

        bucket["item_count"] += 1
        bucket["taxable_amount"] += base_total
        bucket["tax_amount"] += tax

    subtotal_before_tax = quantize_money(subtotal)
    total_tax = quantize_money(total_tax)

    breakdown = {
        key: TaxBreakdownEntry(
            rate=float(bucket["rate"]),
            name=bucket["name"],
            item_count=bucket["item_count"],
            taxable_amount=float(quantize_money(bucket["taxable_amount"])),
            tax_amount=float(quantize_money(bucket["tax_amount"])),
        )
        for key, bucket in buckets.items()
    }

    logger.debug("Session summary over %d lines, %d rate buckets", count, len(breakdown))

    return SessionTaxSummary(
        subtotal_before_tax=float(subtotal_before_tax),
        total_tax=float(total_tax),
        grand_total=float(quantize_money(subtotal_before_tax + total_tax)),
        breakdown=breakdown,
    )

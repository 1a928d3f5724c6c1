"""Result models — engine output contracts."""

from srs_pricing.models.results import (
    CostBreakdown,
    DiscountBreakdown,
    MarginSummary,
    QuoteResult,
    TermQuote,
)

__all__ = [
    "CostBreakdown",
    "DiscountBreakdown",
    "MarginSummary",
    "QuoteResult",
    "TermQuote",
]

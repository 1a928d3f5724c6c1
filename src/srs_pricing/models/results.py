"""Result types — the contract between engine, service, reports, and dashboard.

Every value is recomputed per call; nothing here is persisted.
"""

from __future__ import annotations

from pydantic import BaseModel

from srs_pricing.config.quote import QuoteScenario


class DiscountBreakdown(BaseModel):
    """Discount fractions and the list prices they were applied to."""

    volume: float
    """Full volume discount (applied to Year 2+)."""

    volume_y1: float
    """Volume discount after the Year-1 factor."""

    contract: float
    """Flat contract-length discount."""

    total_y1: float
    """Combined Year-1 discount, capped at max_total_discount."""

    total_y2: float
    """Combined Year-2+ discount = volume + contract, capped."""

    total_units: float
    """Total commitment = monthly_rate × 12 × commit_years."""

    discount_units: float
    """Blended discount basis between annual and total units."""

    overhead_y1: float
    """Year-1 overhead contribution per unit."""

    overhead_y2: float
    """Blended Year-2+ overhead per unit per year (after any credit)."""

    list_y1: float
    """Year-1 list price before volume discount."""

    list_y2: float
    """Year-2+ list price before volume and contract discounts."""


class CostBreakdown(BaseModel):
    """Fully-loaded cost view behind a quote (per unit)."""

    hardware_reserve: float
    year1_cost: float
    year2_cost_blended: float
    year2_cost_by_year: dict[int, float]
    """Contract year → Year-2+ cost for that year (years 2..max(2, contract))."""

    support_hours_by_year: dict[int, float]
    """Contract year → support hours after time decay and scale efficiency."""

    support_ftes_by_year: dict[int, float]
    """Contract year → support FTEs needed for the whole installed base."""

    annual_overhead: float
    overhead_year1: float
    overhead_blended: float
    overhead_credit_per_year: float
    """Year-1 surplus subtracted from each Year-2+ year's overhead (0 when disabled)."""


class MarginSummary(BaseModel):
    """Margins for internal review. Negative values mean the price is below cost."""

    year1: float
    year2: float
    year2_with_overhead: float
    contract: float

    target_year1: float
    target_year2: float

    year1_below_target: bool
    year2_below_target: bool
    """Compares year2_with_overhead against target_year2."""


class QuoteResult(BaseModel):
    """Complete pricing output for one scenario."""

    scenario: QuoteScenario
    """Inputs echoed back, with the existing fleet resolved."""

    year1_price: float
    year2_price: float
    contract_price: float
    annual_average: float
    """contract_price / contract_years."""

    discounts: DiscountBreakdown
    costs: CostBreakdown
    margins: MarginSummary


class TermQuote(BaseModel):
    """One row of the contract-length comparison for a fixed commitment."""

    contract_years: int
    contract_discount: float
    year1_price: float
    year2_price_raw: float
    """Year-2+ price before minimum-gap enforcement."""

    year2_price: float
    contract_price: float
    annual_average: float

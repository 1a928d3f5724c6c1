"""Price model — list prices, discounts, add-ons, term gaps, rounding.

Year 1:   round_up(year1_list × (1 − year1 discount))          → base price
          base − shift + year1 license                          → year1 price
Year 2+:  list anchored at the baseline contract length (cost-plus) or the
          configured fixed list; round_up(list × (1 − volume − contract))
          + year2 license + deferred Year-1 shift per year
          then the minimum gap between adjacent contract lengths is enforced.
"""

from __future__ import annotations

import logging

from srs_pricing.config.engine import EngineConfig
from srs_pricing.engine import costs
from srs_pricing.engine.discounts import (
    contract_discount,
    discount_basis_units,
    scenario_volume_discount,
    total_commitment,
    year1_total_discount,
    year1_volume_discount,
    year2_total_discount,
)
from srs_pricing.engine.rounding import round_up
from srs_pricing.errors import ConfigurationError
from srs_pricing.models.results import DiscountBreakdown

logger = logging.getLogger(__name__)


def _round(config: EngineConfig, value: float) -> float:
    return round_up(value, config.pricing.rounding_increment)


# ═══════════════════════════════════════════════════════════════════════════
# Year 1
# ═══════════════════════════════════════════════════════════════════════════

def year1_list_price(config: EngineConfig) -> float:
    return config.pricing.year1_list_price


def year1_base_price(
    config: EngineConfig, monthly_rate: float, commit_years: float, contract_years: int,
) -> float:
    """Year-1 list price after the (scaled) volume discount, rounded up."""
    discount = year1_total_discount(config, monthly_rate, commit_years, contract_years)
    return _round(config, year1_list_price(config) * (1 - discount))


def year1_shift_amount(
    config: EngineConfig, monthly_rate: float, commit_years: float, contract_years: int,
) -> float:
    """Portion of the Year-1 base price deferred into Year 2+ (0 for 1-year contracts)."""
    if contract_years <= 1:
        return 0.0
    base = year1_base_price(config, monthly_rate, commit_years, contract_years)
    return base * config.pricing.year1_shift_factor


def year1_shift_per_year(
    config: EngineConfig, monthly_rate: float, commit_years: float, contract_years: int,
) -> float:
    if contract_years <= 1:
        return 0.0
    shift = year1_shift_amount(config, monthly_rate, commit_years, contract_years)
    return shift / (contract_years - 1)


def year1_service_revenue(
    config: EngineConfig, monthly_rate: float, commit_years: float, contract_years: int,
) -> float:
    """Hardware + support revenue kept in Year 1 (base price less the deferred shift)."""
    return (
        year1_base_price(config, monthly_rate, commit_years, contract_years)
        - year1_shift_amount(config, monthly_rate, commit_years, contract_years)
    )


def year1_price(
    config: EngineConfig, monthly_rate: float, commit_years: float, contract_years: int,
) -> float:
    return _round(
        config,
        year1_service_revenue(config, monthly_rate, commit_years, contract_years)
        + config.licensing.year1_net,
    )


# ═══════════════════════════════════════════════════════════════════════════
# Year 2+
# ═══════════════════════════════════════════════════════════════════════════

def blended_overhead(
    config: EngineConfig,
    contract_years: int,
    monthly_rate: float,
    commit_years: float,
    existing_fleet: float,
) -> float:
    """Blended Year-2+ overhead with the Year-1 surplus credit applied."""
    revenue = year1_service_revenue(config, monthly_rate, commit_years, contract_years)
    return costs.overhead_blended(
        config, contract_years, monthly_rate, commit_years, existing_fleet, year1_revenue=revenue,
    )


def year2_list_price(
    config: EngineConfig, monthly_rate: float, commit_years: float, existing_fleet: float,
) -> float:
    """Year-2+ list price per unit per year.

    Cost-plus: the minimum net price at the baseline contract length,
    grossed up by that length's contract discount, so the steepest term still
    clears the margin target before volume discount.
    """
    pricing = config.pricing
    if pricing.year2_basis == "fixed_list":
        return pricing.year2_list_price

    baseline = pricing.baseline_contract_years
    full_cost = (
        costs.year2_cost_blended(config, baseline, monthly_rate, commit_years, existing_fleet)
        + blended_overhead(config, baseline, monthly_rate, commit_years, existing_fleet)
    )
    if pricing.margin_basis == "margin":
        min_net = full_cost / (1 - pricing.target_margin_year2)
    else:
        min_net = full_cost * (1 + pricing.target_margin_year2)

    denominator = 1 - contract_discount(config, baseline)
    if denominator <= 0:
        raise ConfigurationError(
            f"baseline contract discount for {baseline}yr leaves no room for a list price"
        )
    return min_net / denominator


def year2_price_raw(
    config: EngineConfig,
    contract_years: int,
    monthly_rate: float,
    commit_years: float,
    existing_fleet: float,
) -> float:
    """Year-2+ price before minimum-gap enforcement."""
    list_price = year2_list_price(config, monthly_rate, commit_years, existing_fleet)
    discount = year2_total_discount(config, monthly_rate, commit_years, contract_years)
    net = _round(config, list_price * (1 - discount))
    return _round(
        config,
        net
        + config.licensing.year2_net
        + year1_shift_per_year(config, monthly_rate, commit_years, contract_years),
    )


def year2_price_schedule(
    config: EngineConfig, monthly_rate: float, commit_years: float, existing_fleet: float,
) -> dict[int, tuple[float, float]]:
    """Raw and gap-adjusted Year-2+ price for every offered term longer than 1 year.

    Walks from the longest term to the shortest; each adjusted price is
    max(raw, next-longer adjusted + min_gap_per_year).

    Returns {contract_years: (raw, adjusted)}.
    """
    gap = config.pricing.min_gap_per_year
    terms = [t for t in config.contract_terms if t > 1]
    raw = {t: year2_price_raw(config, t, monthly_rate, commit_years, existing_fleet) for t in terms}

    schedule: dict[int, tuple[float, float]] = {}
    next_adjusted: float | None = None
    for term in reversed(terms):
        adjusted = raw[term]
        if gap > 0 and next_adjusted is not None:
            adjusted = _round(config, max(adjusted, next_adjusted + gap))
        if adjusted != raw[term]:
            logger.debug(
                "term %syr raised %.2f → %.2f to keep a %.2f gap", term, raw[term], adjusted, gap,
            )
        schedule[term] = (raw[term], adjusted)
        next_adjusted = adjusted
    return schedule


def year2_price(
    config: EngineConfig,
    contract_years: int,
    monthly_rate: float,
    commit_years: float,
    existing_fleet: float,
) -> float:
    """Final Year-2+ price per unit per year."""
    contract_discount(config, contract_years)  # rejects unoffered terms
    if config.pricing.min_gap_per_year > 0 and contract_years > 1:
        schedule = year2_price_schedule(config, monthly_rate, commit_years, existing_fleet)
        if contract_years in schedule:
            return schedule[contract_years][1]
    return year2_price_raw(config, contract_years, monthly_rate, commit_years, existing_fleet)


def contract_price(
    config: EngineConfig,
    contract_years: int,
    monthly_rate: float,
    commit_years: float,
    existing_fleet: float,
) -> float:
    """Total per-unit contract price: Year 1 + Year 2+ × (contract_years − 1)."""
    y1 = year1_price(config, monthly_rate, commit_years, contract_years)
    y2 = year2_price(config, contract_years, monthly_rate, commit_years, existing_fleet)
    return y1 + y2 * max(0, contract_years - 1)


def discount_breakdown(
    config: EngineConfig,
    contract_years: int,
    monthly_rate: float,
    commit_years: float,
    existing_fleet: float,
) -> DiscountBreakdown:
    return DiscountBreakdown(
        volume=scenario_volume_discount(config, monthly_rate, commit_years),
        volume_y1=year1_volume_discount(config, monthly_rate, commit_years),
        contract=contract_discount(config, contract_years),
        total_y1=year1_total_discount(config, monthly_rate, commit_years, contract_years),
        total_y2=year2_total_discount(config, monthly_rate, commit_years, contract_years),
        total_units=total_commitment(monthly_rate, commit_years),
        discount_units=discount_basis_units(config, monthly_rate, commit_years),
        overhead_y1=costs.year1_overhead_contribution(config, monthly_rate, commit_years, existing_fleet),
        overhead_y2=blended_overhead(config, contract_years, monthly_rate, commit_years, existing_fleet),
        list_y1=year1_list_price(config),
        list_y2=year2_list_price(config, monthly_rate, commit_years, existing_fleet),
    )

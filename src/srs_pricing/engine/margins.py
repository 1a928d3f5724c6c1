"""Margin model — price minus fully-loaded cost, as a fraction of price.

Margins are reported as-is: a negative value means the price sits below
cost. Division by a non-positive price raises MarginError.
"""

from __future__ import annotations

import math

from srs_pricing.config.engine import EngineConfig
from srs_pricing.engine import costs, prices
from srs_pricing.errors import MarginError
from srs_pricing.models.results import MarginSummary


def margin(price: float, cost: float, label: str = "price") -> float:
    if not math.isfinite(price) or price <= 0:
        raise MarginError(f"cannot compute margin on {label} {price}")
    return (price - cost) / price


def year1_margin(
    config: EngineConfig,
    contract_years: int,
    monthly_rate: float,
    commit_years: float,
    existing_fleet: float,
) -> float:
    price = prices.year1_price(config, monthly_rate, commit_years, contract_years)
    cost = (
        costs.year1_cost(config, monthly_rate, commit_years, existing_fleet)
        + costs.year1_overhead_contribution(config, monthly_rate, commit_years, existing_fleet)
    )
    return margin(price, cost, "year-1 price")


def year2_margin(
    config: EngineConfig,
    contract_years: int,
    monthly_rate: float,
    commit_years: float,
    existing_fleet: float,
) -> float:
    """Year-2+ margin against blended direct cost only."""
    price = prices.year2_price(config, contract_years, monthly_rate, commit_years, existing_fleet)
    cost = costs.year2_cost_blended(config, contract_years, monthly_rate, commit_years, existing_fleet)
    return margin(price, cost, "year-2 price")


def year2_margin_with_overhead(
    config: EngineConfig,
    contract_years: int,
    monthly_rate: float,
    commit_years: float,
    existing_fleet: float,
) -> float:
    price = prices.year2_price(config, contract_years, monthly_rate, commit_years, existing_fleet)
    cost = (
        costs.year2_cost_blended(config, contract_years, monthly_rate, commit_years, existing_fleet)
        + prices.blended_overhead(config, contract_years, monthly_rate, commit_years, existing_fleet)
    )
    return margin(price, cost, "year-2 price")


def contract_margin(
    config: EngineConfig,
    contract_years: int,
    monthly_rate: float,
    commit_years: float,
    existing_fleet: float,
) -> float:
    """Whole-contract margin: Year-1 cost + overhead plus (N − 1) Year-2+ cost + overhead."""
    price = prices.contract_price(config, contract_years, monthly_rate, commit_years, existing_fleet)
    later_years = max(0, contract_years - 1)
    cost = (
        costs.year1_cost(config, monthly_rate, commit_years, existing_fleet)
        + costs.year1_overhead_contribution(config, monthly_rate, commit_years, existing_fleet)
        + later_years * (
            costs.year2_cost_blended(config, contract_years, monthly_rate, commit_years, existing_fleet)
            + prices.blended_overhead(config, contract_years, monthly_rate, commit_years, existing_fleet)
        )
    )
    return margin(price, cost, "contract price")


def margin_summary(
    config: EngineConfig,
    contract_years: int,
    monthly_rate: float,
    commit_years: float,
    existing_fleet: float,
) -> MarginSummary:
    args = (config, contract_years, monthly_rate, commit_years, existing_fleet)
    pricing = config.pricing
    # A markup of M on cost is a gross margin of M / (1 + M).
    target_y2 = (
        pricing.target_margin_year2 / (1 + pricing.target_margin_year2)
        if pricing.margin_basis == "markup"
        else pricing.target_margin_year2
    )
    y1 = year1_margin(*args)
    y2_loaded = year2_margin_with_overhead(*args)
    return MarginSummary(
        year1=y1,
        year2=year2_margin(*args),
        year2_with_overhead=y2_loaded,
        contract=contract_margin(*args),
        target_year1=pricing.target_margin_year1,
        target_year2=target_y2,
        year1_below_target=y1 < pricing.target_margin_year1,
        year2_below_target=y2_loaded < target_y2,
    )

"""Quote orchestrator — one scenario in, one QuoteResult out.

Pure and stateless: safe to call concurrently with a shared EngineConfig.
"""

from __future__ import annotations

import logging

from srs_pricing.config.engine import EngineConfig
from srs_pricing.config.quote import QuoteScenario
from srs_pricing.engine import costs, prices
from srs_pricing.engine.discounts import contract_discount
from srs_pricing.engine.margins import margin_summary
from srs_pricing.models.results import CostBreakdown, QuoteResult, TermQuote

logger = logging.getLogger(__name__)


def resolve_scenario(config: EngineConfig, scenario: QuoteScenario) -> QuoteScenario:
    """Fill the existing fleet from config and reject unoffered contract lengths."""
    contract_discount(config, scenario.contract_years)
    if scenario.existing_fleet_units is not None:
        return scenario
    return scenario.model_copy(update={"existing_fleet_units": config.fleet.existing_units})


def compute_cost_breakdown(
    config: EngineConfig,
    contract_years: int,
    monthly_rate: float,
    commit_years: float,
    existing_fleet: float,
) -> CostBreakdown:
    args = (monthly_rate, commit_years, existing_fleet)
    support_years = range(1, max(2, contract_years) + 1)
    return CostBreakdown(
        hardware_reserve=costs.hardware_reserve(config),
        year1_cost=costs.year1_cost(config, *args),
        year2_cost_blended=costs.year2_cost_blended(config, contract_years, *args),
        year2_cost_by_year={
            y: costs.year2_cost_for_year(config, y, *args) for y in costs.year2_years(contract_years)
        },
        support_hours_by_year={
            y: costs.support_hours_for_year(config, y, *args) for y in support_years
        },
        support_ftes_by_year={
            y: costs.support_ftes_for_year(config, y, *args) for y in support_years
        },
        annual_overhead=costs.annual_overhead(config),
        overhead_year1=costs.year1_overhead_contribution(config, *args),
        overhead_blended=prices.blended_overhead(config, contract_years, *args),
        overhead_credit_per_year=costs.overhead_credit_per_year(
            config,
            contract_years,
            prices.year1_service_revenue(config, monthly_rate, commit_years, contract_years),
            *args,
        ),
    )


def compute_quote(config: EngineConfig, scenario: QuoteScenario) -> QuoteResult:
    """Price one scenario: prices, discount breakdown, costs, margins."""
    scenario = resolve_scenario(config, scenario)
    contract = scenario.contract_years
    args = (scenario.monthly_rate, scenario.commit_years, scenario.existing_fleet_units)

    y1 = prices.year1_price(config, scenario.monthly_rate, scenario.commit_years, contract)
    y2 = prices.year2_price(config, contract, *args)
    total = prices.contract_price(config, contract, *args)

    logger.debug(
        "quote rate=%s commit=%s contract=%s fleet=%s → y1=%.0f y2=%.0f total=%.0f",
        scenario.monthly_rate, scenario.commit_years, contract,
        scenario.existing_fleet_units, y1, y2, total,
    )

    return QuoteResult(
        scenario=scenario,
        year1_price=y1,
        year2_price=y2,
        contract_price=total,
        annual_average=total / contract,
        discounts=prices.discount_breakdown(config, contract, *args),
        costs=compute_cost_breakdown(config, contract, *args),
        margins=margin_summary(config, contract, *args),
    )


def compute_term_table(
    config: EngineConfig,
    monthly_rate: float,
    commit_years: float,
    existing_fleet_units: float | None = None,
) -> list[TermQuote]:
    """Price every offered contract length for one commitment, shortest first."""
    fleet = config.fleet.existing_units if existing_fleet_units is None else existing_fleet_units
    rows: list[TermQuote] = []
    for term in config.contract_terms:
        raw = prices.year2_price_raw(config, term, monthly_rate, commit_years, fleet)
        y2 = prices.year2_price(config, term, monthly_rate, commit_years, fleet)
        total = prices.contract_price(config, term, monthly_rate, commit_years, fleet)
        rows.append(TermQuote(
            contract_years=term,
            contract_discount=contract_discount(config, term),
            year1_price=prices.year1_price(config, monthly_rate, commit_years, term),
            year2_price_raw=raw,
            year2_price=y2,
            contract_price=total,
            annual_average=total / term,
        ))
    return rows

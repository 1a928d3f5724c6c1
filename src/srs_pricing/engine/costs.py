"""Cost model — Year-1 and per-year Year-2+ cost per unit, and amortised overhead.

Support labor shrinks along two curves:

  time decay   max(floor, decay_rate ** (year − 1))
  scale        1 / (1 + slope × log10(base / reference)), floored, once the
               average installed base exceeds the reference size

Overhead is a fixed annual cost spread over the average installed base of
each contract year, so early years with a small base carry more of it.
"""

from __future__ import annotations

import math

from srs_pricing.config.engine import EngineConfig


def year2_years(contract_years: int) -> range:
    """Contract years that make up the blended Year-2+ rate: 2..max(2, contract_years)."""
    return range(2, max(2, contract_years) + 1)


def hardware_reserve(config: EngineConfig) -> float:
    """Annual reserve toward replacing the unit's hardware."""
    return config.hardware.unit_cost / config.hardware.replacement_cycle_years


def time_decay_factor(config: EngineConfig, year: int) -> float:
    eff = config.efficiency
    return max(eff.floor, eff.decay_rate ** (year - 1))


def scale_factor(config: EngineConfig, installed_base: float) -> float:
    """Support-hour multiplier for an installed base of ``installed_base`` units."""
    scale = config.scale_efficiency
    if installed_base <= scale.reference_units:
        return 1.0
    reduction = 1.0 / (1.0 + scale.slope * math.log10(installed_base / scale.reference_units))
    return max(scale.floor, min(1.0, reduction))


def avg_installed_base_for_year(
    year: int,
    monthly_rate: float,
    commit_years: float,
    existing_fleet: float,
) -> float:
    """Average installed base during contract year ``year``.

    Units arrive linearly at ``monthly_rate × 12`` per year until
    ``commit_years`` have elapsed. The result is the mean of that ramp across
    the year, so a year still inside the commitment counts half of its own
    additions. For whole-year commitments this equals
    fleet + annual × min(year, commit) − annual / 2 (while year <= commit).
    """
    annual = monthly_rate * 12
    start, end = year - 1, year
    if commit_years >= end:
        ramp_years = end - 0.5
    elif commit_years <= start:
        ramp_years = commit_years
    else:
        # Ramp stops part-way through the year: integrate t over [start, commit]
        # and hold at commit for the remainder.
        ramp_years = (commit_years ** 2 - start ** 2) / 2 + (end - commit_years) * commit_years
    return max(existing_fleet, existing_fleet + annual * ramp_years)


def support_hours_for_year(
    config: EngineConfig,
    year: int,
    monthly_rate: float,
    commit_years: float,
    existing_fleet: float,
) -> float:
    base = avg_installed_base_for_year(year, monthly_rate, commit_years, existing_fleet)
    return (
        config.labor.support_hours_per_unit_year
        * time_decay_factor(config, year)
        * scale_factor(config, base)
    )


def support_ftes_for_year(
    config: EngineConfig,
    year: int,
    monthly_rate: float,
    commit_years: float,
    existing_fleet: float,
) -> float:
    """Support staff (FTEs) the average installed base of ``year`` keeps busy."""
    base = avg_installed_base_for_year(year, monthly_rate, commit_years, existing_fleet)
    hours = support_hours_for_year(config, year, monthly_rate, commit_years, existing_fleet)
    return hours * base / config.labor.fte_hours_per_year

def year1_cost(
    config: EngineConfig,
    monthly_rate: float,
    commit_years: float,
    existing_fleet: float,
) -> float:
    """Hardware + build + Year-1 support + coordination labor."""
    labor = config.labor
    support_hours = support_hours_for_year(config, 1, monthly_rate, commit_years, existing_fleet)
    return (
        config.hardware.unit_cost
        + labor.build_hours_per_unit * labor.hourly_rate
        + support_hours * labor.hourly_rate
        + labor.coordination_hours_per_unit_year * labor.hourly_rate
    )


def year2_cost_for_year(
    config: EngineConfig,
    year: int,
    monthly_rate: float,
    commit_years: float,
    existing_fleet: float,
) -> float:
    """Support labor for ``year`` plus the hardware reserve."""
    support_hours = support_hours_for_year(config, year, monthly_rate, commit_years, existing_fleet)
    return support_hours * config.labor.hourly_rate + hardware_reserve(config)


def year2_cost_blended(
    config: EngineConfig,
    contract_years: int,
    monthly_rate: float,
    commit_years: float,
    existing_fleet: float,
) -> float:
    """Mean Year-2+ cost over years 2..max(2, contract_years)."""
    years = year2_years(contract_years)
    total = sum(
        year2_cost_for_year(config, y, monthly_rate, commit_years, existing_fleet) for y in years
    )
    return total / len(years)


# ── Overhead ────────────────────────────────────────────────────────────────

def annual_overhead(config: EngineConfig) -> float:
    """Fixed annual overhead: dev/maintenance FTEs × salary + additional cost."""
    return (
        config.overhead.dev_maintenance_ftes * config.labor.fte_salary
        + config.overhead.additional_annual_cost
    )


def overhead_per_unit_for_year(
    config: EngineConfig,
    year: int,
    monthly_rate: float,
    commit_years: float,
    existing_fleet: float,
) -> float:
    base = avg_installed_base_for_year(year, monthly_rate, commit_years, existing_fleet)
    if base <= 0:
        return 0.0
    return annual_overhead(config) / base


def year1_overhead_contribution(
    config: EngineConfig,
    monthly_rate: float,
    commit_years: float,
    existing_fleet: float,
) -> float:
    """Share of Year-1 overhead charged against the Year-1 price."""
    return (
        overhead_per_unit_for_year(config, 1, monthly_rate, commit_years, existing_fleet)
        * config.pricing.overhead_year1_factor
    )


def overhead_credit_per_year(
    config: EngineConfig,
    contract_years: int,
    year1_revenue: float,
    monthly_rate: float,
    commit_years: float,
    existing_fleet: float,
) -> float:
    """Year-1 surplus redistributed to each Year-2+ year (0 when disabled).

    surplus = max(0, year1_revenue − year1_cost − year1 overhead contribution),
    spread across min(contract_years − 1, overhead_credit_cap_years) years.
    """
    pricing = config.pricing
    if not pricing.overhead_credit_enabled or contract_years <= 1:
        return 0.0
    surplus = max(
        0.0,
        year1_revenue
        - year1_cost(config, monthly_rate, commit_years, existing_fleet)
        - year1_overhead_contribution(config, monthly_rate, commit_years, existing_fleet),
    )
    credit_years = min(contract_years - 1, pricing.overhead_credit_cap_years)
    return surplus / credit_years


def overhead_blended(
    config: EngineConfig,
    contract_years: int,
    monthly_rate: float,
    commit_years: float,
    existing_fleet: float,
    year1_revenue: float = 0.0,
) -> float:
    """Mean Year-2+ overhead per unit, less the Year-1 surplus credit, floored at 0."""
    years = year2_years(contract_years)
    mean = sum(
        overhead_per_unit_for_year(config, y, monthly_rate, commit_years, existing_fleet)
        for y in years
    ) / len(years)
    credit = overhead_credit_per_year(
        config, contract_years, year1_revenue, monthly_rate, commit_years, existing_fleet,
    )
    return max(0.0, mean - credit)

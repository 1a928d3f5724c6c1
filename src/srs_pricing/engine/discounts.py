"""Discount model — volume (commitment) and contract-length discounts.

Volume discount is measured on a blended unit basis:

  annual_units × (1 − w) + annual_units × commit_years × w

and read off the tier curve selected by ``discounts.volume_curve``. The
``rate_duration`` curve skips the tiers and adds two ease-out curves, one on
the monthly rate and one on the commitment length.
"""

from __future__ import annotations

from srs_pricing.config.discounts import EaseOutCurve, VolumeTier
from srs_pricing.config.engine import EngineConfig
from srs_pricing.errors import ConfigurationError, InvalidScenarioError


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def total_commitment(monthly_rate: float, commit_years: float) -> float:
    return monthly_rate * 12 * commit_years


def discount_basis_units(config: EngineConfig, monthly_rate: float, commit_years: float) -> float:
    """Blend of one year's units and the whole multi-year commitment."""
    annual_units = monthly_rate * 12
    w = config.discounts.commitment_weight
    return annual_units * (1 - w) + annual_units * commit_years * w


def normalize_tiers(tiers: list[VolumeTier]) -> list[VolumeTier]:
    """Sorted, de-duplicated, monotonic tiers with an implicit (0 units, 0%) floor.

    Duplicate thresholds keep the largest discount. A tier whose discount is
    lower than a cheaper threshold's is lifted to the running maximum.
    """
    best: dict[float, float] = {0.0: 0.0}
    for tier in tiers:
        best[tier.min_units] = max(best.get(tier.min_units, 0.0), _clamp(tier.discount))

    normalized: list[VolumeTier] = []
    running = 0.0
    for min_units in sorted(best):
        running = max(running, best[min_units])
        normalized.append(VolumeTier(min_units=min_units, discount=running))
    return normalized


def volume_tier_for(config: EngineConfig, units: float) -> VolumeTier:
    """Highest normalised tier whose threshold ``units`` has reached."""
    tiers = normalize_tiers(config.discounts.volume_tiers)
    reached = tiers[0]
    for tier in tiers:
        if units >= tier.min_units:
            reached = tier
    return reached


def _interpolated(tiers: list[VolumeTier], units: float) -> float:
    if units <= tiers[0].min_units:
        return tiers[0].discount
    for lower, upper in zip(tiers, tiers[1:]):
        if units <= upper.min_units:
            span = upper.min_units - lower.min_units
            if span <= 0:
                raise ConfigurationError(
                    f"zero-width discount interpolation range at {lower.min_units} units"
                )
            frac = (units - lower.min_units) / span
            return lower.discount + (upper.discount - lower.discount) * frac
    return tiers[-1].discount


def _ease_out(tiers: list[VolumeTier], units: float) -> float:
    top = tiers[-1]
    if top.min_units <= 0:
        raise ConfigurationError("ease_out volume curve needs a tier above 0 units")
    n = _clamp(units / top.min_units)
    return top.discount * (1 - (1 - n) ** 2)


def ease_out_discount(curve: EaseOutCurve, value: float) -> float:
    n = _clamp((value - curve.lower) / (curve.upper - curve.lower))
    return curve.max_discount * (1 - (1 - n) ** 2)


def volume_discount(config: EngineConfig, units: float) -> float:
    """Volume discount fraction for ``units`` discount-basis units, in [0, 1].

    Callers must not assume continuity unless ``volume_curve='interpolate'``
    (or ``'ease_out'``); ``'step'`` jumps at each threshold.
    """
    tiers = normalize_tiers(config.discounts.volume_tiers)
    curve = config.discounts.volume_curve
    if curve == "rate_duration":
        raise ConfigurationError(
            "the rate_duration curve is read from rate and duration, not discount-basis units"
        )
    if curve == "step":
        discount = volume_tier_for(config, units).discount
    elif curve == "ease_out":
        discount = _ease_out(tiers, units)
    else:
        discount = _interpolated(tiers, units)
    return _clamp(discount)


def scenario_volume_discount(config: EngineConfig, monthly_rate: float, commit_years: float) -> float:
    """Volume discount for a scenario: tier curve on the blended basis, or rate + duration curves."""
    disc = config.discounts
    if disc.volume_curve == "rate_duration":
        return _clamp(
            ease_out_discount(disc.rate_curve, monthly_rate)
            + ease_out_discount(disc.duration_curve, commit_years)
        )
    return volume_discount(config, discount_basis_units(config, monthly_rate, commit_years))


def year1_volume_discount(config: EngineConfig, monthly_rate: float, commit_years: float) -> float:
    """Volume discount scaled by the Year-1 factor."""
    return (
        scenario_volume_discount(config, monthly_rate, commit_years)
        * config.discounts.year1_volume_factor
    )


def contract_discount(config: EngineConfig, contract_years: int) -> float:
    """Flat discount for an offered contract length.

    Unconfigured lengths raise InvalidScenarioError unless
    ``discounts.strict_contract_terms`` is off, in which case they get 0%.
    """
    if contract_years in config.contract_discounts:
        return _clamp(config.contract_discounts[contract_years])
    if config.discounts.strict_contract_terms:
        raise InvalidScenarioError(
            f"{contract_years}-year contracts are not offered "
            f"(available: {config.contract_terms})"
        )
    return 0.0


def combined_discount(config: EngineConfig, *parts: float) -> float:
    """Sum of discount fractions, capped at ``max_total_discount``."""
    return _clamp(sum(parts), 0.0, config.discounts.max_total_discount)


def year1_total_discount(
    config: EngineConfig, monthly_rate: float, commit_years: float, contract_years: int,
) -> float:
    parts = [year1_volume_discount(config, monthly_rate, commit_years)]
    if config.pricing.year1_includes_contract_discount:
        parts.append(
            contract_discount(config, contract_years) * config.discounts.year1_contract_factor
        )
    return combined_discount(config, *parts)


def year2_total_discount(
    config: EngineConfig, monthly_rate: float, commit_years: float, contract_years: int,
) -> float:
    return combined_discount(
        config,
        scenario_volume_discount(config, monthly_rate, commit_years),
        contract_discount(config, contract_years),
    )

"""Grid sweeps over (contract, duration, rate) and monotonicity checks.

A pricing curve regresses when moving to a larger commitment makes the
customer worse off (price up, discount down) or when a discount increase
does not show up in the price at all. Every adjacent pair along a rate
series and a duration series is compared.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field

import pandas as pd

from srs_pricing.config.engine import EngineConfig
from srs_pricing.engine import prices
from srs_pricing.engine.discounts import (
    discount_basis_units,
    normalize_tiers,
    scenario_volume_discount,
    total_commitment,
)


@dataclass(frozen=True)
class GridRow:
    """One priced grid point."""

    contract: int
    rate: float
    duration: float
    total_units: float
    discount_units: float
    volume_discount: float
    y1_price: float
    y1_effective: float
    """1 − y1_price / displayed Year-1 list, floored at 0."""
    y2_price: float
    y2_effective: float
    total_price: float
    annual_avg: float


@dataclass(frozen=True)
class Anomaly:
    """Adjacent grid points whose prices or discounts move the wrong way."""

    issues: tuple[str, ...]
    context: str
    prev: GridRow
    curr: GridRow
    deltas: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class TermGapViolation:
    """A shorter term priced within min_gap of the next-longer term."""

    rate: float
    duration: float
    shorter: int
    longer: int
    shorter_y2: float
    longer_y2: float
    required_gap: float


def display_list_prices(config: EngineConfig, rate: float, duration: float, fleet: float) -> tuple[float, float]:
    """List prices shown to customers, including license list prices."""
    lic = config.licensing
    return (
        prices.year1_list_price(config) + lic.year1_list_price,
        prices.year2_list_price(config, rate, duration, fleet) + lic.year2_list_price,
    )


def compute_row(config: EngineConfig, rate: float, duration: float, contract: int, fleet: float) -> GridRow:
    y1 = prices.year1_price(config, rate, duration, contract)
    y2 = prices.year2_price(config, contract, rate, duration, fleet)
    total = prices.contract_price(config, contract, rate, duration, fleet)
    list_y1, list_y2 = display_list_prices(config, rate, duration, fleet)
    return GridRow(
        contract=contract,
        rate=rate,
        duration=duration,
        total_units=total_commitment(rate, duration),
        discount_units=discount_basis_units(config, rate, duration),
        volume_discount=scenario_volume_discount(config, rate, duration),
        y1_price=y1,
        y1_effective=max(0.0, 1 - y1 / list_y1) if list_y1 > 0 else 0.0,
        y2_price=y2,
        y2_effective=max(0.0, 1 - y2 / list_y2) if list_y2 > 0 else 0.0,
        total_price=total,
        annual_avg=total / contract if contract > 0 else total,
    )


def build_grid(
    config: EngineConfig,
    rates: list[float],
    durations: list[float],
    contracts: list[int],
    fleet: float,
) -> list[GridRow]:
    """Price every (contract, duration, rate) combination, in that nesting order."""
    return [
        compute_row(config, rate, duration, contract, fleet)
        for contract in contracts
        for duration in durations
        for rate in rates
    ]


def grid_frame(rows: list[GridRow]) -> pd.DataFrame:
    """Rows as a display table (currency as whole numbers, discounts as percentages)."""
    def pct(value: float) -> str:
        return f"{value * 100:.1f}%"

    return pd.DataFrame([
        {
            "contract": r.contract,
            "rate": r.rate,
            "duration": r.duration,
            "totalUnits": r.total_units,
            "discountUnits": round(r.discount_units),
            "volumeDisc": pct(r.volume_discount),
            "y1Price": round(r.y1_price),
            "y1Disc": pct(r.y1_effective),
            "y2Price": round(r.y2_price),
            "y2Disc": pct(r.y2_effective),
            "totalPrice": round(r.total_price),
            "annualAvg": round(r.annual_avg),
        }
        for r in rows
    ])


def _delta_issues(prev: GridRow, curr: GridRow, price_eps: float, disc_eps: float) -> tuple[list[str], dict[str, float]]:
    d = {
        "disc_total": curr.y2_effective - prev.y2_effective,
        "disc_volume": curr.volume_discount - prev.volume_discount,
        "y1_display": curr.y1_effective - prev.y1_effective,
        "y1_price": curr.y1_price - prev.y1_price,
        "y2_price": curr.y2_price - prev.y2_price,
        "total_price": curr.total_price - prev.total_price,
        "annual_avg": curr.annual_avg - prev.annual_avg,
    }
    issues: list[str] = []
    if d["disc_total"] < -disc_eps:
        issues.append("discount_decrease")
    if d["disc_volume"] < -disc_eps:
        issues.append("volume_discount_decrease")
    if d["y1_price"] > price_eps:
        issues.append("y1_price_increase")
    if d["y2_price"] > price_eps:
        issues.append("y2_price_increase")
    if d["total_price"] > price_eps:
        issues.append("total_price_increase")
    if d["annual_avg"] > price_eps:
        issues.append("annual_price_increase")

    if d["disc_volume"] > disc_eps and abs(d["y1_price"]) <= price_eps:
        issues.append("y1_flat_after_volume_increase")
    if d["disc_total"] > disc_eps and abs(d["y2_price"]) <= price_eps:
        issues.append("y2_flat_after_discount_increase")
    if d["disc_total"] > disc_eps and abs(d["total_price"]) <= price_eps:
        issues.append("total_flat_after_discount_increase")
    if d["y1_display"] > disc_eps and abs(d["y1_price"]) <= price_eps:
        issues.append("y1_flat_after_display_increase")
    return issues, d


def find_anomalies(rows: list[GridRow], price_eps: float = 0.01, disc_eps: float = 0.005) -> list[Anomaly]:
    """Compare neighbours along each rate series, then each duration series."""
    by_rate_series: dict[tuple[int, float], list[GridRow]] = defaultdict(list)
    by_duration_series: dict[tuple[int, float], list[GridRow]] = defaultdict(list)
    for row in rows:
        by_rate_series[(row.contract, row.duration)].append(row)
        by_duration_series[(row.contract, row.rate)].append(row)

    anomalies: list[Anomaly] = []
    for (contract, duration), series in by_rate_series.items():
        series = sorted(series, key=lambda r: r.rate)
        for prev, curr in zip(series, series[1:]):
            issues, d = _delta_issues(prev, curr, price_eps, disc_eps)
            if issues:
                anomalies.append(Anomaly(
                    tuple(issues), f"contract {contract} rate (dur {duration:g})", prev, curr, d,
                ))
    for (contract, rate), series in by_duration_series.items():
        series = sorted(series, key=lambda r: r.duration)
        for prev, curr in zip(series, series[1:]):
            issues, d = _delta_issues(prev, curr, price_eps, disc_eps)
            if issues:
                anomalies.append(Anomaly(
                    tuple(issues), f"contract {contract} duration (rate {rate:g})", prev, curr, d,
                ))
    return anomalies


def format_anomaly(anomaly: Anomaly) -> str:
    prev, curr, d = anomaly.prev, anomaly.curr, anomaly.deltas

    def pct(value: float) -> str:
        return f"{value * 100:.1f}%"

    ctx = f"{anomaly.context} {prev.rate:g}/{prev.duration:g} -> {curr.rate:g}/{curr.duration:g}"
    return "\n".join([
        f"! {', '.join(anomaly.issues)} ({ctx})",
        f"  discY2 {pct(prev.y2_effective)} -> {pct(curr.y2_effective)} (Δ {pct(d['disc_total'])})",
        f"  discY1 {pct(prev.y1_effective)} -> {pct(curr.y1_effective)} (Δ {pct(d['y1_display'])})",
        f"  volDisc {pct(prev.volume_discount)} -> {pct(curr.volume_discount)} (Δ {pct(d['disc_volume'])})",
        f"  y2 {prev.y2_price:.0f} -> {curr.y2_price:.0f} (Δ {d['y2_price']:+.0f})",
        f"  annual {prev.annual_avg:.0f} -> {curr.annual_avg:.0f} (Δ {d['annual_avg']:+.0f})",
        f"  total {prev.total_price:.0f} -> {curr.total_price:.0f} (Δ {d['total_price']:+.0f})",
    ])


def find_term_gap_violations(
    config: EngineConfig,
    rates: list[float],
    durations: list[float],
    fleet: float,
) -> list[TermGapViolation]:
    """Adjacent offered terms L1 < L2 where y2(L1) < y2(L2) + min_gap − increment."""
    gap = config.pricing.min_gap_per_year
    increment = config.pricing.rounding_increment
    terms = [t for t in config.contract_terms if t > 1]
    violations: list[TermGapViolation] = []
    for rate in rates:
        for duration in durations:
            y2 = {t: prices.year2_price(config, t, rate, duration, fleet) for t in terms}
            for shorter, longer in zip(terms, terms[1:]):
                if y2[shorter] < y2[longer] + gap - increment:
                    violations.append(TermGapViolation(
                        rate, duration, shorter, longer, y2[shorter], y2[longer], gap,
                    ))
    return violations


def tier_label(config: EngineConfig, units: float) -> str:
    """Half-open label of the volume tier reached, e.g. '120-<240' or '500+'."""
    tiers = normalize_tiers(config.discounts.volume_tiers)
    for lower, upper in zip(tiers, tiers[1:]):
        if lower.min_units <= units < upper.min_units:
            return f"{lower.min_units:g}-<{upper.min_units:g}"
    return f"{tiers[-1].min_units:g}+"

"""Shared test fixtures — a flat-cost config with hand-checkable numbers, plus the shipped YAMLs."""

from __future__ import annotations

from pathlib import Path

import pytest

from srs_pricing.config import (
    DiscountConfig,
    EfficiencyConfig,
    EngineConfig,
    HardwareConfig,
    LaborConfig,
    OverheadConfig,
    PricingConfig,
    ScaleEfficiencyConfig,
    VolumeTier,
)
from srs_pricing.config.loader import load_engine_config

CONFIG_DIR = Path(__file__).parent.parent / "configs"


@pytest.fixture
def flat_config() -> EngineConfig:
    """No time decay, no scale savings, no volume discount below 1,000 units.

    Year-1 cost  = 1000 hw + 2×50 build + 10×50 support + 4×50 coord = 1800
    Year-2 cost  = 10×50 support + 1000/5 reserve                     = 700
    Overhead     = 1 FTE × 60,000                                     = 60,000 / yr
    """
    return EngineConfig(
        hardware=HardwareConfig(unit_cost=1_000, replacement_cycle_years=5),
        labor=LaborConfig(
            hourly_rate=50,
            fte_salary=60_000,
            build_hours_per_unit=2,
            support_hours_per_unit_year=10,
            coordination_hours_per_unit_year=4,
        ),
        efficiency=EfficiencyConfig(decay_rate=1.0, floor=1.0),
        scale_efficiency=ScaleEfficiencyConfig(reference_units=1e9, slope=0.0, floor=1.0),
        overhead=OverheadConfig(dev_maintenance_ftes=1, additional_annual_cost=0),
        pricing=PricingConfig(
            year1_list_price=2_000,
            rounding_increment=10,
            target_margin_year1=0.25,
            target_margin_year2=0.25,
            baseline_contract_years=3,
            min_gap_per_year=0,
        ),
        discounts=DiscountConfig(
            volume_tiers=[VolumeTier(min_units=1_000, discount=0.10)],
            volume_curve="step",
        ),
        contract_discounts={1: 0.0, 3: 0.20},
    )


@pytest.fixture
def default_config() -> EngineConfig:
    return EngineConfig()


@pytest.fixture
def two_layer_config() -> EngineConfig:
    return load_engine_config(CONFIG_DIR / "two_layer.yaml")


@pytest.fixture
def rate_duration_config() -> EngineConfig:
    return load_engine_config(CONFIG_DIR / "rate_duration.yaml")

"""Pydantic validation tests — invalid configuration and scenarios are rejected up front."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from srs_pricing.config import (
    EaseOutCurve,
    EfficiencyConfig,
    EngineConfig,
    HardwareConfig,
    LaborConfig,
    LicensingConfig,
    PricingConfig,
    QuoteScenario,
    ScaleEfficiencyConfig,
    VolumeTier,
)


class TestScenarioValidation:

    def test_valid(self):
        s = QuoteScenario(monthly_rate=10, commit_years=3, contract_years=5)
        assert s.existing_fleet_units is None

    @pytest.mark.parametrize("rate", [0, -1])
    def test_rate_must_be_positive(self, rate: float):
        with pytest.raises(ValidationError):
            QuoteScenario(monthly_rate=rate, commit_years=3, contract_years=5)

    def test_commit_must_be_positive(self):
        with pytest.raises(ValidationError):
            QuoteScenario(monthly_rate=10, commit_years=0, contract_years=5)

    def test_contract_at_least_one_year(self):
        with pytest.raises(ValidationError):
            QuoteScenario(monthly_rate=10, commit_years=3, contract_years=0)

    def test_negative_fleet_rejected(self):
        with pytest.raises(ValidationError):
            QuoteScenario(monthly_rate=10, commit_years=3, contract_years=5, existing_fleet_units=-5)

    def test_frozen(self):
        s = QuoteScenario(monthly_rate=10, commit_years=3, contract_years=5)
        with pytest.raises(ValidationError):
            s.monthly_rate = 20


class TestGroupValidation:

    def test_replacement_cycle_positive(self):
        with pytest.raises(ValidationError):
            HardwareConfig(replacement_cycle_years=0)

    def test_negative_hours_rejected(self):
        with pytest.raises(ValidationError):
            LaborConfig(support_hours_per_unit_year=-1)

    def test_decay_rate_bounds(self):
        with pytest.raises(ValidationError):
            EfficiencyConfig(decay_rate=0)
        with pytest.raises(ValidationError):
            EfficiencyConfig(decay_rate=1.1)

    def test_scale_reference_positive(self):
        with pytest.raises(ValidationError):
            ScaleEfficiencyConfig(reference_units=0)

    def test_rounding_increment_positive(self):
        with pytest.raises(ValidationError):
            PricingConfig(rounding_increment=0)

    def test_gap_must_be_finite(self):
        with pytest.raises(ValidationError):
            PricingConfig(min_gap_per_year=float("inf"))

    def test_credit_cap_at_least_one(self):
        with pytest.raises(ValidationError):
            PricingConfig(overhead_credit_cap_years=0)

    def test_true_margin_target_below_one(self):
        with pytest.raises(ValidationError):
            PricingConfig(margin_basis="margin", target_margin_year2=1.0)

    def test_tier_discount_bounds(self):
        with pytest.raises(ValidationError):
            VolumeTier(min_units=100, discount=1.5)

    def test_license_discount_bounds(self):
        with pytest.raises(ValidationError):
            LicensingConfig(year1_discount=-0.1)

    def test_ease_out_curve_bounds(self):
        with pytest.raises(ValidationError):
            EaseOutCurve(lower=10, upper=10, max_discount=0.2)
        with pytest.raises(ValidationError):
            EaseOutCurve(lower=0, upper=20, max_discount=1.5)

    def test_unknown_curve_rejected(self):
        with pytest.raises(ValidationError):
            EngineConfig(discounts={"volume_curve": "cubic"})


class TestEngineConfigValidation:

    def test_defaults_are_valid(self):
        cfg = EngineConfig()
        assert cfg.contract_terms == [1, 3, 5, 10]

    def test_empty_contract_table(self):
        with pytest.raises(ValidationError):
            EngineConfig(contract_discounts={})

    def test_baseline_must_be_offered(self):
        with pytest.raises(ValidationError, match="baseline_contract_years"):
            EngineConfig(contract_discounts={1: 0.0, 3: 0.05})

    def test_baseline_discount_below_100pct(self):
        with pytest.raises(ValidationError):
            EngineConfig(contract_discounts={1: 0.0, 10: 1.0})

    def test_contract_discount_out_of_range(self):
        with pytest.raises(ValidationError):
            EngineConfig(contract_discounts={1: 0.0, 10: -0.1})

    def test_contract_length_at_least_one(self):
        with pytest.raises(ValidationError):
            EngineConfig(contract_discounts={0: 0.0, 10: 0.1})

    def test_fixed_list_skips_baseline_check(self):
        cfg = EngineConfig(
            pricing={"year2_basis": "fixed_list"},
            contract_discounts={1: 0.0, 3: 0.05},
        )
        assert cfg.contract_terms == [1, 3]

    def test_string_contract_keys_coerced(self):
        cfg = EngineConfig(contract_discounts={"1": 0.0, "10": 0.15})
        assert cfg.contract_terms == [1, 10]

    def test_frozen(self):
        cfg = EngineConfig()
        with pytest.raises(ValidationError):
            cfg.pricing.rounding_increment = 50

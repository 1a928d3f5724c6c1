"""Tests for engine/prices.py — list prices, add-ons, term gaps, worked examples."""

from __future__ import annotations

import pytest

from srs_pricing.config import EngineConfig, LicensingConfig
from srs_pricing.engine import prices
from srs_pricing.engine.rounding import round_up


def _with_pricing(config: EngineConfig, **updates) -> EngineConfig:
    return config.model_copy(update={"pricing": config.pricing.model_copy(update=updates)})


# ═══════════════════════════════════════════════════════════════════════════
# Cost-plus engine on the flat config (rate 10/mo, 2-year commitment, no fleet)
# ═══════════════════════════════════════════════════════════════════════════
#
# Baseline term = 3 years (20% contract discount).
#   blended cost      = 700
#   blended overhead  = (60000/180 + 60000/240) / 2 = 291.667
#   min net           = 991.667 × 1.25              = 1239.583
#   list              = 1239.583 / 0.8              = 1549.479

LIST_Y2 = (700 + (60_000 / 180 + 60_000 / 240) / 2) * 1.25 / 0.8


class TestCostPlus:

    def test_year2_list_price(self, flat_config: EngineConfig):
        assert prices.year2_list_price(flat_config, 10, 2, 0) == pytest.approx(LIST_Y2)

    def test_year2_price_at_baseline(self, flat_config: EngineConfig):
        # 1549.479 × 0.8 = 1239.58 → 1240
        assert prices.year2_price(flat_config, 3, 10, 2, 0) == 1_240

    def test_year1_price(self, flat_config: EngineConfig):
        assert prices.year1_base_price(flat_config, 10, 2, 3) == 2_000
        assert prices.year1_price(flat_config, 10, 2, 3) == 2_000

    def test_contract_price(self, flat_config: EngineConfig):
        assert prices.contract_price(flat_config, 3, 10, 2, 0) == 2_000 + 2 * 1_240

    def test_one_year_contract_is_year1_only(self, flat_config: EngineConfig):
        assert prices.contract_price(flat_config, 1, 10, 2, 0) == 2_000

    def test_margin_basis_uses_true_margin(self, flat_config: EngineConfig):
        cfg = _with_pricing(flat_config, margin_basis="margin")
        full_cost = 700 + (60_000 / 180 + 60_000 / 240) / 2
        assert prices.year2_list_price(cfg, 10, 2, 0) == pytest.approx(full_cost / 0.75 / 0.8)

    def test_volume_discount_applies_to_year2(self, flat_config: EngineConfig):
        # 100/mo × 2 yrs: basis 1200×0.5 + 2400×0.5 = 1800 ≥ 1000 → 10% volume
        list_price = prices.year2_list_price(flat_config, 100, 2, 0)
        expected = round_up(list_price * (1 - 0.10 - 0.20), 10)
        assert prices.year2_price(flat_config, 3, 100, 2, 0) == expected

    def test_year1_gets_scaled_volume_discount(self, flat_config: EngineConfig):
        # Year 1: 2000 × (1 − 0.05) = 1900
        assert prices.year1_price(flat_config, 100, 2, 3) == 1_900


class TestFixedList:

    def test_year2_list_is_configured_price(self, flat_config: EngineConfig):
        cfg = _with_pricing(flat_config, year2_basis="fixed_list", year2_list_price=1_500)
        assert prices.year2_list_price(cfg, 10, 2, 0) == 1_500
        assert prices.year2_price(cfg, 3, 10, 2, 0) == 1_200   # 1500 × 0.8


# ═══════════════════════════════════════════════════════════════════════════
# Add-ons: Year-1 shift and licensing
# ═══════════════════════════════════════════════════════════════════════════

class TestShift:

    def test_shift_moves_revenue_into_later_years(self, flat_config: EngineConfig):
        cfg = _with_pricing(flat_config, year1_shift_factor=0.1)
        assert prices.year1_shift_amount(cfg, 10, 2, 3) == pytest.approx(200)
        assert prices.year1_shift_per_year(cfg, 10, 2, 3) == pytest.approx(100)
        assert prices.year1_price(cfg, 10, 2, 3) == 1_800
        assert prices.year2_price(cfg, 3, 10, 2, 0) == 1_340

    def test_total_revenue_preserved(self, flat_config: EngineConfig):
        shifted = _with_pricing(flat_config, year1_shift_factor=0.1)
        assert prices.contract_price(shifted, 3, 10, 2, 0) == prices.contract_price(flat_config, 3, 10, 2, 0)

    def test_no_shift_on_one_year_contract(self, flat_config: EngineConfig):
        cfg = _with_pricing(flat_config, year1_shift_factor=0.1)
        assert prices.year1_shift_amount(cfg, 10, 2, 1) == 0.0
        assert prices.year1_price(cfg, 10, 2, 1) == 2_000


class TestLicensing:

    def test_license_net_prices_added(self, flat_config: EngineConfig):
        cfg = flat_config.model_copy(update={"licensing": LicensingConfig(
            year1_list_price=100, year1_discount=0.5,
            year2_list_price=200, year2_discount=0.25,
        )})
        assert prices.year1_price(cfg, 10, 2, 3) == 2_050
        assert prices.year2_price(cfg, 3, 10, 2, 0) == 1_390


# ═══════════════════════════════════════════════════════════════════════════
# Minimum gap between contract lengths
# ═══════════════════════════════════════════════════════════════════════════

class TestMinimumGap:

    @pytest.mark.parametrize("rate", [5, 15, 40])
    @pytest.mark.parametrize("commit", [1, 3, 7])
    def test_adjacent_terms_keep_gap(self, default_config: EngineConfig, rate: float, commit: float):
        gap = default_config.pricing.min_gap_per_year
        inc = default_config.pricing.rounding_increment
        terms = [t for t in default_config.contract_terms if t > 1]
        y2 = {t: prices.year2_price(default_config, t, rate, commit, 0) for t in terms}
        for shorter, longer in zip(terms, terms[1:]):
            assert y2[shorter] >= y2[longer] + gap - inc

    def test_large_gap_overrides_raw_prices(self, default_config: EngineConfig):
        cfg = _with_pricing(default_config, min_gap_per_year=300)
        schedule = prices.year2_price_schedule(cfg, 15, 3, 0)
        assert schedule[10][1] == schedule[10][0]            # longest term untouched
        assert schedule[5][1] >= schedule[10][1] + 300
        assert schedule[3][1] >= schedule[5][1] + 300
        assert schedule[3][1] > schedule[3][0]               # raised above raw

    def test_schedule_skips_one_year_term(self, default_config: EngineConfig):
        assert 1 not in prices.year2_price_schedule(default_config, 15, 3, 0)

    def test_disabled_gap_returns_raw(self, default_config: EngineConfig):
        cfg = _with_pricing(default_config, min_gap_per_year=0)
        for term in (3, 5, 10):
            assert prices.year2_price(cfg, term, 15, 3, 0) == prices.year2_price_raw(cfg, term, 15, 3, 0)

    def test_longer_contract_cheaper_per_year(self, default_config: EngineConfig):
        # Installed-base example: empty fleet, 15/mo for 3 years
        assert prices.year2_price(default_config, 10, 15, 3, 0) < prices.year2_price(default_config, 3, 15, 3, 0)


# ═══════════════════════════════════════════════════════════════════════════
# Monotonicity in commitment
# ═══════════════════════════════════════════════════════════════════════════

@pytest.mark.parametrize("contract", [3, 5, 10])
@pytest.mark.parametrize("rate", [5, 10, 15, 25])
def test_longer_commitment_never_raises_price(default_config: EngineConfig, contract: int, rate: float):
    y1 = [prices.year1_price(default_config, rate, c, contract) for c in range(1, 11)]
    y2 = [prices.year2_price(default_config, contract, rate, c, 0) for c in range(1, 11)]
    assert all(b <= a for a, b in zip(y1, y1[1:]))
    assert all(b <= a for a, b in zip(y2, y2[1:]))


# ═══════════════════════════════════════════════════════════════════════════
# 2-layer worked example ($50 rounding, 20/mo, 5-year commitment, 5-year contract)
# ═══════════════════════════════════════════════════════════════════════════

class TestTwoLayerExample:

    def test_discounts(self, two_layer_config: EngineConfig):
        b = prices.discount_breakdown(two_layer_config, 5, 20, 5, 0)
        assert b.total_units == 1_200
        assert b.volume == pytest.approx(0.25)
        assert b.volume_y1 == pytest.approx(0.125)
        assert b.contract == pytest.approx(0.05)
        assert b.total_y1 == pytest.approx(0.175)
        assert b.total_y2 == pytest.approx(0.30)
        assert b.list_y1 == 3_600
        assert b.list_y2 == 1_550

    def test_prices(self, two_layer_config: EngineConfig):
        assert prices.year1_price(two_layer_config, 20, 5, 5) == 3_000    # 2970 → 3000
        assert prices.year2_price(two_layer_config, 5, 20, 5, 0) == 1_100  # 1085 → 1100
        assert prices.contract_price(two_layer_config, 5, 20, 5, 0) == 7_400

"""Tests for config/loader.py — YAML files and override merging."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from srs_pricing.config import EngineConfig
from srs_pricing.config.loader import (
    config_from_overrides,
    dump_engine_config,
    load_engine_config,
    merge_overrides,
)

CONFIG_DIR = Path(__file__).parent.parent / "configs"


def test_default_yaml_matches_model_defaults():
    assert load_engine_config(CONFIG_DIR / "default.yaml") == EngineConfig()


def test_two_layer_yaml_loads():
    cfg = load_engine_config(CONFIG_DIR / "two_layer.yaml")
    assert cfg.pricing.year2_basis == "fixed_list"
    assert cfg.pricing.rounding_increment == 50
    assert cfg.discounts.volume_curve == "step"
    # sections not in the file keep their defaults
    assert cfg.hardware.unit_cost == 950


def test_dump_round_trip(tmp_path: Path, two_layer_config: EngineConfig):
    out = tmp_path / "cfg.yaml"
    dump_engine_config(two_layer_config, out)
    assert load_engine_config(out) == two_layer_config


def test_empty_yaml_is_defaults(tmp_path: Path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_engine_config(path) == EngineConfig()


def test_merge_overrides_is_recursive_and_copies():
    base = {"pricing": {"rounding_increment": 20, "min_gap_per_year": 20}, "fleet": {"existing_units": 0}}
    merged = merge_overrides(base, {"pricing": {"rounding_increment": 50}})
    assert merged["pricing"] == {"rounding_increment": 50, "min_gap_per_year": 20}
    assert base["pricing"]["rounding_increment"] == 20


def test_merge_overrides_replaces_non_dicts():
    merged = merge_overrides({"tiers": [1, 2]}, {"tiers": [3]})
    assert merged["tiers"] == [3]


def test_config_from_overrides():
    cfg = config_from_overrides({"pricing": {"rounding_increment": 50}})
    assert cfg.pricing.rounding_increment == 50
    assert cfg.pricing.min_gap_per_year == EngineConfig().pricing.min_gap_per_year
    assert cfg.contract_terms == [1, 3, 5, 10]


def test_contract_table_override_replaces_whole_table():
    cfg = config_from_overrides({
        "contract_discounts": {"1": 0.0, "5": 0.10},
        "pricing": {"baseline_contract_years": 5},
    })
    assert cfg.contract_terms == [1, 5]
    assert cfg.contract_discounts == {1: 0.0, 5: 0.10}


def test_contract_table_override_can_add_terms():
    table = {"1": 0.0, "3": 0.05, "5": 0.10, "7": 0.12, "10": 0.15}
    cfg = config_from_overrides({"contract_discounts": table})
    assert cfg.contract_terms == [1, 3, 5, 7, 10]


def test_config_from_overrides_validates():
    with pytest.raises(ValidationError):
        config_from_overrides({"pricing": {"rounding_increment": -5}})

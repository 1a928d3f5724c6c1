"""YAML load/dump for EngineConfig, plus the override merge used by the service."""

from __future__ import annotations

import logging
from copy import deepcopy
from pathlib import Path
from typing import Any

import yaml

from srs_pricing.config.engine import EngineConfig

logger = logging.getLogger(__name__)

# The contract-discount table is the set of offered terms.
REPLACED_KEYS = ("contract_discounts",)


def merge_overrides(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``overrides`` onto a copy of ``base``.

    Nested dicts merge key by key; anything else replaces the base value.
    """
    merged = deepcopy(base)
    for key, val in overrides.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(val, dict):
            merged[key] = merge_overrides(merged[key], val)
        else:
            merged[key] = deepcopy(val)
    return merged


def load_engine_config(path: str | Path) -> EngineConfig:
    """Load an EngineConfig from YAML. Missing sections fall back to defaults."""
    yaml_path = Path(path)
    with open(yaml_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    logger.debug("Loaded engine config from %s", yaml_path)
    return EngineConfig(**data)


def dump_engine_config(config: EngineConfig, path: str | Path) -> None:
    """Write an EngineConfig to YAML (round-trips through load_engine_config)."""
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(config.model_dump(mode="json"), f, sort_keys=False)


def config_from_overrides(overrides: dict[str, Any] | None, base: EngineConfig | None = None) -> EngineConfig:
    """Build an EngineConfig from partial overrides merged onto ``base`` (defaults if None).

    Keys in REPLACED_KEYS swap the whole value instead of merging, so an
    override can drop contract lengths as well as add them.
    """
    overrides = overrides or {}
    base_dict = (base or EngineConfig()).model_dump(mode="json")
    merged = merge_overrides(base_dict, overrides)
    for key in REPLACED_KEYS:
        if key in overrides:
            merged[key] = deepcopy(overrides[key])
    return EngineConfig(**merged)

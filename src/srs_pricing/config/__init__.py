"""Configuration models — every engine input type."""

from srs_pricing.config.hardware import HardwareConfig
from srs_pricing.config.labor import LaborConfig
from srs_pricing.config.efficiency import EfficiencyConfig, ScaleEfficiencyConfig
from srs_pricing.config.overhead import OverheadConfig
from srs_pricing.config.pricing import PricingConfig
from srs_pricing.config.discounts import DiscountConfig, EaseOutCurve, VolumeTier
from srs_pricing.config.licensing import LicensingConfig
from srs_pricing.config.engine import EngineConfig, FleetConfig
from srs_pricing.config.quote import QuoteScenario

__all__ = [
    "HardwareConfig",
    "LaborConfig",
    "EfficiencyConfig",
    "ScaleEfficiencyConfig",
    "OverheadConfig",
    "PricingConfig",
    "DiscountConfig",
    "EaseOutCurve",
    "VolumeTier",
    "LicensingConfig",
    "FleetConfig",
    "EngineConfig",
    "QuoteScenario",
]

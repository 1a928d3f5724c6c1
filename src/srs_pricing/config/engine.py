"""Top-level engine configuration — bundles every parameter group."""

import math

from pydantic import BaseModel, ConfigDict, Field, model_validator

from srs_pricing.config.hardware import HardwareConfig
from srs_pricing.config.labor import LaborConfig
from srs_pricing.config.efficiency import EfficiencyConfig, ScaleEfficiencyConfig
from srs_pricing.config.overhead import OverheadConfig
from srs_pricing.config.pricing import PricingConfig
from srs_pricing.config.discounts import DiscountConfig
from srs_pricing.config.licensing import LicensingConfig


class FleetConfig(BaseModel):
    """Installed base already deployed before the new commitment."""

    model_config = ConfigDict(frozen=True)

    existing_units: float = Field(default=0.0, ge=0, description="Default existing fleet size (units)")


def _default_contract_discounts() -> dict[int, float]:
    return {1: 0.00, 3: 0.05, 5: 0.10, 10: 0.15}


class EngineConfig(BaseModel):
    """Complete, immutable input bundle for the pricing engine."""

    model_config = ConfigDict(frozen=True)

    hardware: HardwareConfig = Field(default_factory=HardwareConfig)
    labor: LaborConfig = Field(default_factory=LaborConfig)
    efficiency: EfficiencyConfig = Field(default_factory=EfficiencyConfig)
    scale_efficiency: ScaleEfficiencyConfig = Field(default_factory=ScaleEfficiencyConfig)
    overhead: OverheadConfig = Field(default_factory=OverheadConfig)
    pricing: PricingConfig = Field(default_factory=PricingConfig)
    discounts: DiscountConfig = Field(default_factory=DiscountConfig)
    contract_discounts: dict[int, float] = Field(
        default_factory=_default_contract_discounts,
        description="Allowed contract length (years) → flat discount fraction",
    )
    fleet: FleetConfig = Field(default_factory=FleetConfig)
    licensing: LicensingConfig = Field(default_factory=LicensingConfig)

    @model_validator(mode="after")
    def _check_contract_table(self) -> "EngineConfig":
        if not self.contract_discounts:
            raise ValueError("contract_discounts must offer at least one contract length")
        for years, discount in self.contract_discounts.items():
            if years < 1:
                raise ValueError(f"contract length must be >= 1 year, got {years}")
            if not math.isfinite(discount) or not 0.0 <= discount <= 1.0:
                raise ValueError(f"contract discount for {years}yr must be in [0, 1], got {discount}")

        baseline = self.pricing.baseline_contract_years
        if self.pricing.year2_basis == "cost_plus":
            if baseline not in self.contract_discounts:
                raise ValueError(
                    f"baseline_contract_years={baseline} is not an offered contract length "
                    f"({sorted(self.contract_discounts)})"
                )
            if self.contract_discounts[baseline] >= 1.0:
                raise ValueError("baseline contract discount of 100% leaves no list price")
        return self

    @property
    def contract_terms(self) -> list[int]:
        """Offered contract lengths, ascending."""
        return sorted(self.contract_discounts)

"""Support-hour efficiency curves — time decay and installed-base scale."""

from pydantic import BaseModel, ConfigDict, Field


class EfficiencyConfig(BaseModel):
    """Per-year decay of support hours as a unit matures.

    factor(year) = max(floor, decay_rate ** (year − 1))
    """

    model_config = ConfigDict(frozen=True)

    decay_rate: float = Field(
        default=0.85, gt=0, le=1.0,
        description="Multiplicative support-hour decay per contract year (1.0 = no decay)",
    )
    floor: float = Field(
        default=0.5, ge=0, le=1.0,
        description="Lowest fraction of base support hours reachable through time decay",
    )


class ScaleEfficiencyConfig(BaseModel):
    """Logarithmic reduction of support hours as the installed base grows.

    factor = 1 while base <= reference_units, otherwise
    max(floor, min(1, 1 / (1 + slope × log10(base / reference_units))))
    """

    model_config = ConfigDict(frozen=True)

    reference_units: float = Field(
        default=100.0, gt=0, description="Installed base at which scale savings begin",
    )
    slope: float = Field(default=0.35, ge=0, description="Savings per decade of installed-base growth")
    floor: float = Field(
        default=0.6, ge=0, le=1.0, description="Lowest reachable scale factor",
    )

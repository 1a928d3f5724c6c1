"""Volume and contract-length discount settings."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class VolumeTier(BaseModel):
    """One volume tier: ``discount`` applies from ``min_units`` upward."""

    model_config = ConfigDict(frozen=True)

    min_units: float = Field(ge=0, description="Discount-basis units at which this tier starts")
    discount: float = Field(ge=0, le=1.0, description="Discount fraction at this threshold")


class EaseOutCurve(BaseModel):
    """Quadratic ease-out from ``lower`` (0%) to ``upper`` (``max_discount``).

    discount = max_discount × (1 − (1 − n)²),  n = clamp((x − lower) / (upper − lower))
    """

    model_config = ConfigDict(frozen=True)

    lower: float = Field(default=0.0, ge=0, description="Input at which the curve starts (0%)")
    upper: float = Field(gt=0, description="Input at which the full discount is reached")
    max_discount: float = Field(ge=0, le=1.0, description="Discount fraction at and above ``upper``")

    @model_validator(mode="after")
    def _check_bounds(self) -> "EaseOutCurve":
        if self.upper <= self.lower:
            raise ValueError(f"upper ({self.upper}) must exceed lower ({self.lower})")
        return self


def _default_tiers() -> list[VolumeTier]:
    return [
        VolumeTier(min_units=120, discount=0.05),
        VolumeTier(min_units=240, discount=0.10),
        VolumeTier(min_units=360, discount=0.15),
        VolumeTier(min_units=500, discount=0.20),
    ]


class DiscountConfig(BaseModel):
    """Volume discount curve and the commitment basis it is measured on.

    Tiers may be given in any order and may repeat thresholds; the engine
    normalises them (dedupe keeping the max, implicit 0-unit / 0% point,
    ascending, monotonic) before use.
    """

    model_config = ConfigDict(frozen=True)

    volume_tiers: list[VolumeTier] = Field(default_factory=_default_tiers)
    volume_curve: Literal["interpolate", "step", "ease_out", "rate_duration"] = Field(
        default="interpolate",
        description="'interpolate' = linear between tier thresholds; "
                    "'step' = highest tier reached; "
                    "'ease_out' = max × (1 − (1 − n)²) over the top threshold; "
                    "'rate_duration' = rate_curve(monthly rate) + duration_curve(commit years), "
                    "tiers unused.",
    )
    rate_curve: EaseOutCurve = Field(
        default_factory=lambda: EaseOutCurve(lower=0, upper=20, max_discount=0.25),
        description="Monthly-rate curve for volume_curve='rate_duration'",
    )
    duration_curve: EaseOutCurve = Field(
        default_factory=lambda: EaseOutCurve(lower=0, upper=10, max_discount=0.18),
        description="Commitment-years curve for volume_curve='rate_duration'",
    )
    year1_volume_factor: float = Field(
        default=0.5, ge=0, le=1.0,
        description="Year 1 receives this fraction of the volume discount "
                    "(hardware cost limits how far Year 1 can go)",
    )
    year1_contract_factor: float = Field(
        default=1.0, ge=0, le=1.0,
        description="Fraction of the contract discount applied to Year 1 when "
                    "pricing.year1_includes_contract_discount is set",
    )
    commitment_weight: float = Field(
        default=0.5, ge=0, le=1.0,
        description="Blend between annual units (0) and total multi-year commitment (1) "
                    "as the volume-discount basis",
    )
    max_total_discount: float = Field(
        default=1.0, ge=0, le=1.0, description="Cap on any combined discount fraction",
    )
    strict_contract_terms: bool = Field(
        default=True,
        description="Reject contract lengths missing from contract_discounts "
                    "(False = legacy silent 0% discount)",
    )

    @model_validator(mode="after")
    def _check_tiers(self) -> "DiscountConfig":
        if not self.volume_tiers:
            raise ValueError("volume_tiers must contain at least one tier")
        return self

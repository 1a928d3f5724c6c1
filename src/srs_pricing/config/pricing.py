"""Price-setting policy — list prices, margins, overhead allocation, term gaps."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PricingConfig(BaseModel):
    """How costs and discounts become customer prices.

    ``year2_basis`` selects the engine variant:

    * ``cost_plus`` — Year-2+ list price is derived from blended installed-base
      cost + overhead at ``baseline_contract_years``, marked up by
      ``target_margin_year2`` and grossed up for that term's contract discount.
    * ``fixed_list`` — Year-2+ list price is ``year2_list_price`` (the 2-layer
      engine).
    """

    model_config = ConfigDict(frozen=True)

    # --- List prices ---
    year1_list_price: float = Field(default=3_600.0, ge=0, description="Fixed Year-1 list price per unit ($)")
    year2_list_price: float = Field(
        default=1_550.0, ge=0,
        description="Year-2+ list price per unit per year ($). Only used when year2_basis='fixed_list'.",
    )
    year2_basis: Literal["cost_plus", "fixed_list"] = Field(
        default="cost_plus", description="Source of the Year-2+ list price",
    )
    year1_includes_contract_discount: bool = Field(
        default=False,
        description="Apply the contract-length discount to Year 1 as well (2-layer engine behaviour)",
    )

    # --- Rounding ---
    rounding_increment: float = Field(
        default=20.0, gt=0, description="All final prices round UP to a multiple of this ($)",
    )

    # --- Year-1 → Year-2 cost shifting ---
    year1_shift_factor: float = Field(
        default=0.0, ge=0, le=1.0,
        description="Fraction of the Year-1 base price deferred into Year 2+ "
                    "(spread evenly across contract_years − 1).",
    )

    # --- Margins ---
    target_margin_year1: float = Field(default=0.25, ge=0, description="Year-1 margin target (display / flags)")
    target_margin_year2: float = Field(default=0.30, ge=0, description="Year-2+ margin target")
    margin_basis: Literal["markup", "margin"] = Field(
        default="markup",
        description="'markup' → min net = cost × (1 + M); "
                    "'margin' → min net = cost ÷ (1 − M).",
    )

    # --- Overhead allocation ---
    overhead_year1_factor: float = Field(
        default=1.0, ge=0,
        description="Share of Year-1 overhead-per-unit charged against Year 1",
    )
    overhead_credit_enabled: bool = Field(
        default=False,
        description="Let Year-1 surplus offset blended Year-2+ overhead",
    )
    overhead_credit_cap_years: int = Field(
        default=3, ge=1,
        description="Maximum number of Year-2+ years the Year-1 surplus is spread across",
    )

    # --- Term structure ---
    baseline_contract_years: int = Field(
        default=10, ge=1,
        description="Contract length that anchors the Year-2+ minimum price "
                    "(usually the longest / most discounted term)",
    )
    min_gap_per_year: float = Field(
        default=20.0, ge=0, allow_inf_nan=False,
        description="Minimum Year-2+ price gap between adjacent contract lengths ($/yr). 0 disables.",
    )

    @model_validator(mode="after")
    def _check_margin_basis(self) -> "PricingConfig":
        if self.margin_basis == "margin" and self.target_margin_year2 >= 1.0:
            raise ValueError("target_margin_year2 must be < 1 when margin_basis='margin'")
        return self

"""Scenario — the four inputs to every pricing query."""

from pydantic import BaseModel, ConfigDict, Field


class QuoteScenario(BaseModel):
    """One customer commitment to price."""

    model_config = ConfigDict(frozen=True)

    monthly_rate: float = Field(gt=0, description="Units ordered per month")
    commit_years: float = Field(gt=0, description="Years the monthly rate is sustained")
    contract_years: int = Field(ge=1, description="Per-unit contract length (must be an offered term)")
    existing_fleet_units: float | None = Field(
        default=None, ge=0,
        description="Units already deployed. None → EngineConfig.fleet.existing_units.",
    )

"""Fixed overhead — independent of installed base."""

from pydantic import BaseModel, ConfigDict, Field


class OverheadConfig(BaseModel):
    """Annual fixed cost amortised across the installed base."""

    model_config = ConfigDict(frozen=True)

    dev_maintenance_ftes: float = Field(
        default=1.0, ge=0, description="FTEs for system development and maintenance",
    )
    additional_annual_cost: float = Field(default=0.0, ge=0, description="Other fixed annual costs ($)")

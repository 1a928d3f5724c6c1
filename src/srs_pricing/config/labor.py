"""Labor rates and per-unit hours."""

from pydantic import BaseModel, ConfigDict, Field


class LaborConfig(BaseModel):
    """Hourly rate, per-unit hours, and FTE sizing for overhead."""

    model_config = ConfigDict(frozen=True)

    hourly_rate: float = Field(default=35.0, ge=0, description="Loaded labor rate ($/hr)")
    fte_salary: float = Field(default=60_000.0, ge=0, description="Annual FTE salary ($)")
    fte_hours_per_year: float = Field(
        default=2_000.0, gt=0,
        description="Work hours per FTE (50 weeks × 40 hrs); sizes the support staffing figures",
    )
    build_hours_per_unit: float = Field(default=3.0, ge=0, description="One-time setup hours per unit")
    support_hours_per_unit_year: float = Field(
        default=8.0, ge=0,
        description="Base annual support hours per unit, before time decay and scale efficiency",
    )
    coordination_hours_per_unit_year: float = Field(
        default=4.0, ge=0, description="Coordination hours per unit, charged in Year 1",
    )

"""Hardware cost inputs."""

from pydantic import BaseModel, ConfigDict, Field


class HardwareConfig(BaseModel):
    """Per-unit hardware cost and its replacement cycle."""

    model_config = ConfigDict(frozen=True)

    unit_cost: float = Field(default=950.0, ge=0, description="Box + storage + enclosure ($)")
    replacement_cycle_years: float = Field(
        default=5.0, gt=0,
        description="Years before a unit is replaced. Drives the annual hardware "
                    "reserve = unit_cost / replacement_cycle_years.",
    )

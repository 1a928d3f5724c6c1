"""Optional per-unit license fees layered on top of hardware + support pricing."""

from pydantic import BaseModel, ConfigDict, Field


class LicensingConfig(BaseModel):
    """Flat per-unit license list prices and their discounts."""

    model_config = ConfigDict(frozen=True)

    year1_list_price: float = Field(default=0.0, ge=0, description="Year-1 license list price per unit ($)")
    year1_discount: float = Field(default=0.0, ge=0, le=1.0, description="Year-1 license discount fraction")
    year2_list_price: float = Field(
        default=0.0, ge=0, description="Year-2+ license list price per unit per year ($)",
    )
    year2_discount: float = Field(default=0.0, ge=0, le=1.0, description="Year-2+ license discount fraction")

    @property
    def year1_net(self) -> float:
        return self.year1_list_price * (1.0 - self.year1_discount)

    @property
    def year2_net(self) -> float:
        return self.year2_list_price * (1.0 - self.year2_discount)

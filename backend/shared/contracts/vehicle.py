"""
Vehicle pricing contracts.

A vehicle rate scales the flat daily transport estimate. Rates are
maintained through the admin endpoints and read by the transport
cost calculator.
"""

from typing import Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


VehicleType = Literal["Bike", "TukTuk", "Car", "Van", "SUV", "MiniBus", "LargeBus"]

# Used when the store has no record for a vehicle type
DEFAULT_VEHICLE_MULTIPLIERS: Dict[str, float] = {
    "Bike": 0.3,
    "TukTuk": 0.4,
    "Car": 1.0,
    "Van": 1.3,
    "SUV": 1.5,
    "MiniBus": 1.8,
    "LargeBus": 2.5,
}


class VehicleRate(BaseModel):
    """Multiplier record for one vehicle type."""

    model_config = ConfigDict(extra="ignore")

    type: VehicleType = Field(description="Vehicle type")
    multiplier: float = Field(default=1.0, ge=0, description="Scales the base transport cost")
    baseRate: Optional[float] = Field(
        default=50, description="Configured base cost (informational)"
    )


class VehicleRateUpdate(BaseModel):
    """Request to create or update a vehicle multiplier."""

    type: VehicleType = Field(description="Vehicle type to update")
    multiplier: float = Field(ge=0, description="New multiplier")

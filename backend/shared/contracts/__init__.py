"""Data contracts shared by the pricing pipeline and the API layer."""

from backend.shared.contracts.itinerary import (
    CostBreakdown,
    HotelOption,
    Itinerary,
    ItineraryDay,
    PlannerInput,
)
from backend.shared.contracts.vehicle import (
    DEFAULT_VEHICLE_MULTIPLIERS,
    VehicleRate,
    VehicleRateUpdate,
)

__all__ = [
    "CostBreakdown",
    "HotelOption",
    "Itinerary",
    "ItineraryDay",
    "PlannerInput",
    "DEFAULT_VEHICLE_MULTIPLIERS",
    "VehicleRate",
    "VehicleRateUpdate",
]

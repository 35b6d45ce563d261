"""
Vehicle multipliers.

Per-vehicle multipliers applied to the daily transport estimate, stored
in MongoDB and managed through the admin endpoints.
"""

from backend.vehicles.store import (
    InMemoryVehicleRateStore,
    MongoVehicleRateStore,
    VehicleRateStore,
    get_vehicle_rate_store,
)

__all__ = [
    "VehicleRateStore",
    "InMemoryVehicleRateStore",
    "MongoVehicleRateStore",
    "get_vehicle_rate_store",
]

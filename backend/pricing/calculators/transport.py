"""
Transport cost calculator.

A fixed daily estimate: the base cost scaled by the vehicle multiplier.
Origin and destination are accepted but do not affect the estimate.
"""

import asyncio
import logging
from typing import Optional

from backend.pricing.outcomes import CostOutcome
from backend.shared.contracts.vehicle import DEFAULT_VEHICLE_MULTIPLIERS
from backend.shared.parsing import round_half_up
from backend.vehicles.store import VehicleRateStore


logger = logging.getLogger(__name__)

BASE_TRANSPORT_COST = 50


def resolve_multiplier(vehicle_type: str, stored_multiplier: Optional[float]) -> float:
    """Stored multiplier, else the default table, else 1.0."""
    if stored_multiplier is not None:
        return stored_multiplier
    return DEFAULT_VEHICLE_MULTIPLIERS.get(vehicle_type, 1.0)


async def get_transport_cost(
    origin: Optional[str],
    destination: Optional[str],
    vehicle_type: Optional[str],
    rates: VehicleRateStore,
    base_cost: float = BASE_TRANSPORT_COST,
) -> CostOutcome:
    """
    Estimate one day's transport cost for the chosen vehicle.

    Args:
        origin: Previous night's location (unused)
        destination: This day's location (unused)
        vehicle_type: Vehicle type, defaults to "Car"
        rates: Vehicle multiplier store
        base_cost: Cost for a vehicle with multiplier 1.0

    Returns:
        CostOutcome with round(base_cost * multiplier). If the store
        fails, a fallback outcome carrying base_cost.
    """
    vehicle_type = vehicle_type or "Car"
    try:
        loop = asyncio.get_running_loop()
        stored = await loop.run_in_executor(None, rates.get, vehicle_type)
        multiplier = resolve_multiplier(
            vehicle_type, stored.multiplier if stored is not None else None
        )
        return CostOutcome.ok(round_half_up(base_cost * multiplier))
    except Exception as e:
        logger.exception(
            f"[transport] Vehicle rate lookup failed | vehicle={vehicle_type}, "
            f"route={origin} -> {destination}: {e}"
        )
        return CostOutcome.fallback(base_cost, f"vehicle rate lookup failed: {e}")

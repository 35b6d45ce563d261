"""
FastAPI endpoints for vehicle multipliers.

Admin endpoints for reading and updating the per-vehicle multipliers
used by the transport cost estimate.
"""

import asyncio
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from backend.shared.contracts.vehicle import (
    DEFAULT_VEHICLE_MULTIPLIERS,
    VehicleRate,
    VehicleRateUpdate,
)
from backend.vehicles.store import VehicleRateStore, get_vehicle_rate_store


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/vehicles", tags=["vehicles"])


def default_vehicle_rates() -> List[VehicleRate]:
    """The built-in multiplier table as VehicleRate records."""
    return [
        VehicleRate(type=vehicle_type, multiplier=multiplier)
        for vehicle_type, multiplier in DEFAULT_VEHICLE_MULTIPLIERS.items()
    ]


@router.get("", response_model=List[VehicleRate])
async def list_vehicle_rates(
    store: VehicleRateStore = Depends(get_vehicle_rate_store),
) -> List[VehicleRate]:
    """
    List vehicle multipliers.

    Returns the default table when nothing has been stored yet.
    """
    loop = asyncio.get_running_loop()
    try:
        rates = await loop.run_in_executor(None, store.list_all)
    except Exception as e:
        logger.exception("[vehicles] Failed to list vehicle rates")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to load vehicle rates: {str(e)}",
        )
    return rates or default_vehicle_rates()


@router.post("/update", response_model=VehicleRate)
async def update_vehicle_rate(
    request: VehicleRateUpdate,
    store: VehicleRateStore = Depends(get_vehicle_rate_store),
) -> VehicleRate:
    """Create or update the multiplier for one vehicle type."""
    loop = asyncio.get_running_loop()
    try:
        rate = await loop.run_in_executor(
            None, store.upsert, request.type, request.multiplier
        )
    except Exception as e:
        logger.exception(f"[vehicles] Failed to update vehicle rate | type={request.type}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update vehicle rate: {str(e)}",
        )

    logger.info(f"[vehicles] Vehicle rate updated | type={rate.type}, multiplier={rate.multiplier}")
    return rate

"""
FastAPI endpoints for itinerary pricing.

Provides the refresh endpoint that re-prices an AI-generated itinerary
with live hotel, ticket and transport data.
"""

import logging
import uuid
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from backend.pricing.errors import ItineraryValidationError
from backend.pricing.refresh import refresh_itinerary_prices
from backend.pricing.schemas import RefreshPricesRequest
from backend.pricing.toolkit import PricingToolkit, build_default_toolkit


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/plans", tags=["pricing"])

# Pricing services (shared across requests)
_toolkit: Optional[PricingToolkit] = None


def get_pricing_toolkit() -> PricingToolkit:
    """Get or create the shared pricing toolkit."""
    global _toolkit
    if _toolkit is None:
        _toolkit = build_default_toolkit()
    return _toolkit


@router.post("/refresh-prices")
async def refresh_prices(
    request: RefreshPricesRequest,
    toolkit: PricingToolkit = Depends(get_pricing_toolkit),
) -> Dict[str, Any]:
    """
    Refresh an itinerary's costs with live prices.

    Lookups that fail fall back to the itinerary's existing estimates, so
    a partially unavailable provider still yields a normal response.

    Returns:
        The itinerary with updated days and estimatedTotalBudget
    """
    session_id = str(uuid.uuid4())
    _log = f"[session={session_id}] [graph=price_refresh] [api=refresh-prices] "

    try:
        return await refresh_itinerary_prices(
            request.itinerary,
            request.planner_input,
            toolkit=toolkit,
            session_id=session_id,
        )
    except ItineraryValidationError as e:
        logger.warning(f"{_log}Rejected request: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception:
        logger.exception(f"{_log}Price refresh failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to refresh prices",
        )

"""
Itinerary price refresh.

Entry point used by the HTTP layer: validates the request shape, runs the
price refresh graph and returns the refreshed itinerary.
"""

import logging
import uuid
from typing import Any, Dict, Optional

from backend.pricing.errors import ItineraryValidationError
from backend.pricing.graph.build import create_price_refresh_graph
from backend.pricing.toolkit import PricingToolkit


logger = logging.getLogger(__name__)


def validate_itinerary(itinerary: Any) -> None:
    """
    Reject requests without a day list.

    Raises:
        ItineraryValidationError: If `itinerary` or `itinerary.days` is missing
    """
    if not isinstance(itinerary, dict) or not isinstance(itinerary.get("days"), list):
        raise ItineraryValidationError("Invalid itinerary data")


async def refresh_itinerary_prices(
    itinerary: Optional[Dict[str, Any]],
    planner_input: Optional[Dict[str, Any]],
    toolkit: Optional[PricingToolkit] = None,
    session_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Re-price every day of an itinerary with live data.

    `days` and `estimatedTotalBudget` are replaced; every other itinerary
    field is returned unchanged.

    Args:
        itinerary: Itinerary with a `days` list
        planner_input: Planner form input (travelers, vehicleType, ...)
        toolkit: Services used for lookups. Production services if not provided.
        session_id: Request identifier for log lines. Generated if not provided.

    Returns:
        The refreshed itinerary

    Raises:
        ItineraryValidationError: If the itinerary has no day list. Raised
            before any lookup is made.
    """
    validate_itinerary(itinerary)

    session_id = session_id or str(uuid.uuid4())
    graph = create_price_refresh_graph(toolkit=toolkit)

    initial_state = {
        "itinerary": itinerary,
        "planner_input": planner_input or {},
        "traveler_count": 1,
        "updated_days": None,
        "refreshed_itinerary": None,
        "fallbacks": [],
        "messages": [],
        "session_id": session_id,
    }

    result = await graph.ainvoke(initial_state)
    return result["refreshed_itinerary"]

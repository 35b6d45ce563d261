"""
Price refresh nodes for the LangGraph workflow.

prepare -> enrich_days -> aggregate. Days are enriched concurrently with
a single all-or-nothing join: an unexpected error in any day fails the
whole refresh.
"""

import asyncio
import logging
from typing import Any, Dict

from backend.pricing.nodes.enrich import enrich_day
from backend.pricing.policy import resolve_traveler_count
from backend.pricing.schemas import PriceRefreshState
from backend.pricing.toolkit import PricingToolkit
from backend.shared.contracts.itinerary import PlannerInput
from backend.shared.logging.config import log_refresh_event


logger = logging.getLogger(__name__)


def prepare_node(state: PriceRefreshState) -> Dict[str, Any]:
    """
    Derive the party size once for every day.

    Args:
        state: Refresh state with itinerary and planner_input

    Returns:
        Dictionary with traveler_count
    """
    session_id = state.get("session_id", "unknown")
    _log = f"[session={session_id}] [graph=price_refresh] [node=prepare] "

    planner_input = PlannerInput.model_validate(state.get("planner_input") or {})
    traveler_count = resolve_traveler_count(planner_input)

    logger.info(
        f"{_log}Refreshing prices | days={len(state['itinerary']['days'])}, "
        f"travelers={traveler_count}, vehicle={planner_input.vehicleType}, "
        f"hotel_rating={planner_input.hotelRating or 'any'}, guide={planner_input.includeGuide}"
    )

    return {"traveler_count": traveler_count}


async def enrich_days_node(state: PriceRefreshState, toolkit: PricingToolkit) -> Dict[str, Any]:
    """
    Re-price every day concurrently.

    Args:
        state: Refresh state with itinerary, planner_input and traveler_count
        toolkit: Lookup, vehicle store and config

    Returns:
        Dictionary with updated_days and the collected fallback records
    """
    session_id = state.get("session_id", "unknown")
    _log = f"[session={session_id}] [graph=price_refresh] [node=enrich_days] "

    days = state["itinerary"]["days"]
    planner_input = PlannerInput.model_validate(state.get("planner_input") or {})

    results = await asyncio.gather(
        *(
            enrich_day(
                day,
                index,
                days,
                planner_input,
                state["traveler_count"],
                toolkit,
                session_id=session_id,
            )
            for index, day in enumerate(days)
        )
    )

    fallbacks = [record for result in results for record in result.fallbacks]
    for record in fallbacks:
        logger.warning(
            f"{_log}Using fallback | day={record['day']}, source={record['source']}, "
            f"status={record['status']}, reason={record['reason']}"
        )

    return {
        "updated_days": [result.day for result in results],
        "fallbacks": fallbacks,
    }


def aggregate_node(state: PriceRefreshState) -> Dict[str, Any]:
    """
    Assemble the refreshed itinerary and its trip total.

    Args:
        state: Refresh state with itinerary and updated_days

    Returns:
        Dictionary with refreshed_itinerary and a summary message
    """
    session_id = state.get("session_id", "unknown")
    _log = f"[session={session_id}] [graph=price_refresh] [node=aggregate] "

    days = state["updated_days"] or []
    total_budget = sum(day["estimatedCost"]["total"] for day in days)

    refreshed = {
        **state["itinerary"],
        "days": days,
        "estimatedTotalBudget": total_budget,
    }

    fallbacks = state.get("fallbacks") or []
    logger.info(
        f"{_log}Refresh complete | days={len(days)}, "
        f"estimatedTotalBudget={total_budget}, fallbacks={len(fallbacks)}"
    )
    log_refresh_event(
        "price_refresh_complete",
        state,
        extra={"estimated_total_budget": total_budget, "fallbacks": fallbacks},
    )

    return {
        "refreshed_itinerary": refreshed,
        "messages": [
            {
                "role": "system",
                "agent": "price_refresh",
                "content": (
                    f"Refreshed {len(days)} days. "
                    f"Estimated total budget: ${total_budget:.2f}"
                ),
            }
        ],
    }

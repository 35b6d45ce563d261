"""
Day enrichment.

Re-prices a single itinerary day: transport, hotel and activity tickets
are looked up concurrently, zero results fall back to the day's prior
estimate, and the day total is recomputed.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from backend.pricing.calculators.hotels import HotelQuote, get_hotel_options
from backend.pricing.calculators.tickets import get_ticket_price
from backend.pricing.calculators.transport import get_transport_cost
from backend.pricing.outcomes import CostOutcome
from backend.pricing.policy import guide_cost, is_accommodation_applicable
from backend.pricing.toolkit import PricingToolkit
from backend.shared.contracts.itinerary import ItineraryDay, PlannerInput


logger = logging.getLogger(__name__)


@dataclass
class EnrichedDay:
    """A re-priced day plus the non-live outcomes behind it."""

    day: Dict[str, Any]
    fallbacks: List[Dict[str, Any]] = field(default_factory=list)


async def _departure_day_quote() -> HotelQuote:
    return HotelQuote(outcome=CostOutcome.absent("no accommodation on the final day"))


def resolve_origin(
    index: int,
    days: List[Dict[str, Any]],
    start_point: Optional[str],
) -> Optional[str]:
    """Previous day's location from the input list, or the start point for day 0."""
    if index == 0:
        return start_point
    previous = days[index - 1]
    return previous.get("location") if isinstance(previous, dict) else None


async def enrich_day(
    day: Dict[str, Any],
    index: int,
    days: List[Dict[str, Any]],
    planner_input: PlannerInput,
    traveler_count: int,
    toolkit: PricingToolkit,
    session_id: Optional[str] = None,
) -> EnrichedDay:
    """
    Re-price one day of the itinerary.

    Lookup failures never raise here; they come back from the calculators
    as fallback outcomes. Any other exception propagates and fails the
    whole refresh.

    Args:
        day: The day as received (extra fields are kept)
        index: Position of the day in the itinerary
        days: The full input day list, used to resolve the origin
        planner_input: Parsed planner form input
        traveler_count: Party size, already floored at 1
        toolkit: Lookup, vehicle store and config
        session_id: Request identifier for log lines

    Returns:
        EnrichedDay with the updated day and its fallback records
    """
    _log = f"[session={session_id}] [graph=price_refresh] [node=enrich_days] [day={index + 1}] "
    config = toolkit.config

    current = ItineraryDay.model_validate(day)
    prior = current.estimatedCost
    has_accommodation = is_accommodation_applicable(index, len(days))
    origin = resolve_origin(index, days, planner_input.startPoint)
    activity_names = current.activity_names()

    logger.debug(
        f"{_log}Pricing day | location={current.location}, origin={origin}, "
        f"activities={len(activity_names)}, accommodation={has_accommodation}"
    )

    if has_accommodation:
        hotel_call = get_hotel_options(
            toolkit.lookup,
            current.location,
            current.date,
            planner_input.hotelRating,
            traveler_count,
            currency=config.currency,
            country=config.country,
            language=config.language,
            limit=config.max_hotel_options,
        )
    else:
        hotel_call = _departure_day_quote()

    ticket_calls = [
        get_ticket_price(
            toolkit.lookup,
            name,
            google_domain=config.google_domain,
            country=config.country,
            language=config.language,
        )
        for name in activity_names
    ]

    transport, hotel, ticket_outcomes = await asyncio.gather(
        get_transport_cost(
            origin,
            current.location,
            planner_input.vehicleType,
            toolkit.vehicle_rates,
            base_cost=config.base_transport_cost,
        ),
        hotel_call,
        asyncio.gather(*ticket_calls),
    )

    # Hotel: no fallback on the final day
    if not has_accommodation:
        hotel_price = 0
        hotel_options: List[Dict[str, Any]] = []
    else:
        hotel_price = hotel.selected_price or prior.accommodation
        hotel_options = hotel.all_options

    # Tickets are per person
    ticket_total = sum(outcome.value for outcome in ticket_outcomes) * max(traveler_count, 1)
    tickets = ticket_total or prior.tickets

    transport_cost = transport.value or prior.transportFuel

    miscellaneous = prior.miscellaneous + guide_cost(planner_input, config.guide_daily_cost)
    total = transport_cost + hotel_price + tickets + prior.food + miscellaneous

    fallbacks = []
    context = {"day": index + 1, "location": current.location}
    if not transport.is_live:
        fallbacks.append(transport.describe("transport", **context))
    if has_accommodation and not hotel.outcome.is_live:
        fallbacks.append(hotel.outcome.describe("hotel", **context))
    for name, outcome in zip(activity_names, ticket_outcomes):
        if not outcome.is_live:
            fallbacks.append(outcome.describe("tickets", activity=name, **context))

    prior_cost = day.get("estimatedCost") or {}
    updated = {
        **day,
        "estimatedCost": {
            **prior_cost,
            "transportFuel": transport_cost,
            "accommodation": hotel_price,
            "tickets": tickets,
            "food": prior.food,
            "miscellaneous": miscellaneous,
            "total": total,
        },
        "hotelOptions": hotel_options,
    }

    logger.info(
        f"{_log}Day priced | transport={transport_cost}, hotel={hotel_price}, "
        f"tickets={tickets}, misc={miscellaneous}, total={total}, "
        f"fallbacks={len(fallbacks)}"
    )

    return EnrichedDay(day=updated, fallbacks=fallbacks)

"""
Hotel options calculator.

Searches Google Hotels for one night at a location and turns the result
into a short list of priced options. The cheapest valid option is
recommended and its nightly rate becomes the day's accommodation cost.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Tuple

from backend.pricing.lookup import PriceLookup
from backend.pricing.outcomes import CostOutcome
from backend.shared.contracts.itinerary import HotelOption
from backend.shared.parsing import parse_price


logger = logging.getLogger(__name__)

HOTELS_ENGINE = "google_hotels"
MAX_HOTEL_OPTIONS = 5


@dataclass
class HotelQuote:
    """Selected nightly price plus the options shown to the user."""

    outcome: CostOutcome
    all_options: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def selected_price(self) -> float:
        return self.outcome.value


def build_hotel_query(location: Optional[str], star_rating: Optional[str]) -> str:
    """Query text for the hotel search (also the cache key)."""
    if star_rating:
        return f"{star_rating} star hotel in {location}"
    return f"best hotels in {location}"


def stay_dates(check_in_date: Optional[str]) -> Tuple[str, str]:
    """
    One-night stay dates as YYYY-MM-DD strings.

    Args:
        check_in_date: Check-in date (YYYY-MM-DD, a longer ISO timestamp is
            truncated). Defaults to today.

    Raises:
        ValueError: If the date cannot be parsed
    """
    start = date.fromisoformat(check_in_date[:10]) if check_in_date else date.today()
    return start.isoformat(), (start + timedelta(days=1)).isoformat()


def _to_option(prop: Dict[str, Any]) -> HotelOption:
    rate = prop.get("rate_per_night") or {}
    images = prop.get("images") or []
    return HotelOption(
        name=prop.get("name") or "",
        price=parse_price(rate.get("lowest")),
        rating=prop.get("overall_rating"),
        image=images[0].get("thumbnail") if images else None,
        description=prop.get("description"),
        link=prop.get("link"),
    )


def select_hotel_options(
    properties: List[Dict[str, Any]],
    limit: int = MAX_HOTEL_OPTIONS,
) -> List[Dict[str, Any]]:
    """
    Normalize provider properties into ranked hotel options.

    Malformed properties and options without a positive price are
    dropped one by one, the rest are ordered by
    price (ties keep provider order) and cut to `limit`. The first option
    is the only one marked as recommended.

    Args:
        properties: `properties` list from a google_hotels response
        limit: Maximum number of options to keep

    Returns:
        List of HotelOption dicts
    """
    options = []
    for prop in properties:
        if not isinstance(prop, dict):
            continue
        try:
            option = _to_option(prop)
        except (ValueError, TypeError, AttributeError) as e:
            logger.debug(f"[hotels] Skipping malformed property {prop.get('name')!r}: {e}")
            continue
        if option.price > 0:
            options.append(option)

    # Recommended option (index 0) must be the cheapest; sort is stable
    options.sort(key=lambda opt: opt.price)
    options = options[:limit]

    for index, opt in enumerate(options):
        opt.isRecommended = index == 0

    return [opt.model_dump() for opt in options]


async def get_hotel_options(
    lookup: PriceLookup,
    location: Optional[str],
    check_in_date: Optional[str],
    star_rating: Optional[str],
    traveler_count: int,
    currency: str = "USD",
    country: str = "us",
    language: str = "en",
    limit: int = MAX_HOTEL_OPTIONS,
) -> HotelQuote:
    """
    Price one night at `location` and list the hotel options.

    Never raises: lookup failures and malformed responses produce a
    fallback quote with price 0 and no options.

    Args:
        lookup: Cached search lookup
        location: Where the night is spent
        check_in_date: Check-in date (YYYY-MM-DD), defaults to today
        star_rating: Preferred star rating, if any
        traveler_count: Party size sent as the adult count
        currency: Currency for the rates
        country: Google `gl` parameter
        language: Google `hl` parameter
        limit: Maximum number of options to keep

    Returns:
        HotelQuote with the recommended nightly price and all options
    """
    try:
        check_in, check_out = stay_dates(check_in_date)
        query = build_hotel_query(location, star_rating)

        result = await lookup.fetch(
            HOTELS_ENGINE,
            query,
            {
                "check_in_date": check_in,
                "check_out_date": check_out,
                "currency": currency,
                "adults": str(traveler_count),
                "gl": country,
                "hl": language,
            },
        )

        options = select_hotel_options(result.get("properties") or [], limit=limit)
        if not options:
            return HotelQuote(outcome=CostOutcome.absent("no priced hotel options"))

        return HotelQuote(outcome=CostOutcome.ok(options[0]["price"]), all_options=options)

    except Exception as e:
        logger.warning(f"[hotels] Hotel price lookup failed | location={location}: {e}")
        return HotelQuote(outcome=CostOutcome.fallback(0, f"hotel lookup failed: {e}"))

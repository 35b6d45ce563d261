"""
Itinerary pricing.

Re-prices AI-generated itineraries with live data: SerpAPI hotel and
ticket searches behind a 30-day cache, plus vehicle-based transport
estimates. Individual lookup failures fall back to the itinerary's
existing estimates.
"""

from backend.pricing.refresh import refresh_itinerary_prices
from backend.pricing.errors import ItineraryValidationError, PriceLookupError
from backend.pricing.schemas import PriceRefreshState

__all__ = [
    "refresh_itinerary_prices",
    "ItineraryValidationError",
    "PriceLookupError",
    "PriceRefreshState",
]

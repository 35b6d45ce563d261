"""Cost calculators for transport, hotels and activity tickets."""

from backend.pricing.calculators.transport import get_transport_cost
from backend.pricing.calculators.hotels import HotelQuote, get_hotel_options
from backend.pricing.calculators.tickets import get_ticket_price

__all__ = ["get_transport_cost", "HotelQuote", "get_hotel_options", "get_ticket_price"]

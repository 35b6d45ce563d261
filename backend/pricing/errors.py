"""
Exceptions raised by the price refresh pipeline.
"""


class ItineraryValidationError(Exception):
    """Raised when a refresh request does not carry a usable itinerary."""

    pass


class PriceLookupError(Exception):
    """Raised when a live price lookup cannot produce a result."""

    pass

"""
Shared infrastructure for the backend.

Modules:
- search: SerpAPI client with retry logic
- logging: Structured JSON logging
- contracts: Itinerary and vehicle data contracts
- parsing: Price text parsing
"""

from backend.shared.search.client import get_api_key, run_search
from backend.shared.logging.config import setup_logging, log_refresh_event

__all__ = [
    "get_api_key",
    "run_search",
    "setup_logging",
    "log_refresh_event",
]

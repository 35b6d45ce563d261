"""
Graph configuration for the price refresh pipeline.

Centralizes the pricing constants and lookup tunables so they can be
adjusted without touching the node or calculator code.
"""

import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import load_dotenv
load_dotenv()


# 30 days in milliseconds
CACHE_TTL_MS = 30 * 24 * 60 * 60 * 1000


@dataclass
class PricingGraphConfig:
    """
    Configuration for the price refresh graph.

    Attributes:
        base_transport_cost: Flat daily transport estimate before the vehicle multiplier
        guide_daily_cost: Added to miscellaneous when a guide is included
        cache_ttl_ms: Age after which a cached search result is ignored
        cache_path: Location of the JSON search cache file
        max_hotel_options: Number of hotel options kept per day
        currency: Currency requested from the hotel search
        country: Google `gl` parameter
        language: Google `hl` parameter
        google_domain: Domain used for general web searches
        search_max_attempts: Attempts per provider call on transport errors
        search_retry_min_wait: Minimum backoff between attempts (seconds)
        search_retry_max_wait: Maximum backoff between attempts (seconds)
    """

    # Cost constants
    base_transport_cost: float = 50
    guide_daily_cost: float = 35

    # Cache
    cache_ttl_ms: int = CACHE_TTL_MS
    cache_path: str = os.getenv("PRICE_CACHE_PATH", "serpapi_cache.json")

    # Hotel search
    max_hotel_options: int = 5
    currency: str = "USD"
    country: str = "us"
    language: str = "en"
    google_domain: str = "google.com"

    # Retry configuration (used by tenacity in shared/search/client.py)
    search_max_attempts: int = 3
    search_retry_min_wait: int = 2  # seconds
    search_retry_max_wait: int = 10  # seconds


# Default configuration instance
DEFAULT_CONFIG = PricingGraphConfig()


def get_config(
    base_transport_cost: Optional[float] = None,
    guide_daily_cost: Optional[float] = None,
    cache_ttl_ms: Optional[int] = None,
    cache_path: Optional[str] = None,
    max_hotel_options: Optional[int] = None,
    currency: Optional[str] = None,
    country: Optional[str] = None,
    language: Optional[str] = None,
    google_domain: Optional[str] = None,
    search_max_attempts: Optional[int] = None,
    search_retry_min_wait: Optional[int] = None,
    search_retry_max_wait: Optional[int] = None,
) -> PricingGraphConfig:
    """
    Create a configuration with optional overrides.

    Any argument left as None keeps the DEFAULT_CONFIG value; zero and
    empty values are applied as given.

    Args:
        base_transport_cost: Override for the base transport cost
        guide_daily_cost: Override for the guide daily cost
        cache_ttl_ms: Override for the cache TTL
        cache_path: Override for the cache file location
        max_hotel_options: Override for the number of hotel options kept
        currency: Override for the hotel search currency
        country: Override for the Google `gl` parameter
        language: Override for the Google `hl` parameter
        google_domain: Override for the general search domain
        search_max_attempts: Override for attempts per provider call
        search_retry_min_wait: Override for the minimum retry backoff
        search_retry_max_wait: Override for the maximum retry backoff

    Returns:
        PricingGraphConfig with specified overrides applied
    """
    overrides = {
        "base_transport_cost": base_transport_cost,
        "guide_daily_cost": guide_daily_cost,
        "cache_ttl_ms": cache_ttl_ms,
        "cache_path": cache_path,
        "max_hotel_options": max_hotel_options,
        "currency": currency,
        "country": country,
        "language": language,
        "google_domain": google_domain,
        "search_max_attempts": search_max_attempts,
        "search_retry_min_wait": search_retry_min_wait,
        "search_retry_max_wait": search_retry_max_wait,
    }
    return replace(
        DEFAULT_CONFIG,
        **{name: value for name, value in overrides.items() if value is not None},
    )

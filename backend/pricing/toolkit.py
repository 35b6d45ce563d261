"""
Collaborators used by the price refresh pipeline.

Bundles the price lookup, vehicle rate store and configuration so the
graph can be built against production services or test doubles.
"""

from dataclasses import dataclass, field
from typing import Optional

from backend.pricing.cache import JsonFileCacheBackend, SearchCache
from backend.pricing.graph.config import DEFAULT_CONFIG, PricingGraphConfig
from backend.pricing.lookup import PriceLookup
from backend.shared.search.client import make_search_fn
from backend.vehicles.store import VehicleRateStore, get_vehicle_rate_store


@dataclass
class PricingToolkit:
    """
    Services the refresh pipeline depends on.

    Attributes:
        lookup: Cached search lookup for hotel and ticket prices
        vehicle_rates: Store of vehicle multipliers
        config: Pricing constants and tunables
    """

    lookup: PriceLookup
    vehicle_rates: VehicleRateStore
    config: PricingGraphConfig = field(default_factory=lambda: DEFAULT_CONFIG)


def build_default_toolkit(config: Optional[PricingGraphConfig] = None) -> PricingToolkit:
    """
    Build the production toolkit: JSON file cache, SerpAPI, shared vehicle store.

    Args:
        config: Optional configuration. Uses DEFAULT_CONFIG if not provided.

    Returns:
        PricingToolkit wired to real services
    """
    if config is None:
        config = DEFAULT_CONFIG

    cache = SearchCache(JsonFileCacheBackend(config.cache_path), ttl_ms=config.cache_ttl_ms)
    search_fn = make_search_fn(
        max_attempts=config.search_max_attempts,
        min_wait=config.search_retry_min_wait,
        max_wait=config.search_retry_max_wait,
    )
    return PricingToolkit(
        lookup=PriceLookup(cache, search_fn=search_fn),
        vehicle_rates=get_vehicle_rate_store(),
        config=config,
    )

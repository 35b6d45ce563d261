"""
Graph configuration for the price refresh pipeline.

The compiled graph lives in `backend.pricing.graph.build`.
"""

from backend.pricing.graph.config import DEFAULT_CONFIG, PricingGraphConfig, get_config

__all__ = ["DEFAULT_CONFIG", "PricingGraphConfig", "get_config"]

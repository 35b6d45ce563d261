"""Node functions for the price refresh graph."""

from backend.pricing.nodes.enrich import EnrichedDay, enrich_day
from backend.pricing.nodes.refresh import aggregate_node, enrich_days_node, prepare_node

__all__ = [
    "EnrichedDay",
    "enrich_day",
    "prepare_node",
    "enrich_days_node",
    "aggregate_node",
]

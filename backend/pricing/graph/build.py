"""
Graph construction for the price refresh pipeline.

Builds and compiles the LangGraph workflow that re-prices an itinerary.
"""

from typing import Optional

from langgraph.graph import StateGraph, END

from backend.pricing.schemas import PriceRefreshState
from backend.pricing.nodes.refresh import prepare_node, enrich_days_node, aggregate_node
from backend.pricing.graph.config import PricingGraphConfig
from backend.pricing.toolkit import PricingToolkit, build_default_toolkit


def create_price_refresh_graph(
    toolkit: Optional[PricingToolkit] = None,
    config: Optional[PricingGraphConfig] = None,
):
    """
    Create and compile the LangGraph workflow for a price refresh.

    The graph structure is:
        Entry -> prepare -> enrich_days -> aggregate -> END

    Args:
        toolkit: Services used for lookups. Built from `config` if not provided.
        config: Optional configuration, only used when building the toolkit.
            Uses DEFAULT_CONFIG if not provided.

    Returns:
        Compiled LangGraph application ready for execution.
    """
    if toolkit is None:
        toolkit = build_default_toolkit(config)

    async def enrich_days(state: PriceRefreshState):
        return await enrich_days_node(state, toolkit)

    graph = StateGraph(PriceRefreshState)

    # Add nodes
    graph.add_node("prepare", prepare_node)
    graph.add_node("enrich_days", enrich_days)
    graph.add_node("aggregate", aggregate_node)

    # Set entry point and edges
    graph.set_entry_point("prepare")
    graph.add_edge("prepare", "enrich_days")
    graph.add_edge("enrich_days", "aggregate")
    graph.add_edge("aggregate", END)

    # Compile
    app = graph.compile()

    return app

"""
Schemas for the price refresh pipeline.

Defines the LangGraph state schema and the HTTP request model.
"""

import operator
from typing import Any, Annotated, Dict, List, Optional, TypedDict

from pydantic import BaseModel, ConfigDict, Field


class PriceRefreshState(TypedDict):
    """
    State schema for the price refresh graph.

    `itinerary` and `planner_input` are the raw request bodies. The days
    list inside `itinerary` is never modified, so every day's origin is
    read from the input rather than from another day's result.
    """

    # Request
    itinerary: Dict[str, Any]
    planner_input: Dict[str, Any]

    # Derived once before the per-day fan-out
    traveler_count: int

    # Results
    updated_days: Optional[List[Dict[str, Any]]]
    refreshed_itinerary: Optional[Dict[str, Any]]

    # Process tracking
    fallbacks: Annotated[List[dict], operator.add]
    messages: Annotated[List[dict], operator.add]
    session_id: Optional[str]


class RefreshPricesRequest(BaseModel):
    """Body of POST /api/plans/refresh-prices."""

    model_config = ConfigDict(populate_by_name=True)

    itinerary: Optional[Dict[str, Any]] = Field(
        default=None, description="Itinerary produced by the itinerary generator"
    )
    planner_input: Optional[Dict[str, Any]] = Field(
        default=None,
        alias="input",
        description="Planner form input (travelers, vehicleType, hotelRating, ...)",
    )

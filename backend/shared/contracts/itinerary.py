"""
Itinerary contracts.

Defines the itinerary structure produced by the AI itinerary generator
and re-priced by the refresh pipeline, plus the planner form input that
drives the refresh. Every model allows extra fields so anything the
generator adds passes through a refresh untouched.
"""

from typing import Any, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from backend.shared.parsing import parse_price


class CostBreakdown(BaseModel):
    """
    Per-day cost breakdown.

    `total` is transportFuel + accommodation + tickets + food +
    miscellaneous. Guide cost, when present, is folded into miscellaneous.
    """

    model_config = ConfigDict(extra="allow")

    accommodation: float = Field(default=0, description="Hotel cost for the night")
    tickets: float = Field(default=0, description="Entrance tickets for the whole party")
    transportFuel: float = Field(default=0, description="Daily transport cost")
    food: float = Field(default=0, description="Meals (never re-priced)")
    miscellaneous: float = Field(
        default=0, description="Tips, parking, highway charges and guide"
    )
    total: float = Field(default=0, description="Sum of the fields above")

    @field_validator(
        "accommodation",
        "tickets",
        "transportFuel",
        "food",
        "miscellaneous",
        "total",
        mode="before",
    )
    @classmethod
    def _coerce_amount(cls, value: Any) -> float:
        return parse_price(value)


class HotelOption(BaseModel):
    """A hotel option returned by the live hotel search."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(default="", description="Property name")
    price: float = Field(description="Lowest nightly rate")
    rating: Optional[float] = Field(default=None, description="Overall guest rating")
    image: Optional[str] = Field(default=None, description="Thumbnail URL")
    description: Optional[str] = Field(default=None, description="Short description")
    link: Optional[str] = Field(default=None, description="Booking or property link")
    isRecommended: bool = Field(default=False, description="Cheapest valid option")


class ItineraryDay(BaseModel):
    """A single day in the itinerary."""

    model_config = ConfigDict(extra="allow")

    day: Optional[Union[int, str]] = Field(default=None, description="Day number (1-indexed)")
    location: Optional[str] = Field(default=None, description="Where the night is spent")
    date: Optional[str] = Field(default=None, description="Date in YYYY-MM-DD format")
    activities: List[Union[str, dict]] = Field(
        default_factory=list,
        description="Activity names, or objects with a `name` field",
    )
    estimatedCost: CostBreakdown = Field(default_factory=CostBreakdown)
    hotelOptions: List[Any] = Field(
        default_factory=list, description="Replaced on every refresh"
    )

    @field_validator("estimatedCost", mode="before")
    @classmethod
    def _default_cost(cls, value: Any) -> Any:
        return value if value is not None else {}

    @field_validator("activities", mode="before")
    @classmethod
    def _default_activities(cls, value: Any) -> Any:
        return value if value is not None else []

    def activity_names(self) -> List[str]:
        """Names of this day's activities, skipping unnamed entries."""
        names = []
        for activity in self.activities:
            name = activity if isinstance(activity, str) else activity.get("name")
            if name:
                names.append(name)
        return names


class Itinerary(BaseModel):
    """Trip-level itinerary."""

    model_config = ConfigDict(extra="allow")

    days: List[ItineraryDay] = Field(description="Day-by-day plan")
    estimatedTotalBudget: float = Field(
        default=0, description="Sum of every day's estimatedCost.total"
    )

    @field_validator("estimatedTotalBudget", mode="before")
    @classmethod
    def _coerce_budget(cls, value: Any) -> float:
        return parse_price(value)


class PlannerInput(BaseModel):
    """Planner form input that drives a price refresh."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    travelers: Optional[int] = Field(default=None, description="Explicit party size")
    adults: Optional[int] = Field(default=None)
    children: Optional[int] = Field(default=None)
    vehicleType: str = Field(default="Car", description="Vehicle used for the trip")
    hotelRating: Optional[str] = Field(
        default=None, description="Preferred hotel star rating"
    )
    startPoint: Optional[str] = Field(
        default=None, description="Where the trip starts (origin for day 1)"
    )
    includeGuide: bool = Field(
        default=False,
        validation_alias=AliasChoices("includeGuide", "isGuideIncluded"),
    )

    @field_validator("travelers", "adults", "children", mode="before")
    @classmethod
    def _blank_count(cls, value: Any) -> Any:
        return None if value in ("", None) else value

    @field_validator("hotelRating", mode="before")
    @classmethod
    def _rating_text(cls, value: Any) -> Optional[str]:
        if value is None or value == "":
            return None
        return str(value)

    @field_validator("vehicleType", mode="before")
    @classmethod
    def _default_vehicle(cls, value: Any) -> str:
        return value or "Car"

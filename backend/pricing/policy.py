"""
Pricing policy rules.

Small named rules applied by the day enrichment step, kept out of the
orchestration code so they can be tested on their own.
"""

from backend.shared.contracts.itinerary import PlannerInput

GUIDE_DAILY_COST = 35


def is_accommodation_applicable(day_index: int, total_days: int) -> bool:
    """No hotel night is booked on the departure (final) day."""
    return day_index != total_days - 1


def resolve_traveler_count(planner_input: PlannerInput) -> int:
    """
    Party size used for ticket totals and hotel searches.

    An explicit `travelers` value wins; otherwise adults + children are
    summed, missing counts treated as 0. The result is never below 1.
    """
    if planner_input.travelers:
        count = planner_input.travelers
    else:
        count = (planner_input.adults or 0) + (planner_input.children or 0)
    return max(count, 1)


def guide_cost(planner_input: PlannerInput, daily_rate: float = GUIDE_DAILY_COST) -> float:
    return daily_rate if planner_input.includeGuide else 0

"""
Ticket price calculator.

Asks Google for "<activity> ticket price" and reads the price from the
answer box or the knowledge graph.
"""

import logging
from typing import Any, Dict, Optional

from backend.pricing.lookup import PriceLookup
from backend.pricing.outcomes import CostOutcome
from backend.shared.parsing import parse_price


logger = logging.getLogger(__name__)

SEARCH_ENGINE = "google"

# Checked in order; the first field present wins
PRICE_FIELDS = (
    ("answer_box", "price"),
    ("knowledge_graph", "ticket_admission"),
)


def extract_ticket_price(result: Dict[str, Any]) -> Optional[float]:
    """
    Read a per-person price from a Google search response.

    Returns:
        The parsed price from the first present field (0 if unparseable),
        or None when no price field is present.
    """
    for section, key in PRICE_FIELDS:
        block = result.get(section)
        if isinstance(block, dict) and block.get(key):
            return parse_price(block[key])
    return None


async def get_ticket_price(
    lookup: PriceLookup,
    activity_name: str,
    google_domain: str = "google.com",
    country: str = "us",
    language: str = "en",
) -> CostOutcome:
    """
    Per-person ticket price for an activity.

    Never raises: a failed lookup yields a fallback outcome with value 0.

    Args:
        lookup: Cached search lookup
        activity_name: Activity or attraction name
        google_domain: Google domain to search
        country: Google `gl` parameter
        language: Google `hl` parameter

    Returns:
        CostOutcome with the per-person price
    """
    try:
        result = await lookup.fetch(
            SEARCH_ENGINE,
            f"{activity_name} ticket price",
            {"google_domain": google_domain, "gl": country, "hl": language},
        )
    except Exception as e:
        logger.warning(f"[tickets] Ticket price lookup failed | activity={activity_name!r}: {e}")
        return CostOutcome.fallback(0, f"ticket lookup failed: {e}")

    price = extract_ticket_price(result)
    if price is None:
        return CostOutcome.absent("no ticket price in search result")
    if price <= 0:
        return CostOutcome.absent("unparseable ticket price")
    return CostOutcome.ok(price)

"""Accommodation node: lodging search under a nightly price ceiling."""

import logging
import math
from typing import Any, Dict

from trip_planner.graph.config import DEFAULT_CONFIG, TripPlannerGraphConfig
from trip_planner.graph.state import TripPlannerState, log_prefix
from trip_planner.services.base import LodgingProvider
from trip_planner.shared.errors import LodgingSearchError


logger = logging.getLogger(__name__)


def nightly_price_ceiling(budget_usd: float, nights: int) -> int:
    """Whole-dollar nightly ceiling: floor(budget / nights)."""
    return math.floor(budget_usd / max(1, nights))


async def search_accommodation(
    state: TripPlannerState,
    lodging: LodgingProvider,
    config: TripPlannerGraphConfig = DEFAULT_CONFIG,
) -> Dict[str, Any]:
    """
    Search lodging for the stay and keep the provider's top results.

    Nights are taken to equal ``days_count``. Listings are kept in the
    order the provider ranked them.

    Args:
        state: Validated planning state
        lodging: Lodging provider
        config: Number of listings kept

    Returns:
        State update with ``airbnb_recommendations`` and any error entry.
    """
    _log = log_prefix(state, "search_accommodation")
    nights = state["days_count"]
    check_in = state["start_date"].isoformat()
    check_out = state["end_date"].isoformat()

    logger.info(
        f"{_log}Entering node | destination={state['destination']}, "
        f"check_in={check_in}, check_out={check_out}, budget={state['budget_usd']}"
    )

    try:
        max_price = nightly_price_ceiling(state["budget_usd"], nights)
        listings = await lodging.search_lodging(
            state["destination"], check_in, check_out, 0, max_price
        )
        if not isinstance(listings, list):
            raise LodgingSearchError("Invalid response from lodging provider")
        if not listings:
            raise LodgingSearchError("No listings found")
    except Exception as e:
        logger.warning(f"{_log}Accommodation search failed: {e}")
        return {
            "airbnb_recommendations": [],
            "errors": [f"Accommodation search failed: {e}"],
        }

    kept = listings[: config.max_listings]
    logger.info(f"{_log}Listings found | total={len(listings)}, kept={len(kept)}")
    return {"airbnb_recommendations": kept}

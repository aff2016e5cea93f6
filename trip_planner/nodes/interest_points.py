"""POI discovery node."""

import logging
from typing import Any, Dict

from trip_planner.graph.state import TripPlannerState, log_prefix
from trip_planner.services.base import PointsOfInterestProvider
from trip_planner.shared.errors import NoPointsOfInterestError


logger = logging.getLogger(__name__)


async def discover_interest_points(
    state: TripPlannerState, provider: PointsOfInterestProvider
) -> Dict[str, Any]:
    """
    Fetch recommended points of interest for the destination.

    An empty result counts as a failure: it is recorded in ``errors`` and
    ``points_of_interest`` stays empty so route planning skips its work.

    Args:
        state: Current planning state
        provider: POI provider

    Returns:
        State update with ``points_of_interest``, or an error entry.
    """
    _log = log_prefix(state, "discover_pois")
    logger.info(f"{_log}Entering node | destination={state['destination']}")

    try:
        pois = await provider.discover_points_of_interest(
            state["destination"], state["start_date"], state["end_date"]
        )
        if not pois:
            raise NoPointsOfInterestError("No points of interest found for destination")
    except Exception as e:
        logger.warning(f"{_log}POI discovery failed: {e}")
        return {"errors": [f"POI discovery failed: {e}"]}

    logger.info(f"{_log}Discovered POIs | count={len(pois)}")
    return {"points_of_interest": list(pois)}

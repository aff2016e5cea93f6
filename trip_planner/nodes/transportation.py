"""Transport mode node: asks the advisor for the primary way to travel."""

import logging
from typing import Any, Dict

from trip_planner.graph.state import TripPlannerState, log_prefix
from trip_planner.services.base import TransportModeAdvisor
from trip_planner.shared.geo import haversine_km


logger = logging.getLogger(__name__)


async def determine_transportation_mode(
    state: TripPlannerState, advisor: TransportModeAdvisor
) -> Dict[str, Any]:
    """
    Recommend a transport mode from the great-circle distance.

    Only launched when both coordinate pairs exist; the graph router makes
    that decision. The advisor's reasoning is logged, not stored.

    Args:
        state: Planning state with both coordinates populated
        advisor: Transport mode provider

    Returns:
        State update with ``transportation_mode``, or an error entry.
    """
    _log = log_prefix(state, "determine_transportation_mode")
    origin = state["origin_coordinates"]
    destination = state["destination_coordinates"]

    distance_km = haversine_km(origin.lat, origin.lng, destination.lat, destination.lng)
    logger.info(f"{_log}Great-circle distance | km={distance_km:.1f}")

    try:
        decision = await advisor.determine_transport_mode(
            state.get("origin") or "", state["destination"], distance_km
        )
    except Exception as e:
        logger.warning(f"{_log}Transport mode failed: {e}")
        return {"errors": [f"Transportation mode determination failed: {e}"]}

    logger.info(f"{_log}Mode selected | mode={decision.mode}, reasoning={decision.reasoning!r}")
    return {"transportation_mode": decision.mode}

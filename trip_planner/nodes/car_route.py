"""Car route node: the drive from origin to destination."""

import logging
from typing import Any, Dict

from trip_planner.graph.state import TripPlannerState, log_prefix
from trip_planner.services.base import RoutingProvider
from trip_planner.shared.contracts import DayRoute, RouteData, RouteLeg


logger = logging.getLogger(__name__)


async def calculate_car_route(state: TripPlannerState, routing: RoutingProvider) -> Dict[str, Any]:
    """
    Compute the driving route between origin and destination.

    Written to ``car_route`` as a single day-0 leg, separate from the
    itinerary's ``route_information``.
    """
    _log = log_prefix(state, "calculate_car_route")
    origin = state.get("origin") or "Origin"
    destination = state["destination"]

    try:
        result = await routing.compute_route(
            state["origin_coordinates"], state["destination_coordinates"]
        )
    except Exception as e:
        logger.warning(f"{_log}Car route failed: {e}")
        return {"errors": [f"Car route calculation failed: {e}"]}

    logger.info(
        f"{_log}Car route computed | distance={result.distance_label}, "
        f"duration={result.duration_label}, steps={len(result.steps)}"
    )
    leg = RouteLeg(
        start_location=origin,
        end_location=destination,
        distance=result.distance_label,
        duration=result.duration_label,
    )
    return {
        "car_route": RouteData(
            total_distance=result.distance_label,
            total_duration=result.duration_label,
            routes=[DayRoute(day=0, legs=[leg])],
        )
    }

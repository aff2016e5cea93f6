"""
Routing logic for the trip planner graph.

Conditional steps are skipped by not launching them, never by raising
inside the step.
"""

import logging
from typing import Literal

from trip_planner.graph.state import TripPlannerState


logger = logging.getLogger(__name__)


def route_after_geocoding(
    state: TripPlannerState,
) -> Literal["determine_transportation_mode", "complete"]:
    """
    Decide whether the transport mode step runs.

    Routing logic:
    1. Both origin and destination coordinates present -> transport mode
    2. Otherwise -> complete (branch ends)

    Args:
        state: Current planning state

    Returns:
        Name of the next node to execute
    """
    run_id = state.get("run_id", "unknown")
    has_origin = state.get("origin_coordinates") is not None
    has_destination = state.get("destination_coordinates") is not None
    _log = f"[run={run_id}] [graph=trip_planner] [router=route_after_geocoding] "

    if has_origin and has_destination:
        logger.info(f"{_log}Routing to 'determine_transportation_mode'")
        return "determine_transportation_mode"

    logger.info(
        f"{_log}Skipping transport mode | "
        f"origin={has_origin}, destination={has_destination}"
    )
    return "complete"


def route_after_transportation(
    state: TripPlannerState,
) -> Literal["calculate_car_route", "complete"]:
    """Run the origin-to-destination car route only when driving was chosen."""
    run_id = state.get("run_id", "unknown")
    mode = state.get("transportation_mode")
    _log = f"[run={run_id}] [graph=trip_planner] [router=route_after_transportation] "

    if mode == "car":
        logger.info(f"{_log}Routing to 'calculate_car_route'")
        return "calculate_car_route"

    logger.info(f"{_log}Routing to 'complete' | mode={mode}")
    return "complete"

"""Geocoding node: destination and optional origin coordinates."""

import logging
from typing import Any, Dict, List

from trip_planner.graph.state import TripPlannerState, log_prefix
from trip_planner.services.base import Geocoder


logger = logging.getLogger(__name__)


async def geocode_locations(state: TripPlannerState, geocoder: Geocoder) -> Dict[str, Any]:
    """
    Resolve destination and origin to coordinates.

    A destination failure ends the step: without it no transport decision
    is possible, so the origin is not looked up. An origin failure keeps
    the destination coordinates.

    Args:
        state: Current planning state
        geocoder: Geocoding provider

    Returns:
        State update with the coordinates found and any errors.
    """
    _log = log_prefix(state, "geocode_locations")
    destination = state["destination"]
    origin = (state.get("origin") or "").strip()
    errors: List[str] = []

    try:
        destination_coordinates = await geocoder.geocode(destination)
    except Exception as e:
        logger.warning(f"{_log}Destination geocoding failed: {e}")
        return {
            "errors": [f'Failed to geocode destination "{destination}": {e}'],
        }

    update: Dict[str, Any] = {"destination_coordinates": destination_coordinates}
    logger.info(
        f"{_log}Destination geocoded | "
        f"lat={destination_coordinates.lat}, lng={destination_coordinates.lng}"
    )

    if origin:
        try:
            update["origin_coordinates"] = await geocoder.geocode(origin)
            logger.info(f"{_log}Origin geocoded | origin={origin}")
        except Exception as e:
            logger.warning(f"{_log}Origin geocoding failed: {e}")
            errors.append(
                f'Failed to geocode origin "{origin}": {e}. '
                "Continuing without origin coordinates."
            )

    if errors:
        update["errors"] = errors
    return update

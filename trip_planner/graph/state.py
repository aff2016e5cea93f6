"""
Planning state schema.

Defines the state that flows through the trip planner graph. One state
object exists per planning run; runs never share state.
"""

import operator
import uuid
from datetime import date, datetime, timezone
from typing import Annotated, List, Optional, TypedDict

from trip_planner.shared.contracts import (
    Coordinates,
    DaySchedule,
    Listing,
    PlanningInput,
    PointOfInterest,
    RouteData,
    TransportationMode,
)


class TripPlannerState(TypedDict):
    """
    State schema for the trip planner graph.

    Every output field is written by exactly one node, so concurrent
    branches never race on a field. ``errors`` is the only shared field
    and is append-only: the additive reducer concatenates each node's
    messages onto what is already there.
    """

    # Run tracking
    run_id: str

    # User input
    destination: str
    origin: Optional[str]
    start_date: Optional[date]
    end_date: Optional[date]
    budget_usd: float

    # Derived by validate_input
    days_count: int

    # Written by geocode_locations
    destination_coordinates: Optional[Coordinates]
    origin_coordinates: Optional[Coordinates]

    # Written by determine_transportation_mode
    transportation_mode: Optional[TransportationMode]

    # Written by discover_pois
    points_of_interest: List[PointOfInterest]

    # Written by plan_routes
    daily_itinerary: List[DaySchedule]
    route_information: RouteData

    # Written by calculate_car_route
    car_route: Optional[RouteData]

    # Written by search_accommodation
    airbnb_recommendations: List[Listing]

    # Non-fatal step failures, append-only
    errors: Annotated[List[str], operator.add]

    # Bookkeeping
    start_time: datetime
    end_time: Optional[datetime]


def build_initial_state(
    planning_input: PlanningInput,
    run_id: Optional[str] = None,
) -> TripPlannerState:
    """
    Create the initial state for one planning run.

    Args:
        planning_input: User-supplied trip fields
        run_id: Optional run identifier; a UUID is generated when omitted

    Returns:
        A fresh state with every derived and output field at its default.
    """
    return {
        "run_id": run_id or str(uuid.uuid4()),
        "destination": planning_input.destination,
        "origin": planning_input.origin,
        "start_date": planning_input.start_date,
        "end_date": planning_input.end_date,
        "budget_usd": planning_input.budget_usd,
        "days_count": 1,
        "destination_coordinates": None,
        "origin_coordinates": None,
        "transportation_mode": None,
        "points_of_interest": [],
        "daily_itinerary": [],
        "route_information": RouteData.empty(),
        "car_route": None,
        "airbnb_recommendations": [],
        "errors": [],
        "start_time": datetime.now(timezone.utc),
        "end_time": None,
    }


def log_prefix(state: TripPlannerState, node: str) -> str:
    """Bracketed context prefix used by every planner log line."""
    run_id = state.get("run_id", "unknown")
    return f"[run={run_id}] [graph=trip_planner] [node={node}] "

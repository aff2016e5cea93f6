"""Contracts shared by the planning graph, the API and the trip store."""

from trip_planner.shared.contracts.trip_plan import (
    TRANSPORTATION_MODES,
    Coordinates,
    DayPointOfInterest,
    DayRoute,
    DaySchedule,
    Listing,
    PlanningInput,
    PointOfInterest,
    RouteData,
    RouteLeg,
    RouteResult,
    RouteStep,
    TransportationMode,
    TransportModeDecision,
    TripPlanData,
)
from trip_planner.shared.contracts.saved_trip import SavedTrip, SaveTripRequest

__all__ = [
    "TRANSPORTATION_MODES",
    "Coordinates",
    "DayPointOfInterest",
    "DayRoute",
    "DaySchedule",
    "Listing",
    "PlanningInput",
    "PointOfInterest",
    "RouteData",
    "RouteLeg",
    "RouteResult",
    "RouteStep",
    "TransportationMode",
    "TransportModeDecision",
    "TripPlanData",
    "SavedTrip",
    "SaveTripRequest",
]

"""
Planning steps.

Each step is an async function of the planning state (plus the provider it
talks to) that returns a partial state update. Provider failures are
caught at the step boundary and returned as ``errors`` entries; only
validation raises.
"""

from trip_planner.nodes.accommodation import search_accommodation
from trip_planner.nodes.car_route import calculate_car_route
from trip_planner.nodes.geocoding import geocode_locations
from trip_planner.nodes.interest_points import discover_interest_points
from trip_planner.nodes.route_planning import plan_routes
from trip_planner.nodes.transportation import determine_transportation_mode
from trip_planner.nodes.validation import validate_input

__all__ = [
    "calculate_car_route",
    "determine_transportation_mode",
    "discover_interest_points",
    "geocode_locations",
    "plan_routes",
    "search_accommodation",
    "validate_input",
]

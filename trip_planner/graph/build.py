"""
Trip planner graph construction.

Wires the planning steps into one graph. Wrapper nodes bind each step to
the provider it talks to, so the steps themselves stay plain async
functions of the state.
"""

import logging
from datetime import date
from typing import Any, Callable, Dict, Optional

from langgraph.graph import END, StateGraph

from trip_planner.graph.config import DEFAULT_CONFIG, TripPlannerGraphConfig
from trip_planner.graph.router import route_after_geocoding, route_after_transportation
from trip_planner.graph.state import TripPlannerState, log_prefix
from trip_planner.nodes import (
    calculate_car_route,
    determine_transportation_mode,
    discover_interest_points,
    geocode_locations,
    plan_routes,
    search_accommodation,
    validate_input,
)
from trip_planner.services.base import PlannerServices


logger = logging.getLogger(__name__)


def create_trip_planner_graph(
    services: PlannerServices,
    config: Optional[TripPlannerGraphConfig] = None,
    clock: Optional[Callable[[], date]] = None,
):
    """
    Create and compile the trip planner graph.

    The graph structure is:
        Entry -> validate_input
          -> geocode_locations -> route_after_geocoding
               -> "determine_transportation_mode" -> route_after_transportation
                    -> "calculate_car_route" -> END
                    -> "complete" -> END
               -> "complete" -> END
          -> discover_pois -> plan_routes -> END
          -> search_accommodation -> END

    The three branches after validation run in the same super-step, so
    their provider calls are in flight concurrently.

    Args:
        services: Providers the steps call
        config: Graph configuration; defaults to DEFAULT_CONFIG
        clock: Returns today's date for validation; defaults to date.today

    Returns:
        Compiled LangGraph application ready for execution.
    """
    config = config or DEFAULT_CONFIG

    async def _validate(state: TripPlannerState) -> Dict[str, Any]:
        return await validate_input(state, config, clock)

    async def _geocode(state: TripPlannerState) -> Dict[str, Any]:
        logger.info(f"{log_prefix(state, 'geocode_locations')}Entering node")
        return await geocode_locations(state, services.geocoder)

    async def _transportation(state: TripPlannerState) -> Dict[str, Any]:
        logger.info(f"{log_prefix(state, 'determine_transportation_mode')}Entering node")
        return await determine_transportation_mode(state, services.transport_mode)

    async def _car_route(state: TripPlannerState) -> Dict[str, Any]:
        logger.info(f"{log_prefix(state, 'calculate_car_route')}Entering node")
        return await calculate_car_route(state, services.routing)

    async def _discover_pois(state: TripPlannerState) -> Dict[str, Any]:
        return await discover_interest_points(state, services.points_of_interest)

    async def _plan_routes(state: TripPlannerState) -> Dict[str, Any]:
        logger.info(
            f"{log_prefix(state, 'plan_routes')}Entering node | "
            f"pois={len(state.get('points_of_interest') or [])}, days={state['days_count']}"
        )
        return await plan_routes(state, services.routing, config)

    async def _accommodation(state: TripPlannerState) -> Dict[str, Any]:
        return await search_accommodation(state, services.lodging, config)

    graph = StateGraph(TripPlannerState)

    # Add nodes
    graph.add_node("validate_input", _validate)
    graph.add_node("geocode_locations", _geocode)
    graph.add_node("determine_transportation_mode", _transportation)
    graph.add_node("calculate_car_route", _car_route)
    graph.add_node("discover_pois", _discover_pois)
    graph.add_node("plan_routes", _plan_routes)
    graph.add_node("search_accommodation", _accommodation)

    graph.set_entry_point("validate_input")

    # Fan out once input is valid
    graph.add_edge("validate_input", "geocode_locations")
    graph.add_edge("validate_input", "discover_pois")
    graph.add_edge("validate_input", "search_accommodation")

    # Geocoding branch
    graph.add_conditional_edges(
        "geocode_locations",
        route_after_geocoding,
        {
            "determine_transportation_mode": "determine_transportation_mode",
            "complete": END,
        },
    )
    graph.add_conditional_edges(
        "determine_transportation_mode",
        route_after_transportation,
        {
            "calculate_car_route": "calculate_car_route",
            "complete": END,
        },
    )
    graph.add_edge("calculate_car_route", END)

    # POI branch
    graph.add_edge("discover_pois", "plan_routes")
    graph.add_edge("plan_routes", END)

    # Accommodation branch
    graph.add_edge("search_accommodation", END)

    compiled = graph.compile()
    logger.debug("Trip planner graph compiled")
    return compiled

"""
Trip planner backend.

Turns a destination, an optional origin, a date range and a budget into a
trip plan: points of interest, a day-by-day itinerary with route legs,
and lodging recommendations.

Packages:
- graph: LangGraph workflow, state and planner entry point
- nodes: Planning steps
- services: Geocoding, routing, LLM and lodging providers
- trips: Saved trip persistence
- api: FastAPI routers
- shared: Contracts, errors, settings, logging
"""

from trip_planner.graph import TripPlanner, create_trip_planner_graph, execute_trip_planner

__all__ = ["TripPlanner", "create_trip_planner_graph", "execute_trip_planner"]

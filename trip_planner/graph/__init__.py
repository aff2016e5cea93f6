"""
Trip planner graph.

Validates the input, then runs three independent branches concurrently:
    geocoding -> transport mode -> car route (each step conditional)
    POI discovery -> route planning
    accommodation search

The merged state is returned to the caller, with non-fatal step failures
collected in ``errors``.
"""

from trip_planner.graph.build import create_trip_planner_graph
from trip_planner.graph.planner import TripPlanner, execute_trip_planner

__all__ = ["TripPlanner", "create_trip_planner_graph", "execute_trip_planner"]

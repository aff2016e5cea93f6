"""
HTTP API.

Routers:
- planning_api: POST /api/plan-trip
- trips_api: saved trip CRUD under /api
"""

from trip_planner.api.handlers import register_exception_handlers
from trip_planner.api.planning_api import router as planning_router
from trip_planner.api.trips_api import router as trips_router

__all__ = ["planning_router", "register_exception_handlers", "trips_router"]

"""
FastAPI dependencies.

The planner and the trip store are created once by the application
lifespan and read from ``app.state``; endpoints never build their own.
"""

from typing import Optional

from fastapi import Header, Request

from trip_planner.api.schemas import ApiError
from trip_planner.graph.planner import TripPlanner
from trip_planner.trips.store import TripStore


def get_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    """
    Authenticated user id, taken from the ``X-User-Id`` header.

    Session handling happens upstream; the header carries an opaque id.
    """
    if not x_user_id or not x_user_id.strip():
        raise ApiError(401, "Authentication required", "AUTH_ERROR")
    return x_user_id.strip()


def get_planner(request: Request) -> TripPlanner:
    return request.app.state.planner


def get_trip_store(request: Request) -> TripStore:
    return request.app.state.trip_store

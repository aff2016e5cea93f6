"""
Saved trip endpoints.

Handlers are plain functions: FastAPI runs them in its thread pool, so
blocking database calls never stall the event loop.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from trip_planner.api.dependencies import get_trip_store, get_user_id
from trip_planner.api.schemas import (
    FavoriteRequest,
    SavedTripsPage,
    SaveTripData,
    error_response,
    success_response,
)
from trip_planner.shared.contracts import SaveTripRequest
from trip_planner.shared.errors import DuplicateTripError, TripNotFoundError, TripStoreError
from trip_planner.trips.store import SORT_FIELDS, TripStore, clamp_limit, clamp_offset


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["trips"])


def _not_found() -> JSONResponse:
    return error_response(404, "Trip not found", "NOT_FOUND")


def _database_error(action: str, e: Exception) -> JSONResponse:
    logger.error(f"Database error while trying to {action}: {e}")
    return error_response(
        500, f"Failed to {action}. Please try again later.", "DATABASE_ERROR"
    )


@router.post("/save-trip")
def save_trip(
    request: SaveTripRequest,
    user_id: str = Depends(get_user_id),
    store: TripStore = Depends(get_trip_store),
) -> JSONResponse:
    """Persist a generated plan for the current user."""
    try:
        trip = store.save(user_id, request)
    except DuplicateTripError as e:
        return error_response(409, str(e), "DUPLICATE_TRIP")
    except TripStoreError as e:
        return _database_error("save trip", e)

    return success_response(
        SaveTripData(trip_id=trip.id, created_at=trip.created_at.isoformat())
    )


@router.get("/saved-trips")
def list_saved_trips(
    limit: Optional[int] = Query(default=None),
    offset: Optional[int] = Query(default=None),
    sort_by: str = Query(default="created_at", alias="sortBy"),
    user_id: str = Depends(get_user_id),
    store: TripStore = Depends(get_trip_store),
) -> JSONResponse:
    """One page of the current user's trips, with the total count."""
    if sort_by not in SORT_FIELDS:
        return error_response(
            400, 'sortBy must be "created_at" or "is_favorite"', "VALIDATION_ERROR"
        )

    limit, offset = clamp_limit(limit), clamp_offset(offset)
    try:
        trips, total = store.list_for_user(user_id, limit=limit, offset=offset, sort_by=sort_by)
    except TripStoreError as e:
        return _database_error("fetch trips", e)

    return success_response(
        SavedTripsPage(trips=trips, total=total, has_more=offset + limit < total)
    )


@router.get("/trips/{trip_id}")
def get_trip(
    trip_id: str,
    user_id: str = Depends(get_user_id),
    store: TripStore = Depends(get_trip_store),
) -> JSONResponse:
    try:
        trip = store.get(user_id, trip_id)
    except TripNotFoundError:
        return _not_found()
    except TripStoreError as e:
        return _database_error("fetch trip", e)
    return success_response(trip)


@router.delete("/trips/{trip_id}")
def delete_trip(
    trip_id: str,
    user_id: str = Depends(get_user_id),
    store: TripStore = Depends(get_trip_store),
) -> JSONResponse:
    try:
        store.delete(user_id, trip_id)
    except TripNotFoundError:
        return _not_found()
    except TripStoreError as e:
        return _database_error("delete trip", e)
    return success_response()


@router.patch("/trips/{trip_id}/favorite")
def set_favorite(
    trip_id: str,
    request: FavoriteRequest,
    user_id: str = Depends(get_user_id),
    store: TripStore = Depends(get_trip_store),
) -> JSONResponse:
    """Toggle the favorite flag, the only field a saved trip allows to change."""
    try:
        trip = store.set_favorite(user_id, trip_id, request.is_favorite)
    except TripNotFoundError:
        return _not_found()
    except TripStoreError as e:
        return _database_error("update trip", e)
    return success_response(trip)

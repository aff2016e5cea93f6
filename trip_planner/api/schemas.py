"""
Request/response models and the response envelope for the HTTP API.

Every response body has the shape ``{success, data?, error?, code?, timeout?}``.
"""

from typing import Any, Dict, List, Optional

from fastapi.responses import JSONResponse
from pydantic import Field

from trip_planner.graph.state import TripPlannerState
from trip_planner.shared.contracts import SavedTrip, TripPlanData
from trip_planner.shared.contracts.trip_plan import CamelModel


# ============================================================================
# Request/Response Models
# ============================================================================


class PlanTripRequest(CamelModel):
    """Trip planning request. Fields are optional here so that a missing
    field is reported with the API's own error envelope."""

    destination: Optional[str] = None
    origin: Optional[str] = None
    start_date: Optional[str] = Field(default=None, description="Trip start date (YYYY-MM-DD)")
    end_date: Optional[str] = Field(default=None, description="Trip end date (YYYY-MM-DD)")
    budget_usd: Optional[float] = Field(default=None, description="Accommodation budget in USD")


class PlanTripData(TripPlanData):
    """Generated plan plus the non-fatal errors collected while planning."""

    errors: List[str] = Field(default_factory=list)


class SaveTripData(CamelModel):
    trip_id: str
    created_at: str


class SavedTripsPage(CamelModel):
    trips: List[SavedTrip]
    total: int
    has_more: bool


class FavoriteRequest(CamelModel):
    is_favorite: bool


def plan_data_from_state(state: TripPlannerState) -> PlanTripData:
    """Copy the plan fields of a final planning state into a response model."""
    return PlanTripData(
        days_count=state["days_count"],
        transportation_mode=state.get("transportation_mode"),
        points_of_interest=state.get("points_of_interest") or [],
        daily_itinerary=state.get("daily_itinerary") or [],
        route_information=state["route_information"],
        car_route=state.get("car_route"),
        airbnb_recommendations=state.get("airbnb_recommendations") or [],
        errors=list(state.get("errors") or []),
    )


# ============================================================================
# Envelope
# ============================================================================


class ApiError(Exception):
    """An error answered with the API envelope instead of FastAPI's default body."""

    def __init__(self, status_code: int, message: str, code: str, **extra: Any):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.code = code
        self.extra = extra


def success_response(data: Any = None, status_code: int = 200) -> JSONResponse:
    body: Dict[str, Any] = {"success": True}
    if data is not None:
        if isinstance(data, CamelModel):
            data = data.model_dump(by_alias=True, mode="json")
        body["data"] = data
    return JSONResponse(status_code=status_code, content=body)


def error_response(status_code: int, message: str, code: str, **extra: Any) -> JSONResponse:
    body: Dict[str, Any] = {"success": False, "error": message, "code": code}
    body.update(extra)
    return JSONResponse(status_code=status_code, content=body)

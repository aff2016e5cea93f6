"""
Trip planning endpoint.

Maps the JSON request to a planning input, runs the planner and maps the
final state, or a fatal error, to the response envelope.
"""

import logging
import uuid
from datetime import date

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from trip_planner.api.dependencies import get_planner, get_user_id
from trip_planner.api.schemas import (
    PlanTripRequest,
    error_response,
    plan_data_from_state,
    success_response,
)
from trip_planner.graph.planner import TripPlanner
from trip_planner.shared.contracts import PlanningInput
from trip_planner.shared.errors import PlanningTimeoutError, PlanningValidationError


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["planning"])


@router.post("/plan-trip")
async def plan_trip(
    request: PlanTripRequest,
    user_id: str = Depends(get_user_id),
    planner: TripPlanner = Depends(get_planner),
) -> JSONResponse:
    """
    Generate a trip plan.

    Partial results are returned with status 200 and the step errors in
    ``data.errors``. Only a run that produced neither POIs nor listings is
    reported as a planning failure.
    """
    run_id = str(uuid.uuid4())
    _log = f"[run={run_id}] [graph=trip_planner] [api=plan_trip] "

    if not (request.destination and request.start_date and request.end_date and request.budget_usd):
        return error_response(
            400,
            "Missing required fields: destination, startDate, endDate, budgetUsd",
            "VALIDATION_ERROR",
        )

    try:
        start_date = date.fromisoformat(request.start_date)
        end_date = date.fromisoformat(request.end_date)
    except ValueError:
        return error_response(
            400, "Invalid date format. Use ISO 8601 (YYYY-MM-DD)", "VALIDATION_ERROR"
        )

    planning_input = PlanningInput(
        destination=request.destination,
        origin=request.origin or None,
        start_date=start_date,
        end_date=end_date,
        budget_usd=request.budget_usd,
    )
    logger.info(
        f"{_log}Request received | user={user_id}, destination={planning_input.destination}"
    )

    try:
        state = await planner.execute(planning_input, run_id=run_id)
    except PlanningValidationError as e:
        return error_response(400, str(e), "VALIDATION_ERROR")
    except PlanningTimeoutError as e:
        return error_response(
            504,
            "Trip planning took too long. Please try again.",
            "TIMEOUT_ERROR",
            timeout=e.timeout,
        )
    except Exception as e:
        logger.exception(f"{_log}Planning failed: {e}")
        return error_response(
            500, "An unexpected error occurred during trip planning", "INTERNAL_ERROR"
        )

    errors = state.get("errors") or []
    if errors and not state.get("points_of_interest") and not state.get("airbnb_recommendations"):
        logger.info(f"{_log}Nothing usable produced | errors={len(errors)}")
        return error_response(
            400,
            f"Trip planning encountered errors: {'; '.join(errors)}",
            "PLANNING_ERROR",
        )

    return success_response(plan_data_from_state(state))

"""Exception handlers that keep every error body in the API envelope."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from trip_planner.api.schemas import ApiError, error_response


logger = logging.getLogger(__name__)


async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
    return error_response(exc.status_code, exc.message, exc.code, **exc.extra)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies and parameters answer 400 instead of FastAPI's 422."""
    errors = exc.errors()
    if any(error.get("type") == "json_invalid" for error in errors):
        return error_response(400, "Invalid JSON in request body", "INVALID_REQUEST")

    details = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        details.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    logger.info(f"Rejected request to {request.url.path} | errors={len(errors)}")
    return error_response(400, "; ".join(details), "VALIDATION_ERROR")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, handle_api_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)

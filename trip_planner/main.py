"""
FastAPI application entry point.

Composition root: builds the providers, the planner and the trip store
once per process, and closes the shared clients on shutdown.
"""

import logging
import os
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from trip_planner.api import planning_router, register_exception_handlers, trips_router
from trip_planner.graph.config import get_config
from trip_planner.graph.planner import TripPlanner
from trip_planner.services import build_default_services, close_services
from trip_planner.shared.logging import setup_logging
from trip_planner.shared.settings import Settings, load_settings, validate_environment
from trip_planner.trips.store import TripStore, create_trip_store


# ============================================================================
# Logging configuration (single source of truth for the service)
# ============================================================================
LOG_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)-35s | %(message)s"
)

if os.environ.get("LOG_FORMAT", "").lower() == "json":
    setup_logging(logging.INFO)
else:
    logging.basicConfig(
        level=logging.INFO,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

# Quiet noisy third-party loggers
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("openai").setLevel(logging.WARNING)
logging.getLogger("urllib3").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


def create_app(
    planner: Optional[TripPlanner] = None,
    store: Optional[TripStore] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        planner: Planner to serve requests with. Built from the default
            providers at startup when omitted.
        store: Trip store. Chosen from MONGODB_URI at startup when omitted.
        settings: Settings; loaded from the environment when omitted.

    Returns:
        Configured FastAPI app.
    """
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        services = None
        if planner is None:
            validate_environment(settings)
            config = get_config(timeout_ms=settings.agent_timeout_ms)
            services = build_default_services(settings, config)
            app.state.planner = TripPlanner(services, config)
        else:
            app.state.planner = planner
        app.state.trip_store = store or create_trip_store(settings.mongodb_uri, settings.mongodb_db)
        logger.info(f"Trip planner ready | env={settings.app_env}")

        yield

        if services is not None:
            await close_services(services)
        if store is None:
            app.state.trip_store.close()
        logger.info("Trip planner shut down")

    app = FastAPI(
        title="Trip Planner",
        description="AI-powered trip planning built with LangGraph",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(planning_router)
    app.include_router(trips_router)

    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "name": "Trip Planner",
            "version": "0.1.0",
            "endpoints": {
                "plan_trip": "/api/plan-trip",
                "save_trip": "/api/save-trip",
                "saved_trips": "/api/saved-trips",
                "trip": "/api/trips/{trip_id}",
            },
            "docs": "/docs",
        }

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("trip_planner.main:app", host="0.0.0.0", port=8000, reload=True)

"""
External providers consumed by the planner.

Modules:
- base: Provider protocols and the PlannerServices bundle
- lifecycle: Lazy create-once/reuse/close holder for shared clients
- google_maps: Geocoding and routing (googlemaps SDK)
- llm_advisor: POI discovery and transport mode (OpenAI)
- airbnb: Lodging search (Airbnb MCP server over HTTP)
"""

import logging
from typing import Optional

from trip_planner.graph.config import DEFAULT_CONFIG, TripPlannerGraphConfig
from trip_planner.services.airbnb import AirbnbLodgingService
from trip_planner.services.base import (
    Geocoder,
    LodgingProvider,
    PlannerServices,
    PointsOfInterestProvider,
    RoutingProvider,
    TransportModeAdvisor,
)
from trip_planner.services.google_maps import GoogleMapsService
from trip_planner.services.llm_advisor import OpenAIPlanningAdvisor
from trip_planner.shared.settings import Settings


logger = logging.getLogger(__name__)


def build_default_services(
    settings: Settings,
    config: Optional[TripPlannerGraphConfig] = None,
) -> PlannerServices:
    """
    Build the production provider bundle.

    No network connection is made here; each client is created on first use.

    Args:
        settings: Provider credentials and endpoints
        config: Graph configuration (POI count hints)

    Returns:
        PlannerServices wired to Google Maps, OpenAI and Airbnb.
    """
    config = config or DEFAULT_CONFIG
    maps = GoogleMapsService(settings.google_maps_api_key)
    advisor = OpenAIPlanningAdvisor(
        settings.openai_api_key,
        model=settings.openai_model,
        min_pois=config.min_pois,
        max_pois=config.max_pois,
    )
    lodging = AirbnbLodgingService(settings.airbnb_mcp_endpoint)
    return PlannerServices(
        geocoder=maps,
        points_of_interest=advisor,
        routing=maps,
        transport_mode=advisor,
        lodging=lodging,
    )


async def close_services(services: PlannerServices) -> None:
    """Close every distinct provider that owns a shared client."""
    seen = set()
    for provider in (
        services.geocoder,
        services.points_of_interest,
        services.routing,
        services.transport_mode,
        services.lodging,
    ):
        if id(provider) in seen:
            continue
        seen.add(id(provider))
        close = getattr(provider, "close", None)
        if close is not None:
            await close()
    logger.info(f"Closed {len(seen)} provider(s)")


__all__ = [
    "Geocoder",
    "LodgingProvider",
    "PlannerServices",
    "PointsOfInterestProvider",
    "RoutingProvider",
    "TransportModeAdvisor",
    "build_default_services",
    "close_services",
]

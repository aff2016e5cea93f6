"""
Google Maps adapter for geocoding and routing.

Wraps the synchronous ``googlemaps`` SDK. Calls run in a worker thread so
the planning event loop keeps serving other branches while a request is
in flight. The SDK client is created lazily, once per process.
"""

import asyncio
import logging
import re
from typing import Any, Dict, List, Optional

import googlemaps
from googlemaps import exceptions as gmaps_exceptions

from trip_planner.services.lifecycle import LazyResource
from trip_planner.shared.contracts import Coordinates, RouteResult, RouteStep
from trip_planner.shared.errors import GeocodingError, RoutingError
from trip_planner.shared.geo import format_distance, format_duration


logger = logging.getLogger(__name__)

_TAG_PATTERN = re.compile(r"<[^>]+>")

GOOGLE_MAPS_ERRORS = (
    gmaps_exceptions.ApiError,
    gmaps_exceptions.HTTPError,
    gmaps_exceptions.Timeout,
    gmaps_exceptions.TransportError,
)


def parse_geocode_results(address: str, results: Any) -> Coordinates:
    """
    Extract coordinates from a geocode response.

    Args:
        address: The address that was geocoded (for error messages)
        results: Raw list returned by ``googlemaps.Client.geocode``

    Returns:
        Coordinates of the first result.

    Raises:
        GeocodingError: If no result or no valid location is present.
    """
    if not isinstance(results, list) or not results:
        raise GeocodingError(f"No geocoding results for {address!r}")

    location = (results[0].get("geometry") or {}).get("location") or {}
    lat, lng = location.get("lat"), location.get("lng")
    if not isinstance(lat, (int, float)) or not isinstance(lng, (int, float)):
        raise GeocodingError("Could not parse coordinates from geocoding response")
    if not (-90 <= lat <= 90 and -180 <= lng <= 180):
        raise GeocodingError("Coordinates out of valid range")

    return Coordinates(lat=lat, lng=lng)


def _parse_step(step: Dict[str, Any]) -> RouteStep:
    distance = step.get("distance") or {}
    duration = step.get("duration") or {}
    return RouteStep(
        instructions=_TAG_PATTERN.sub("", step.get("html_instructions") or ""),
        distance_label=distance.get("text") or "",
        distance_meters=distance.get("value") or 0,
        duration_label=duration.get("text") or "",
        duration_seconds=duration.get("value") or 0,
        travel_mode=step.get("travel_mode") or "DRIVING",
    )


def parse_directions(routes: Any) -> RouteResult:
    """
    Extract distance, duration and steps from a directions response.

    Distances and durations are summed over all legs of the first route.

    Args:
        routes: Raw list returned by ``googlemaps.Client.directions``

    Returns:
        RouteResult for the first route.

    Raises:
        RoutingError: If the response holds no usable route.
    """
    if not isinstance(routes, list) or not routes:
        raise RoutingError("No route found between the given points")

    legs = routes[0].get("legs") or []
    if not legs:
        raise RoutingError("Route has no legs")

    distance_meters = 0.0
    duration_seconds = 0.0
    steps: List[RouteStep] = []
    for leg in legs:
        distance_value = (leg.get("distance") or {}).get("value")
        duration_value = (leg.get("duration") or {}).get("value")
        if not isinstance(distance_value, (int, float)):
            raise RoutingError("Invalid distance in directions response")
        if not isinstance(duration_value, (int, float)):
            raise RoutingError("Invalid duration in directions response")
        distance_meters += distance_value
        duration_seconds += duration_value
        steps.extend(_parse_step(step) for step in leg.get("steps") or [])

    if len(legs) == 1:
        distance_label = (legs[0].get("distance") or {}).get("text")
        duration_label = (legs[0].get("duration") or {}).get("text")
    else:
        distance_label = duration_label = None

    return RouteResult(
        distance_label=distance_label or format_distance(distance_meters),
        distance_meters=distance_meters,
        duration_label=duration_label or format_duration(duration_seconds),
        duration_seconds=duration_seconds,
        steps=steps,
    )


class GoogleMapsService:
    """Geocoder and RoutingProvider backed by the Google Maps web services."""

    def __init__(
        self,
        api_key: Optional[str],
        mode: str = "driving",
        timeout: float = 10.0,
    ):
        self.mode = mode
        self._resource: LazyResource[googlemaps.Client] = LazyResource(
            "google_maps",
            factory=lambda: self._create_client(api_key, timeout),
            closer=lambda client: client.session.close(),
        )

    @staticmethod
    def _create_client(api_key: Optional[str], timeout: float) -> googlemaps.Client:
        if not api_key:
            raise GeocodingError("GOOGLE_MAPS_API_KEY environment variable is not set")
        try:
            return googlemaps.Client(key=api_key, timeout=timeout)
        except ValueError as e:
            raise GeocodingError(f"Failed to initialize Google Maps client: {e}") from e

    async def geocode(self, address: str) -> Coordinates:
        try:
            client = await self._resource.get()
            results = await asyncio.to_thread(client.geocode, address)
        except GeocodingError:
            raise
        except GOOGLE_MAPS_ERRORS as e:
            raise GeocodingError(f"Geocoding failed: {e}") from e

        coordinates = parse_geocode_results(address, results)
        logger.debug(f"Geocoded {address!r} -> ({coordinates.lat}, {coordinates.lng})")
        return coordinates

    async def compute_route(
        self, origin: Coordinates, destination: Coordinates
    ) -> RouteResult:
        try:
            client = await self._resource.get()
        except GeocodingError as e:
            raise RoutingError(str(e)) from e

        try:
            routes = await asyncio.to_thread(
                client.directions,
                (origin.lat, origin.lng),
                (destination.lat, destination.lng),
                mode=self.mode,
            )
        except GOOGLE_MAPS_ERRORS as e:
            raise RoutingError(f"Route calculation failed: {e}") from e

        return parse_directions(routes)

    async def close(self) -> None:
        await self._resource.close()

"""
Provider interfaces consumed by the planning steps.

Each external capability is a narrow async protocol. Steps depend only on
these protocols; concrete adapters live next to this module and are wired
together by the composition root.
"""

from dataclasses import dataclass
from datetime import date
from typing import List, Protocol, runtime_checkable

from trip_planner.shared.contracts import (
    Coordinates,
    Listing,
    PointOfInterest,
    RouteResult,
    TransportModeDecision,
)


@runtime_checkable
class Geocoder(Protocol):
    async def geocode(self, address: str) -> Coordinates:
        """Resolve a free-text place name to coordinates."""
        ...


@runtime_checkable
class PointsOfInterestProvider(Protocol):
    async def discover_points_of_interest(
        self, destination: str, start_date: date, end_date: date
    ) -> List[PointOfInterest]:
        """Recommend points of interest for a destination and date range."""
        ...


@runtime_checkable
class RoutingProvider(Protocol):
    async def compute_route(
        self, origin: Coordinates, destination: Coordinates
    ) -> RouteResult:
        """Travel distance and duration between two coordinate pairs."""
        ...


@runtime_checkable
class TransportModeAdvisor(Protocol):
    async def determine_transport_mode(
        self, origin: str, destination: str, distance_km: float
    ) -> TransportModeDecision:
        """Recommend the primary transport mode for a trip."""
        ...


@runtime_checkable
class LodgingProvider(Protocol):
    async def search_lodging(
        self,
        destination: str,
        check_in: str,
        check_out: str,
        min_price: int,
        max_price: int,
    ) -> List[Listing]:
        """Search lodging listings within a nightly price range."""
        ...


@dataclass(frozen=True)
class PlannerServices:
    """
    The set of providers a planner run talks to.

    Built once per process by the composition root and handed to the
    planner's constructor. Providers hold read-only shared clients and
    carry no per-request state.
    """

    geocoder: Geocoder
    points_of_interest: PointsOfInterestProvider
    routing: RoutingProvider
    transport_mode: TransportModeAdvisor
    lodging: LodgingProvider

"""
Shared fakes for planner tests.

Each fake records its calls so tests can assert which providers were (or
were not) reached.
"""

import asyncio
from datetime import date, timedelta
from typing import Dict, List, Optional

import pytest

from trip_planner.services.base import PlannerServices
from trip_planner.shared.contracts import (
    Coordinates,
    Listing,
    PlanningInput,
    PointOfInterest,
    RouteResult,
    TransportModeDecision,
)
from trip_planner.shared.errors import GeocodingError, RoutingError


PARIS = Coordinates(lat=48.8566, lng=2.3522)
LONDON = Coordinates(lat=51.5074, lng=-0.1278)


async def _wait_forever():
    await asyncio.Event().wait()


class FakeGeocoder:
    def __init__(self, known: Optional[Dict[str, Coordinates]] = None, hang: bool = False):
        self.known = known if known is not None else {"Paris, France": PARIS, "London, UK": LONDON}
        self.hang = hang
        self.calls: List[str] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def geocode(self, address: str) -> Coordinates:
        self.calls.append(address)
        if self.hang:
            await _wait_forever()
        if address not in self.known:
            raise GeocodingError(f"No geocoding results for {address!r}")
        return self.known[address]


class FakePointsOfInterest:
    def __init__(self, pois: Optional[List[PointOfInterest]] = None, error: Optional[Exception] = None):
        self.pois = pois if pois is not None else make_pois(8)
        self.error = error
        self.call_count = 0

    async def discover_points_of_interest(self, destination, start_date, end_date):
        self.call_count += 1
        if self.error:
            raise self.error
        return list(self.pois)


class FakeRouting:
    """Answers every leg with 1.5 km / 5 minutes unless told to fail."""

    def __init__(self, fail: bool = False, fail_on: Optional[List[tuple]] = None):
        self.fail = fail
        self.fail_on = set(fail_on or [])
        self.calls: List[tuple] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def compute_route(self, origin: Coordinates, destination: Coordinates) -> RouteResult:
        self.calls.append((origin, destination))
        if self.fail or (origin.lat, origin.lng) in self.fail_on:
            raise RoutingError("Route calculation failed: ZERO_RESULTS")
        return RouteResult(
            distance_label="1.5 km",
            distance_meters=1500,
            duration_label="5 mins",
            duration_seconds=300,
        )


class FakeTransportAdvisor:
    def __init__(self, mode: str = "train", error: Optional[Exception] = None):
        self.mode = mode
        self.error = error
        self.calls: List[tuple] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def determine_transport_mode(self, origin, destination, distance_km):
        self.calls.append((origin, destination, distance_km))
        if self.error:
            raise self.error
        return TransportModeDecision(mode=self.mode, reasoning="Fast and direct")


class FakeLodging:
    def __init__(self, listings=None, error: Optional[Exception] = None):
        self.listings = listings if listings is not None else make_listings(15)
        self.error = error
        self.calls: List[dict] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def search_lodging(self, destination, check_in, check_out, min_price, max_price):
        self.calls.append(
            {
                "destination": destination,
                "check_in": check_in,
                "check_out": check_out,
                "min_price": min_price,
                "max_price": max_price,
            }
        )
        if self.error:
            raise self.error
        return self.listings


def make_pois(count: int) -> List[PointOfInterest]:
    return [
        PointOfInterest(
            name=f"Sight {index}",
            description=f"Worth seeing #{index}",
            lat=48.85 + index * 0.01,
            lng=2.35 + index * 0.01,
            category="landmark",
        )
        for index in range(1, count + 1)
    ]


def make_listings(count: int) -> List[Listing]:
    return [
        Listing(
            id=str(index),
            name=f"Flat {index}",
            price=f"${index * 100}",
            price_per_night="$90",
            link=f"https://www.airbnb.com/rooms/{index}",
            location=PARIS,
        )
        for index in range(1, count + 1)
    ]


def make_input(
    destination: str = "Paris, France",
    origin: Optional[str] = None,
    start_in_days: int = 14,
    length_days: int = 7,
    budget_usd: float = 2000,
) -> PlanningInput:
    start = date.today() + timedelta(days=start_in_days)
    return PlanningInput(
        destination=destination,
        origin=origin,
        start_date=start,
        end_date=start + timedelta(days=length_days),
        budget_usd=budget_usd,
    )


class Fakes:
    """Bundle of fakes with a PlannerServices view."""

    def __init__(self):
        self.geocoder = FakeGeocoder()
        self.points_of_interest = FakePointsOfInterest()
        self.routing = FakeRouting()
        self.transport_mode = FakeTransportAdvisor()
        self.lodging = FakeLodging()

    @property
    def services(self) -> PlannerServices:
        return PlannerServices(
            geocoder=self.geocoder,
            points_of_interest=self.points_of_interest,
            routing=self.routing,
            transport_mode=self.transport_mode,
            lodging=self.lodging,
        )

    def total_calls(self) -> int:
        return (
            self.geocoder.call_count
            + self.points_of_interest.call_count
            + self.routing.call_count
            + self.transport_mode.call_count
            + self.lodging.call_count
        )


@pytest.fixture
def fakes() -> Fakes:
    return Fakes()


@pytest.fixture(name="make_input")
def make_input_fixture():
    return make_input


@pytest.fixture(name="make_pois")
def make_pois_fixture():
    return make_pois


@pytest.fixture(name="make_listings")
def make_listings_fixture():
    return make_listings

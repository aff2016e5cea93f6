"""
Unit tests for the planning steps, called directly with a hand-built state.
"""

import asyncio
import math
from datetime import date

from trip_planner.graph.config import get_config
from trip_planner.nodes.accommodation import nightly_price_ceiling, search_accommodation
from trip_planner.nodes.car_route import calculate_car_route
from trip_planner.nodes.geocoding import geocode_locations
from trip_planner.nodes.interest_points import discover_interest_points
from trip_planner.nodes.route_planning import partition_by_day, plan_routes, time_window
from trip_planner.nodes.transportation import determine_transportation_mode
from trip_planner.shared.contracts import Coordinates, RouteData


START = date(2026, 6, 1)
PARIS = Coordinates(lat=48.8566, lng=2.3522)
LONDON = Coordinates(lat=51.5074, lng=-0.1278)


def _make_state(**overrides):
    """Create a validated planning state."""
    state = {
        "run_id": "test-run",
        "destination": "Paris, France",
        "origin": None,
        "start_date": START,
        "end_date": date(2026, 6, 4),
        "budget_usd": 900.0,
        "days_count": 3,
        "destination_coordinates": None,
        "origin_coordinates": None,
        "transportation_mode": None,
        "points_of_interest": [],
        "daily_itinerary": [],
        "route_information": RouteData.empty(),
        "car_route": None,
        "airbnb_recommendations": [],
        "errors": [],
    }
    state.update(overrides)
    return state


def _with_origin():
    return _make_state(
        origin="London, UK", origin_coordinates=LONDON, destination_coordinates=PARIS
    )


# ============================================================================
# Geocoding
# ============================================================================


class TestGeocodeLocations:
    def test_destination_only(self, fakes):
        result = asyncio.run(geocode_locations(_make_state(), fakes.geocoder))

        assert result == {"destination_coordinates": PARIS}
        assert fakes.geocoder.calls == ["Paris, France"]

    def test_blank_origin_is_absent(self, fakes):
        """A whitespace origin is not geocoded."""
        asyncio.run(geocode_locations(_make_state(origin="  "), fakes.geocoder))

        assert fakes.geocoder.calls == ["Paris, France"]

    def test_destination_and_origin(self, fakes):
        result = asyncio.run(geocode_locations(_make_state(origin="London, UK"), fakes.geocoder))

        assert result["destination_coordinates"] == PARIS
        assert result["origin_coordinates"] == LONDON
        assert "errors" not in result

    def test_destination_failure_skips_origin(self, fakes):
        """Without a destination the origin lookup is not attempted."""
        fakes.geocoder.known = {"London, UK": LONDON}

        result = asyncio.run(geocode_locations(_make_state(origin="London, UK"), fakes.geocoder))

        assert fakes.geocoder.calls == ["Paris, France"]
        assert result == {
            "errors": [
                'Failed to geocode destination "Paris, France": '
                "No geocoding results for 'Paris, France'"
            ]
        }


# ============================================================================
# Transportation
# ============================================================================


class TestDetermineTransportationMode:
    def test_passes_labels_and_distance(self, fakes):
        fakes.transport_mode.mode = "plane"

        result = asyncio.run(determine_transportation_mode(_with_origin(), fakes.transport_mode))

        assert result == {"transportation_mode": "plane"}
        origin, destination, distance_km = fakes.transport_mode.calls[0]
        assert origin == "London, UK"
        assert destination == "Paris, France"
        assert 340 < distance_km < 347


# ============================================================================
# POI discovery
# ============================================================================


class TestDiscoverInterestPoints:
    def test_returns_pois(self, fakes, make_pois):
        fakes.points_of_interest.pois = make_pois(3)

        result = asyncio.run(discover_interest_points(_make_state(), fakes.points_of_interest))

        assert [poi.name for poi in result["points_of_interest"]] == ["Sight 1", "Sight 2", "Sight 3"]

    def test_empty_is_an_error(self, fakes):
        fakes.points_of_interest.pois = []

        result = asyncio.run(discover_interest_points(_make_state(), fakes.points_of_interest))

        assert "points_of_interest" not in result
        assert result["errors"] == [
            "POI discovery failed: No points of interest found for destination"
        ]


# ============================================================================
# Route planning
# ============================================================================


class TestPartitionByDay:
    def test_even_split(self, make_pois):
        buckets = partition_by_day(make_pois(6), 3)
        assert [len(bucket) for bucket in buckets] == [2, 2, 2]

    def test_ceil_per_day_leaves_trailing_days_empty(self, make_pois):
        """8 POIs over 7 days: 2 per day, the last three days are empty."""
        buckets = partition_by_day(make_pois(8), 7)
        assert [len(bucket) for bucket in buckets] == [2, 2, 2, 2, 0, 0, 0]

    def test_fewer_pois_than_days(self, make_pois):
        buckets = partition_by_day(make_pois(2), 4)
        assert [len(bucket) for bucket in buckets] == [1, 1, 0, 0]


class TestTimeWindow:
    def test_sequential_two_hour_windows(self):
        assert time_window(0) == "09:00-11:00"
        assert time_window(1) == "11:00-13:00"
        assert time_window(3) == "15:00-17:00"


class TestPlanRoutes:
    def test_no_pois_returns_defaults(self, fakes):
        result = asyncio.run(plan_routes(_make_state(), fakes.routing))

        assert result["daily_itinerary"] == []
        assert result["route_information"] == RouteData.empty()
        assert "errors" not in result
        assert fakes.routing.call_count == 0

    def test_schedule_and_legs(self, fakes, make_pois):
        """6 POIs over 3 days: two per day, one leg per day."""
        state = _make_state(points_of_interest=make_pois(6))

        result = asyncio.run(plan_routes(state, fakes.routing))

        itinerary = result["daily_itinerary"]
        assert [day.date for day in itinerary] == ["2026-06-01", "2026-06-02", "2026-06-03"]
        assert [day.total_duration for day in itinerary] == ["4 hours"] * 3

        first_day = itinerary[0]
        assert [poi.time_window for poi in first_day.pois] == ["09:00-11:00", "11:00-13:00"]
        assert [poi.travel_time_from_previous for poi in first_day.pois] == [0, 5]
        assert all(poi.duration == 120 for poi in first_day.pois)

        route_information = result["route_information"]
        assert [route.day for route in route_information.routes] == [1, 2, 3]
        leg = route_information.routes[0].legs[0]
        assert (leg.start_location, leg.end_location) == ("Sight 1", "Sight 2")
        assert (leg.distance, leg.duration) == ("1.5 km", "5 mins")
        assert route_information.total_distance == "4.5 km"
        assert route_information.total_duration == "15 minutes"
        assert fakes.routing.call_count == 3

    def test_empty_days_have_zero_hours(self, fakes, make_pois):
        state = _make_state(points_of_interest=make_pois(2), days_count=3)

        result = asyncio.run(plan_routes(state, fakes.routing))

        itinerary = result["daily_itinerary"]
        assert len(itinerary) == 3
        assert [len(day.pois) for day in itinerary] == [1, 1, 0]
        assert itinerary[2].total_duration == "0 hours"
        assert result["route_information"].routes == []

    def test_failed_leg_uses_straight_line_estimate(self, fakes, make_pois):
        """One failing leg is estimated; the others still use the provider."""
        pois = make_pois(4)
        fakes.routing.fail_on = {(pois[0].lat, pois[0].lng)}
        state = _make_state(points_of_interest=pois, days_count=1)

        result = asyncio.run(plan_routes(state, fakes.routing))

        legs = result["route_information"].routes[0].legs
        assert len(legs) == 3
        assert legs[0].distance == "1.3 km"
        assert legs[0].duration == "1 minutes"
        assert legs[1].distance == "1.5 km"
        assert "errors" not in result

    def test_legs_are_measured_in_order(self, fakes, make_pois):
        pois = make_pois(3)
        state = _make_state(points_of_interest=pois, days_count=1)

        asyncio.run(plan_routes(state, fakes.routing))

        starts = [origin.lat for origin, _ in fakes.routing.calls]
        assert starts == [pois[0].lat, pois[1].lat]


# ============================================================================
# Accommodation
# ============================================================================


class TestSearchAccommodation:
    def test_ceiling_and_dates(self, fakes, make_listings):
        fakes.lodging.listings = make_listings(3)

        result = asyncio.run(search_accommodation(_make_state(), fakes.lodging))

        assert fakes.lodging.calls == [
            {
                "destination": "Paris, France",
                "check_in": "2026-06-01",
                "check_out": "2026-06-04",
                "min_price": 0,
                "max_price": 300,
            }
        ]
        assert len(result["airbnb_recommendations"]) == 3

    def test_truncates_to_configured_count(self, fakes, make_listings):
        fakes.lodging.listings = make_listings(8)
        config = get_config(max_listings=5)

        result = asyncio.run(search_accommodation(_make_state(), fakes.lodging, config))

        assert [listing.id for listing in result["airbnb_recommendations"]] == ["1", "2", "3", "4", "5"]

    def test_non_list_response(self, fakes):
        fakes.lodging.listings = {"results": []}

        result = asyncio.run(search_accommodation(_make_state(), fakes.lodging))

        assert result["airbnb_recommendations"] == []
        assert result["errors"] == [
            "Accommodation search failed: Invalid response from lodging provider"
        ]

    def test_empty_response(self, fakes):
        fakes.lodging.listings = []

        result = asyncio.run(search_accommodation(_make_state(), fakes.lodging))

        assert result["errors"] == ["Accommodation search failed: No listings found"]

    def test_nightly_ceiling_floors(self):
        assert nightly_price_ceiling(1000, 10) == 100
        assert nightly_price_ceiling(1000, 3) == 333

    def test_non_finite_budget_is_an_error_entry(self, fakes):
        """A budget with no whole-dollar ceiling fails the step, not the run."""
        result = asyncio.run(search_accommodation(_make_state(budget_usd=math.nan), fakes.lodging))

        assert result["airbnb_recommendations"] == []
        assert result["errors"][0].startswith("Accommodation search failed: ")
        assert fakes.lodging.call_count == 0


# ============================================================================
# Car route
# ============================================================================


class TestCalculateCarRoute:
    def test_single_day_zero_leg(self, fakes):
        result = asyncio.run(calculate_car_route(_with_origin(), fakes.routing))

        car_route = result["car_route"]
        assert car_route.total_distance == "1.5 km"
        assert len(car_route.routes) == 1
        assert car_route.routes[0].day == 0
        assert car_route.routes[0].legs[0].start_location == "London, UK"
        assert fakes.routing.calls == [(LONDON, PARIS)]

    def test_failure_is_recorded(self, fakes):
        fakes.routing.fail = True

        result = asyncio.run(calculate_car_route(_with_origin(), fakes.routing))

        assert result == {
            "errors": ["Car route calculation failed: Route calculation failed: ZERO_RESULTS"]
        }

"""Tests for Google Maps geocode and directions response parsing."""

import pytest

from trip_planner.services.google_maps import parse_directions, parse_geocode_results
from trip_planner.shared.errors import GeocodingError, RoutingError


def _make_leg(meters, seconds, distance_text=None, duration_text=None, steps=None):
    return {
        "distance": {"value": meters, "text": distance_text},
        "duration": {"value": seconds, "text": duration_text},
        "steps": steps or [],
    }


class TestParseGeocodeResults:
    def test_first_result_used(self):
        results = [
            {"geometry": {"location": {"lat": 48.8566, "lng": 2.3522}}},
            {"geometry": {"location": {"lat": 33.66, "lng": -95.55}}},
        ]

        coordinates = parse_geocode_results("Paris", results)

        assert (coordinates.lat, coordinates.lng) == (48.8566, 2.3522)

    def test_no_results(self):
        with pytest.raises(GeocodingError, match="No geocoding results for 'Nowhere'"):
            parse_geocode_results("Nowhere", [])

    def test_missing_location(self):
        with pytest.raises(GeocodingError, match="Could not parse coordinates"):
            parse_geocode_results("Paris", [{"geometry": {}}])

    def test_out_of_range(self):
        with pytest.raises(GeocodingError, match="out of valid range"):
            parse_geocode_results("Paris", [{"geometry": {"location": {"lat": 95, "lng": 0}}}])


class TestParseDirections:
    def test_single_leg_keeps_provider_labels(self):
        step = {
            "html_instructions": "Head <b>north</b> on Rue de Rivoli",
            "distance": {"value": 400, "text": "0.4 km"},
            "duration": {"value": 60, "text": "1 min"},
            "travel_mode": "DRIVING",
        }
        routes = [{"legs": [_make_leg(1500, 300, "1.5 km", "5 mins", [step])]}]

        result = parse_directions(routes)

        assert result.distance_label == "1.5 km"
        assert result.duration_label == "5 mins"
        assert result.distance_meters == 1500
        assert result.steps[0].instructions == "Head north on Rue de Rivoli"

    def test_multiple_legs_summed_and_formatted(self):
        routes = [{"legs": [_make_leg(1000, 1800, "1 km", "30 mins"), _make_leg(500, 3600)]}]

        result = parse_directions(routes)

        assert result.distance_meters == 1500
        assert result.distance_label == "1.5 km"
        assert result.duration_label == "1h 30m"

    def test_no_routes(self):
        with pytest.raises(RoutingError, match="No route found"):
            parse_directions([])

    def test_invalid_distance(self):
        with pytest.raises(RoutingError, match="Invalid distance"):
            parse_directions([{"legs": [_make_leg(None, 60)]}])

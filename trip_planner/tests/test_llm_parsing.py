"""
Tests for LLM reply parsing and the POI sizing rule.
"""

from datetime import date

import pytest

from trip_planner.services.llm_advisor import (
    parse_points_of_interest,
    parse_transport_mode,
    suggested_poi_count,
    trip_length_days,
)
from trip_planner.shared.errors import LLMProviderError
from trip_planner.shared.llm.client import extract_json_from_response


class TestExtractJson:
    def test_plain_json(self):
        assert extract_json_from_response('{"a": 1}') == '{"a": 1}'

    def test_markdown_fence(self):
        raw = 'Here you go:\n```json\n{"pois": []}\n```'
        assert extract_json_from_response(raw) == '{"pois": []}'

    def test_surrounding_prose(self):
        raw = 'Sure! [{"name": "x"}] Hope that helps.'
        assert extract_json_from_response(raw) == '[{"name": "x"}]'


class TestParsePointsOfInterest:
    def test_pois_object(self):
        raw = (
            '{"pois": [{"name": "Louvre", "description": "Art", "lat": 48.86, '
            '"lng": 2.34, "category": "museum"}]}'
        )

        pois = parse_points_of_interest(raw)

        assert len(pois) == 1
        assert pois[0].name == "Louvre"
        assert pois[0].category == "museum"

    def test_bare_list(self):
        raw = '[{"name": "Park", "lat": 1, "lng": 2}]'
        assert [poi.name for poi in parse_points_of_interest(raw)] == ["Park"]

    def test_invalid_items_skipped(self):
        """Out-of-range coordinates drop that item only."""
        raw = '{"pois": [{"name": "Bad", "lat": 200, "lng": 0}, {"name": "Good", "lat": 10, "lng": 10}]}'
        assert [poi.name for poi in parse_points_of_interest(raw)] == ["Good"]

    def test_missing_array(self):
        with pytest.raises(LLMProviderError, match="missing pois array"):
            parse_points_of_interest('{"places": "none"}')

    def test_not_json(self):
        with pytest.raises(LLMProviderError, match="invalid JSON"):
            parse_points_of_interest("I cannot help with that.")


class TestParseTransportMode:
    def test_mode_normalized(self):
        decision = parse_transport_mode('{"mode": " Train ", "reasoning": "Eurostar"}')
        assert decision.mode == "train"
        assert decision.reasoning == "Eurostar"

    def test_unknown_mode(self):
        with pytest.raises(LLMProviderError):
            parse_transport_mode('{"mode": "teleport"}')


class TestPoiSizing:
    @pytest.mark.parametrize("days, expected", [(1, 8), (4, 8), (5, 10), (6, 12), (30, 12)])
    def test_two_per_day_clamped(self, days, expected):
        assert suggested_poi_count(days) == expected

    def test_trip_length_at_least_one(self):
        assert trip_length_days(date(2026, 5, 1), date(2026, 5, 1)) == 1
        assert trip_length_days(date(2026, 5, 1), date(2026, 5, 4)) == 3

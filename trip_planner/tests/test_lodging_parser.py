"""
Tests for the lodging payload parser.

No network: the parser is fed the shapes the Airbnb MCP server returns.
"""

import json

import pytest

from trip_planner.services.airbnb import (
    format_price,
    parse_listing,
    parse_listings,
    parse_price,
    parse_rating,
)


def _make_item(**overrides):
    item = {
        "id": "4242",
        "name": "Canal-side loft",
        "price": "$1,234.50 total",
        "pricePerNight": "$176",
        "location": {"lat": 52.37, "lng": 4.89},
        "rating": "4.85 out of 5 average rating, 120 reviews",
        "image": "https://img.example/4242.jpg",
    }
    item.update(overrides)
    return item


# ============================================================================
# Prices and ratings
# ============================================================================


class TestParsePrice:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (120, 120.0),
            (99.5, 99.5),
            ("$1,234.50 total", 1234.5),
            ("From $ 80 a night", 80.0),
            ("250", 250.0),
        ],
    )
    def test_accepted_forms(self, value, expected):
        assert parse_price(value) == expected

    @pytest.mark.parametrize("value", [None, True, "free", {"amount": 10}])
    def test_unparseable(self, value):
        assert parse_price(value) is None


class TestFormatPrice:
    def test_whole_dollars(self):
        assert format_price(450) == "$450"
        assert format_price(2500.0) == "$2,500"

    def test_cents(self):
        assert format_price(1234.5) == "$1,234.50"


class TestParseRating:
    def test_label_with_reviews(self):
        assert parse_rating("4.85 out of 5 average rating, 120 reviews") == (4.85, 120)

    def test_number(self):
        assert parse_rating(4.7) == (4.7, None)

    def test_missing(self):
        assert parse_rating(None) == (None, None)
        assert parse_rating("New listing") == (None, None)


# ============================================================================
# Listings
# ============================================================================


class TestParseListing:
    def test_full_item(self):
        listing = parse_listing(_make_item(), fallback_price_per_night=200)

        assert listing.id == "4242"
        assert listing.price == "$1,234.50"
        assert listing.price_per_night == "$176"
        assert listing.location.lat == 52.37
        assert listing.rating == 4.85
        assert listing.review_count == 120
        assert listing.distance_to_route == "Check listing"

    def test_link_fallback(self):
        """Without a link the listing points at the Airbnb room page."""
        listing = parse_listing(_make_item(), fallback_price_per_night=200)
        assert listing.link == "https://www.airbnb.com/rooms/4242"

    def test_explicit_link_kept(self):
        listing = parse_listing(_make_item(url="https://example.com/x"), fallback_price_per_night=200)
        assert listing.link == "https://example.com/x"

    def test_nightly_price_fallback(self):
        listing = parse_listing(_make_item(pricePerNight=None), fallback_price_per_night=150)
        assert listing.price_per_night == "$150"

    def test_explicit_review_count_wins(self):
        listing = parse_listing(_make_item(reviewCount="1,024"), fallback_price_per_night=200)
        assert listing.review_count == 1024

    def test_missing_coordinates_default_to_zero(self):
        listing = parse_listing(_make_item(location=None), fallback_price_per_night=200)
        assert (listing.location.lat, listing.location.lng) == (0.0, 0.0)

    @pytest.mark.parametrize("overrides", [{"id": None}, {"name": None}])
    def test_unusable_items_skipped(self, overrides):
        assert parse_listing(_make_item(**overrides), fallback_price_per_night=200) is None


class TestParseListings:
    def test_bare_list_keeps_order(self):
        payload = [_make_item(id="b"), _make_item(id="a")]
        assert [listing.id for listing in parse_listings(payload, 100)] == ["b", "a"]

    def test_search_results_wrapper(self):
        payload = {"searchResults": [_make_item(), {"name": "no id"}]}
        assert len(parse_listings(payload, 100)) == 1

    def test_mcp_text_content(self):
        """Tool results wrap the JSON payload inside text content blocks."""
        inner = {"searchResults": [_make_item(id="1"), _make_item(id="2")]}
        payload = {
            "content": [
                {"type": "text", "text": "not json"},
                {"type": "image", "data": "..."},
                {"type": "text", "text": json.dumps(inner)},
            ]
        }

        listings = parse_listings(payload, 100)

        assert [listing.id for listing in listings] == ["1", "2"]

    def test_empty_payload(self):
        assert parse_listings({"content": []}, 100) == []

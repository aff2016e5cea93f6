"""
Airbnb lodging search adapter.

Talks JSON-RPC (``tools/call``) over HTTP to an Airbnb MCP server. The
server's tool name has changed between releases, so the adapter tries an
ordered list of tool names, each under the same error contract, and stops
at the first one that answers.

Listing payloads are loosely structured; ``parse_listings`` is the single
place that turns them into ``Listing`` contracts.

Listing grammar accepted by ``parse_listings``:
    payload   := [item, ...] | {"searchResults": [item, ...]}
               | {"content": [{"type": "text", "text": <json payload>}, ...]}
    price     := number | string containing "$<digits[,digits][.digits]>"
               | plain numeric string
    rating    := number | string "<x> out of 5 ..., <n> reviews"
Items without an id or a name are skipped.
"""

import asyncio
import itertools
import json
import logging
import re
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import requests
from pydantic import ValidationError

from trip_planner.services.lifecycle import LazyResource
from trip_planner.shared.contracts import Coordinates, Listing
from trip_planner.shared.errors import LodgingSearchError


logger = logging.getLogger(__name__)

DEFAULT_TOOL_NAMES = ("airbnb_search", "search_listings")

PRICE_PATTERN = re.compile(r"\$\s*([\d,]+(?:\.\d+)?)")
NUMBER_PATTERN = re.compile(r"^\s*([\d,]+(?:\.\d+)?)\s*$")
RATING_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*out of 5", re.IGNORECASE)
REVIEWS_PATTERN = re.compile(r"(\d[\d,]*)\s+reviews?", re.IGNORECASE)


# ============================================================================
# Parsing
# ============================================================================


def parse_price(value: Any) -> Optional[float]:
    """Parse a price from a number or a price string ("$1,234.50 total")."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        return None
    match = PRICE_PATTERN.search(value) or NUMBER_PATTERN.match(value)
    if not match:
        return None
    return float(match.group(1).replace(",", ""))


def format_price(amount: float) -> str:
    if amount == int(amount):
        return f"${int(amount):,}"
    return f"${amount:,.2f}"


def parse_rating(value: Any) -> Tuple[Optional[float], Optional[int]]:
    """
    Parse a rating and review count.

    Returns:
        (rating, review_count); either may be None.
    """
    if isinstance(value, bool) or value is None:
        return None, None
    if isinstance(value, (int, float)):
        return float(value), None
    if not isinstance(value, str):
        return None, None

    rating_match = RATING_PATTERN.search(value) or NUMBER_PATTERN.match(value)
    reviews_match = REVIEWS_PATTERN.search(value)
    rating = float(rating_match.group(1).replace(",", "")) if rating_match else None
    reviews = int(reviews_match.group(1).replace(",", "")) if reviews_match else None
    return rating, reviews


def _coordinates(item: Dict[str, Any]) -> Coordinates:
    location = item.get("location") or item.get("coordinates") or {}
    if not isinstance(location, dict):
        location = {}
    lat = location.get("lat", location.get("latitude", item.get("lat")))
    lng = location.get("lng", location.get("longitude", item.get("lng")))
    try:
        return Coordinates(lat=float(lat), lng=float(lng))
    except (TypeError, ValueError, ValidationError):
        return Coordinates(lat=0.0, lng=0.0)


def _to_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str) and value.replace(",", "").strip().isdigit():
        return int(value.replace(",", "").strip())
    return None


def parse_listing(item: Any, fallback_price_per_night: float) -> Optional[Listing]:
    """Convert one raw listing item, or return None if it is unusable."""
    if not isinstance(item, dict):
        return None
    listing_id = item.get("id")
    name = item.get("name") or item.get("title")
    if not listing_id or not name:
        return None

    total = parse_price(item.get("price"))
    per_night = parse_price(item.get("pricePerNight"))
    if per_night is None:
        per_night = fallback_price_per_night

    rating, label_reviews = parse_rating(item.get("rating", item.get("avgRatingA11yLabel")))
    review_count = _to_int(item.get("reviewCount"))
    if review_count is None:
        review_count = label_reviews

    return Listing(
        id=str(listing_id),
        name=str(name),
        price=format_price(total if total is not None else 0),
        price_per_night=format_price(per_night),
        link=str(item.get("link") or item.get("url") or f"https://www.airbnb.com/rooms/{listing_id}"),
        location=_coordinates(item),
        distance_to_route=str(item.get("distanceToRoute") or "Check listing"),
        rating=rating,
        review_count=review_count,
        image=str(item["image"]) if item.get("image") else None,
    )


def _iter_items(payload: Any) -> Iterable[Any]:
    if isinstance(payload, list):
        yield from payload
    elif isinstance(payload, dict):
        if isinstance(payload.get("content"), list):
            for content in payload["content"]:
                if not isinstance(content, dict) or content.get("type") != "text":
                    continue
                try:
                    yield from _iter_items(json.loads(content.get("text") or ""))
                except json.JSONDecodeError:
                    logger.debug("Skipping non-JSON text content in lodging response")
        elif isinstance(payload.get("searchResults"), list):
            yield from payload["searchResults"]
        else:
            yield payload


def parse_listings(payload: Any, fallback_price_per_night: float) -> List[Listing]:
    """
    Turn a lodging search payload into listings, in provider order.

    Args:
        payload: Decoded tool result (see module docstring for the grammar)
        fallback_price_per_night: Nightly price used when an item has none

    Returns:
        Parsed listings; may be empty.
    """
    listings = []
    for item in _iter_items(payload):
        listing = parse_listing(item, fallback_price_per_night)
        if listing is not None:
            listings.append(listing)
    return listings


# ============================================================================
# Client
# ============================================================================


class AirbnbLodgingService:
    """LodgingProvider backed by an Airbnb MCP server reachable over HTTP."""

    def __init__(
        self,
        endpoint: Optional[str],
        tool_names: Sequence[str] = DEFAULT_TOOL_NAMES,
        timeout: float = 20.0,
    ):
        self.endpoint = endpoint
        self.tool_names = tuple(tool_names)
        self.timeout = timeout
        self._request_ids = itertools.count(1)
        self._resource: LazyResource[requests.Session] = LazyResource(
            "airbnb",
            factory=self._create_session,
            closer=lambda session: session.close(),
        )

    def _create_session(self) -> requests.Session:
        if not self.endpoint:
            raise LodgingSearchError("AIRBNB_MCP_ENDPOINT environment variable is not set")
        session = requests.Session()
        session.headers.update({"Content-Type": "application/json", "Accept": "application/json"})
        return session

    def _call_tool(self, session: requests.Session, name: str, arguments: Dict[str, Any]) -> Any:
        body = {
            "jsonrpc": "2.0",
            "id": next(self._request_ids),
            "method": "tools/call",
            "params": {"name": name, "arguments": arguments},
        }
        try:
            response = session.post(self.endpoint, json=body, timeout=self.timeout)
            response.raise_for_status()
            message = response.json()
        except (requests.RequestException, ValueError) as e:
            raise LodgingSearchError(f"{name}: {e}") from e

        if message.get("error"):
            error = message["error"]
            detail = error.get("message") if isinstance(error, dict) else error
            raise LodgingSearchError(f"{name}: {detail}")

        result = message.get("result")
        if not isinstance(result, dict):
            raise LodgingSearchError(f"{name}: invalid response, no result")
        if result.get("isError"):
            raise LodgingSearchError(f"{name}: tool reported an error")
        return result

    async def search_lodging(
        self,
        destination: str,
        check_in: str,
        check_out: str,
        min_price: int,
        max_price: int,
    ) -> List[Listing]:
        session = await self._resource.get()
        arguments = {
            "location": destination,
            "checkin": check_in,
            "checkout": check_out,
            "minPrice": min_price,
            "maxPrice": max_price,
        }

        failures = []
        for name in self.tool_names:
            try:
                result = await asyncio.to_thread(self._call_tool, session, name, arguments)
            except LodgingSearchError as e:
                logger.warning(f"Lodging tool strategy failed: {e}")
                failures.append(str(e))
                continue

            listings = parse_listings(result, fallback_price_per_night=max_price)
            logger.info(f"Lodging search via {name!r} returned {len(listings)} listings")
            return listings

        raise LodgingSearchError(f"Airbnb search failed: {'; '.join(failures)}")

    async def close(self) -> None:
        await self._resource.close()

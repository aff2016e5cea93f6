"""
LLM-backed advisors: POI discovery and transport mode selection.

Both go through the shared OpenAI client (created lazily, once per
process) and the tenacity-retried ``call_llm``. Replies are parsed into
contracts here so the planning steps never see free text.
"""

import asyncio
import json
import logging
import math
from datetime import date
from typing import Any, List, Optional

from pydantic import ValidationError

from trip_planner.services.lifecycle import LazyResource
from trip_planner.services.prompts import (
    POI_SYSTEM_PROMPT,
    POI_USER_PROMPT,
    TRANSPORT_SYSTEM_PROMPT,
    TRANSPORT_USER_PROMPT,
)
from trip_planner.shared.contracts import (
    TRANSPORTATION_MODES,
    PointOfInterest,
    TransportModeDecision,
)
from trip_planner.shared.errors import LLMProviderError
from trip_planner.shared.llm.client import call_llm, create_client, extract_json_from_response


logger = logging.getLogger(__name__)

KM_TO_MILES = 0.621371


def trip_length_days(start_date: date, end_date: date) -> int:
    return max(1, math.ceil((end_date - start_date).days))


def suggested_poi_count(trip_days: int, min_pois: int = 8, max_pois: int = 12) -> int:
    """Two POIs per day, kept inside [min_pois, max_pois]."""
    return max(min_pois, min(max_pois, trip_days * 2))


def _load_json(raw_response: str) -> Any:
    try:
        return json.loads(extract_json_from_response(raw_response))
    except json.JSONDecodeError as e:
        raise LLMProviderError(f"Model returned invalid JSON: {e}") from e


def parse_points_of_interest(raw_response: str) -> List[PointOfInterest]:
    """
    Parse a POI reply into contracts.

    Accepts ``{"pois": [...]}`` or a bare list. Items that fail validation
    are skipped with a warning rather than failing the whole reply.

    Args:
        raw_response: Raw model output

    Returns:
        Validated POIs in the order the model listed them.

    Raises:
        LLMProviderError: If the reply is not JSON or has no POI array.
    """
    parsed = _load_json(raw_response)
    items = parsed.get("pois") if isinstance(parsed, dict) else parsed
    if not isinstance(items, list):
        raise LLMProviderError("Invalid response format: missing pois array")

    pois: List[PointOfInterest] = []
    for index, item in enumerate(items):
        try:
            pois.append(PointOfInterest.model_validate(item))
        except ValidationError as e:
            logger.warning(f"Skipping invalid POI at index {index}: {e.error_count()} errors")
    return pois


def parse_transport_mode(raw_response: str) -> TransportModeDecision:
    """
    Parse a transport mode reply into a decision.

    Raises:
        LLMProviderError: If the reply is not JSON or names an unknown mode.
    """
    parsed = _load_json(raw_response)
    if isinstance(parsed, dict) and isinstance(parsed.get("mode"), str):
        parsed["mode"] = parsed["mode"].strip().lower()
    try:
        return TransportModeDecision.model_validate(parsed)
    except ValidationError as e:
        raise LLMProviderError(f"Invalid transportation mode response: {e}") from e


class OpenAIPlanningAdvisor:
    """PointsOfInterestProvider and TransportModeAdvisor backed by OpenAI."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gpt-4.1-mini",
        min_pois: int = 8,
        max_pois: int = 12,
    ):
        self.model = model
        self.min_pois = min_pois
        self.max_pois = max_pois
        self._resource = LazyResource(
            "openai",
            factory=lambda: create_client(api_key),
            closer=lambda client: client.close(),
        )

    async def _complete(self, system_prompt: str, user_prompt: str) -> str:
        client = await self._resource.get()
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        try:
            return await asyncio.to_thread(
                call_llm, messages, client, self.model, True
            )
        except LLMProviderError:
            raise
        except Exception as e:
            raise LLMProviderError(f"Language model call failed: {e}") from e

    async def discover_points_of_interest(
        self, destination: str, start_date: date, end_date: date
    ) -> List[PointOfInterest]:
        trip_days = trip_length_days(start_date, end_date)
        target = suggested_poi_count(trip_days, self.min_pois, self.max_pois)
        prompt = POI_USER_PROMPT.format(
            min_count=max(self.min_pois, target - 2),
            max_count=target,
            trip_days=trip_days,
            destination=destination,
        )
        raw = await self._complete(POI_SYSTEM_PROMPT, prompt)
        pois = parse_points_of_interest(raw)
        logger.info(f"Discovered {len(pois)} POIs for {destination!r} ({trip_days}d)")
        return pois

    async def determine_transport_mode(
        self, origin: str, destination: str, distance_km: float
    ) -> TransportModeDecision:
        prompt = TRANSPORT_USER_PROMPT.format(
            origin=origin,
            destination=destination,
            distance_km=distance_km,
            distance_miles=distance_km * KM_TO_MILES,
            modes=", ".join(TRANSPORTATION_MODES),
        )
        raw = await self._complete(TRANSPORT_SYSTEM_PROMPT, prompt)
        return parse_transport_mode(raw)

    async def close(self) -> None:
        await self._resource.close()

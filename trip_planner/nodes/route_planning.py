"""
Route planning node: daily itinerary and route legs.

POIs are split evenly across the trip days by index. Each day gets
sequential visit windows from the configured start hour, and each pair of
consecutive POIs within a day becomes a route leg. Legs are measured one
at a time through the routing provider; a leg the provider cannot answer
falls back to a straight-line estimate and is not reported as an error.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Dict, List, Sequence

from trip_planner.graph.config import DEFAULT_CONFIG, TripPlannerGraphConfig
from trip_planner.graph.state import TripPlannerState, log_prefix
from trip_planner.services.base import RoutingProvider
from trip_planner.shared.contracts import (
    Coordinates,
    DayPointOfInterest,
    DayRoute,
    DaySchedule,
    PointOfInterest,
    RouteData,
    RouteLeg,
)
from trip_planner.shared.geo import (
    estimate_travel_seconds,
    format_distance,
    format_duration,
    haversine_meters,
    round_half_up,
)


logger = logging.getLogger(__name__)


@dataclass
class LegMeasurement:
    distance_meters: float
    duration_seconds: float
    distance_label: str
    duration_label: str
    estimated: bool = False


def partition_by_day(
    pois: Sequence[PointOfInterest], days_count: int
) -> List[List[PointOfInterest]]:
    """
    Split POIs into ``days_count`` day buckets, ``ceil(n / days)`` per day.

    Buckets past the last POI stay empty.
    """
    buckets: List[List[PointOfInterest]] = [[] for _ in range(days_count)]
    if not pois:
        return buckets
    per_day = math.ceil(len(pois) / days_count)
    for index, poi in enumerate(pois):
        buckets[index // per_day].append(poi)
    return buckets


def time_window(slot: int, day_start_hour: int = 9, visit_minutes: int = 120) -> str:
    """Visit window label for the n-th slot of a day, e.g. slot 1 -> "11:00-13:00"."""
    start = day_start_hour * 60 + slot * visit_minutes
    end = start + visit_minutes
    return f"{_clock(start)}-{_clock(end)}"


def _clock(minutes: int) -> str:
    return f"{(minutes // 60) % 24:02d}:{minutes % 60:02d}"


def day_duration_label(poi_count: int, visit_minutes: int = 120) -> str:
    hours = poi_count * visit_minutes / 60
    return f"{hours:g} hours"


def estimate_leg(start: PointOfInterest, end: PointOfInterest) -> LegMeasurement:
    """Straight-line leg estimate: haversine distance, 1 km ~ 60 s."""
    meters = haversine_meters(start.lat, start.lng, end.lat, end.lng)
    seconds = estimate_travel_seconds(meters)
    return LegMeasurement(
        distance_meters=meters,
        duration_seconds=seconds,
        distance_label=format_distance(meters),
        duration_label=format_duration(seconds),
        estimated=True,
    )


async def measure_leg(
    routing: RoutingProvider,
    start: PointOfInterest,
    end: PointOfInterest,
    log: str = "",
) -> LegMeasurement:
    """Measure one leg with the routing provider, estimating on failure."""
    try:
        result = await routing.compute_route(
            Coordinates(lat=start.lat, lng=start.lng),
            Coordinates(lat=end.lat, lng=end.lng),
        )
    except Exception as e:
        logger.warning(
            f"{log}Leg {start.name!r} -> {end.name!r} unavailable, "
            f"using straight-line estimate: {e}"
        )
        return estimate_leg(start, end)

    return LegMeasurement(
        distance_meters=result.distance_meters,
        duration_seconds=result.duration_seconds,
        distance_label=result.distance_label,
        duration_label=result.duration_label,
    )


async def build_itinerary(
    pois: Sequence[PointOfInterest],
    days_count: int,
    start_date: date,
    routing: RoutingProvider,
    config: TripPlannerGraphConfig = DEFAULT_CONFIG,
    log: str = "",
) -> Dict[str, Any]:
    """
    Schedule POIs over the trip and measure every leg, strictly in order.

    Args:
        pois: Discovered POIs, in provider order
        days_count: Number of trip days
        start_date: Date of day 1
        routing: Routing provider for leg measurements
        config: Visit length and day start hour
        log: Log prefix

    Returns:
        Dict with ``daily_itinerary`` and ``route_information``.
    """
    daily_itinerary: List[DaySchedule] = []
    routes: List[DayRoute] = []
    total_meters = 0.0
    total_seconds = 0.0

    for day_index, bucket in enumerate(partition_by_day(pois, days_count)):
        day_pois: List[DayPointOfInterest] = []
        legs: List[RouteLeg] = []
        previous = None

        for slot, poi in enumerate(bucket):
            travel_minutes = 0
            if previous is not None:
                leg = await measure_leg(routing, previous, poi, log)
                total_meters += leg.distance_meters
                total_seconds += leg.duration_seconds
                travel_minutes = round_half_up(leg.duration_seconds / 60)
                legs.append(
                    RouteLeg(
                        start_location=previous.name,
                        end_location=poi.name,
                        distance=leg.distance_label,
                        duration=leg.duration_label,
                    )
                )

            day_pois.append(
                DayPointOfInterest(
                    **poi.model_dump(include=set(PointOfInterest.model_fields)),
                    time_window=time_window(slot, config.day_start_hour, config.poi_visit_minutes),
                    duration=config.poi_visit_minutes,
                    travel_time_from_previous=travel_minutes,
                )
            )
            previous = poi

        day_number = day_index + 1
        daily_itinerary.append(
            DaySchedule(
                day=day_number,
                date=(start_date + timedelta(days=day_index)).isoformat(),
                pois=day_pois,
                total_duration=day_duration_label(len(day_pois), config.poi_visit_minutes),
            )
        )
        if legs:
            routes.append(DayRoute(day=day_number, legs=legs))

    route_information = RouteData(
        total_distance=format_distance(total_meters),
        total_duration=format_duration(total_seconds),
        routes=routes,
    )
    return {"daily_itinerary": daily_itinerary, "route_information": route_information}


async def plan_routes(
    state: TripPlannerState,
    routing: RoutingProvider,
    config: TripPlannerGraphConfig = DEFAULT_CONFIG,
) -> Dict[str, Any]:
    """
    Build the daily itinerary and route information from discovered POIs.

    With no POIs there is nothing to plan: the defaults are returned and
    no error is recorded (POI discovery already reported it).

    Args:
        state: Planning state after POI discovery
        routing: Routing provider
        config: Itinerary settings

    Returns:
        State update with ``daily_itinerary`` and ``route_information``.
    """
    _log = log_prefix(state, "plan_routes")
    pois = state.get("points_of_interest") or []

    if not pois:
        logger.info(f"{_log}No POIs, skipping itinerary")
        return {"daily_itinerary": [], "route_information": RouteData.empty()}

    try:
        result = await build_itinerary(
            pois,
            state["days_count"],
            state["start_date"],
            routing,
            config,
            _log,
        )
    except Exception as e:
        logger.exception(f"{_log}Route planning failed: {e}")
        return {"errors": [f"Route planning failed: {e}"]}

    route_information = result["route_information"]
    logger.info(
        f"{_log}Itinerary planned | days={len(result['daily_itinerary'])}, "
        f"distance={route_information.total_distance}, "
        f"duration={route_information.total_duration}"
    )
    return result

"""
Geographic helpers and human-readable route labels.

All functions here are pure: no I/O, no provider calls.
"""

import math


EARTH_RADIUS_KM = 6371.0

# Straight-line fallback: 1 km of distance ~ 60 seconds of travel.
FALLBACK_SECONDS_PER_KM = 60.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Great-circle distance between two points using the haversine formula.

    Args:
        lat1: Latitude of the first point in degrees
        lng1: Longitude of the first point in degrees
        lat2: Latitude of the second point in degrees
        lng2: Longitude of the second point in degrees

    Returns:
        Distance in kilometers
    """
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def haversine_meters(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    return haversine_km(lat1, lng1, lat2, lng2) * 1000.0


def estimate_travel_seconds(distance_meters: float) -> float:
    """Straight-line travel time estimate used when routing is unavailable."""
    return (distance_meters / 1000.0) * FALLBACK_SECONDS_PER_KM


def format_distance(meters: float) -> str:
    """
    Format a distance for display.

    Examples:
        500  -> "500 m"
        1500 -> "1.5 km"
    """
    if meters < 1000:
        return f"{round_half_up(meters)} m"
    return f"{meters / 1000:.1f} km"


def format_duration(seconds: float) -> str:
    """
    Format a duration for display.

    Examples:
        30   -> "30 seconds"
        150  -> "3 minutes"
        3600 -> "1 hour"
        5400 -> "1h 30m"
    """
    if seconds < 60:
        return f"{round_half_up(seconds)} seconds"
    if seconds < 3600:
        return f"{round_half_up(seconds / 60)} minutes"

    hours = int(seconds // 3600)
    minutes = round_half_up((seconds % 3600) / 60)
    if minutes == 60:
        hours += 1
        minutes = 0
    if minutes == 0:
        return f"{hours} hour{'s' if hours > 1 else ''}"
    return f"{hours}h {minutes}m"

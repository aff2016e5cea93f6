"""
Graph configuration for the trip planner.

Centralizes the tunables of the planning workflow, making it easy to
adjust behavior without modifying the graph wiring.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TripPlannerGraphConfig:
    """
    Configuration for the trip planner graph.

    Attributes:
        timeout_ms: Overall wall-clock budget for one planning run
        recursion_limit: Maximum number of graph super-steps
        min_pois: Lower bound of the POI count requested from the provider
        max_pois: Upper bound of the POI count requested from the provider
        max_listings: Number of lodging listings kept from the search
        poi_visit_minutes: Default time spent at each POI
        day_start_hour: Hour the first visit window of a day starts
        max_trip_days: Longest trip accepted by validation
        max_budget_usd: Largest budget accepted by validation
        max_destination_length: Longest destination accepted by validation
        max_advance_years: How far in the future a trip may start
    """

    timeout_ms: int = 60000
    recursion_limit: int = 25

    # POI discovery
    min_pois: int = 8
    max_pois: int = 12

    # Accommodation
    max_listings: int = 10

    # Itinerary
    poi_visit_minutes: int = 120
    day_start_hour: int = 9

    # Validation limits
    max_trip_days: int = 365
    max_budget_usd: float = 1_000_000
    max_destination_length: int = 255
    max_advance_years: int = 2


# Default configuration instance
DEFAULT_CONFIG = TripPlannerGraphConfig()


def get_config(
    timeout_ms: Optional[int] = None,
    recursion_limit: Optional[int] = None,
    min_pois: Optional[int] = None,
    max_pois: Optional[int] = None,
    max_listings: Optional[int] = None,
) -> TripPlannerGraphConfig:
    """
    Create a configuration with optional overrides.

    Args:
        timeout_ms: Override for the overall planning timeout
        recursion_limit: Override for recursion limit
        min_pois: Override for the minimum POI count hint
        max_pois: Override for the maximum POI count hint
        max_listings: Override for the number of listings kept

    Returns:
        TripPlannerGraphConfig with specified overrides applied
    """
    return TripPlannerGraphConfig(
        timeout_ms=timeout_ms if timeout_ms is not None else DEFAULT_CONFIG.timeout_ms,
        recursion_limit=(
            recursion_limit if recursion_limit is not None else DEFAULT_CONFIG.recursion_limit
        ),
        min_pois=min_pois if min_pois is not None else DEFAULT_CONFIG.min_pois,
        max_pois=max_pois if max_pois is not None else DEFAULT_CONFIG.max_pois,
        max_listings=max_listings if max_listings is not None else DEFAULT_CONFIG.max_listings,
    )

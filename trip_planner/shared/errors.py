"""
Error taxonomy for the trip planner.

Two errors are fatal to a planning run and surface to the caller:
PlanningValidationError (bad input, nothing runs) and PlanningTimeoutError
(the graph did not settle in time). Provider errors are raised by the
service adapters and converted into non-fatal ``errors`` entries at the
step boundary.
"""


class TripPlannerError(Exception):
    """Base class for all trip planner errors."""


class PlanningValidationError(TripPlannerError, ValueError):
    """Raised when user input fails validation. Fatal for the run."""


class PlanningTimeoutError(TripPlannerError, TimeoutError):
    """Raised when the planning graph does not settle within the timeout."""

    def __init__(self, message: str, timeout: int):
        super().__init__(message)
        self.timeout = timeout


# ============================================================================
# Provider errors (non-fatal, folded into state["errors"] by the nodes)
# ============================================================================


class ProviderError(TripPlannerError):
    """Raised when an external provider call fails or returns garbage."""


class GeocodingError(ProviderError):
    pass


class RoutingError(ProviderError):
    pass


class LLMProviderError(ProviderError):
    pass


class LodgingSearchError(ProviderError):
    pass


class NoPointsOfInterestError(ProviderError):
    """Raised when POI discovery succeeds but yields nothing usable."""


# ============================================================================
# Persistence errors
# ============================================================================


class TripStoreError(TripPlannerError):
    pass


class TripNotFoundError(TripStoreError):
    pass


class DuplicateTripError(TripStoreError):
    pass

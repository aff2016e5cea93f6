"""
Saved trip contract.

A SavedTrip is the persisted copy of a finished plan. It has its own
lifecycle: created on save, read on view, deleted on delete. The only
mutation allowed after creation is the favorite toggle.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from trip_planner.shared.contracts.trip_plan import (
    CamelModel,
    DaySchedule,
    Listing,
    PointOfInterest,
    RouteData,
)


class SaveTripRequest(CamelModel):
    """Plan fields a client submits to persist a trip."""

    destination: str = Field(min_length=1, max_length=255)
    origin: Optional[str] = None
    start_date: str = Field(description="Trip start date (YYYY-MM-DD)")
    end_date: str = Field(description="Trip end date (YYYY-MM-DD)")
    budget_usd: float = Field(gt=0)
    points_of_interest: List[PointOfInterest]
    daily_itinerary: List[DaySchedule]
    route_information: RouteData
    airbnb_recommendations: List[Listing]


class SavedTrip(SaveTripRequest):
    """A persisted trip owned by one user."""

    id: str
    user_id: str
    created_at: datetime
    updated_at: datetime
    is_favorite: bool = False

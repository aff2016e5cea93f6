"""
Trip plan contracts.

Defines the structured values that flow between planning steps and out
through the API. Field names are snake_case in Python and camelCase on
the wire (``pointsOfInterest``, ``timeWindow``, ``pricePerNight``...).
"""

from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


TransportationMode = Literal["plane", "train", "bus", "car", "ferry", "combination"]

TRANSPORTATION_MODES = ("plane", "train", "bus", "car", "ferry", "combination")


class CamelModel(BaseModel):
    """Base model that serializes with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Coordinates(CamelModel):
    """A latitude/longitude pair."""

    lat: float = Field(ge=-90, le=90, description="Latitude in degrees")
    lng: float = Field(ge=-180, le=180, description="Longitude in degrees")


class PointOfInterest(CamelModel):
    """A named, categorized, geocoded attraction candidate."""

    name: str = Field(description="Name of the POI")
    description: str = Field(default="", description="Why it is worth visiting")
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)
    category: str = Field(
        default="landmark",
        description="Category (e.g., 'museum', 'landmark', 'park', 'market')",
    )


class DayPointOfInterest(PointOfInterest):
    """A POI scheduled on a specific day."""

    time_window: str = Field(description="Visit window, e.g. '09:00-11:00'")
    duration: int = Field(ge=0, description="Visit duration in minutes")
    travel_time_from_previous: int = Field(
        ge=0, description="Travel time from the previous POI in minutes"
    )


class DaySchedule(CamelModel):
    """The ordered POIs assigned to one calendar day of the trip."""

    day: int = Field(ge=1, description="1-based day index")
    date: str = Field(description="Calendar date (YYYY-MM-DD)")
    pois: List[DayPointOfInterest] = Field(default_factory=list)
    total_duration: str = Field(description="Human-readable day length")


class RouteLeg(CamelModel):
    """One directed hop between two consecutive stops."""

    start_location: str
    end_location: str
    distance: str
    duration: str


class DayRoute(CamelModel):
    """Legs travelled on one day. Day 0 is the origin-to-destination drive."""

    day: int = Field(ge=0)
    legs: List[RouteLeg] = Field(default_factory=list)


class RouteData(CamelModel):
    """Aggregated route information for the whole trip."""

    total_distance: str = ""
    total_duration: str = ""
    routes: List[DayRoute] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> "RouteData":
        return cls(total_distance="", total_duration="", routes=[])


class Listing(CamelModel):
    """A lodging listing returned by the accommodation search."""

    id: str
    name: str
    price: str = Field(description="Total price for the stay")
    price_per_night: str
    link: str
    location: Coordinates
    distance_to_route: str = "Check listing"
    rating: Optional[float] = None
    review_count: Optional[int] = None
    image: Optional[str] = None


# ============================================================================
# Provider result types
# ============================================================================


class RouteStep(CamelModel):
    """A single turn-by-turn instruction of a route."""

    instructions: str = ""
    distance_label: str = ""
    distance_meters: float = 0
    duration_label: str = ""
    duration_seconds: float = 0
    travel_mode: str = "DRIVING"


class RouteResult(CamelModel):
    """Distance/duration between two coordinate pairs."""

    distance_label: str
    distance_meters: float = Field(ge=0)
    duration_label: str
    duration_seconds: float = Field(ge=0)
    steps: List[RouteStep] = Field(default_factory=list)


class TransportModeDecision(CamelModel):
    """Recommended primary transport mode between origin and destination."""

    mode: TransportationMode
    reasoning: str = Field(default="", description="Advisory explanation")


class TripPlanData(CamelModel):
    """The generated part of a plan, as returned to API clients."""

    days_count: int
    transportation_mode: Optional[TransportationMode] = None
    points_of_interest: List[PointOfInterest] = Field(default_factory=list)
    daily_itinerary: List[DaySchedule] = Field(default_factory=list)
    route_information: RouteData = Field(default_factory=RouteData.empty)
    car_route: Optional[RouteData] = None
    airbnb_recommendations: List[Listing] = Field(default_factory=list)


class PlanningInput(CamelModel):
    """User-supplied subset of the planning state."""

    destination: str = ""
    origin: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    budget_usd: float = 0

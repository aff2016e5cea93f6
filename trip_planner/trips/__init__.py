"""Saved trip persistence."""

from trip_planner.trips.store import (
    InMemoryTripStore,
    MongoTripStore,
    TripStore,
    create_trip_store,
)

__all__ = ["InMemoryTripStore", "MongoTripStore", "TripStore", "create_trip_store"]

"""
Saved trip persistence.

Every operation is keyed by the owning user's id; a user never sees, or
changes, another user's trips. Saved trips are read-only after creation
except for the favorite flag.

Two stores share one interface:
- InMemoryTripStore: process-local, used when no database is configured
- MongoTripStore: pymongo-backed, used when MONGODB_URI is set
"""

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol, Tuple

from pymongo import ASCENDING, DESCENDING, MongoClient, ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from trip_planner.shared.contracts import SavedTrip, SaveTripRequest
from trip_planner.shared.errors import DuplicateTripError, TripNotFoundError, TripStoreError


logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 50
MAX_LIMIT = 100
SORT_FIELDS = ("created_at", "is_favorite")


def clamp_limit(limit: Optional[int]) -> int:
    """Page size clamped to 1..100; None means the default of 50."""
    if limit is None:
        return DEFAULT_LIMIT
    return min(max(limit, 1), MAX_LIMIT)


def clamp_offset(offset: Optional[int]) -> int:
    return max(offset or 0, 0)


def check_sort_by(sort_by: str) -> str:
    if sort_by not in SORT_FIELDS:
        raise ValueError('sortBy must be "created_at" or "is_favorite"')
    return sort_by


class TripStore(Protocol):
    def save(self, user_id: str, request: SaveTripRequest) -> SavedTrip:
        ...

    def list_for_user(
        self,
        user_id: str,
        limit: Optional[int] = DEFAULT_LIMIT,
        offset: Optional[int] = 0,
        sort_by: str = "created_at",
    ) -> Tuple[List[SavedTrip], int]:
        """Return one page of the user's trips and the user's total count."""
        ...

    def get(self, user_id: str, trip_id: str) -> SavedTrip:
        ...

    def set_favorite(self, user_id: str, trip_id: str, is_favorite: bool) -> SavedTrip:
        ...

    def delete(self, user_id: str, trip_id: str) -> None:
        ...

    def close(self) -> None:
        ...


def _new_trip(user_id: str, request: SaveTripRequest) -> SavedTrip:
    now = datetime.now(timezone.utc)
    return SavedTrip(
        **request.model_dump(),
        id=str(uuid.uuid4()),
        user_id=user_id,
        created_at=now,
        updated_at=now,
        is_favorite=False,
    )


def _identity(user_id: str, destination: str, start_date: str, end_date: str) -> Tuple[str, ...]:
    return (user_id, destination, start_date, end_date)


# ============================================================================
# In-memory store
# ============================================================================


class InMemoryTripStore:
    """Thread-safe, process-local trip store."""

    def __init__(self):
        self._trips: Dict[str, SavedTrip] = {}
        self._lock = threading.Lock()

    def save(self, user_id: str, request: SaveTripRequest) -> SavedTrip:
        identity = _identity(user_id, request.destination, request.start_date, request.end_date)
        with self._lock:
            for trip in self._trips.values():
                if _identity(trip.user_id, trip.destination, trip.start_date, trip.end_date) == identity:
                    raise DuplicateTripError("A trip with this destination and dates is already saved")
            trip = _new_trip(user_id, request)
            self._trips[trip.id] = trip
        logger.info(f"[user={user_id}] Saved trip {trip.id} | destination={trip.destination}")
        return trip

    def list_for_user(
        self,
        user_id: str,
        limit: Optional[int] = DEFAULT_LIMIT,
        offset: Optional[int] = 0,
        sort_by: str = "created_at",
    ) -> Tuple[List[SavedTrip], int]:
        check_sort_by(sort_by)
        limit, offset = clamp_limit(limit), clamp_offset(offset)
        with self._lock:
            trips = [trip for trip in self._trips.values() if trip.user_id == user_id]

        if sort_by == "is_favorite":
            trips.sort(key=lambda trip: (not trip.is_favorite, trip.created_at))
        else:
            trips.sort(key=lambda trip: trip.created_at)
        return trips[offset : offset + limit], len(trips)

    def get(self, user_id: str, trip_id: str) -> SavedTrip:
        with self._lock:
            trip = self._trips.get(trip_id)
        if trip is None or trip.user_id != user_id:
            raise TripNotFoundError("Trip not found")
        return trip

    def set_favorite(self, user_id: str, trip_id: str, is_favorite: bool) -> SavedTrip:
        with self._lock:
            trip = self._trips.get(trip_id)
            if trip is None or trip.user_id != user_id:
                raise TripNotFoundError("Trip not found")
            updated = trip.model_copy(
                update={"is_favorite": is_favorite, "updated_at": datetime.now(timezone.utc)}
            )
            self._trips[trip_id] = updated
        return updated

    def delete(self, user_id: str, trip_id: str) -> None:
        with self._lock:
            trip = self._trips.get(trip_id)
            if trip is None or trip.user_id != user_id:
                raise TripNotFoundError("Trip not found")
            del self._trips[trip_id]
        logger.info(f"[user={user_id}] Deleted trip {trip_id}")

    def close(self) -> None:
        pass


# ============================================================================
# MongoDB store
# ============================================================================


class MongoTripStore:
    """Trip store on a MongoDB collection, one document per trip."""

    def __init__(
        self,
        uri: str,
        db_name: str = "trip_planner",
        collection_name: str = "trips",
        client: Optional[MongoClient] = None,
    ):
        self._client = client or MongoClient(uri, serverSelectionTimeoutMS=3000, tz_aware=True)
        self._collection = self._client[db_name][collection_name]
        self._indexes_ready = False
        self._lock = threading.Lock()

    def _trips(self):
        if not self._indexes_ready:
            with self._lock:
                if not self._indexes_ready:
                    self._collection.create_index(
                        [
                            ("user_id", ASCENDING),
                            ("destination", ASCENDING),
                            ("start_date", ASCENDING),
                            ("end_date", ASCENDING),
                        ],
                        unique=True,
                        name="user_destination_dates",
                    )
                    self._collection.create_index([("user_id", ASCENDING), ("created_at", ASCENDING)])
                    self._indexes_ready = True
        return self._collection

    @staticmethod
    def _to_document(trip: SavedTrip) -> Dict[str, Any]:
        document = trip.model_dump(exclude={"id"})
        document["_id"] = trip.id
        return document

    @staticmethod
    def _from_document(document: Dict[str, Any]) -> SavedTrip:
        document = dict(document)
        document["id"] = str(document.pop("_id"))
        return SavedTrip.model_validate(document)

    def save(self, user_id: str, request: SaveTripRequest) -> SavedTrip:
        trip = _new_trip(user_id, request)
        try:
            self._trips().insert_one(self._to_document(trip))
        except DuplicateKeyError as e:
            raise DuplicateTripError("A trip with this destination and dates is already saved") from e
        except PyMongoError as e:
            raise TripStoreError(f"Failed to save trip: {e}") from e
        logger.info(f"[user={user_id}] Saved trip {trip.id} | destination={trip.destination}")
        return trip

    def list_for_user(
        self,
        user_id: str,
        limit: Optional[int] = DEFAULT_LIMIT,
        offset: Optional[int] = 0,
        sort_by: str = "created_at",
    ) -> Tuple[List[SavedTrip], int]:
        check_sort_by(sort_by)
        limit, offset = clamp_limit(limit), clamp_offset(offset)
        if sort_by == "is_favorite":
            order = [("is_favorite", DESCENDING), ("created_at", ASCENDING)]
        else:
            order = [("created_at", ASCENDING)]

        query = {"user_id": user_id}
        try:
            total = self._trips().count_documents(query)
            cursor = self._trips().find(query).sort(order).skip(offset).limit(limit)
            trips = [self._from_document(document) for document in cursor]
        except PyMongoError as e:
            raise TripStoreError(f"Failed to fetch trips: {e}") from e
        return trips, total

    def get(self, user_id: str, trip_id: str) -> SavedTrip:
        try:
            document = self._trips().find_one({"_id": trip_id, "user_id": user_id})
        except PyMongoError as e:
            raise TripStoreError(f"Failed to fetch trip: {e}") from e
        if document is None:
            raise TripNotFoundError("Trip not found")
        return self._from_document(document)

    def set_favorite(self, user_id: str, trip_id: str, is_favorite: bool) -> SavedTrip:
        try:
            document = self._trips().find_one_and_update(
                {"_id": trip_id, "user_id": user_id},
                {"$set": {"is_favorite": is_favorite, "updated_at": datetime.now(timezone.utc)}},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise TripStoreError(f"Failed to update trip: {e}") from e
        if document is None:
            raise TripNotFoundError("Trip not found")
        return self._from_document(document)

    def delete(self, user_id: str, trip_id: str) -> None:
        try:
            result = self._trips().delete_one({"_id": trip_id, "user_id": user_id})
        except PyMongoError as e:
            raise TripStoreError(f"Failed to delete trip: {e}") from e
        if result.deleted_count == 0:
            raise TripNotFoundError("Trip not found")
        logger.info(f"[user={user_id}] Deleted trip {trip_id}")

    def close(self) -> None:
        self._client.close()


def create_trip_store(mongodb_uri: Optional[str], db_name: str = "trip_planner") -> TripStore:
    """MongoTripStore when a URI is configured, otherwise an in-memory store."""
    if mongodb_uri:
        logger.info(f"Using MongoDB trip store | db={db_name}")
        return MongoTripStore(mongodb_uri, db_name)
    logger.warning("MONGODB_URI not set; saved trips are kept in memory only")
    return InMemoryTripStore()

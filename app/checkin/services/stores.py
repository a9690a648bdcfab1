"""
Collection adapters for the check-in pipeline.

Each store owns one collection, its upsert filter and the translation of
driver errors into check-in persistence errors. A document validation
failure (the collection's range validator rejecting a value) becomes a
RangeConstraintViolation; every other driver error becomes a
PersistenceError carrying the server message.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import OperationFailure, PyMongoError

from app.checkin.errors import PersistenceError, RangeConstraintViolation

logger = logging.getLogger(__name__)

# MongoDB server error code for $jsonSchema validator rejections
DOCUMENT_VALIDATION_FAILURE = 121

DAILY_ENTRIES = "daily_entries"
CHECKINS = "checkin"
PROFILES = "profiles"
DASHBOARD_CACHE = "dashboard_cache"


def _error_message(error: PyMongoError) -> str:
    details = getattr(error, "details", None)
    if isinstance(details, dict) and details.get("errmsg"):
        return details["errmsg"]
    return str(error)


def translate_error(error: PyMongoError, collection: str) -> PersistenceError:
    """Map a driver error to the check-in error taxonomy."""
    message = _error_message(error)
    if isinstance(error, OperationFailure) and error.code == DOCUMENT_VALIDATION_FAILURE:
        return RangeConstraintViolation(message, collection=collection)
    return PersistenceError(message, collection=collection)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class _KeyedUpsertStore:
    """Upsert-by-key over one collection."""

    COLLECTION: str = ""

    def __init__(self, db: AsyncIOMotorDatabase):
        self._collection = db[self.COLLECTION]

    async def _upsert(self, key: Dict[str, Any], fields: Dict[str, Any]) -> Dict[str, Any]:
        now = _utcnow()
        try:
            return await self._collection.find_one_and_update(
                key,
                {
                    "$set": {**fields, "updated_at": now},
                    "$setOnInsert": {"created_at": now},
                },
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise translate_error(e, self.COLLECTION) from e

    async def _find_one(
        self,
        query: Dict[str, Any],
        projection: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        try:
            return await self._collection.find_one(query, projection)
        except PyMongoError as e:
            raise translate_error(e, self.COLLECTION) from e


class DailyEntryStore(_KeyedUpsertStore):
    """Calendar-mirror records keyed by (user_id, local_date). Admin scope."""

    COLLECTION = DAILY_ENTRIES

    async def upsert(self, user_id: str, local_date: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        return await self._upsert({"user_id": user_id, "local_date": local_date}, fields)


class CheckInStore(_KeyedUpsertStore):
    """Canonical check-in records keyed by (user_id, day). User scope."""

    COLLECTION = CHECKINS

    async def upsert(self, user_id: str, day: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        return await self._upsert({"user_id": user_id, "day": day}, fields)

    async def find(self, user_id: str, day: str) -> Optional[Dict[str, Any]]:
        return await self._find_one({"user_id": user_id, "day": day})

    async def exists(self, user_id: str, day: str) -> bool:
        return await self._find_one({"user_id": user_id, "day": day}, {"_id": 1}) is not None


class ProfileStore(_KeyedUpsertStore):
    """Profile aggregate keyed by user_id. User scope; only streak fields are written."""

    COLLECTION = PROFILES

    STREAK_PROJECTION = {
        "current_streak": 1,
        "last_checkin_date": 1,
        "first_activity_date": 1,
        "timezone": 1,
    }

    async def find_streak_state(self, user_id: str) -> Optional[Dict[str, Any]]:
        return await self._find_one({"user_id": user_id}, self.STREAK_PROJECTION)

    async def update_streak(
        self,
        profile_id: Any,
        current_streak: int,
        last_checkin_date: str,
        first_activity_date: str,
    ) -> None:
        try:
            await self._collection.update_one(
                {"_id": profile_id},
                {
                    "$set": {
                        "current_streak": current_streak,
                        "last_checkin_date": last_checkin_date,
                        "first_activity_date": first_activity_date,
                        "updated_at": _utcnow(),
                    }
                },
            )
        except PyMongoError as e:
            raise translate_error(e, self.COLLECTION) from e


class DashboardCacheStore(_KeyedUpsertStore):
    """Per-user dashboard cache invalidation marker. Admin scope."""

    COLLECTION = DASHBOARD_CACHE

    async def mark_invalidated(self, user_id: str) -> None:
        await self._upsert({"user_id": user_id}, {"invalidated_at": _utcnow()})

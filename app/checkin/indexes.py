"""
Collection setup for the check-in pipeline.

Creates the unique compound indexes the upserts rely on and attaches
$jsonSchema validators that bound the numeric check-in fields.
"""

import logging
from typing import Any, Dict, List

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.checkin.services.stores import (
    CHECKINS,
    DAILY_ENTRIES,
    DASHBOARD_CACHE,
    PROFILES,
)

logger = logging.getLogger(__name__)

INT_TYPES = ["int", "long"]


def _bounded(maximum: int) -> Dict[str, Any]:
    return {"bsonType": INT_TYPES + ["null"], "minimum": 1, "maximum": maximum}


def range_validator(fields: List[str], maximum: int) -> Dict[str, Any]:
    """$jsonSchema validator bounding ``fields`` to [1, maximum] (null allowed)."""
    return {
        "$jsonSchema": {
            "bsonType": "object",
            "properties": {name: _bounded(maximum) for name in fields},
        }
    }


DAILY_ENTRY_METRICS = ["mood", "energy", "focus", "sleep_quality"]
CHECKIN_METRICS = ["mood", "energy", "focus", "sleep"]


async def _apply_validator(db: AsyncIOMotorDatabase, name: str, validator: Dict[str, Any]) -> None:
    if name in await db.list_collection_names():
        await db.command("collMod", name, validator=validator)
    else:
        await db.create_collection(name, validator=validator)


async def ensure_checkin_collections(
    user_db: AsyncIOMotorDatabase,
    admin_db: AsyncIOMotorDatabase,
    daily_entry_max: int = 10,
    checkin_max: int = 10,
) -> None:
    """
    Create indexes and range validators.

    Args:
        user_db: User-scoped database (checkin, profiles)
        admin_db: Administrative database (daily_entries, dashboard_cache)
        daily_entry_max: Upper bound for daily entry metrics (5 on legacy schemas)
        checkin_max: Upper bound for check-in record metrics
    """
    await _apply_validator(admin_db, DAILY_ENTRIES, range_validator(DAILY_ENTRY_METRICS, daily_entry_max))
    await _apply_validator(user_db, CHECKINS, range_validator(CHECKIN_METRICS, checkin_max))

    await admin_db[DAILY_ENTRIES].create_index(
        [("user_id", 1), ("local_date", 1)], unique=True, name="uq_user_local_date"
    )
    await user_db[CHECKINS].create_index(
        [("user_id", 1), ("day", 1)], unique=True, name="uq_user_day"
    )
    await user_db[PROFILES].create_index("user_id", unique=True, name="uq_profile_user")
    await admin_db[DASHBOARD_CACHE].create_index("user_id", unique=True, name="uq_cache_user")

    logger.info(
        f"Check-in collections ready (daily_entries max={daily_entry_max}, checkin max={checkin_max})"
    )

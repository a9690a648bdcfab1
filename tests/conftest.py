"""Shared test fixtures for check-in API tests."""

import copy
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import OperationFailure

from app.checkin.services.cache_invalidator import CacheInvalidator
from app.checkin.services.checkin_record_writer import CheckInRecordWriter
from app.checkin.services.daily_entry_writer import DailyEntryWriter
from app.checkin.services.stores import (
    CheckInStore,
    DailyEntryStore,
    DashboardCacheStore,
    ProfileStore,
)
from app.pipelines.checkin import CheckInOrchestrator


class FakeCollection:
    """
    In-memory stand-in for a Motor collection.

    Supports the calls the check-in stores make. ``max_value`` emulates a
    $jsonSchema range validator over ``bounded_fields``; ``fail_with``
    makes every call raise.
    """

    def __init__(self, bounded_fields=(), max_value: Optional[int] = None):
        self.docs: List[Dict[str, Any]] = []
        self.bounded_fields = bounded_fields
        self.max_value = max_value
        self.fail_with: Optional[Exception] = None
        self.write_attempts: List[Dict[str, Any]] = []

    def _check_available(self):
        if self.fail_with is not None:
            raise self.fail_with

    def _matches(self, doc, query):
        return all(doc.get(k) == v for k, v in query.items())

    def _validate(self, doc):
        if self.max_value is None:
            return
        for name in self.bounded_fields:
            value = doc.get(name)
            if value is not None and not 1 <= value <= self.max_value:
                raise OperationFailure(
                    "Document failed validation",
                    code=121,
                    details={"errmsg": "Document failed validation", "code": 121},
                )

    async def find_one(self, query, projection=None):
        self._check_available()
        for doc in self.docs:
            if self._matches(doc, query):
                return copy.deepcopy(doc)
        return None

    async def find_one_and_update(self, query, update, upsert=False, return_document=None):
        self._check_available()
        self.write_attempts.append(copy.deepcopy(update["$set"]))
        existing = next((d for d in self.docs if self._matches(d, query)), None)
        candidate = dict(existing) if existing else {"_id": ObjectId(), **query, **update.get("$setOnInsert", {})}
        candidate.update(update["$set"])
        self._validate(candidate)
        if existing is not None:
            existing.update(candidate)
            return copy.deepcopy(existing)
        if not upsert:
            return None
        self.docs.append(candidate)
        return copy.deepcopy(candidate)

    async def update_one(self, query, update, upsert=False):
        self._check_available()
        for doc in self.docs:
            if self._matches(doc, query):
                doc.update(update["$set"])
                return MagicMock(matched_count=1)
        return MagicMock(matched_count=0)


class FakeDatabase:
    """Dict of FakeCollections keyed by collection name."""

    def __init__(self, **collections: FakeCollection):
        self.collections = dict(collections)

    def __getitem__(self, name):
        if name not in self.collections:
            self.collections[name] = FakeCollection()
        return self.collections[name]


@pytest.fixture
def sample_user_id():
    return str(ObjectId())


@pytest.fixture
def fixed_now():
    return datetime(2024, 1, 2, 15, 30, tzinfo=timezone.utc)


@pytest.fixture
def mock_collection():
    collection = AsyncMock()
    collection.find = MagicMock()
    return collection


@pytest.fixture
def mock_db(mock_collection):
    db = MagicMock()
    db.__getitem__ = MagicMock(return_value=mock_collection)
    return db


@pytest.fixture
def user_db():
    return FakeDatabase()


@pytest.fixture
def admin_db():
    return FakeDatabase()


def build_orchestrator(user_db, admin_db) -> CheckInOrchestrator:
    return CheckInOrchestrator(
        daily_entry_writer=DailyEntryWriter(DailyEntryStore(admin_db)),
        checkin_record_writer=CheckInRecordWriter(CheckInStore(user_db)),
        profile_store=ProfileStore(user_db),
        cache_invalidator=CacheInvalidator(DashboardCacheStore(admin_db)),
    )


@pytest.fixture
def orchestrator(user_db, admin_db):
    return build_orchestrator(user_db, admin_db)


@pytest.fixture
def legacy_daily_entries(admin_db):
    """daily_entries still bounded to the old 1-5 range."""
    collection = FakeCollection(
        bounded_fields=("mood", "energy", "focus", "sleep_quality"),
        max_value=5,
    )
    admin_db.collections["daily_entries"] = collection
    return collection


@pytest.fixture
def legacy_orchestrator(user_db, admin_db, legacy_daily_entries):
    return build_orchestrator(user_db, admin_db)

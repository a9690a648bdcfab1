"""Check-in services."""

from app.checkin.services.input_normalizer import InputNormalizer, clamp10
from app.checkin.services.tag_classifier import TagClassifier
from app.checkin.services.daily_entry_writer import DailyEntryWriter
from app.checkin.services.streak_engine import StreakEngine
from app.checkin.services.checkin_record_writer import CheckInRecordWriter
from app.checkin.services.cache_invalidator import CacheInvalidator
from app.checkin.services.micro_wins import MicroWinGenerator
from app.checkin.services.stores import (
    DailyEntryStore,
    CheckInStore,
    ProfileStore,
    DashboardCacheStore,
)

__all__ = [
    "InputNormalizer",
    "clamp10",
    "TagClassifier",
    "DailyEntryWriter",
    "StreakEngine",
    "CheckInRecordWriter",
    "CacheInvalidator",
    "MicroWinGenerator",
    "DailyEntryStore",
    "CheckInStore",
    "ProfileStore",
    "DashboardCacheStore",
]

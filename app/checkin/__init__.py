"""
Check-in System

Ingests the daily check-in: normalizes sliders and tags, writes the daily
entry and the canonical check-in record, advances the profile streak and
invalidates the dashboard cache.
"""

from app.checkin.services import (
    InputNormalizer,
    TagClassifier,
    DailyEntryWriter,
    StreakEngine,
    CheckInRecordWriter,
    CacheInvalidator,
    MicroWinGenerator,
)

__all__ = [
    "InputNormalizer",
    "TagClassifier",
    "DailyEntryWriter",
    "StreakEngine",
    "CheckInRecordWriter",
    "CacheInvalidator",
    "MicroWinGenerator",
]

"""
Canonical check-in record writer.

Upserts the (user_id, day) record that streak and analytics jobs read.
Values are written on whatever scale the daily entry ended up using so
the two collections agree with each other.
"""

import logging
from typing import Any, Dict, Optional

from app.checkin.models import ScaledMetrics, StressLevel, WriteResult
from app.checkin.services.stores import CheckInStore

logger = logging.getLogger(__name__)


class CheckInRecordWriter:
    """
    Writes the checkin collection through the user-scoped connection.
    """

    def __init__(self, store: CheckInStore):
        """
        Initialize CheckInRecordWriter.

        Args:
            store: checkin adapter bound to the user-scoped database
        """
        self._store = store

    async def upsert(
        self,
        user_id: str,
        day: str,
        metrics: ScaledMetrics,
        intense_exercise: bool,
        new_supplement: bool,
        stress_level: Optional[StressLevel],
    ) -> WriteResult:
        """
        Create or update the day's canonical record.

        Args:
            user_id: Caller's user ID
            day: YYYY-MM-DD day key
            metrics: Metrics as persisted by the daily entry writer
            intense_exercise: Derived tag signal
            new_supplement: Derived tag signal
            stress_level: Normalized stress level or None

        Returns:
            WriteResult with the record ID; ``created`` is False for a
            same-day resubmission

        Raises:
            PersistenceError: Lookup or upsert failed
        """
        # Read-then-upsert is not atomic; two concurrent first submissions
        # can both report created=True but still land on one row.
        existed = await self._store.exists(user_id, day)

        doc = await self._store.upsert(
            user_id,
            day,
            self._fields(metrics, intense_exercise, new_supplement, stress_level),
        )

        logger.debug(
            f"Check-in record {'updated' if existed else 'inserted'} for user {user_id} on {day} "
            f"(scale={metrics.scale.value})"
        )
        return WriteResult(
            record_id=str(doc["_id"]) if doc else None,
            metrics=metrics,
            created=not existed,
        )

    @staticmethod
    def _fields(
        metrics: ScaledMetrics,
        intense_exercise: bool,
        new_supplement: bool,
        stress_level: Optional[StressLevel],
    ) -> Dict[str, Any]:
        return {
            "mood": metrics.mood,
            "energy": metrics.energy,
            "focus": metrics.focus,
            "sleep": metrics.sleep,
            "scale": metrics.scale.value,
            "stress_level": stress_level.value if stress_level else None,
            "intense_exercise": intense_exercise,
            "new_supplement": new_supplement,
        }

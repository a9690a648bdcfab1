"""
Daily entry writer.

Upserts the calendar-mirror record for (user_id, local_date). Some
deployments still carry the legacy 1-5 range validator on this
collection; when the store rejects the 10-point values the writer
rescales to 5 points and retries once.
"""

import logging
from typing import Any, Dict, Optional

from app.checkin.errors import RangeConstraintViolation
from app.checkin.models import NormalizedCheckIn, Scale, ScaledMetrics, WriteResult
from app.checkin.services.input_normalizer import round_half_up
from app.checkin.services.stores import DailyEntryStore

logger = logging.getLogger(__name__)


def halve(value: int) -> int:
    """Map a 1-10 value onto 1-5."""
    return max(1, min(5, round_half_up(value / 2)))


def rescale_to_five(metrics: ScaledMetrics) -> ScaledMetrics:
    """
    Rescale 10-point metrics to the 5-point range.

    Optional metrics that are unset stay unset.
    """
    if metrics.scale is Scale.FIVE:
        return metrics
    return ScaledMetrics(
        scale=Scale.FIVE,
        energy=halve(metrics.energy),
        focus=halve(metrics.focus),
        mood=halve(metrics.mood) if metrics.mood is not None else None,
        sleep=halve(metrics.sleep) if metrics.sleep is not None else None,
    )


class DailyEntryWriter:
    """
    Writes daily_entries through the administrative connection.
    """

    def __init__(self, store: DailyEntryStore):
        """
        Initialize DailyEntryWriter.

        Args:
            store: daily_entries adapter bound to the admin database
        """
        self._store = store

    async def upsert(
        self,
        user_id: str,
        local_date: str,
        checkin: NormalizedCheckIn,
        supplement_intake: Optional[Dict[str, Any]] = None,
    ) -> WriteResult:
        """
        Create or update the day's entry.

        Args:
            user_id: Caller's user ID
            local_date: YYYY-MM-DD day key
            checkin: Normalized check-in with classified tags
            supplement_intake: Taken supplements, already filtered

        Returns:
            WriteResult with the metrics (and scale) actually persisted

        Raises:
            PersistenceError: First attempt failed for a reason other than
                the range validator, or the rescaled retry failed
        """
        metrics = ScaledMetrics.from_checkin(checkin)

        try:
            doc = await self._store.upsert(
                user_id, local_date, self._fields(metrics, checkin, supplement_intake)
            )
        except RangeConstraintViolation as e:
            logger.warning(
                f"daily_entries rejected 10-point values for user {user_id} on {local_date}, "
                f"retrying on 5-point scale: {e.message}"
            )
            metrics = rescale_to_five(metrics)
            doc = await self._store.upsert(
                user_id, local_date, self._fields(metrics, checkin, supplement_intake)
            )

        logger.info(
            f"Daily entry saved for user {user_id} on {local_date} "
            f"(scale={metrics.scale.value})"
        )
        return WriteResult(
            record_id=str(doc["_id"]) if doc else None,
            metrics=metrics,
            clean_day=not checkin.tags,
        )

    @staticmethod
    def _fields(
        metrics: ScaledMetrics,
        checkin: NormalizedCheckIn,
        supplement_intake: Optional[Dict[str, Any]],
    ) -> Dict[str, Any]:
        return {
            "mood": metrics.mood,
            "energy": metrics.energy,
            "focus": metrics.focus,
            "sleep_quality": metrics.sleep,
            "scale": metrics.scale.value,
            "tags": sorted(checkin.tags) or None,
            "supplement_intake": supplement_intake or None,
        }

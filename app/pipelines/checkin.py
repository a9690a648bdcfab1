"""
Check-in system pipeline functions.

Orchestration logic for check-in operations. The submission pipeline runs
every step in sequence within the request; each step yields a StepOutcome
and only fatal outcomes stop the pipeline.
"""

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Any, Dict, Optional

from app.checkin.errors import PersistenceError
from app.checkin.models import (
    CheckInSubmission,
    StepOutcome,
    StreakUpdate,
    WriteResult,
)
from app.checkin.services.cache_invalidator import CacheInvalidator
from app.checkin.services.checkin_record_writer import CheckInRecordWriter
from app.checkin.services.daily_entry_writer import DailyEntryWriter
from app.checkin.services.day_boundary import local_day
from app.checkin.services.input_normalizer import InputNormalizer
from app.checkin.services.micro_wins import MicroWinGenerator
from app.checkin.services.stores import CheckInStore, ProfileStore
from app.checkin.services.streak_engine import StreakEngine
from app.checkin.services.tag_classifier import TagClassifier
from common.utils import success_response

logger = logging.getLogger(__name__)


class CheckInOrchestrator:
    """
    Runs the daily check-in submission.

    Order: normalize, classify tags, daily entry (may retry once on the
    5-point scale), streak, canonical check-in record, cache invalidation,
    micro-wins. Daily entry and check-in record failures are fatal; the
    profile streak and the cache marker are best effort.
    """

    def __init__(
        self,
        daily_entry_writer: DailyEntryWriter,
        checkin_record_writer: CheckInRecordWriter,
        profile_store: ProfileStore,
        cache_invalidator: CacheInvalidator,
        default_timezone: str = "UTC",
    ):
        """
        Initialize CheckInOrchestrator.

        Args:
            daily_entry_writer: daily_entries writer (admin connection)
            checkin_record_writer: checkin writer (user-scoped connection)
            profile_store: Profile streak reads/writes (user-scoped connection)
            cache_invalidator: dashboard_cache marker (admin connection)
            default_timezone: Day boundary when the profile has no timezone
        """
        self._daily_entry_writer = daily_entry_writer
        self._checkin_record_writer = checkin_record_writer
        self._profile_store = profile_store
        self._cache_invalidator = cache_invalidator
        self._default_timezone = default_timezone

    async def submit(
        self,
        user_id: str,
        submission: CheckInSubmission,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """
        Orchestrates the check-in submission flow.

        Args:
            user_id: Current user's ID
            submission: Raw request body
            now: Request time (defaults to the current time)

        Returns:
            Response dict with id, upserted flag and micro_wins

        Raises:
            MissingRequiredField: energy or focus not numeric; nothing is written
            PersistenceError: daily entry or check-in record write failed
        """
        checkin = InputNormalizer.normalize(submission)
        classification = TagClassifier.classify(submission.tags, submission.supplement_intake)
        checkin = replace(
            checkin,
            tags=classification.tags,
            intense_exercise=classification.intense_exercise,
            new_supplement=classification.new_supplement,
        )

        profile = await self._load_profile(user_id)
        timezone_name = profile.value.get("timezone") if profile.value else None
        today = local_day(timezone_name, self._default_timezone, now)
        day = today.isoformat()

        entry = await self._fatal_step(
            "daily_entries",
            self._daily_entry_writer.upsert(user_id, day, checkin, classification.supplement_intake),
        )

        streak = await self._update_streak(user_id, profile, today)

        record = await self._fatal_step(
            "checkin",
            self._checkin_record_writer.upsert(
                user_id,
                day,
                entry.metrics,
                intense_exercise=checkin.intense_exercise,
                new_supplement=checkin.new_supplement,
                stress_level=checkin.stress_level,
            ),
        )

        await self._cache_invalidator.invalidate(user_id)

        micro_wins = MicroWinGenerator.generate(entry.clean_day, streak.value)

        logger.info(
            f"Check-in {'created' if record.created else 'resubmitted'} for user {user_id} on {day} "
            f"(scale={entry.metrics.scale.value}, micro_wins={len(micro_wins)})"
        )

        return success_response(
            id=record.record_id,
            upserted=True,
            micro_wins=micro_wins,
        )

    async def _fatal_step(self, name: str, step) -> WriteResult:
        outcome = await self._run(name, step, fatal=True)
        if outcome.fatal:
            raise outcome.error
        return outcome.value

    async def _run(self, name: str, step, fatal: bool) -> StepOutcome:
        try:
            return StepOutcome.success(await step)
        except PersistenceError as e:
            e.fatal = fatal
            if fatal:
                logger.error(f"Check-in step {name} failed: {e.message}")
            else:
                logger.warning(f"Check-in step {name} failed, continuing: {e.message}")
            return StepOutcome.failure(e, fatal=fatal)

    async def _load_profile(self, user_id: str) -> StepOutcome[Dict[str, Any]]:
        outcome = await self._run("profile lookup", self._profile_store.find_streak_state(user_id), fatal=False)
        if outcome.ok and outcome.value is None:
            logger.info(f"No profile for user {user_id}; streak will not be tracked")
        return outcome

    async def _update_streak(
        self,
        user_id: str,
        profile: StepOutcome[Dict[str, Any]],
        today: date,
    ) -> StepOutcome[StreakUpdate]:
        """Advance and persist the profile streak. Never raises."""
        if not profile.ok or profile.value is None:
            return StepOutcome()

        update = StreakEngine.transition_from_profile(today, profile.value)
        written = await self._run(
            "profile streak",
            self._profile_store.update_streak(
                profile.value["_id"],
                current_streak=update.current_streak,
                last_checkin_date=update.last_checkin_date,
                first_activity_date=update.first_activity_date,
            ),
            fatal=False,
        )
        if not written.ok:
            return written

        logger.info(
            f"Streak for user {user_id}: {update.transition.value} -> {update.current_streak}"
        )
        return StepOutcome.success(update)


async def resolve_today(
    profile_store: ProfileStore,
    user_id: str,
    default_timezone: str = "UTC",
    now: Optional[datetime] = None,
) -> date:
    """Current day for the user; falls back to the default timezone on lookup failure."""
    try:
        profile = await profile_store.find_streak_state(user_id)
    except PersistenceError as e:
        logger.warning(f"Profile lookup failed for user {user_id}: {e.message}")
        profile = None
    return local_day(profile.get("timezone") if profile else None, default_timezone, now)


async def get_today_checkin_pipeline(
    checkin_store: CheckInStore,
    profile_store: ProfileStore,
    user_id: str,
    default_timezone: str = "UTC",
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Get today's check-in status.

    Args:
        checkin_store: Canonical check-in records
        profile_store: For the user's timezone
        user_id: Current user's ID
        default_timezone: Day boundary when the profile has none

    Returns:
        dict with hasCheckedInToday flag and checkin data
    """
    today = await resolve_today(profile_store, user_id, default_timezone, now)
    checkin = await checkin_store.find(user_id, today.isoformat())

    return success_response(
        hasCheckedInToday=checkin is not None,
        checkin=_format_checkin(checkin) if checkin else None,
    )


async def get_streak_pipeline(
    profile_store: ProfileStore,
    user_id: str,
    default_timezone: str = "UTC",
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Get the current streak from the profile.

    Args:
        profile_store: Profile streak state
        user_id: Current user's ID
        default_timezone: Day boundary when the profile has none

    Returns:
        dict with streak, lastCheckinDate and firstActivityDate
    """
    profile = await profile_store.find_streak_state(user_id)
    if not profile:
        return success_response(streak=0, lastCheckinDate=None, firstActivityDate=None)

    today = local_day(profile.get("timezone"), default_timezone, now)
    return success_response(
        streak=StreakEngine.displayed_streak(today, profile),
        lastCheckinDate=profile.get("last_checkin_date"),
        firstActivityDate=profile.get("first_activity_date"),
    )


def _format_checkin(checkin: Dict[str, Any]) -> Dict[str, Any]:
    """Format check-in document for API response."""
    return {
        "id": str(checkin["_id"]),
        "day": checkin["day"],
        "mood": checkin.get("mood"),
        "energy": checkin.get("energy"),
        "focus": checkin.get("focus"),
        "sleep": checkin.get("sleep"),
        "stress_level": checkin.get("stress_level"),
        "intense_exercise": bool(checkin.get("intense_exercise")),
        "new_supplement": bool(checkin.get("new_supplement")),
    }

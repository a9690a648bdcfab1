"""
Check-in streak state machine.

Pure transition from the stored profile streak fields to the new state
for today's check-in. Persisting the result is the caller's job.
"""

from datetime import date, timedelta
from typing import Any, Dict, Optional

from app.checkin.models import StreakTransition, StreakUpdate
from app.checkin.services.day_boundary import parse_day


def _as_streak(value: Any) -> int:
    try:
        streak = int(value or 0)
    except (TypeError, ValueError):
        return 0
    return max(0, streak)


class StreakEngine:
    """
    Computes streak transitions.

    States reachable on a given day:
        same_day    - already checked in today, streak unchanged
        consecutive - last check-in was yesterday, streak + 1
        broken      - anything else (gap or first ever), streak reset to 1
    """

    @staticmethod
    def transition(
        today: date,
        last_checkin_date: Optional[date],
        current_streak: int,
        first_activity_date: Optional[date] = None,
    ) -> StreakUpdate:
        """
        Compute the new streak state.

        Args:
            today: Check-in day
            last_checkin_date: Day of the previous check-in, if any
            current_streak: Stored streak count
            first_activity_date: Stored first activity day, if any

        Returns:
            StreakUpdate; first_activity_date is kept once set
        """
        if last_checkin_date == today:
            kind = StreakTransition.SAME_DAY
            streak = current_streak
        elif last_checkin_date == today - timedelta(days=1):
            kind = StreakTransition.CONSECUTIVE
            streak = current_streak + 1
        else:
            kind = StreakTransition.BROKEN
            streak = 1

        return StreakUpdate(
            transition=kind,
            current_streak=streak,
            last_checkin_date=today.isoformat(),
            first_activity_date=(first_activity_date or today).isoformat(),
        )

    @classmethod
    def transition_from_profile(cls, today: date, profile: Dict[str, Any]) -> StreakUpdate:
        """Run ``transition`` on the raw streak fields of a profile document."""
        return cls.transition(
            today=today,
            last_checkin_date=parse_day(profile.get("last_checkin_date")),
            current_streak=_as_streak(profile.get("current_streak")),
            first_activity_date=parse_day(profile.get("first_activity_date")),
        )

    @classmethod
    def displayed_streak(cls, today: date, profile: Dict[str, Any]) -> int:
        """
        Streak as shown to the user without checking in.

        A streak whose last check-in is older than yesterday is already
        broken and reads as 0.
        """
        last = parse_day(profile.get("last_checkin_date"))
        if last is None or last < today - timedelta(days=1):
            return 0
        return _as_streak(profile.get("current_streak"))

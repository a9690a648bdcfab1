"""Celebratory messages derived from a finished check-in."""

from typing import List, Optional

from app.checkin.models import StreakTransition, StreakUpdate

CLEAN_DAY_MESSAGE = "✨ Clean day logged — signal strength improved"
FIRST_OF_STREAK_MESSAGE = "🎉 First check-in of this streak! Your testing has begun."


def streak_message(streak: int) -> str:
    unit = "day" if streak == 1 else "days"
    return f"🔥 Streak: {streak} {unit}! Consistent data = clearer results"


class MicroWinGenerator:

    @staticmethod
    def generate(clean_day: bool, streak: Optional[StreakUpdate]) -> List[str]:
        """
        Build the micro-win list: clean-day message first, then the streak one.

        No streak message for a same-day resubmission or when no streak
        update was recorded.
        """
        wins: List[str] = []

        if clean_day:
            wins.append(CLEAN_DAY_MESSAGE)

        if streak is not None:
            if streak.transition is StreakTransition.CONSECUTIVE:
                wins.append(streak_message(streak.current_streak))
            elif streak.transition is StreakTransition.BROKEN:
                wins.append(FIRST_OF_STREAK_MESSAGE)

        return wins

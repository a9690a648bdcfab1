"""Unit tests for micro-win generation."""

from app.checkin.models import StreakTransition, StreakUpdate
from app.checkin.services.micro_wins import (
    CLEAN_DAY_MESSAGE,
    FIRST_OF_STREAK_MESSAGE,
    MicroWinGenerator,
)


def _update(transition, streak):
    return StreakUpdate(
        transition=transition,
        current_streak=streak,
        last_checkin_date="2024-01-02",
        first_activity_date="2024-01-01",
    )


class TestGenerate:
    def test_clean_day_then_streak(self):
        wins = MicroWinGenerator.generate(True, _update(StreakTransition.CONSECUTIVE, 4))

        assert wins[0] == CLEAN_DAY_MESSAGE
        assert "4 days" in wins[1]
        assert len(wins) == 2

    def test_singular_day(self):
        wins = MicroWinGenerator.generate(False, _update(StreakTransition.CONSECUTIVE, 1))

        assert wins == ["🔥 Streak: 1 day! Consistent data = clearer results"]

    def test_broken_streak_message(self):
        wins = MicroWinGenerator.generate(False, _update(StreakTransition.BROKEN, 1))

        assert wins == [FIRST_OF_STREAK_MESSAGE]

    def test_same_day_has_no_streak_message(self):
        wins = MicroWinGenerator.generate(False, _update(StreakTransition.SAME_DAY, 4))

        assert wins == []

    def test_no_streak_update(self):
        assert MicroWinGenerator.generate(True, None) == [CLEAN_DAY_MESSAGE]

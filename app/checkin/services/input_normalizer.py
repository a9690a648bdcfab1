"""
Check-in input normalization.

Validates the loosely typed submission and clamps slider values into the
1-10 range.
"""

import math
from typing import Any, Optional

from app.checkin.errors import MissingRequiredField
from app.checkin.models import CheckInSubmission, NormalizedCheckIn, StressLevel


def is_number(value: Any) -> bool:
    """True for int/float values; booleans are not numbers here."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_finite_number(value: Any) -> bool:
    """True for numbers that are finite as floats; ints too large for a float are not."""
    if not is_number(value):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up, as slider clients do."""
    return int(math.floor(value + 0.5))


def clamp10(value: Any) -> int:
    """
    Round and clamp a slider value into [1, 10].

    Non-finite input returns 0, which is outside the valid range and marks
    the value as unusable.
    """
    if not is_finite_number(value):
        return 0
    return max(1, min(10, round_half_up(value)))


class InputNormalizer:
    """
    Turns a raw check-in submission into a NormalizedCheckIn.
    """

    REQUIRED_METRICS = ["energy", "focus"]
    OPTIONAL_METRICS = ["sleep", "mood"]

    @classmethod
    def normalize(cls, submission: CheckInSubmission) -> NormalizedCheckIn:
        """
        Validate and clamp a submission.

        Args:
            submission: Raw request body

        Returns:
            NormalizedCheckIn with energy/focus always set

        Raises:
            MissingRequiredField: energy or focus is not a finite number
        """
        for metric in cls.REQUIRED_METRICS:
            value = getattr(submission, metric)
            if not is_finite_number(value):
                raise MissingRequiredField(metric)

        return NormalizedCheckIn(
            energy=clamp10(submission.energy),
            focus=clamp10(submission.focus),
            sleep=cls._optional_metric(submission.sleep),
            mood=cls._optional_metric(submission.mood),
            stress_level=cls._stress_level(submission.stress),
        )

    @staticmethod
    def _optional_metric(value: Any) -> Optional[int]:
        # Absent or unusable optional sliders stay unset instead of 0
        if not is_finite_number(value):
            return None
        return clamp10(value)

    @staticmethod
    def _stress_level(value: Any) -> Optional[StressLevel]:
        if not isinstance(value, str):
            return None
        try:
            return StressLevel(value.lower())
        except ValueError:
            return None

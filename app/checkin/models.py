"""
Models for the check-in pipeline.

Pydantic schemas for the HTTP surface and dataclasses for the values
passed between pipeline steps.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, FrozenSet, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field


# ─────────────────────────────────────────────────────────────────
# Request / response schemas
# ─────────────────────────────────────────────────────────────────

class CheckInSubmission(BaseModel):
    """
    Raw check-in body.

    Fields are left untyped on purpose: the normalizer decides what counts
    as numeric, and unknown keys are ignored.
    """
    model_config = ConfigDict(extra="ignore")

    mood: Any = None
    energy: Any = None
    focus: Any = None
    sleep: Any = None
    stress: Any = None
    tags: Any = None
    supplement_intake: Any = None

    @classmethod
    def from_body(cls, body: Any) -> "CheckInSubmission":
        """Build a submission from a decoded JSON body; non-objects count as empty."""
        if not isinstance(body, dict):
            body = {}
        return cls.model_validate(body)


class SubmitCheckInResponse(BaseModel):
    """Response for check-in submission."""
    success: bool = True
    id: Optional[str] = None
    upserted: bool = True
    micro_wins: List[str] = Field(default_factory=list)


class CheckInRecordResponse(BaseModel):
    """Canonical check-in record in API responses."""
    id: str
    day: str
    mood: Optional[int] = None
    energy: Optional[int] = None
    focus: Optional[int] = None
    sleep: Optional[int] = None
    stress_level: Optional[str] = None
    intense_exercise: bool = False
    new_supplement: bool = False


class TodayCheckInResponse(BaseModel):
    """Response for today's check-in status."""
    success: bool = True
    hasCheckedInToday: bool
    checkin: Optional[CheckInRecordResponse] = None


class StreakResponse(BaseModel):
    """Response for streak information."""
    success: bool = True
    streak: int
    lastCheckinDate: Optional[str] = None
    firstActivityDate: Optional[str] = None


# ─────────────────────────────────────────────────────────────────
# Pipeline values
# ─────────────────────────────────────────────────────────────────

class StressLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Scale(int, Enum):
    """Numeric scale a set of metrics is expressed in."""
    TEN = 10
    FIVE = 5


class StreakTransition(str, Enum):
    SAME_DAY = "same_day"
    CONSECUTIVE = "consecutive"
    BROKEN = "broken"


@dataclass(frozen=True)
class NormalizedCheckIn:
    """Validated check-in; metrics on the 1-10 scale."""
    energy: int
    focus: int
    sleep: Optional[int] = None
    mood: Optional[int] = None
    stress_level: Optional[StressLevel] = None
    tags: FrozenSet[str] = frozenset()
    intense_exercise: bool = False
    new_supplement: bool = False


@dataclass(frozen=True)
class TagClassification:
    """Tag set after exclusivity rules, plus derived signals."""
    tags: FrozenSet[str]
    intense_exercise: bool
    new_supplement: bool
    supplement_intake: Optional[Dict[str, Any]] = None

    @property
    def clean_day(self) -> bool:
        return not self.tags


@dataclass(frozen=True)
class ScaledMetrics:
    """Numeric metrics tagged with the scale they are stored in."""
    scale: Scale
    energy: int
    focus: int
    mood: Optional[int] = None
    sleep: Optional[int] = None

    @classmethod
    def from_checkin(cls, checkin: NormalizedCheckIn) -> "ScaledMetrics":
        return cls(
            scale=Scale.TEN,
            energy=checkin.energy,
            focus=checkin.focus,
            mood=checkin.mood,
            sleep=checkin.sleep,
        )


@dataclass(frozen=True)
class WriteResult:
    """Outcome of a successful upsert."""
    record_id: Optional[str]
    metrics: ScaledMetrics
    created: bool = False
    clean_day: bool = False


@dataclass(frozen=True)
class StreakUpdate:
    """New streak state computed for one check-in."""
    transition: StreakTransition
    current_streak: int
    last_checkin_date: str
    first_activity_date: str


T = TypeVar("T")


@dataclass
class StepOutcome(Generic[T]):
    """
    Result of one pipeline step.

    ``error`` is set when the step failed; ``fatal`` says whether the
    orchestrator must stop there.
    """
    value: Optional[T] = None
    error: Optional[Exception] = None
    fatal: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "StepOutcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: Exception, fatal: bool) -> "StepOutcome[T]":
        return cls(error=error, fatal=fatal)

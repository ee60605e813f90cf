"""Fitness goal data models."""

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from ..errors import InvalidInput


class PrimaryGoal(str, Enum):
    """Member's primary fitness goal."""

    WEIGHT_LOSS = "Weight Loss"
    MUSCLE_GAIN = "Muscle Gain"
    STRENGTH_TRAINING = "Strength Training"
    GENERAL_FITNESS = "General Fitness"


class WorkoutTime(str, Enum):
    """Preferred time of day to train."""

    MORNING = "Morning"
    AFTERNOON = "Afternoon"
    EVENING = "Evening"
    NIGHT = "Night"


DEFAULT_WEIGHT = 0
DEFAULT_WEEKLY_TARGET = 3

# Fields shared by the standalone record and the member's embedded copy
TRACKED_FIELDS = (
    "primary_goal",
    "current_weight",
    "target_weight",
    "weekly_workout_target",
    "preferred_workout_time",
    "dietary_preferences",
)


def is_valid_number(value) -> bool:
    """Whether a value is a usable non-negative number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value >= 0


def sanitize_number(value, default: float) -> float:
    """Replace an absent, non-numeric, NaN or negative value with a default."""
    return value if is_valid_number(value) else default


def is_valid_count(value) -> bool:
    """Whether a value is a usable non-negative whole number."""
    return is_valid_number(value) and float(value).is_integer()


def sanitize_count(value, default: int) -> int:
    """Like sanitize_number, but fractional values also fall back."""
    return int(value) if is_valid_count(value) else default


def _enum_or_default(enum_cls, value, default):
    try:
        return enum_cls(value)
    except ValueError:
        return default


@dataclass
class FitnessGoal:
    """A member's fitness goals.

    Stored both as a standalone record and as a mirror embedded in the
    member record; the standalone record is the source of truth.
    """

    member_id: int
    primary_goal: PrimaryGoal = PrimaryGoal.GENERAL_FITNESS
    current_weight: float = DEFAULT_WEIGHT
    target_weight: float = DEFAULT_WEIGHT
    weekly_workout_target: int = DEFAULT_WEEKLY_TARGET
    preferred_workout_time: WorkoutTime = WorkoutTime.EVENING
    dietary_preferences: list[str] = field(default_factory=list)
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def weight_to_go(self) -> float:
        """Signed distance from the current weight to the target."""
        return self.target_weight - self.current_weight

    def tracked_values(self) -> dict:
        """Values of the fields mirrored into the member record."""
        return {
            "primary_goal": self.primary_goal.value,
            "current_weight": self.current_weight,
            "target_weight": self.target_weight,
            "weekly_workout_target": self.weekly_workout_target,
            "preferred_workout_time": self.preferred_workout_time.value,
            "dietary_preferences": list(self.dietary_preferences),
        }

    def matches(self, mirror: dict | None) -> bool:
        """Whether an embedded copy equals this record on every tracked field."""
        if mirror is None:
            return False
        values = self.tracked_values()
        return all(mirror.get(name) == values[name] for name in TRACKED_FIELDS)

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        data = {"member_id": self.member_id, **self.tracked_values()}
        data["updated_at"] = self.updated_at.isoformat() if self.updated_at else None
        return data

    @classmethod
    def from_mirror(cls, member_id: int, mirror: dict) -> "FitnessGoal":
        """Build a sanitized record from a loosely-typed embedded copy.

        Unknown or invalid values fall back to the documented defaults
        instead of being rejected.
        """
        dietary = mirror.get("dietary_preferences")
        if not isinstance(dietary, list):
            dietary = []
        return cls(
            member_id=member_id,
            primary_goal=_enum_or_default(
                PrimaryGoal, mirror.get("primary_goal"), PrimaryGoal.GENERAL_FITNESS
            ),
            current_weight=sanitize_number(mirror.get("current_weight"), DEFAULT_WEIGHT),
            target_weight=sanitize_number(mirror.get("target_weight"), DEFAULT_WEIGHT),
            weekly_workout_target=sanitize_count(
                mirror.get("weekly_workout_target"), DEFAULT_WEEKLY_TARGET
            ),
            preferred_workout_time=_enum_or_default(
                WorkoutTime, mirror.get("preferred_workout_time"), WorkoutTime.EVENING
            ),
            dietary_preferences=[str(p) for p in dietary],
        )

    def merged_with(self, values: dict) -> "FitnessGoal":
        """Return a copy with ``values`` merged over this record.

        Absent fields and invalid numbers keep the current value. Invalid
        enumerated values or a non-list of dietary preferences raise
        InvalidInput.
        """
        merged = FitnessGoal.from_mirror(self.member_id, self.tracked_values())
        merged.id = self.id
        merged.created_at = self.created_at

        primary = values.get("primary_goal")
        if primary not in (None, ""):
            try:
                merged.primary_goal = PrimaryGoal(primary)
            except ValueError as e:
                raise InvalidInput(f"Unknown primary goal: {primary!r}") from e

        workout_time = values.get("preferred_workout_time")
        if workout_time not in (None, ""):
            try:
                merged.preferred_workout_time = WorkoutTime(workout_time)
            except ValueError as e:
                raise InvalidInput(f"Unknown workout time: {workout_time!r}") from e

        for name in ("current_weight", "target_weight"):
            value = values.get(name)
            if is_valid_number(value):
                setattr(merged, name, value)

        weekly = values.get("weekly_workout_target")
        if is_valid_count(weekly):
            merged.weekly_workout_target = int(weekly)

        dietary = values.get("dietary_preferences")
        if dietary is not None:
            if not isinstance(dietary, list) or not all(isinstance(p, str) for p in dietary):
                raise InvalidInput("dietary_preferences must be a list of strings")
            merged.dietary_preferences = list(dietary)

        return merged

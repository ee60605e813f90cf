"""Workout plan data models."""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum

from ..errors import InvalidInput


class Weekday(str, Enum):
    """Day of the week a plan schedules exercises on."""

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @classmethod
    def from_date(cls, day: date) -> "Weekday":
        """Get the weekday of a calendar date."""
        # date.weekday() is 0 for Monday, matching declaration order
        return list(cls)[day.weekday()]

    @classmethod
    def parse(cls, value: str) -> "Weekday":
        """Parse a weekday name, case-insensitively."""
        for weekday in cls:
            if weekday.value.lower() == str(value).strip().lower():
                return weekday
        raise InvalidInput(f"Unknown weekday: {value!r}")


def parse_date(value: date | datetime | str) -> date:
    """Coerce a date, datetime or ISO string to a calendar date.

    Time-of-day is discarded.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            if "T" in text or " " in text:
                return datetime.fromisoformat(text).date()
            return date.fromisoformat(text)
        except ValueError as e:
            raise InvalidInput(f"Invalid date: {value!r}") from e
    raise InvalidInput(f"Invalid date: {value!r}")


@dataclass
class PlanExercise:
    """An exercise scheduled on a plan day."""

    name: str
    sets: int
    reps: int
    rest_duration: str = ""  # e.g. "60s", "2 min"
    notes: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "sets": self.sets,
            "reps": self.reps,
            "rest_duration": self.rest_duration,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PlanExercise":
        """Create from dictionary."""
        return cls(
            name=data["name"],
            sets=data["sets"],
            reps=data["reps"],
            rest_duration=data.get("rest_duration", ""),
            notes=data.get("notes") or "",
        )


@dataclass
class WorkoutPlan:
    """A recurring weekly schedule assigned to a member over a date range."""

    member_id: int
    trainer_id: int
    name: str
    start_date: date
    end_date: date
    days: dict[Weekday, list[PlanExercise]] = field(default_factory=dict)
    notes: str = ""
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_active_on(self, day: date) -> bool:
        """Whether the date falls inside the plan's inclusive range."""
        return self.start_date <= day <= self.end_date

    def exercises_for(self, weekday: Weekday) -> list[PlanExercise]:
        """Exercises scheduled on a weekday (empty when it is a rest day)."""
        return self.days.get(weekday, [])

    def first_training_day(self) -> Weekday | None:
        """First weekday, Monday to Sunday, that has any exercises."""
        for weekday in Weekday:
            if self.exercises_for(weekday):
                return weekday
        return None

    @property
    def training_days(self) -> list[Weekday]:
        """Weekdays with at least one exercise, in calendar order."""
        return [weekday for weekday in Weekday if self.exercises_for(weekday)]

    @property
    def duration_days(self) -> int:
        """Number of calendar days covered by the plan."""
        return (self.end_date - self.start_date + timedelta(days=1)).days

    def to_dict(self) -> dict:
        """Convert to dictionary for storage and API responses."""
        return {
            "id": self.id,
            "member_id": self.member_id,
            "trainer_id": self.trainer_id,
            "name": self.name,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "days": {
                weekday.value: [ex.to_dict() for ex in exercises]
                for weekday, exercises in self.days.items()
            },
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        id: int | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> "WorkoutPlan":
        """Create from dictionary.

        ``days`` may be either a mapping of weekday name to exercises or a
        list of ``{"day": ..., "exercises": [...]}`` entries.
        """
        raw_days = data.get("days") or {}
        if isinstance(raw_days, list):
            raw_days = {entry["day"]: entry.get("exercises", []) for entry in raw_days}

        days: dict[Weekday, list[PlanExercise]] = {}
        for name, exercises in raw_days.items():
            days[Weekday.parse(name)] = [PlanExercise.from_dict(ex) for ex in exercises]

        return cls(
            id=id if id is not None else data.get("id"),
            member_id=data["member_id"],
            trainer_id=data["trainer_id"],
            name=data["name"],
            start_date=parse_date(data["start_date"]),
            end_date=parse_date(data["end_date"]),
            days=days,
            notes=data.get("notes") or "",
            created_at=created_at,
            updated_at=updated_at,
        )

"""Daily workout progress tracking model."""

from dataclasses import dataclass, field
from datetime import date, datetime

from .workout_plan import Weekday


@dataclass
class ExerciseProgress:
    """Completion state of one scheduled exercise."""

    name: str
    completed: bool = False


@dataclass
class WorkoutProgress:
    """Per-exercise completion for one member, plan and calendar date.

    Created by the first toggle of the day and updated by each toggle
    after that. ``completed`` is true only when every entry is.
    """

    member_id: int
    plan_id: int
    date: date
    day: Weekday
    exercises: list[ExerciseProgress] = field(default_factory=list)
    completed: bool = False
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def completed_count(self) -> int:
        return sum(1 for ex in self.exercises if ex.completed)

    def recompute_completed(self) -> bool:
        """Recompute the record-level flag from the exercise entries."""
        self.completed = bool(self.exercises) and all(ex.completed for ex in self.exercises)
        return self.completed

    def is_exercise_completed(self, name: str) -> bool:
        return any(ex.name == name and ex.completed for ex in self.exercises)

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "member_id": self.member_id,
            "plan_id": self.plan_id,
            "date": self.date.isoformat(),
            "day": self.day.value,
            "exercises": [
                {"name": ex.name, "completed": ex.completed} for ex in self.exercises
            ],
            "completed": self.completed,
            "completion_percentage": completion_percentage(self),
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


def completion_percentage(progress: WorkoutProgress | None) -> int:
    """Whole-number percentage of completed exercises, rounded half up.

    Returns 0 for a missing record or one without entries.
    """
    if progress is None or not progress.exercises:
        return 0
    total = len(progress.exercises)
    done = progress.completed_count
    return (200 * done + total) // (2 * total)

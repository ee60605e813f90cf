"""Exceptions raised by gym-progress services."""


class GymProgressError(Exception):
    """Base class for all gym-progress errors."""


class NotFound(GymProgressError, LookupError):
    """A referenced plan, member or progress record does not exist."""


class InvalidInput(GymProgressError, ValueError):
    """Malformed input that cannot be defaulted."""


class ExerciseNotScheduled(GymProgressError):
    """An exercise was toggled that is not on the schedule for that date."""

    def __init__(self, exercise_name: str, weekday: str):
        self.exercise_name = exercise_name
        self.weekday = weekday
        super().__init__(f"Exercise '{exercise_name}' is not scheduled on {weekday}")


class ConflictRetryExhausted(GymProgressError):
    """A write kept losing to concurrent writers."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Gave up after {attempts} attempts due to concurrent updates")

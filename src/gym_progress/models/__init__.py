"""Data models for gym-progress."""

from .goals import FitnessGoal, PrimaryGoal, WorkoutTime
from .member import Member
from .progress import ExerciseProgress, WorkoutProgress, completion_percentage
from .workout_plan import PlanExercise, Weekday, WorkoutPlan, parse_date

__all__ = [
    "completion_percentage",
    "ExerciseProgress",
    "FitnessGoal",
    "Member",
    "parse_date",
    "PlanExercise",
    "PrimaryGoal",
    "Weekday",
    "WorkoutPlan",
    "WorkoutProgress",
    "WorkoutTime",
]

"""Database layer for gym-progress."""

from .engine import get_data_dir, get_db_path, init_db
from .repositories import (
    FitnessGoalRepository,
    MemberRepository,
    WorkoutPlanRepository,
    WorkoutProgressRepository,
)

__all__ = [
    "FitnessGoalRepository",
    "get_data_dir",
    "get_db_path",
    "init_db",
    "MemberRepository",
    "WorkoutPlanRepository",
    "WorkoutProgressRepository",
]

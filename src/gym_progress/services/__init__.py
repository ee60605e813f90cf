"""Business logic for gym-progress."""

from .goal_sync import GoalSynchronizer
from .members import register_member
from .plans import PlanService
from .reconciler import ProgressReconciler
from .scheduler import ScheduledWorkout, Scheduler

__all__ = [
    "GoalSynchronizer",
    "PlanService",
    "ProgressReconciler",
    "register_member",
    "ScheduledWorkout",
    "Scheduler",
]

"""Daily progress reconciliation against a member's workout plan."""

import logging
from datetime import date, datetime

from ..db.repositories import WorkoutPlanRepository, WorkoutProgressRepository
from ..errors import ExerciseNotScheduled, InvalidInput, NotFound
from ..models.progress import WorkoutProgress
from ..models.workout_plan import Weekday, parse_date
from .scheduler import scheduled_exercises

_LOGGER = logging.getLogger(__name__)


class ProgressReconciler:
    """Reads and toggles per-exercise completion for a plan day."""

    def __init__(
        self,
        plan_repo: WorkoutPlanRepository | None = None,
        progress_repo: WorkoutProgressRepository | None = None,
    ):
        self.plan_repo = plan_repo or WorkoutPlanRepository()
        self.progress_repo = progress_repo or WorkoutProgressRepository()

    async def get_daily_progress(
        self, member_id: int, plan_id: int, on: date | datetime | str
    ) -> WorkoutProgress | None:
        """Get the stored progress for a day, or None if nothing was marked."""
        return await self.progress_repo.get(member_id, plan_id, parse_date(on))

    async def toggle_exercise(
        self,
        member_id: int,
        plan_id: int,
        on: date | datetime | str,
        exercise_name: str,
    ) -> WorkoutProgress:
        """Flip an exercise's completion for a day and return the stored record.

        Raises:
            InvalidInput: empty exercise name or malformed date
            NotFound: plan missing or not assigned to the member
            ExerciseNotScheduled: exercise not on the plan for that date
        """
        day = parse_date(on)
        name = (exercise_name or "").strip()
        if not name:
            raise InvalidInput("Exercise name is required")

        plan = await self.plan_repo.get(plan_id)
        if plan is None or plan.member_id != member_id:
            raise NotFound(f"Workout plan {plan_id} not found")

        weekday = Weekday.from_date(day)
        # dict.fromkeys keeps the first occurrence of repeated names
        scheduled = list(dict.fromkeys(ex.name for ex in scheduled_exercises(plan, day)))
        if name not in scheduled:
            raise ExerciseNotScheduled(name, weekday.value)

        progress = await self.progress_repo.toggle_exercise(
            member_id, plan_id, day, weekday, scheduled, name
        )
        _LOGGER.debug(
            "Toggled %r for member=%s plan=%s date=%s -> %s",
            name,
            member_id,
            plan_id,
            day,
            progress.is_exercise_completed(name),
        )
        return progress

    async def list_progress(
        self,
        member_id: int,
        plan_id: int | None = None,
        start: date | datetime | str | None = None,
        end: date | datetime | str | None = None,
    ) -> list[WorkoutProgress]:
        """List a member's progress history, newest first."""
        return await self.progress_repo.list_for_member(
            member_id,
            plan_id=plan_id,
            start=parse_date(start) if start is not None else None,
            end=parse_date(end) if end is not None else None,
        )

    async def reset_progress(
        self, member_id: int, plan_id: int, on: date | datetime | str
    ) -> None:
        """Clear a day's progress record."""
        day = parse_date(on)
        if not await self.progress_repo.delete(member_id, plan_id, day):
            raise NotFound(f"No progress for plan {plan_id} on {day.isoformat()}")
        _LOGGER.info("Reset progress for member=%s plan=%s date=%s", member_id, plan_id, day)

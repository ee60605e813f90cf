"""Weekly plan scheduling.

Works out which plan and weekday exercise list applies to a member on a
given date, and what the member's next workout is when the date has none.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from ..db.repositories import WorkoutPlanRepository
from ..models.workout_plan import PlanExercise, Weekday, WorkoutPlan, parse_date

_LOGGER = logging.getLogger(__name__)

# Days after the reference date covered by the forward scan
LOOKAHEAD_DAYS = 6


@dataclass
class ScheduledWorkout:
    """A plan's exercise list for one weekday.

    ``date`` is the calendar date the workout falls on, or None when it
    came from the undated fallback.
    """

    plan: WorkoutPlan
    weekday: Weekday
    exercises: list[PlanExercise]
    date: date | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "plan": {
                "id": self.plan.id,
                "name": self.plan.name,
                "trainer_id": self.plan.trainer_id,
                "start_date": self.plan.start_date.isoformat(),
                "end_date": self.plan.end_date.isoformat(),
                "notes": self.plan.notes,
            },
            "weekday": self.weekday.value,
            "date": self.date.isoformat() if self.date else None,
            "exercises": [ex.to_dict() for ex in self.exercises],
        }


def match_plan(plans: list[WorkoutPlan], day: date) -> ScheduledWorkout | None:
    """Pick the first plan covering ``day`` with exercises on its weekday.

    ``plans`` must already be in tie-break order.
    """
    weekday = Weekday.from_date(day)
    for plan in plans:
        if not plan.is_active_on(day):
            continue
        exercises = plan.exercises_for(weekday)
        if exercises:
            return ScheduledWorkout(plan=plan, weekday=weekday, exercises=exercises, date=day)
    return None


def scheduled_exercises(plan: WorkoutPlan, day: date) -> list[PlanExercise]:
    """Exercises a plan schedules on a date (empty outside its range)."""
    if not plan.is_active_on(day):
        return []
    return plan.exercises_for(Weekday.from_date(day))


class Scheduler:
    """Resolves a member's workout for a date from their plans.

    When several plans cover the same date, the most recently created
    plan wins.
    """

    def __init__(self, plan_repo: WorkoutPlanRepository | None = None):
        self.plan_repo = plan_repo or WorkoutPlanRepository()

    async def find_active_plan_for_date(
        self, member_id: int, on: date | datetime | str
    ) -> ScheduledWorkout | None:
        """Get the workout scheduled for a member on a date, if any."""
        day = parse_date(on)
        plans = await self.plan_repo.list_active_for_member(member_id, day)
        return match_plan(plans, day)

    async def find_next_scheduled_workout(
        self, member_id: int, from_date: date | datetime | str
    ) -> ScheduledWorkout | None:
        """Get the member's next workout after ``from_date``.

        Looks at the following six days first. If none of them has a
        workout, falls back to the first training day of the first plan
        that has one, regardless of its date range.
        """
        start = parse_date(from_date)
        plans = await self.plan_repo.list_for_member(member_id)

        for offset in range(1, LOOKAHEAD_DAYS + 1):
            found = match_plan(plans, start + timedelta(days=offset))
            if found:
                return found

        for plan in plans:
            weekday = plan.first_training_day()
            if weekday is not None:
                _LOGGER.debug(
                    "No workout within %d days of %s for member=%s, using plan %s",
                    LOOKAHEAD_DAYS,
                    start,
                    member_id,
                    plan.id,
                )
                return ScheduledWorkout(
                    plan=plan, weekday=weekday, exercises=plan.exercises_for(weekday)
                )
        return None

    async def find_todays_or_next_workout(
        self, member_id: int, on: date | datetime | str
    ) -> tuple[ScheduledWorkout | None, bool]:
        """Get today's workout, or the next one.

        Returns the workout and whether it is today's.
        """
        today = await self.find_active_plan_for_date(member_id, on)
        if today:
            return today, True
        return await self.find_next_scheduled_workout(member_id, on), False

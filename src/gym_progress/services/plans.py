"""Workout plan authoring and listing."""

import logging
from datetime import date, datetime

from ..db.repositories import MemberRepository, WorkoutPlanRepository
from ..errors import InvalidInput, NotFound
from ..models.workout_plan import WorkoutPlan, parse_date

_LOGGER = logging.getLogger(__name__)

REQUIRED_FIELDS = ("member_id", "name", "start_date", "end_date", "days")


def validate_plan(plan: WorkoutPlan) -> None:
    """Check a plan before it is stored.

    Raises:
        InvalidInput: if the plan is not usable
    """
    if not isinstance(plan.name, str) or not plan.name.strip():
        raise InvalidInput("Plan name is required")
    if plan.start_date > plan.end_date:
        raise InvalidInput(
            f"Plan starts after it ends ({plan.start_date} > {plan.end_date})"
        )
    if not plan.training_days:
        raise InvalidInput("Workout plan must have at least one exercise")
    for weekday, exercises in plan.days.items():
        for exercise in exercises:
            if not isinstance(exercise.name, str) or not exercise.name.strip():
                raise InvalidInput(f"Exercise on {weekday.value} has no name")
            for label, value in (("sets", exercise.sets), ("reps", exercise.reps)):
                if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                    raise InvalidInput(
                        f"{exercise.name} on {weekday.value}: {label} must be a positive integer"
                    )


class PlanService:
    """Creates and lists workout plans."""

    def __init__(
        self,
        plan_repo: WorkoutPlanRepository | None = None,
        member_repo: MemberRepository | None = None,
    ):
        self.plan_repo = plan_repo or WorkoutPlanRepository()
        self.member_repo = member_repo or MemberRepository()

    async def create_plan(self, trainer_id: int, data: dict) -> WorkoutPlan:
        """Create a plan authored by ``trainer_id`` from a plan definition."""
        if not isinstance(data, dict):
            raise InvalidInput("Workout plan must be a JSON object")
        missing = [name for name in REQUIRED_FIELDS if not data.get(name)]
        if missing:
            raise InvalidInput(f"Missing required fields: {', '.join(missing)}")

        try:
            plan = WorkoutPlan.from_dict({**data, "trainer_id": trainer_id})
        except (KeyError, TypeError, AttributeError) as e:
            raise InvalidInput(f"Malformed workout plan: {e}") from e
        validate_plan(plan)

        if await self.member_repo.get(plan.member_id) is None:
            raise NotFound(f"Member {plan.member_id} not found")

        plan_id = await self.plan_repo.create(plan)
        _LOGGER.info(
            "Trainer %s created plan %s for member=%s", trainer_id, plan_id, plan.member_id
        )
        return await self.plan_repo.get(plan_id)

    async def get_member_plan(self, member_id: int, plan_id: int) -> WorkoutPlan:
        """Get one of a member's plans."""
        plan = await self.plan_repo.get(plan_id)
        if plan is None or plan.member_id != member_id:
            raise NotFound(f"Workout plan {plan_id} not found")
        return plan

    async def list_member_plans(
        self,
        member_id: int,
        start: date | datetime | str | None = None,
        end: date | datetime | str | None = None,
    ) -> list[WorkoutPlan]:
        """List a member's plans, filtered to those overlapping [start, end].

        The filter only applies when both bounds are given.
        """
        if start is None or end is None:
            return await self.plan_repo.list_for_member(member_id)
        return await self.plan_repo.list_for_member(
            member_id, start=parse_date(start), end=parse_date(end)
        )

    async def list_trainer_plans(
        self, trainer_id: int, member_id: int | None = None
    ) -> list[WorkoutPlan]:
        """List the latest plans a trainer wrote."""
        return await self.plan_repo.list_for_trainer(trainer_id, member_id=member_id)

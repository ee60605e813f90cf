"""Pytest configuration and fixtures."""

import asyncio
import tempfile
from datetime import date
from pathlib import Path

import pytest

from gym_progress.db import (
    FitnessGoalRepository,
    MemberRepository,
    WorkoutPlanRepository,
    WorkoutProgressRepository,
    init_db,
)
from gym_progress.models.member import Member
from gym_progress.models.workout_plan import PlanExercise, Weekday, WorkoutPlan


def exercise(name: str, sets: int = 3, reps: int = 10) -> PlanExercise:
    """Build a plan exercise with sensible defaults."""
    return PlanExercise(name=name, sets=sets, reps=reps, rest_duration="60s")


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def db_path(temp_db_path):
    """A temporary database with the schema in place."""
    asyncio.run(init_db(temp_db_path))
    return temp_db_path


@pytest.fixture
def member_repo(db_path):
    return MemberRepository(db_path)


@pytest.fixture
def plan_repo(db_path):
    return WorkoutPlanRepository(db_path)


@pytest.fixture
def progress_repo(db_path):
    return WorkoutProgressRepository(db_path)


@pytest.fixture
def goal_repo(db_path):
    return FitnessGoalRepository(db_path)


@pytest.fixture
def member_id(member_repo):
    """A registered member without fitness goals."""
    return asyncio.run(member_repo.create(Member(name="Test Member", email="member@example.com")))


@pytest.fixture
def make_plan(plan_repo, member_id):
    """Factory storing a plan for the sample member and returning it."""

    def _make_plan(
        days: dict[Weekday, list[PlanExercise]],
        start: date = date(2025, 5, 1),
        end: date = date(2025, 5, 31),
        name: str = "May Plan",
        owner: int | None = None,
    ) -> WorkoutPlan:
        plan = WorkoutPlan(
            member_id=owner if owner is not None else member_id,
            trainer_id=7,
            name=name,
            start_date=start,
            end_date=end,
            days=days,
        )
        plan_id = asyncio.run(plan_repo.create(plan))
        return asyncio.run(plan_repo.get(plan_id))

    return _make_plan


@pytest.fixture
def wednesday_plan(make_plan):
    """May 2025 plan with a two-exercise Wednesday and nothing else."""
    return make_plan({Weekday.WEDNESDAY: [exercise("Squats"), exercise("Lunges")]})

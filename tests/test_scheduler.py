"""Tests for weekly plan scheduling."""

import asyncio
from datetime import date

import pytest

from gym_progress.errors import InvalidInput
from gym_progress.models.member import Member
from gym_progress.models.workout_plan import PlanExercise, Weekday
from gym_progress.services.scheduler import ScheduledWorkout, Scheduler, scheduled_exercises


def exercise(name: str) -> PlanExercise:
    return PlanExercise(name=name, sets=3, reps=10)


@pytest.fixture
def scheduler(plan_repo):
    return Scheduler(plan_repo)


class TestFindActivePlanForDate:
    """Tests for Scheduler.find_active_plan_for_date."""

    def test_matches_weekday_inside_range(self, scheduler, member_id, wednesday_plan):
        """Test that a Wednesday in range gets the Wednesday list."""
        found = asyncio.run(scheduler.find_active_plan_for_date(member_id, date(2025, 5, 14)))

        assert found is not None
        assert found.plan.id == wednesday_plan.id
        assert found.weekday == Weekday.WEDNESDAY
        assert found.date == date(2025, 5, 14)
        assert [ex.name for ex in found.exercises] == ["Squats", "Lunges"]

    def test_rest_day_has_no_workout(self, scheduler, member_id, wednesday_plan):
        """Test that a Thursday with no exercises returns nothing."""
        assert asyncio.run(scheduler.find_active_plan_for_date(member_id, date(2025, 5, 15))) is None

    def test_outside_range_has_no_workout(self, scheduler, member_id, wednesday_plan):
        assert asyncio.run(scheduler.find_active_plan_for_date(member_id, date(2025, 6, 4))) is None

    def test_range_is_inclusive(self, scheduler, member_id, make_plan):
        make_plan(
            {Weekday.THURSDAY: [exercise("Rows")], Weekday.SATURDAY: [exercise("Deadlift")]},
            start=date(2025, 5, 1),
            end=date(2025, 5, 31),
        )
        # 2025-05-01 is a Thursday, 2025-05-31 a Saturday
        assert asyncio.run(scheduler.find_active_plan_for_date(member_id, "2025-05-01"))
        assert asyncio.run(scheduler.find_active_plan_for_date(member_id, "2025-05-31"))

    def test_ignores_time_of_day(self, scheduler, member_id, wednesday_plan):
        found = asyncio.run(
            scheduler.find_active_plan_for_date(member_id, "2025-05-14T23:30:00")
        )
        assert found is not None
        assert found.date == date(2025, 5, 14)

    def test_newest_overlapping_plan_wins(self, scheduler, member_id, make_plan):
        """Test the tie-break between plans covering the same date."""
        make_plan({Weekday.WEDNESDAY: [exercise("Bench")]}, name="Old")
        newer = make_plan({Weekday.WEDNESDAY: [exercise("Press")]}, name="New")

        found = asyncio.run(scheduler.find_active_plan_for_date(member_id, date(2025, 5, 14)))

        assert found.plan.id == newer.id
        assert [ex.name for ex in found.exercises] == ["Press"]

    def test_falls_through_to_plan_with_exercises(self, scheduler, member_id, make_plan):
        """Test that a newer plan resting that day does not hide an older one."""
        older = make_plan({Weekday.WEDNESDAY: [exercise("Bench")]}, name="Old")
        make_plan({Weekday.MONDAY: [exercise("Press")]}, name="New")

        found = asyncio.run(scheduler.find_active_plan_for_date(member_id, date(2025, 5, 14)))

        assert found.plan.id == older.id

    def test_other_members_plans_are_ignored(self, scheduler, member_repo, member_id, make_plan):
        other = asyncio.run(member_repo.create(Member(name="Other", email="other@example.com")))
        make_plan({Weekday.WEDNESDAY: [exercise("Bench")]}, owner=other)

        assert asyncio.run(scheduler.find_active_plan_for_date(other, date(2025, 5, 14)))
        assert asyncio.run(scheduler.find_active_plan_for_date(member_id, date(2025, 5, 14))) is None

    def test_malformed_date(self, scheduler, member_id):
        with pytest.raises(InvalidInput):
            asyncio.run(scheduler.find_active_plan_for_date(member_id, "not-a-date"))


class TestFindNextScheduledWorkout:
    """Tests for Scheduler.find_next_scheduled_workout."""

    def test_scans_following_days(self, scheduler, member_id, make_plan):
        """Test that a Sunday-only plan is found from the Monday before."""
        plan = make_plan({Weekday.SUNDAY: [exercise("Long Run")]})

        found = asyncio.run(scheduler.find_next_scheduled_workout(member_id, date(2025, 5, 12)))

        assert found.plan.id == plan.id
        assert found.weekday == Weekday.SUNDAY
        assert found.date == date(2025, 5, 18)

    def test_excludes_reference_date(self, scheduler, member_id, wednesday_plan):
        """Test that the scan starts the day after."""
        found = asyncio.run(scheduler.find_next_scheduled_workout(member_id, date(2025, 5, 13)))
        assert found.date == date(2025, 5, 14)

        # From a Wednesday the scan covers Thursday to Tuesday only
        found = asyncio.run(scheduler.find_next_scheduled_workout(member_id, date(2025, 5, 14)))
        assert found.weekday == Weekday.WEDNESDAY
        assert found.date is None

    def test_falls_back_outside_plan_range(self, scheduler, member_id, make_plan):
        """Test the undated fallback once every plan has ended."""
        plan = make_plan(
            {Weekday.SUNDAY: [exercise("Swim")]},
            start=date(2025, 1, 1),
            end=date(2025, 1, 7),
        )

        found = asyncio.run(scheduler.find_next_scheduled_workout(member_id, date(2025, 1, 10)))

        assert found is not None
        assert found.plan.id == plan.id
        assert found.weekday == Weekday.SUNDAY
        assert found.date is None
        assert [ex.name for ex in found.exercises] == ["Swim"]

    def test_fallback_uses_first_weekday_in_calendar_order(
        self, scheduler, member_id, make_plan
    ):
        make_plan(
            {Weekday.FRIDAY: [exercise("Rows")], Weekday.TUESDAY: [exercise("Press")]},
            start=date(2025, 1, 1),
            end=date(2025, 1, 7),
        )

        found = asyncio.run(scheduler.find_next_scheduled_workout(member_id, date(2025, 3, 1)))

        assert found.weekday == Weekday.TUESDAY

    def test_no_plans(self, scheduler, member_id):
        assert asyncio.run(scheduler.find_next_scheduled_workout(member_id, date(2025, 5, 14))) is None


class TestFindTodaysOrNextWorkout:
    """Tests for Scheduler.find_todays_or_next_workout."""

    def test_today(self, scheduler, member_id, wednesday_plan):
        workout, is_today = asyncio.run(
            scheduler.find_todays_or_next_workout(member_id, date(2025, 5, 14))
        )
        assert is_today is True
        assert workout.date == date(2025, 5, 14)

    def test_next(self, scheduler, member_id, wednesday_plan):
        workout, is_today = asyncio.run(
            scheduler.find_todays_or_next_workout(member_id, date(2025, 5, 15))
        )
        assert is_today is False
        assert workout.date == date(2025, 5, 21)


def test_scheduled_exercises_respects_range(wednesday_plan):
    assert [ex.name for ex in scheduled_exercises(wednesday_plan, date(2025, 5, 14))] == [
        "Squats",
        "Lunges",
    ]
    assert scheduled_exercises(wednesday_plan, date(2025, 6, 4)) == []
    assert scheduled_exercises(wednesday_plan, date(2025, 5, 15)) == []


def test_undated_scheduled_workout(wednesday_plan):
    """Test that a workout built without a date serializes with none."""
    workout = ScheduledWorkout(
        plan=wednesday_plan,
        weekday=Weekday.WEDNESDAY,
        exercises=wednesday_plan.exercises_for(Weekday.WEDNESDAY),
    )

    assert workout.date is None
    assert workout.to_dict()["date"] is None
    assert workout.to_dict()["weekday"] == "Wednesday"

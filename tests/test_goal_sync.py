"""Tests for fitness goal synchronization."""

import asyncio
import logging

import pytest

from gym_progress.db import FitnessGoalRepository, MemberRepository
from gym_progress.errors import InvalidInput
from gym_progress.models.goals import FitnessGoal, PrimaryGoal, WorkoutTime
from gym_progress.services.goal_sync import GoalSynchronizer


class CountingGoalRepository(FitnessGoalRepository):
    """Goal repository that counts writes."""

    def __init__(self, db_path):
        super().__init__(db_path)
        self.writes = 0

    async def upsert(self, goal):
        self.writes += 1
        return await super().upsert(goal)


class CountingMemberRepository(MemberRepository):
    """Member repository that counts embedded-goal writes."""

    def __init__(self, db_path):
        super().__init__(db_path)
        self.writes = 0

    async def set_fitness_goals(self, member_id, goals):
        self.writes += 1
        return await super().set_fitness_goals(member_id, goals)


class BrokenMemberRepository(MemberRepository):
    """Member repository whose embedded-goal writes always fail."""

    async def set_fitness_goals(self, member_id, goals):
        raise RuntimeError("disk full")


@pytest.fixture
def goal_writes(db_path):
    return CountingGoalRepository(db_path)


@pytest.fixture
def member_writes(db_path):
    return CountingMemberRepository(db_path)


@pytest.fixture
def sync(goal_writes, member_writes):
    return GoalSynchronizer(goal_writes, member_writes)


class TestGetGoals:
    """Tests for GoalSynchronizer.get_goals."""

    def test_defaults_when_nothing_stored(self, sync, goal_writes, member_writes, member_id):
        """Test that defaults are returned without being persisted."""
        goal = asyncio.run(sync.get_goals(member_id))

        assert goal.primary_goal == PrimaryGoal.GENERAL_FITNESS
        assert goal.current_weight == 0
        assert goal.target_weight == 0
        assert goal.weekly_workout_target == 3
        assert goal.preferred_workout_time == WorkoutTime.EVENING
        assert goal.dietary_preferences == []
        assert goal.id is None
        assert goal_writes.writes == 0
        assert member_writes.writes == 0

    def test_creates_standalone_from_member_copy(
        self, sync, goal_writes, member_writes, member_repo, goal_repo, member_id
    ):
        """Test that a member-only copy is sanitized into a standalone record."""
        asyncio.run(
            member_repo.set_fitness_goals(
                member_id,
                {"primary_goal": "Muscle Gain", "current_weight": 80, "target_weight": "lots"},
            )
        )

        goal = asyncio.run(sync.get_goals(member_id))

        assert goal.id is not None
        assert goal.primary_goal == PrimaryGoal.MUSCLE_GAIN
        assert goal.current_weight == 80
        assert goal.target_weight == 0
        assert goal.weekly_workout_target == 3
        assert asyncio.run(goal_repo.get_by_member(member_id)) is not None

        # The member copy now carries the sanitized values
        member = asyncio.run(member_repo.get(member_id))
        assert goal.matches(member.fitness_goals)
        assert goal_writes.writes == 1
        assert member_writes.writes == 1

    def test_second_read_writes_nothing(self, sync, goal_writes, member_writes, member_repo, member_id):
        """Test that once both copies agree a read is a no-op."""
        asyncio.run(member_repo.set_fitness_goals(member_id, {"primary_goal": "Weight Loss"}))
        first = asyncio.run(sync.get_goals(member_id))
        goal_writes.writes = member_writes.writes = 0

        second = asyncio.run(sync.get_goals(member_id))

        assert second.tracked_values() == first.tracked_values()
        assert goal_writes.writes == 0
        assert member_writes.writes == 0

    def test_standalone_record_wins(self, sync, member_repo, goal_repo, member_id):
        """Test that a diverged member copy is overwritten."""
        asyncio.run(
            goal_repo.upsert(
                FitnessGoal(member_id=member_id, primary_goal=PrimaryGoal.STRENGTH_TRAINING)
            )
        )
        asyncio.run(member_repo.set_fitness_goals(member_id, {"primary_goal": "Weight Loss"}))

        goal = asyncio.run(sync.get_goals(member_id))

        assert goal.primary_goal == PrimaryGoal.STRENGTH_TRAINING
        member = asyncio.run(member_repo.get(member_id))
        assert member.fitness_goals["primary_goal"] == "Strength Training"
        assert member.fitness_goals["weekly_workout_target"] == 3

    def test_dietary_preferences_are_synced(self, sync, member_repo, goal_repo, member_id):
        asyncio.run(
            goal_repo.upsert(FitnessGoal(member_id=member_id, dietary_preferences=["vegan"]))
        )
        asyncio.run(
            member_repo.set_fitness_goals(
                member_id, {**FitnessGoal(member_id=member_id).tracked_values()}
            )
        )

        asyncio.run(sync.get_goals(member_id))

        member = asyncio.run(member_repo.get(member_id))
        assert member.fitness_goals["dietary_preferences"] == ["vegan"]


class TestUpsertGoals:
    """Tests for GoalSynchronizer.upsert_goals."""

    def test_partial_update_merges(self, sync, member_repo, member_id):
        asyncio.run(
            sync.upsert_goals(member_id, {"current_weight": 90, "target_weight": 80})
        )
        goal = asyncio.run(
            sync.upsert_goals(member_id, {"target_weight": 75, "preferred_workout_time": "Morning"})
        )

        assert goal.current_weight == 90
        assert goal.target_weight == 75
        assert goal.preferred_workout_time == WorkoutTime.MORNING
        assert goal.weight_to_go == -15

        member = asyncio.run(member_repo.get(member_id))
        assert goal.matches(member.fitness_goals)

    def test_invalid_number_keeps_previous(self, sync, member_id):
        asyncio.run(sync.upsert_goals(member_id, {"weekly_workout_target": 4}))
        goal = asyncio.run(
            sync.upsert_goals(member_id, {"weekly_workout_target": -2, "current_weight": "x"})
        )

        assert goal.weekly_workout_target == 4
        assert goal.current_weight == 0

    def test_invalid_enum(self, sync, goal_repo, member_id):
        with pytest.raises(InvalidInput):
            asyncio.run(sync.upsert_goals(member_id, {"primary_goal": "Bulk"}))
        assert asyncio.run(goal_repo.get_by_member(member_id)) is None

    @pytest.mark.parametrize("values", [{}, None, ["Weight Loss"]])
    def test_requires_values(self, sync, member_id, values):
        with pytest.raises(InvalidInput):
            asyncio.run(sync.upsert_goals(member_id, values))

    def test_member_copy_failure_is_logged(self, db_path, goal_repo, member_id, caplog):
        """Test that the standalone write stands when the member copy fails."""
        sync = GoalSynchronizer(FitnessGoalRepository(db_path), BrokenMemberRepository(db_path))

        with caplog.at_level(logging.ERROR, logger="gym_progress.services.goal_sync"):
            goal = asyncio.run(sync.upsert_goals(member_id, {"primary_goal": "Weight Loss"}))

        assert goal.primary_goal == PrimaryGoal.WEIGHT_LOSS
        stored = asyncio.run(goal_repo.get_by_member(member_id))
        assert stored.primary_goal == PrimaryGoal.WEIGHT_LOSS
        assert "Failed to update embedded fitness goals" in caplog.text

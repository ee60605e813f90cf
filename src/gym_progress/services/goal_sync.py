"""Fitness goal synchronization.

Goals are stored twice: as a standalone record and as a copy embedded in
the member record. The standalone record is the source of truth; the
embedded copy is repaired to match it whenever goals are read or written.

The two writes are not wrapped in a transaction. If the process dies
between them the copies diverge until the next ``get_goals`` call.
"""

import logging

from ..db.repositories import FitnessGoalRepository, MemberRepository
from ..errors import InvalidInput
from ..models.goals import FitnessGoal

_LOGGER = logging.getLogger(__name__)


class GoalSynchronizer:
    """Keeps standalone goals and the member's embedded copy consistent."""

    def __init__(
        self,
        goal_repo: FitnessGoalRepository | None = None,
        member_repo: MemberRepository | None = None,
    ):
        self.goal_repo = goal_repo or FitnessGoalRepository()
        self.member_repo = member_repo or MemberRepository()

    async def get_goals(self, member_id: int) -> FitnessGoal:
        """Get a member's goals, repairing whichever copy is stale.

        Returns unsaved defaults when the member has no goals anywhere.
        """
        goal = await self.goal_repo.get_by_member(member_id)
        member = await self.member_repo.get(member_id)
        mirror = member.fitness_goals if member else None

        if goal is None and mirror is not None:
            _LOGGER.info(
                "Creating standalone fitness goals for member=%s from member record",
                member_id,
            )
            goal = await self.goal_repo.upsert(FitnessGoal.from_mirror(member_id, mirror))

        if goal is None:
            return FitnessGoal(member_id=member_id)

        if member is not None and not goal.matches(mirror):
            _LOGGER.info("Syncing member=%s fitness goals from standalone record", member_id)
            await self.member_repo.set_fitness_goals(member_id, goal.tracked_values())

        return goal

    async def upsert_goals(self, member_id: int, values: dict) -> FitnessGoal:
        """Merge ``values`` over the member's goals and save both copies.

        The standalone write is authoritative; a failure updating the
        member's copy is logged and does not fail the call.
        """
        if not isinstance(values, dict) or not values:
            raise InvalidInput("Fitness goals data is required")

        existing = await self.goal_repo.get_by_member(member_id)
        if existing is None:
            existing = FitnessGoal(member_id=member_id)

        goal = await self.goal_repo.upsert(existing.merged_with(values))

        try:
            if not await self.member_repo.set_fitness_goals(member_id, goal.tracked_values()):
                _LOGGER.warning(
                    "Member %s not found while syncing fitness goals", member_id
                )
        except Exception:
            _LOGGER.exception(
                "Failed to update embedded fitness goals for member=%s", member_id
            )

        return goal

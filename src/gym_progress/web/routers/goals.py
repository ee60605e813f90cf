"""Fitness goal routes."""

from typing import Any

from fastapi import APIRouter, Body, Depends

from ...services import GoalSynchronizer
from ..deps import current_member_id, get_goal_synchronizer

router = APIRouter(prefix="/goals", tags=["goals"])


@router.get("")
async def get_goals(
    member_id: int = Depends(current_member_id),
    sync: GoalSynchronizer = Depends(get_goal_synchronizer),
):
    """The member's fitness goals, with both stored copies in sync."""
    goal = await sync.get_goals(member_id)
    return {"fitness_goals": goal.to_dict()}


@router.put("")
async def update_goals(
    values: dict[str, Any] = Body(...),
    member_id: int = Depends(current_member_id),
    sync: GoalSynchronizer = Depends(get_goal_synchronizer),
):
    """Update some or all goal fields."""
    goal = await sync.upsert_goals(member_id, values)
    return {"fitness_goals": goal.to_dict()}

"""Member-facing workout plan routes."""

from datetime import date

from fastapi import APIRouter, Depends

from ...services import PlanService, Scheduler
from ..deps import current_member_id, get_plan_service, get_scheduler

router = APIRouter(prefix="/workouts", tags=["workouts"])


@router.get("")
async def list_workouts(
    start_date: str | None = None,
    end_date: str | None = None,
    member_id: int = Depends(current_member_id),
    service: PlanService = Depends(get_plan_service),
):
    """List the member's plans, optionally those overlapping a date range."""
    plans = await service.list_member_plans(member_id, start_date, end_date)
    return {"workouts": [plan.to_dict() for plan in plans]}


@router.get("/today")
async def todays_workout(
    on: str | None = None,
    member_id: int = Depends(current_member_id),
    scheduler: Scheduler = Depends(get_scheduler),
):
    """Today's workout, or the next one when there is none today."""
    workout, is_today = await scheduler.find_todays_or_next_workout(
        member_id, on or date.today()
    )
    if workout is None:
        return {"scheduled": False, "is_today": False, "workout": None}
    return {"scheduled": True, "is_today": is_today, "workout": workout.to_dict()}


@router.get("/next")
async def next_workout(
    on: str | None = None,
    member_id: int = Depends(current_member_id),
    scheduler: Scheduler = Depends(get_scheduler),
):
    """The next workout after a date (default today)."""
    workout = await scheduler.find_next_scheduled_workout(member_id, on or date.today())
    if workout is None:
        return {"scheduled": False, "workout": None}
    return {"scheduled": True, "workout": workout.to_dict()}


@router.get("/{plan_id}")
async def get_workout(
    plan_id: int,
    member_id: int = Depends(current_member_id),
    service: PlanService = Depends(get_plan_service),
):
    """One of the member's plans."""
    plan = await service.get_member_plan(member_id, plan_id)
    return {"workout": plan.to_dict()}

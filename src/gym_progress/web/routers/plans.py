"""Trainer-facing workout plan routes."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ...services import PlanService
from ..deps import current_trainer_id, get_plan_service

router = APIRouter(prefix="/plans", tags=["plans"])


class ExerciseIn(BaseModel):
    name: str
    sets: int
    reps: int
    rest_duration: str = ""
    notes: str | None = None


class PlanIn(BaseModel):
    member_id: int
    name: str
    start_date: str
    end_date: str
    days: dict[str, list[ExerciseIn]] = Field(default_factory=dict)
    notes: str | None = None


@router.post("", status_code=201)
async def create_plan(
    body: PlanIn,
    trainer_id: int = Depends(current_trainer_id),
    service: PlanService = Depends(get_plan_service),
):
    """Create a workout plan for one of the trainer's members."""
    plan = await service.create_plan(trainer_id, body.model_dump())
    return {"plan": plan.to_dict()}


@router.get("")
async def list_plans(
    member_id: int | None = None,
    trainer_id: int = Depends(current_trainer_id),
    service: PlanService = Depends(get_plan_service),
):
    """List the trainer's plans, newest first."""
    plans = await service.list_trainer_plans(trainer_id, member_id=member_id)
    return {"plans": [plan.to_dict() for plan in plans]}

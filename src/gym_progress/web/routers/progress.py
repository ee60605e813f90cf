"""Daily workout progress routes."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ...models.progress import completion_percentage
from ...models.workout_plan import Weekday, parse_date
from ...services import ProgressReconciler
from ..deps import current_member_id, get_reconciler

router = APIRouter(prefix="/progress", tags=["progress"])


class ToggleIn(BaseModel):
    exercise_name: str


@router.get("")
async def list_progress(
    plan_id: int | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
    member_id: int = Depends(current_member_id),
    reconciler: ProgressReconciler = Depends(get_reconciler),
):
    """Progress history for the member, newest first."""
    records = await reconciler.list_progress(
        member_id, plan_id=plan_id, start=start_date, end=end_date
    )
    return {"progress": [record.to_dict() for record in records]}


@router.get("/{plan_id}/{day}")
async def get_progress(
    plan_id: int,
    day: str,
    member_id: int = Depends(current_member_id),
    reconciler: ProgressReconciler = Depends(get_reconciler),
):
    """Progress for one plan day; an empty default when nothing was marked."""
    record = await reconciler.get_daily_progress(member_id, plan_id, day)
    if record is None:
        on = parse_date(day)
        return {
            "progress": {
                "member_id": member_id,
                "plan_id": plan_id,
                "date": on.isoformat(),
                "day": Weekday.from_date(on).value,
                "exercises": [],
                "completed": False,
                "completion_percentage": 0,
            },
            "exists": False,
        }
    return {"progress": record.to_dict(), "exists": True}


@router.post("/{plan_id}/{day}/toggle")
async def toggle_exercise(
    plan_id: int,
    day: str,
    body: ToggleIn,
    member_id: int = Depends(current_member_id),
    reconciler: ProgressReconciler = Depends(get_reconciler),
):
    """Flip one exercise's completion flag."""
    record = await reconciler.toggle_exercise(member_id, plan_id, day, body.exercise_name)
    return {
        "progress": record.to_dict(),
        "completion_percentage": completion_percentage(record),
    }


@router.delete("/{plan_id}/{day}")
async def reset_progress(
    plan_id: int,
    day: str,
    member_id: int = Depends(current_member_id),
    reconciler: ProgressReconciler = Depends(get_reconciler),
):
    """Clear the day's progress."""
    await reconciler.reset_progress(member_id, plan_id, day)
    return {"status": "reset"}
